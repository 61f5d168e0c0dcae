# =============================================================================
# core/people.py  -  People search, enrichment and match
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Three adapters over Apollo's people endpoints.  Each one:
#     1. takes a validated params model (core/params.py)
#     2. maps it onto the upstream request and calls ApolloClient
#     3. reshapes the raw JSON into the models in core/models.py
#
#   people_search      POST /mixed_people/search   -> SearchPage[PersonSummary]
#   people_enrichment  GET  /people/enrich         -> PersonLookup[EnrichedPerson]
#   people_match       POST /people/match          -> PersonLookup[MatchedPerson]
#
# A person Apollo cannot find is a normal result (found=False), not an error.
# ApolloError from the client is logged here and re-raised untouched.
# =============================================================================

import logging
from typing import Any, Mapping, Optional

from core.client import ApolloClient
from core.errors import ApolloError
from core.models import (
    CompanyRef,
    EnrichedPerson,
    MatchedPerson,
    PageInfo,
    PersonLookup,
    PersonSummary,
    SearchPage,
    join_location,
)
from core.params import PeopleEnrichmentParams, PeopleMatchParams, PeopleSearchParams

logger = logging.getLogger(__name__)

ENRICHMENT_NOT_FOUND = "No person found with the provided information"
MATCH_NOT_FOUND = "No person found matching the provided information"


def _person_location(person: Mapping[str, Any]) -> str:
    return join_location(person.get("city"), person.get("state"), person.get("country"))


def summarize_person(person: Mapping[str, Any]) -> PersonSummary:
    organization = person.get("organization") or {}
    return PersonSummary(
        id=person.get("id"),
        name=person.get("name"),
        title=person.get("title"),
        email=person.get("email"),
        company=organization.get("name"),
        company_domain=organization.get("domain"),
        location=_person_location(person),
        linkedin_url=person.get("linkedin_url"),
        seniority=person.get("seniority"),
        functions=person.get("functions"),
    )


def _company(organization: Optional[Mapping[str, Any]], with_size: bool = False) -> Optional[CompanyRef]:
    if not organization:
        return None
    return CompanyRef(
        id=organization.get("id"),
        name=organization.get("name"),
        domain=organization.get("domain"),
        industry=organization.get("industry"),
        employee_count=organization.get("employee_count") if with_size else None,
    )


async def people_search(client: ApolloClient, params: PeopleSearchParams) -> SearchPage:
    """Search Apollo's global people database."""
    request = params.to_upstream()
    logger.info("Executing people search %s", request)
    try:
        response = await client.search_people(request)
    except ApolloError as e:
        logger.error("People search failed: %s", e)
        raise

    response = response or {}
    pagination = PageInfo.from_upstream(response.get("pagination"), params.page)
    logger.info("Found %s people", pagination.total_results)

    return SearchPage(
        results=[summarize_person(person) for person in response.get("people") or []],
        pagination=pagination,
    )


async def people_enrichment(client: ApolloClient, params: PeopleEnrichmentParams) -> PersonLookup:
    """Look up one person by email, LinkedIn URL, or name plus company."""
    request = params.to_upstream()
    logger.info("Executing people enrichment %s", request)
    try:
        response = await client.enrich_person(request)
    except ApolloError as e:
        logger.error("People enrichment failed: %s", e)
        raise

    person = (response or {}).get("person")
    if not person:
        logger.info("People enrichment found no match")
        return PersonLookup(found=False, message=ENRICHMENT_NOT_FOUND)

    logger.info("People enrichment found %s", person.get("id"))
    return PersonLookup(
        found=True,
        person=EnrichedPerson(
            id=person.get("id"),
            name=person.get("name"),
            first_name=person.get("first_name"),
            last_name=person.get("last_name"),
            title=person.get("title"),
            email=person.get("email"),
            phone_numbers=person.get("phone_numbers"),
            linkedin_url=person.get("linkedin_url"),
            photo_url=person.get("photo_url"),
            location=_person_location(person),
            company=_company(person.get("organization")),
            seniority=person.get("seniority"),
            functions=person.get("functions"),
        ),
    )


async def people_match(client: ApolloClient, params: PeopleMatchParams) -> PersonLookup:
    """Match one person and reveal contact details.  Consumes Apollo credits."""
    request = params.to_upstream()
    logger.info("Executing people match %s", request)
    try:
        response = await client.match_person(request)
    except ApolloError as e:
        logger.error("People match failed: %s", e)
        raise

    response = response or {}
    person = response.get("person")
    if not person:
        logger.info("People match found no match")
        return PersonLookup(found=False, message=MATCH_NOT_FOUND)

    logger.info("People match found %s (credits used: %s)", person.get("id"), response.get("credits_used", 0))
    return PersonLookup(
        found=True,
        person=MatchedPerson(
            id=person.get("id"),
            name=person.get("name"),
            first_name=person.get("first_name"),
            last_name=person.get("last_name"),
            title=person.get("title"),
            email=person.get("email"),
            email_status=person.get("email_status"),
            personal_emails=person.get("personal_emails") or [],
            phone_numbers=person.get("phone_numbers") or [],
            linkedin_url=person.get("linkedin_url"),
            photo_url=person.get("photo_url"),
            location=_person_location(person),
            company=_company(person.get("organization"), with_size=True),
            seniority=person.get("seniority"),
            functions=person.get("functions") or [],
            employment_history=person.get("employment_history") or [],
        ),
        credits_used=response.get("credits_used") or 0,
    )
