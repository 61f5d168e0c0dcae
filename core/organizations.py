# =============================================================================
# core/organizations.py  -  Organization search, enrichment and job postings
# =============================================================================
#
#   organization_search      POST /mixed_companies/search
#   organization_enrichment  GET  /organizations/enrich
#   job_postings             GET  /organizations/{id}/job_postings
#
# Flat min/max filters (employee count, revenue, funding) are folded into
# Apollo's nested range objects by OrganizationSearchParams.to_upstream().
# =============================================================================

import logging
from typing import Any, Mapping

from core.client import ApolloClient
from core.errors import ApolloError
from core.models import (
    EnrichedOrganization,
    JobPostingSummary,
    Location,
    OrganizationLookup,
    OrganizationSummary,
    PageInfo,
    SearchPage,
    SocialMedia,
    join_location,
)
from core.params import JobPostingsParams, OrganizationEnrichmentParams, OrganizationSearchParams

logger = logging.getLogger(__name__)

ORGANIZATION_NOT_FOUND = "No organization found with the provided information"


def summarize_organization(org: Mapping[str, Any]) -> OrganizationSummary:
    return OrganizationSummary(
        id=org.get("id"),
        name=org.get("name"),
        domain=org.get("domain"),
        website_url=org.get("website_url"),
        industry=org.get("industry"),
        industries=org.get("industries"),
        location=join_location(org.get("city"), org.get("state"), org.get("country")),
        employee_count=org.get("employee_count"),
        employee_count_range=org.get("employee_count_range"),
        revenue=org.get("revenue"),
        revenue_range=org.get("revenue_range"),
        technologies=org.get("technologies"),
        funding_raised=org.get("funding_raised"),
        founded_year=org.get("founded_year"),
        description=org.get("description"),
        linkedin_url=org.get("linkedin_url"),
    )


async def organization_search(client: ApolloClient, params: OrganizationSearchParams) -> SearchPage:
    """Search Apollo's global company database."""
    request = params.to_upstream()
    logger.info("Executing organization search %s", request)
    try:
        response = await client.search_organizations(request)
    except ApolloError as e:
        logger.error("Organization search failed: %s", e)
        raise

    response = response or {}
    pagination = PageInfo.from_upstream(response.get("pagination"), params.page)
    logger.info("Found %s organizations", pagination.total_results)

    return SearchPage(
        results=[summarize_organization(org) for org in response.get("organizations") or []],
        pagination=pagination,
    )


async def organization_enrichment(
    client: ApolloClient,
    params: OrganizationEnrichmentParams,
) -> OrganizationLookup:
    """Full company profile by domain or name."""
    request = params.to_upstream()
    logger.info("Executing organization enrichment %s", request)
    try:
        response = await client.enrich_organization(request)
    except ApolloError as e:
        logger.error("Organization enrichment failed: %s", e)
        raise

    org = (response or {}).get("organization")
    if not org:
        logger.info("Organization enrichment found no match")
        return OrganizationLookup(found=False, message=ORGANIZATION_NOT_FOUND)

    logger.info("Organization enrichment found %s", org.get("id"))
    city, state, country = org.get("city"), org.get("state"), org.get("country")
    return OrganizationLookup(
        found=True,
        organization=EnrichedOrganization(
            id=org.get("id"),
            name=org.get("name"),
            domain=org.get("domain"),
            domains=org.get("domains"),
            website_url=org.get("website_url"),
            logo_url=org.get("logo_url"),
            industry=org.get("industry"),
            industries=org.get("industries"),
            location=Location(
                city=city,
                state=state,
                country=country,
                full=join_location(city, state, country),
            ),
            employee_count=org.get("employee_count"),
            employee_count_range=org.get("employee_count_range"),
            revenue=org.get("revenue"),
            revenue_range=org.get("revenue_range"),
            phone=org.get("phone"),
            social_media=SocialMedia(
                linkedin_url=org.get("linkedin_url"),
                twitter_url=org.get("twitter_url"),
                facebook_url=org.get("facebook_url"),
            ),
            technologies=org.get("technologies"),
            funding_raised=org.get("funding_raised"),
            founded_year=org.get("founded_year"),
            description=org.get("description"),
        ),
    )


async def job_postings(client: ApolloClient, params: JobPostingsParams) -> SearchPage:
    """Current job postings for one organization."""
    logger.info(
        "Fetching job postings for %s (page %s, per_page %s)",
        params.organization_id, params.page, params.per_page,
    )
    try:
        response = await client.get_job_postings(params.organization_id, params.page, params.per_page)
    except ApolloError as e:
        logger.error("Failed to fetch job postings: %s", e)
        raise

    response = response or {}
    pagination = PageInfo.from_upstream(response.get("pagination"), params.page)
    logger.info("Found %s job postings", pagination.total_results)

    return SearchPage(
        results=[
            JobPostingSummary(
                id=job.get("id"),
                title=job.get("title"),
                department=job.get("department"),
                location=job.get("location"),
                posted_at=job.get("posted_at"),
                job_type=job.get("job_type"),
                seniority_level=job.get("seniority_level"),
                description=job.get("description"),
                apply_url=job.get("apply_url"),
            )
            for job in response.get("job_postings") or []
        ],
        pagination=pagination,
    )
