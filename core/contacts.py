# =============================================================================
# core/contacts.py  -  The team's own contacts: create and search
# =============================================================================
#
#   create_contact   POST /contacts          -> ContactCreation
#   contact_search   POST /contacts/search   -> SearchPage[ContactSummary]
#
# Unlike people_search, these work on contacts already saved to the caller's
# Apollo account.
#
# create_contact has three outcomes:
#   response has "contact"   -> success=True
#   response has "error"     -> success=False, error=<Apollo's error>
#   neither                  -> success=False, error=UNEXPECTED_RESPONSE
# =============================================================================

import logging
from typing import Any, Mapping

from core.client import ApolloClient
from core.errors import ApolloError
from core.models import (
    ContactCreation,
    ContactSummary,
    CreatedContact,
    PageInfo,
    SearchPage,
    join_location,
)
from core.params import ContactSearchParams, CreateContactParams

logger = logging.getLogger(__name__)

UNEXPECTED_RESPONSE = "Unexpected response format from Apollo API"
NO_DEDUPLICATION_NOTE = (
    "Apollo does not apply deduplication when creating contacts via API. "
    "This may create duplicate contacts if similar details already exist."
)
ACCOUNT_SCOPE_NOTE = (
    "This searches only contacts already added to your team's Apollo account. "
    "To search the broader Apollo database, use people_search instead."
)


async def create_contact(client: ApolloClient, params: CreateContactParams) -> ContactCreation:
    """Save a new contact to the team's Apollo account."""
    request = params.to_upstream()
    logger.info("Creating new contact %s", request)
    try:
        response = await client.create_contact(request)
    except ApolloError as e:
        logger.error("Create contact failed: %s", e)
        raise

    response = response or {}
    contact = response.get("contact")
    if contact:
        logger.info("Successfully created contact: %s", contact.get("id"))
        return ContactCreation(
            success=True,
            contact=CreatedContact(
                id=contact.get("id"),
                name=contact.get("name"),
                first_name=contact.get("first_name"),
                last_name=contact.get("last_name"),
                title=contact.get("title"),
                email=contact.get("email"),
                organization=contact.get("organization"),
                direct_phone=contact.get("direct_phone"),
                mobile_phone=contact.get("mobile_phone"),
                labels=contact.get("label_names"),
                visibility=contact.get("visibility"),
                created_at=contact.get("created_at"),
            ),
            note=NO_DEDUPLICATION_NOTE,
        )

    if response.get("error"):
        logger.error("Failed to create contact: %s", response["error"])
        return ContactCreation(success=False, error=response["error"])

    logger.warning("Create contact returned neither a contact nor an error: %s", response)
    return ContactCreation(success=False, error=UNEXPECTED_RESPONSE)


def summarize_contact(contact: Mapping[str, Any]) -> ContactSummary:
    organization = contact.get("organization") or {}
    return ContactSummary(
        id=contact.get("id"),
        name=contact.get("name"),
        first_name=contact.get("first_name"),
        last_name=contact.get("last_name"),
        title=contact.get("title"),
        email=contact.get("email"),
        email_status=contact.get("email_status"),
        company=organization.get("name"),
        company_domain=organization.get("domain"),
        location=join_location(contact.get("city"), contact.get("state"), contact.get("country")),
        linkedin_url=contact.get("linkedin_url"),
        direct_phone=contact.get("direct_phone"),
        mobile_phone=contact.get("mobile_phone"),
        seniority=contact.get("seniority"),
        functions=contact.get("functions"),
        labels=contact.get("label_names"),
        visibility=contact.get("visibility"),
        created_at=contact.get("created_at"),
        updated_at=contact.get("updated_at"),
    )


async def contact_search(client: ApolloClient, params: ContactSearchParams) -> SearchPage:
    """Search contacts saved in the team's Apollo account."""
    request = params.to_upstream()
    logger.info("Executing contact search %s", request)
    try:
        response = await client.search_contacts(request)
    except ApolloError as e:
        logger.error("Contact search failed: %s", e)
        raise

    response = response or {}
    pagination = PageInfo.from_upstream(response.get("pagination"), params.page)
    logger.info("Found %s contacts", pagination.total_results)

    return SearchPage(
        results=[summarize_contact(contact) for contact in response.get("contacts") or []],
        pagination=pagination,
        note=ACCOUNT_SCOPE_NOTE,
    )
