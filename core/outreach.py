# =============================================================================
# core/outreach.py  -  Search emails sent through Apollo sequences
# =============================================================================
#
#   outreach_email_search   POST /emailer_messages/search
#
# This endpoint returns "emailer_messages" with no pagination block, so the
# adapter builds a partial one from what it does know: the requested page and
# the number of messages returned.  Total pages are unknown; the payload says
# so in a note.
# =============================================================================

import logging

from core.client import ApolloClient
from core.errors import ApolloError
from core.models import OutreachEmailSummary, PageInfo, SearchPage
from core.params import OutreachEmailSearchParams

logger = logging.getLogger(__name__)

PAGINATION_NOTE = (
    "This endpoint does not provide pagination metadata. "
    "Results shown are from the requested page only."
)
MASTER_KEY_NOTE = (
    "This endpoint requires a master API key and searches emails created and sent "
    "via Apollo sequences. Not available on free plans."
)


async def outreach_email_search(client: ApolloClient, params: OutreachEmailSearchParams) -> SearchPage:
    """Search outreach emails sent via the team's sequences."""
    request = params.to_upstream()
    logger.info("Executing outreach email search %s", request)
    try:
        response = await client.search_outreach_emails(request)
    except ApolloError as e:
        logger.error("Outreach email search failed: %s", e)
        raise

    logger.debug("Raw outreach email response: %s", response)
    messages = (response or {}).get("emailer_messages")
    if messages is None:
        logger.error("Unexpected outreach email response structure: %s", response)
        raise ApolloError("Invalid response structure from Apollo API", "INVALID_RESPONSE")

    logger.info("Found %s outreach emails", len(messages))

    return SearchPage(
        results=[
            OutreachEmailSummary(
                id=email.get("id"),
                subject=email.get("subject"),
                body_text=email.get("body_text"),
                from_email=email.get("from_email"),
                from_name=email.get("from_name"),
                to_email=email.get("to_email"),
                to_name=email.get("to_name"),
                cc_emails=email.get("cc_emails"),
                bcc_emails=email.get("bcc_emails"),
                campaign_id=email.get("emailer_campaign_id"),
                contact_id=email.get("contact_id"),
                sent_at=email.get("due_at"),
                completed_at=email.get("completed_at"),
                status=email.get("status"),
                type=email.get("type"),
                tracking_disabled_reason=email.get("tracking_disabled_reason"),
                recipients=email.get("recipients"),
            )
            for email in messages
        ],
        pagination=PageInfo(
            current_page=params.page,
            total_results=len(messages),
            note=PAGINATION_NOTE,
        ),
        note=MASTER_KEY_NOTE,
    )
