"""Tests for core.outreach - outreach email search."""

import pytest

from core.errors import ApolloError
from core.models import to_payload
from core.outreach import MASTER_KEY_NOTE, PAGINATION_NOTE, outreach_email_search
from core.params import OutreachEmailSearchParams


class TestOutreachEmailSearch:
    async def test_reshapes_and_builds_pagination(self, fake_client):
        fake_client.responses["search_outreach_emails"] = {
            "emailer_messages": [
                {
                    "id": "m1",
                    "subject": "Quick question",
                    "to_email": "jane@acme.com",
                    "emailer_campaign_id": "camp-1",
                    "due_at": "2026-10-01T09:00:00Z",
                    "status": "completed",
                },
                {"id": "m2"},
            ]
        }
        payload = to_payload(
            await outreach_email_search(fake_client, OutreachEmailSearchParams(page=3, subject="Quick"))
        )

        first = payload["results"][0]
        assert first["campaign_id"] == "camp-1"
        assert first["sent_at"] == "2026-10-01T09:00:00Z"
        assert payload["pagination"] == {"current_page": 3, "total_results": 2, "note": PAGINATION_NOTE}
        assert payload["note"] == MASTER_KEY_NOTE

    async def test_empty_list_is_fine(self, fake_client):
        fake_client.responses["search_outreach_emails"] = {"emailer_messages": []}
        page = await outreach_email_search(fake_client, OutreachEmailSearchParams())
        assert page.results == []
        assert page.pagination.total_results == 0

    async def test_missing_messages_key(self, fake_client):
        fake_client.responses["search_outreach_emails"] = {"something_else": []}
        with pytest.raises(ApolloError, match="Invalid response structure"):
            await outreach_email_search(fake_client, OutreachEmailSearchParams())
