"""Shared fixtures: a recording stand-in for ApolloClient and clean settings."""

from typing import Any

import pytest

from core.config import clear_settings_cache

_ENV_VARS = (
    "APOLLO_API_KEY",
    "APOLLO_BASE_URL",
    "APOLLO_TIMEOUT_SECONDS",
    "LOG_LEVEL",
    "MCP_SERVER_PORT",
    "AGENT_MODEL",
)


class FakeApolloClient:
    """Records every endpoint call and answers with canned responses.

    responses maps an endpoint method name to either a response body or an
    exception instance to raise.
    """

    def __init__(self, responses: dict[str, Any] | None = None):
        self.responses = dict(responses or {})
        self.calls: list[tuple[str, tuple]] = []
        self.closed = False

    async def __aenter__(self) -> "FakeApolloClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        self.closed = True

    async def _answer(self, name: str, *args):
        self.calls.append((name, args))
        response = self.responses.get(name, {})
        if isinstance(response, Exception):
            raise response
        return response

    async def search_people(self, params):
        return await self._answer("search_people", params)

    async def search_organizations(self, params):
        return await self._answer("search_organizations", params)

    async def enrich_person(self, params):
        return await self._answer("enrich_person", params)

    async def match_person(self, params):
        return await self._answer("match_person", params)

    async def enrich_organization(self, params):
        return await self._answer("enrich_organization", params)

    async def get_job_postings(self, organization_id, page=1, per_page=100):
        return await self._answer("get_job_postings", organization_id, page, per_page)

    async def create_contact(self, params):
        return await self._answer("create_contact", params)

    async def search_contacts(self, params):
        return await self._answer("search_contacts", params)

    async def search_outreach_emails(self, params):
        return await self._answer("search_outreach_emails", params)


@pytest.fixture
def fake_client():
    return FakeApolloClient()


@pytest.fixture
def clean_env(monkeypatch):
    """Remove every variable the settings read, and reset the settings cache."""
    for name in _ENV_VARS:
        # setenv first so teardown also removes values a .env file loaded
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    clear_settings_cache()
    yield monkeypatch
    clear_settings_cache()
