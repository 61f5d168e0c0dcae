"""Tests for core.people - search, enrichment and match adapters."""

import pytest

from core.errors import RateLimitError
from core.models import to_payload
from core.params import PeopleEnrichmentParams, PeopleMatchParams, PeopleSearchParams
from core.people import (
    ENRICHMENT_NOT_FOUND,
    MATCH_NOT_FOUND,
    people_enrichment,
    people_match,
    people_search,
)

JANE = {
    "id": "p1",
    "name": "Jane Doe",
    "first_name": "Jane",
    "last_name": "Doe",
    "title": "CTO",
    "email": "jane@acme.com",
    "city": "Austin",
    "state": "TX",
    "country": "United States",
    "linkedin_url": "https://linkedin.com/in/jane",
    "seniority": "c_suite",
    "functions": ["engineering"],
    "organization": {
        "id": "o1",
        "name": "Acme",
        "domain": "acme.com",
        "industry": "Software",
        "employee_count": 120,
    },
}


class TestPeopleSearch:
    async def test_reshapes_rows(self, fake_client):
        fake_client.responses["search_people"] = {
            "people": [JANE],
            "pagination": {"page": 1, "per_page": 25, "total_entries": 1, "total_pages": 1},
        }
        page = await people_search(fake_client, PeopleSearchParams(person_titles=["CTO"]))
        payload = to_payload(page)

        assert payload["results"] == [
            {
                "id": "p1",
                "name": "Jane Doe",
                "title": "CTO",
                "email": "jane@acme.com",
                "company": "Acme",
                "company_domain": "acme.com",
                "location": "Austin, TX, United States",
                "linkedin_url": "https://linkedin.com/in/jane",
                "seniority": "c_suite",
                "functions": ["engineering"],
            }
        ]
        assert payload["pagination"] == {
            "current_page": 1,
            "total_pages": 1,
            "total_results": 1,
            "results_per_page": 25,
        }

    async def test_sends_defaults(self, fake_client):
        await people_search(fake_client, PeopleSearchParams(q_keywords="cto"))
        assert fake_client.calls == [("search_people", ({"q_keywords": "cto", "page": 1, "per_page": 25},))]

    async def test_empty_response(self, fake_client):
        page = await people_search(fake_client, PeopleSearchParams(page=4))
        assert page.results == []
        assert page.pagination.current_page == 4

    async def test_missing_location_parts(self, fake_client):
        fake_client.responses["search_people"] = {"people": [{"id": "p2", "city": "Berlin"}]}
        page = await people_search(fake_client, PeopleSearchParams())
        assert page.results[0].location == "Berlin"
        assert page.results[0].company is None

    async def test_null_body_is_empty_page(self, fake_client):
        fake_client.responses["search_people"] = None
        page = await people_search(fake_client, PeopleSearchParams())
        assert page.results == []
        assert page.pagination.current_page == 1

    async def test_errors_propagate(self, fake_client):
        fake_client.responses["search_people"] = RateLimitError(retry_after=30)
        with pytest.raises(RateLimitError):
            await people_search(fake_client, PeopleSearchParams())


class TestPeopleEnrichment:
    async def test_no_organization_omits_company(self, fake_client):
        fake_client.responses["enrich_person"] = {"person": {"id": "p3", "name": "Solo"}}
        result = to_payload(
            await people_enrichment(fake_client, PeopleEnrichmentParams(email="solo@example.com"))
        )
        assert result["found"] is True
        assert "company" not in result["person"]

    async def test_found(self, fake_client):
        fake_client.responses["enrich_person"] = {"person": JANE}
        result = to_payload(
            await people_enrichment(fake_client, PeopleEnrichmentParams(email="jane@acme.com"))
        )
        assert result["found"] is True
        assert result["person"]["company"] == {
            "id": "o1",
            "name": "Acme",
            "domain": "acme.com",
            "industry": "Software",
        }
        assert fake_client.calls == [("enrich_person", ({"email": "jane@acme.com"},))]

    async def test_not_found(self, fake_client):
        fake_client.responses["enrich_person"] = {"person": None}
        result = await people_enrichment(fake_client, PeopleEnrichmentParams(email="x@y.co"))
        assert to_payload(result) == {"found": False, "message": ENRICHMENT_NOT_FOUND}


class TestPeopleMatch:
    async def test_found_with_defaults(self, fake_client):
        fake_client.responses["match_person"] = {"person": {"id": "p9", "name": "Sam"}}
        result = await people_match(fake_client, PeopleMatchParams(name="Sam"))
        payload = to_payload(result)

        assert payload["credits_used"] == 0
        assert payload["person"]["personal_emails"] == []
        assert payload["person"]["phone_numbers"] == []
        assert payload["person"]["functions"] == []
        assert payload["person"]["employment_history"] == []
        assert "company" not in payload["person"]

    async def test_company_includes_size(self, fake_client):
        fake_client.responses["match_person"] = {"person": JANE, "credits_used": 1}
        result = await people_match(fake_client, PeopleMatchParams(email="jane@acme.com"))
        assert result.person.company.employee_count == 120
        assert result.credits_used == 1

    async def test_sends_reveal_flags(self, fake_client):
        await people_match(fake_client, PeopleMatchParams(first_name="Jane", last_name="Doe"))
        _, (body,) = fake_client.calls[0]
        assert body["reveal_personal_emails"] is True
        assert body["reveal_phone_number"] is False

    async def test_not_found(self, fake_client):
        result = await people_match(fake_client, PeopleMatchParams(email="x@y.co"))
        assert result.found is False
        assert result.message == MATCH_NOT_FOUND
