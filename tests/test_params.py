"""Tests for core.params - per-capability argument validation."""

import pytest

from core.errors import ParameterValidationError
from core.params import (
    ContactSearchParams,
    CreateContactParams,
    JobPostingsParams,
    OrganizationEnrichmentParams,
    OrganizationSearchParams,
    PeopleEnrichmentParams,
    PeopleMatchParams,
    PeopleSearchParams,
    numeric_range,
    parse_params,
)


class TestPagingBounds:
    def test_defaults(self):
        params = parse_params(PeopleSearchParams, {})
        assert params.page == 1
        assert params.per_page == 25

    @pytest.mark.parametrize("arguments", [{"page": 0}, {"page": 501}, {"per_page": 0}, {"per_page": 101}])
    def test_out_of_range(self, arguments):
        with pytest.raises(ParameterValidationError):
            parse_params(ContactSearchParams, arguments)

    def test_upper_bounds_accepted(self):
        params = parse_params(PeopleSearchParams, {"page": 500, "per_page": 100})
        assert (params.page, params.per_page) == (500, 100)

    def test_job_postings_page_has_no_upper_bound(self):
        params = parse_params(JobPostingsParams, {"organization_id": "org-1", "page": 900})
        assert params.page == 900

    def test_message_names_field(self):
        with pytest.raises(ParameterValidationError) as excinfo:
            parse_params(PeopleSearchParams, {"per_page": 1000})
        assert excinfo.value.message.startswith("Validation error: per_page: ")


class TestIdentifierRules:
    def test_enrichment_requires_identifier(self):
        with pytest.raises(ParameterValidationError) as excinfo:
            parse_params(PeopleEnrichmentParams, {})
        assert "Must provide either email, linkedin_url, or name with organization information" in str(
            excinfo.value
        )

    def test_enrichment_name_alone_is_not_enough(self):
        with pytest.raises(ParameterValidationError):
            parse_params(PeopleEnrichmentParams, {"name": "Jane Doe"})

    @pytest.mark.parametrize(
        "arguments",
        [
            {"email": "jane@acme.com"},
            {"linkedin_url": "https://www.linkedin.com/in/janedoe"},
            {"name": "Jane Doe", "domain": "acme.com"},
            {"name": "Jane Doe", "organization_name": "Acme"},
        ],
    )
    def test_enrichment_accepts(self, arguments):
        parse_params(PeopleEnrichmentParams, arguments)

    def test_enrichment_rejects_bad_email(self):
        with pytest.raises(ParameterValidationError, match="email"):
            parse_params(PeopleEnrichmentParams, {"email": "not-an-email"})

    def test_organization_enrichment(self):
        with pytest.raises(ParameterValidationError, match="Must provide either domain or company name"):
            parse_params(OrganizationEnrichmentParams, {})
        assert parse_params(OrganizationEnrichmentParams, {"name": "Acme"}).name == "Acme"

    def test_match_requires_identifier(self):
        with pytest.raises(ParameterValidationError, match="first_name \\+ last_name"):
            parse_params(PeopleMatchParams, {"first_name": "Jane", "domain": "acme.com"})

    def test_match_defaults(self):
        params = parse_params(PeopleMatchParams, {"first_name": "Jane", "last_name": "Doe"})
        assert params.reveal_personal_emails is True
        assert params.reveal_phone_number is False
        assert params.to_upstream() == {
            "first_name": "Jane",
            "last_name": "Doe",
            "reveal_personal_emails": True,
            "reveal_phone_number": False,
        }


class TestCreateContact:
    def test_names_required(self):
        with pytest.raises(ParameterValidationError) as excinfo:
            parse_params(CreateContactParams, {"first_name": ""})
        assert len(excinfo.value.problems) == 2

    def test_visibility_enum(self):
        with pytest.raises(ParameterValidationError):
            parse_params(CreateContactParams, {"first_name": "A", "last_name": "B", "visibility": "team"})

    def test_upstream_body(self):
        params = parse_params(
            CreateContactParams,
            {"first_name": "Jane", "last_name": "Doe", "email": "jane@acme.com", "label_names": ["vip"]},
        )
        assert params.to_upstream() == {
            "first_name": "Jane",
            "last_name": "Doe",
            "email": "jane@acme.com",
            "label_names": ["vip"],
        }


class TestUrlFields:
    @pytest.mark.parametrize(
        "url",
        ["https://acme.com", "https://Acme.com/about", "http://bücher.example/shop"],
    )
    def test_website_url_sent_as_given(self, url):
        params = parse_params(CreateContactParams, {"first_name": "A", "last_name": "B", "website_url": url})
        assert params.to_upstream()["website_url"] == url

    def test_linkedin_url_sent_as_given(self):
        url = "https://www.linkedin.com/in/janedoe"
        assert parse_params(PeopleMatchParams, {"linkedin_url": url}).to_upstream()["linkedin_url"] == url
        assert parse_params(PeopleEnrichmentParams, {"linkedin_url": url}).to_upstream() == {"linkedin_url": url}

    @pytest.mark.parametrize("url", ["linkedin.com/in/jane", "ftp://acme.com", "not a url"])
    def test_rejects_non_http_urls(self, url):
        with pytest.raises(ParameterValidationError) as excinfo:
            parse_params(PeopleEnrichmentParams, {"linkedin_url": url})
        assert excinfo.value.problems[0].startswith("linkedin_url: ")


class TestOrganizationRanges:
    def test_only_min(self):
        params = parse_params(OrganizationSearchParams, {"employee_count_min": 50})
        body = params.to_upstream()
        assert body["employee_count_range"] == {"min": 50}
        assert "revenue_range" not in body
        assert "employee_count_min" not in body

    def test_both_bounds(self):
        body = parse_params(OrganizationSearchParams, {"revenue_min": 1e6, "revenue_max": 2.5e6}).to_upstream()
        assert body["revenue_range"] == {"min": 1000000, "max": 2500000}

    def test_no_bounds(self):
        body = parse_params(OrganizationSearchParams, {"q_keywords": "fintech"}).to_upstream()
        assert body == {"q_keywords": "fintech", "page": 1, "per_page": 25}

    def test_zero_is_a_bound(self):
        assert numeric_range(0, None) == {"min": 0}
        assert numeric_range(None, None) is None
        assert numeric_range(None, 10.5) == {"max": 10.5}
