"""Tests for core.client - the Apollo HTTP client over httpx.MockTransport."""

import json

import httpx
import pytest

from core.client import ApolloClient
from core.errors import (
    ApolloError,
    AuthenticationError,
    RateLimitError,
    TransportError,
    UnknownApolloError,
)

BASE_URL = "https://apollo.test/api/v1"


class Recorder:
    """MockTransport handler that records requests and replays one response."""

    def __init__(self, response: httpx.Response | None = None, error: Exception | None = None):
        self.response = response or httpx.Response(200, json={})
        self.error = error
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return self.response

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


def make_client(recorder: Recorder) -> ApolloClient:
    return ApolloClient("test-key", base_url=BASE_URL, transport=httpx.MockTransport(recorder))


class TestRequests:
    async def test_headers(self):
        recorder = Recorder()
        async with make_client(recorder) as client:
            await client.search_people({"q_keywords": "cto"})
        request = recorder.last
        assert request.headers["X-Api-Key"] == "test-key"
        assert request.headers["Content-Type"] == "application/json"
        assert request.headers["Cache-Control"] == "no-cache"

    async def test_post_body_drops_none(self):
        recorder = Recorder()
        async with make_client(recorder) as client:
            await client.search_organizations({"name": "Acme", "domains": None, "page": 2})
        request = recorder.last
        assert request.method == "POST"
        assert request.url.path == "/api/v1/mixed_companies/search"
        assert json.loads(request.content) == {"name": "Acme", "page": 2}

    async def test_get_query(self):
        recorder = Recorder()
        async with make_client(recorder) as client:
            await client.enrich_organization({"domain": "acme.com", "name": None})
        request = recorder.last
        assert request.method == "GET"
        assert request.url.path == "/api/v1/organizations/enrich"
        assert dict(request.url.params) == {"domain": "acme.com"}

    async def test_job_postings_path(self):
        recorder = Recorder()
        async with make_client(recorder) as client:
            await client.get_job_postings("org-42", page=3, per_page=10)
        request = recorder.last
        assert request.url.path == "/api/v1/organizations/org-42/job_postings"
        assert request.url.params["page"] == "3"
        assert request.url.params["per_page"] == "10"

    @pytest.mark.parametrize(
        "method, path",
        [
            ("search_people", "/api/v1/mixed_people/search"),
            ("match_person", "/api/v1/people/match"),
            ("create_contact", "/api/v1/contacts"),
            ("search_contacts", "/api/v1/contacts/search"),
            ("search_outreach_emails", "/api/v1/emailer_messages/search"),
        ],
    )
    async def test_post_endpoints(self, method, path):
        recorder = Recorder()
        async with make_client(recorder) as client:
            await getattr(client, method)({})
        assert recorder.last.method == "POST"
        assert recorder.last.url.path == path

    async def test_person_enrichment_is_get(self):
        recorder = Recorder()
        async with make_client(recorder) as client:
            await client.enrich_person({"email": "jane@acme.com"})
        assert recorder.last.method == "GET"
        assert recorder.last.url.path == "/api/v1/people/enrich"


class TestResponses:
    async def test_returns_json(self):
        recorder = Recorder(httpx.Response(200, json={"people": [{"id": "p1"}]}))
        async with make_client(recorder) as client:
            assert await client.search_people({}) == {"people": [{"id": "p1"}]}

    async def test_empty_body_is_empty_dict(self):
        recorder = Recorder(httpx.Response(200, content=b""))
        async with make_client(recorder) as client:
            assert await client.create_contact({"first_name": "A"}) == {}

    async def test_invalid_json(self):
        recorder = Recorder(httpx.Response(200, content=b"<html>"))
        async with make_client(recorder) as client:
            with pytest.raises(UnknownApolloError, match="Invalid JSON"):
                await client.search_people({})


class TestErrors:
    async def test_401(self):
        recorder = Recorder(httpx.Response(401, json={"error": {"message": "Invalid API key"}}))
        async with make_client(recorder) as client:
            with pytest.raises(AuthenticationError, match="Invalid API key"):
                await client.search_people({})

    async def test_429_retry_after(self):
        recorder = Recorder(httpx.Response(429, headers={"Retry-After": "120"}, json={}))
        async with make_client(recorder) as client:
            with pytest.raises(RateLimitError) as excinfo:
                await client.match_person({"email": "a@b.co"})
        assert excinfo.value.retry_after == 120

    async def test_500(self):
        recorder = Recorder(httpx.Response(503, text="unavailable"))
        async with make_client(recorder) as client:
            with pytest.raises(ApolloError) as excinfo:
                await client.search_people({})
        assert excinfo.value.status_code == 503
        assert excinfo.value.message == "HTTP 503 Service Unavailable"

    async def test_connection_refused(self):
        recorder = Recorder(error=httpx.ConnectError("connection refused"))
        async with make_client(recorder) as client:
            with pytest.raises(TransportError) as excinfo:
                await client.search_people({})
        assert excinfo.value.message == "Network error: Unable to reach Apollo API"

    async def test_timeout_is_transport(self):
        recorder = Recorder(error=httpx.ReadTimeout("timed out"))
        async with make_client(recorder) as client:
            with pytest.raises(TransportError):
                await client.search_people({})

    async def test_unexpected_exception(self):
        recorder = Recorder(error=RuntimeError("weird"))
        async with make_client(recorder) as client:
            with pytest.raises(UnknownApolloError, match="weird"):
                await client.search_people({})


class TestLifecycle:
    async def test_aclose_without_requests(self):
        client = ApolloClient("k")
        await client.aclose()

    async def test_reopens_after_close(self):
        recorder = Recorder()
        client = make_client(recorder)
        await client.search_people({})
        await client.aclose()
        await client.search_people({})
        await client.aclose()
        assert len(recorder.requests) == 2


class TestPageHelpers:
    async def test_people_pages(self):
        recorder = Recorder(
            httpx.Response(200, json={"people": [], "pagination": {"page": 1, "total_pages": 1}})
        )
        async with make_client(recorder) as client:
            pages = [page async for page in client.search_people_pages({"person_titles": ["CTO"]})]
        assert len(pages) == 1
        assert json.loads(recorder.last.content) == {
            "person_titles": ["CTO"],
            "page": 1,
            "per_page": 100,
        }
