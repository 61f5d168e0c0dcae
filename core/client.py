# =============================================================================
# core/client.py  -  Authenticated HTTP client for the Apollo.io API
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   ApolloClient performs one authenticated HTTP exchange per call and turns
#   every failure into an ApolloError subclass (see core/errors.py).  It does
#   not interpret successful response bodies: adapters in core/people.py,
#   core/organizations.py, core/contacts.py and core/outreach.py do that.
#
# EVERY REQUEST CARRIES:
#   X-Api-Key: <APOLLO_API_KEY>
#   Content-Type: application/json
#   Cache-Control: no-cache
#   and a bounded timeout (30 seconds unless configured otherwise).
#
# LIFECYCLE:
#   The underlying httpx.AsyncClient is opened lazily on the first request
#   and released by aclose().  The class is an async context manager so the
#   tool layer can scope one client to one tool call:
#
#       async with ApolloClient(api_key) as client:
#           response = await client.search_people({...})
# =============================================================================

import logging
from typing import Any, Optional

import httpx

from core.config import DEFAULT_BASE_URL, DEFAULT_TIMEOUT_SECONDS
from core.errors import TransportError, UnknownApolloError, classify_http_error
from core.pagination import DEFAULT_MAX_PAGES, PageCursor

logger = logging.getLogger(__name__)


def _without_none(payload: Optional[dict[str, Any]]) -> Optional[dict[str, Any]]:
    """Drop keys whose value is None; Apollo treats absent and null differently."""
    if payload is None:
        return None
    return {key: value for key, value in payload.items() if value is not None}


def _json_or_none(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return None


class ApolloClient:
    """Thin async client for the Apollo.io REST API."""

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._api_key = api_key
        self._base_url = base_url
        self._timeout = timeout
        self._transport = transport
        self._http: Optional[httpx.AsyncClient] = None

    # -------------------------------------------------------------------------
    # Connection management
    # -------------------------------------------------------------------------
    def _get_http(self) -> httpx.AsyncClient:
        if self._http is None or self._http.is_closed:
            self._http = httpx.AsyncClient(
                base_url=self._base_url,
                headers={
                    "X-Api-Key": self._api_key,
                    "Content-Type": "application/json",
                    "Cache-Control": "no-cache",
                },
                timeout=self._timeout,
                transport=self._transport,
            )
        return self._http

    async def aclose(self) -> None:
        """Release the connection pool, if one was opened."""
        if self._http is not None and not self._http.is_closed:
            await self._http.aclose()
        self._http = None

    async def __aenter__(self) -> "ApolloClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    # -------------------------------------------------------------------------
    # The one place HTTP happens
    # -------------------------------------------------------------------------
    async def request(
        self,
        method: str,
        path: str,
        params: Optional[dict[str, Any]] = None,
        json: Optional[dict[str, Any]] = None,
    ) -> Any:
        """Send one request and return the parsed JSON body.

        Args:
            method: HTTP method ("GET" or "POST").
            path: Path relative to the API root, e.g. "/people/match".
            params: Query parameters (reads).
            json: JSON body (writes and searches).

        Returns:
            The decoded response body; an empty body decodes to {}.

        Raises:
            AuthenticationError, RateLimitError, RequestValidationError,
            ApolloError: Apollo answered with an error status.
            TransportError: No response was received (includes timeouts).
            UnknownApolloError: Anything else, message preserved.
        """
        params = _without_none(params)
        json = _without_none(json)
        logger.debug("Making request to %s %s %s", method, path, json if json is not None else params)

        try:
            response = await self._get_http().request(method, path, params=params, json=json)
        except httpx.TransportError as e:
            # TimeoutException, ConnectError, NetworkError ... all land here
            logger.error("Network error on %s %s: %s", method, path, e)
            raise TransportError() from e
        except Exception as e:
            logger.error("Unexpected error on %s %s: %s", method, path, e)
            raise UnknownApolloError(str(e)) from e

        if response.is_error:
            error = classify_http_error(
                response.status_code,
                _json_or_none(response),
                response.headers,
                response.reason_phrase,
            )
            logger.error(
                "Apollo API error: %s %s -> %s %s",
                method, path, response.status_code, error.message,
            )
            raise error

        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError as e:
            logger.error("Unreadable response body from %s %s: %s", method, path, e)
            raise UnknownApolloError(f"Invalid JSON in Apollo response: {e}") from e

    async def _get(self, path: str, params: Optional[dict[str, Any]] = None) -> Any:
        return await self.request("GET", path, params=params)

    async def _post(self, path: str, payload: Optional[dict[str, Any]] = None) -> Any:
        return await self.request("POST", path, json=payload or {})

    # -------------------------------------------------------------------------
    # Endpoints
    # -------------------------------------------------------------------------
    async def search_people(self, params: dict[str, Any]) -> dict[str, Any]:
        return await self._post("/mixed_people/search", params)

    async def search_organizations(self, params: dict[str, Any]) -> dict[str, Any]:
        return await self._post("/mixed_companies/search", params)

    async def enrich_person(self, params: dict[str, Any]) -> dict[str, Any]:
        return await self._get("/people/enrich", params)

    async def match_person(self, params: dict[str, Any]) -> dict[str, Any]:
        return await self._post("/people/match", params)

    async def enrich_organization(self, params: dict[str, Any]) -> dict[str, Any]:
        return await self._get("/organizations/enrich", params)

    async def get_job_postings(
        self,
        organization_id: str,
        page: int = 1,
        per_page: int = 100,
    ) -> dict[str, Any]:
        return await self._get(
            f"/organizations/{organization_id}/job_postings",
            {"page": page, "per_page": per_page},
        )

    async def create_contact(self, params: dict[str, Any]) -> dict[str, Any]:
        return await self._post("/contacts", params)

    async def search_contacts(self, params: dict[str, Any]) -> dict[str, Any]:
        return await self._post("/contacts/search", params)

    async def search_outreach_emails(self, params: dict[str, Any]) -> dict[str, Any]:
        return await self._post("/emailer_messages/search", params)

    # -------------------------------------------------------------------------
    # Paginated helpers
    # -------------------------------------------------------------------------
    def search_people_pages(
        self,
        params: Optional[dict[str, Any]] = None,
        max_pages: int = DEFAULT_MAX_PAGES,
    ) -> PageCursor:
        """Walk people search results 100 at a time, up to max_pages pages."""
        return PageCursor(self.search_people, params, max_pages)

    def search_organizations_pages(
        self,
        params: Optional[dict[str, Any]] = None,
        max_pages: int = DEFAULT_MAX_PAGES,
    ) -> PageCursor:
        """Walk organization search results 100 at a time, up to max_pages pages."""
        return PageCursor(self.search_organizations, params, max_pages)
