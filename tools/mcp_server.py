# =============================================================================
# tools/mcp_server.py  -  FastMCP Tool Server (ALL Apollo tools in one place)
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Defines every MCP tool the agent can call.  Each tool is a thin wrapper
#   around one core/ adapter: it validates arguments, opens an ApolloClient
#   for the duration of the call, and returns the reshaped result as a dict.
#
# HOW IT WORKS (the flow):
#   1. The agent calls a tool by name via MCP (e.g., "people_search")
#   2. FastMCP checks the argument types/bounds declared in the signature
#   3. _run() builds the capability's params model (identifier rules apply)
#   4. The core/ adapter calls Apollo and reshapes the response
#   5. The agent receives a compact dict (None fields dropped)
#
# ERRORS:
#   Anything that goes wrong becomes a ToolError, which FastMCP reports to
#   the agent as an error result (isError=true) with a readable message.
#   A person or company that cannot be found is NOT an error: the tool
#   returns {"found": false, "message": ...}.
#
# TOOLS:
#   people_search, organization_search          global Apollo database
#   people_enrichment, organization_enrichment  one record by identifier
#   people_match                                reveals emails (uses credits)
#   job_postings                                per organization
#   create_contact, contact_search              the team's own contacts
#   outreach_email_search                       emails sent by sequences
#
# RUNNING THIS SERVER:
#     python -m tools.mcp_server        (stdio transport)
#     apollo-mcp-server                 (console script)
# =============================================================================

import json
import logging
import signal
import sys
from typing import Annotated, Any, Awaitable, Callable, Literal, Optional

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from pydantic import Field

from core import contacts, organizations, outreach, people
from core.client import ApolloClient
from core.config import ConfigError, get_settings
from core.errors import ApolloError, ParameterValidationError
from core.models import to_payload
from core.params import (
    CapabilityParams,
    ContactSearchParams,
    CreateContactParams,
    JobPostingsParams,
    OrganizationEnrichmentParams,
    OrganizationSearchParams,
    OutreachEmailSearchParams,
    PageNumber,
    PeopleEnrichmentParams,
    PeopleMatchParams,
    PeopleSearchParams,
    PerPage,
    parse_params,
)

# =============================================================================
# Logging Setup
# =============================================================================
# STDOUT carries the MCP protocol, so every log line goes to STDERR.
#
# ANSI COLOR CODES:
#     - CYAN for incoming requests (tool name + parameters)
#     - GREEN for response JSON
#     - YELLOW for intermediate status/progress messages
#     - RED for errors returned to the agent
# =============================================================================

_CYAN = "\033[36m"     # Requests (tool calls with params)
_GREEN = "\033[32m"    # Responses (JSON output)
_YELLOW = "\033[33m"   # Status/progress messages
_RED = "\033[31m"      # Errors
_RESET = "\033[0m"     # Reset to default terminal color

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [MCP] %(message)s",
    datefmt="%H:%M:%S",
    stream=sys.stderr,
)


def _log_request(tool_name: str, **params) -> None:
    """Log an incoming tool call with its parameters in CYAN."""
    param_str = ", ".join(f"{k}={v!r}" for k, v in params.items())
    logging.info(f"{_CYAN}{tool_name} called with: {param_str}{_RESET}")


def _log_status(message: str) -> None:
    """Log an intermediate status message in YELLOW."""
    logging.info(f"{_YELLOW}  → {message}{_RESET}")


def _log_response(tool_name: str, result: dict) -> dict:
    """Log the tool response as compact JSON in GREEN, then return it."""
    logging.info(f"{_GREEN}  ← {tool_name} response: {json.dumps(result, separators=(',', ':'), default=str)}{_RESET}")
    return result


def _log_failure(tool_name: str, message: str) -> None:
    logging.error(f"{_RED}  ✗ {tool_name} failed: {message}{_RESET}")


# =============================================================================
# Create the FastMCP server instance
# =============================================================================
mcp = FastMCP("apollo-io")


def _open_client() -> ApolloClient:
    """A fresh client per tool call; nothing is shared between calls."""
    settings = get_settings()
    return ApolloClient(
        api_key=settings.apollo_api_key,
        base_url=settings.apollo_base_url,
        timeout=settings.timeout_seconds,
    )


def _error_text(error: ApolloError) -> str:
    """Readable ToolError text built from the error's caller-facing value."""
    info = error.to_dict()
    text = f"Error: {info['message']}"
    if "retryAfterSeconds" in info:
        text += f" Retry after {info['retryAfterSeconds']} seconds."
    if "details" in info:
        text += f" Details: {json.dumps(info['details'], separators=(',', ':'), default=str)}"
    return text


Adapter = Callable[[ApolloClient, Any], Awaitable[Any]]


async def _run(
    tool_name: str,
    adapter: Adapter,
    model: type[CapabilityParams],
    arguments: dict[str, Any],
) -> dict:
    """Validate, call one adapter, and convert its outcome for the agent.

    Raises:
        ToolError: for rejected arguments and for every failed call.
    """
    _log_request(tool_name, **{k: v for k, v in arguments.items() if v is not None})

    try:
        params = parse_params(model, arguments)
        async with _open_client() as client:
            result = await adapter(client, params)
    except ParameterValidationError as e:
        _log_failure(tool_name, e.message)
        raise ToolError(e.message) from e
    except ApolloError as e:
        _log_failure(tool_name, json.dumps(e.to_dict(), default=str))
        raise ToolError(_error_text(e)) from e
    except ConfigError as e:
        _log_failure(tool_name, str(e))
        raise ToolError(f"Error: {e}") from e
    except Exception as e:
        logging.exception(f"Tool execution failed: {tool_name}")
        raise ToolError(f"Error: {e}") from e

    payload = to_payload(result)
    if "results" in payload:
        _log_status(f"{len(payload['results'])} results")
    return _log_response(tool_name, payload)


StringList = Optional[list[str]]


# =============================================================================
# TOOL 1: people_search
# =============================================================================
@mcp.tool()
async def people_search(
    q_keywords: Optional[str] = None,
    name: Optional[str] = None,
    email: Optional[str] = None,
    title: Optional[str] = None,
    company: Optional[str] = None,
    location: Optional[str] = None,
    industry: Optional[str] = None,
    person_titles: StringList = None,
    organization_domains: StringList = None,
    person_locations: StringList = None,
    organization_locations: StringList = None,
    q_organization_domains: StringList = None,
    organization_ids: StringList = None,
    person_seniorities: StringList = None,
    person_functions: StringList = None,
    organization_num_employees_ranges: StringList = None,
    page: PageNumber = 1,
    per_page: PerPage = 25,
) -> dict:
    """Search for people in the Apollo.io database with various filters.

    WHEN TO CALL THIS: To find candidate prospects by title, company, location,
    seniority or function.  Search results usually do NOT include email
    addresses; call people_match on a result to reveal them.

    Args:
        q_keywords: Free-text keywords matched against profiles.
        person_titles: Job titles, e.g. ["CTO", "VP Engineering"].
        organization_domains: Company domains, e.g. ["stripe.com"].
        person_seniorities: e.g. ["senior", "manager", "director", "c_suite"].
        person_functions: e.g. ["sales", "engineering", "marketing"].
        organization_num_employees_ranges: e.g. ["1,10", "11,50"].
        page: Page number (1-500).
        per_page: Results per page (1-100).

    Returns:
        results: [{id, name, title, email, company, company_domain, location,
                   linkedin_url, seniority, functions}]
        pagination: {current_page, total_pages, total_results, results_per_page}
    """
    return await _run("people_search", people.people_search, PeopleSearchParams, dict(locals()))


# =============================================================================
# TOOL 2: organization_search
# =============================================================================
@mcp.tool()
async def organization_search(
    q_keywords: Optional[str] = None,
    name: Optional[str] = None,
    domains: StringList = None,
    locations: StringList = None,
    industries: StringList = None,
    employee_count_min: Optional[float] = None,
    employee_count_max: Optional[float] = None,
    revenue_min: Optional[float] = None,
    revenue_max: Optional[float] = None,
    technologies: StringList = None,
    funding_raised_min: Optional[float] = None,
    funding_raised_max: Optional[float] = None,
    page: PageNumber = 1,
    per_page: PerPage = 25,
) -> dict:
    """Search for organizations/companies in the Apollo.io database.

    WHEN TO CALL THIS: To build a list of target accounts by industry,
    location, size, revenue, funding or technology stack.

    Args:
        domains, locations, industries, technologies: List filters.
        employee_count_min / employee_count_max: Headcount bounds.
        revenue_min / revenue_max: Annual revenue bounds in USD.
        funding_raised_min / funding_raised_max: Funding bounds in USD.
        page: Page number (1-500).
        per_page: Results per page (1-100).

    Returns:
        results: [{id, name, domain, website_url, industry, location,
                   employee_count, revenue, technologies, funding_raised,
                   founded_year, description, linkedin_url, ...}]
        pagination: {current_page, total_pages, total_results, results_per_page}
    """
    return await _run(
        "organization_search", organizations.organization_search, OrganizationSearchParams, dict(locals())
    )


# =============================================================================
# TOOL 3: people_enrichment
# =============================================================================
@mcp.tool()
async def people_enrichment(
    email: Optional[str] = None,
    linkedin_url: Optional[str] = None,
    name: Optional[str] = None,
    organization_name: Optional[str] = None,
    domain: Optional[str] = None,
) -> dict:
    """Enrich person data using email, LinkedIn URL, or name with company information.

    Provide at least one of: email, linkedin_url, or name together with
    organization_name or domain.

    Returns:
        {found: true, person: {id, name, title, email, phone_numbers,
         linkedin_url, location, company, seniority, functions}}
        or {found: false, message} when nobody matches.
    """
    return await _run(
        "people_enrichment", people.people_enrichment, PeopleEnrichmentParams, dict(locals())
    )


# =============================================================================
# TOOL 4: organization_enrichment
# =============================================================================
@mcp.tool()
async def organization_enrichment(
    domain: Optional[str] = None,
    name: Optional[str] = None,
) -> dict:
    """Enrich organization/company data using domain or company name.

    Args:
        domain: Company domain (e.g., "example.com").  Preferred when known.
        name: Company name.

    Returns:
        {found: true, organization: {id, name, domain, industry,
         location: {city, state, country, full}, employee_count, revenue,
         social_media, technologies, funding_raised, founded_year, ...}}
        or {found: false, message}.
    """
    return await _run(
        "organization_enrichment",
        organizations.organization_enrichment,
        OrganizationEnrichmentParams,
        dict(locals()),
    )


# =============================================================================
# TOOL 5: people_match
# =============================================================================
@mcp.tool()
async def people_match(
    email: Optional[str] = None,
    first_name: Optional[str] = None,
    last_name: Optional[str] = None,
    name: Optional[str] = None,
    organization_name: Optional[str] = None,
    domain: Optional[str] = None,
    linkedin_url: Optional[str] = None,
    reveal_personal_emails: bool = True,
    reveal_phone_number: bool = False,
) -> dict:
    """Match and retrieve detailed person information including email addresses.

    WHEN TO CALL THIS: After people_search, to get contact details for a
    specific person.  Consumes Apollo API credits.

    Provide at least one identifier: email, linkedin_url, name, or
    first_name + last_name.  Adding organization_name or domain improves the
    match.

    Returns:
        {found: true, person: {..., email, email_status, personal_emails,
         phone_numbers, company, employment_history}, credits_used}
        or {found: false, message}.
    """
    return await _run("people_match", people.people_match, PeopleMatchParams, dict(locals()))


# =============================================================================
# TOOL 6: job_postings
# =============================================================================
@mcp.tool()
async def job_postings(
    organization_id: str,
    page: Annotated[int, Field(ge=1, description="Page number")] = 1,
    per_page: PerPage = 25,
) -> dict:
    """Get current job postings for a specific organization.

    Args:
        organization_id: Apollo organization ID (from organization_search or
                         organization_enrichment).

    Returns:
        results: [{id, title, department, location, posted_at, job_type,
                   seniority_level, description, apply_url}]
        pagination: {current_page, total_pages, total_results, results_per_page}
    """
    return await _run("job_postings", organizations.job_postings, JobPostingsParams, dict(locals()))


# =============================================================================
# TOOL 7: create_contact
# =============================================================================
@mcp.tool()
async def create_contact(
    first_name: str,
    last_name: str,
    title: Optional[str] = None,
    organization_name: Optional[str] = None,
    email: Optional[str] = None,
    website_url: Optional[str] = None,
    direct_phone: Optional[str] = None,
    mobile_phone: Optional[str] = None,
    label_names: StringList = None,
    visibility: Optional[Literal["all", "only-me"]] = None,
) -> dict:
    """Create a new contact in the team's Apollo.io account.

    Note: Apollo does not apply deduplication. This creates a new contact
    even if similar details already exist, so check contact_search first.

    Returns:
        {success: true, contact: {id, name, title, email, organization,
         labels, visibility, created_at}, note}
        or {success: false, error}.
    """
    return await _run("create_contact", contacts.create_contact, CreateContactParams, dict(locals()))


# =============================================================================
# TOOL 8: contact_search
# =============================================================================
@mcp.tool()
async def contact_search(
    q_keywords: Optional[str] = None,
    name: Optional[str] = None,
    email: Optional[str] = None,
    title: Optional[str] = None,
    company: Optional[str] = None,
    location: Optional[str] = None,
    industry: Optional[str] = None,
    person_titles: StringList = None,
    organization_domains: StringList = None,
    person_locations: StringList = None,
    organization_locations: StringList = None,
    person_seniorities: StringList = None,
    person_functions: StringList = None,
    organization_num_employees_ranges: StringList = None,
    contact_type: Optional[Literal["person", "company"]] = None,
    contact_email_status: Optional[str] = None,
    label_names: StringList = None,
    page: PageNumber = 1,
    per_page: PerPage = 25,
) -> dict:
    """Search for contacts in your team's Apollo.io account.

    This only searches contacts already added to the account, not the whole
    Apollo database (use people_search for that).  Limited to 50,000 results
    (500 pages).  Not available on free plans.

    Returns:
        results: [{id, name, title, email, email_status, company, location,
                   labels, visibility, created_at, updated_at, ...}]
        pagination: {current_page, total_pages, total_results, results_per_page}
        note: reminder of the account scope
    """
    return await _run("contact_search", contacts.contact_search, ContactSearchParams, dict(locals()))


# =============================================================================
# TOOL 9: outreach_email_search
# =============================================================================
@mcp.tool()
async def outreach_email_search(
    subject: Optional[str] = None,
    body: Optional[str] = None,
    from_address: Optional[str] = None,
    to_address: Optional[str] = None,
    bounce_type: Optional[str] = None,
    sent_at_before: Optional[str] = None,
    sent_at_after: Optional[str] = None,
    delivered_at_before: Optional[str] = None,
    delivered_at_after: Optional[str] = None,
    opened_at_before: Optional[str] = None,
    opened_at_after: Optional[str] = None,
    clicked_at_before: Optional[str] = None,
    clicked_at_after: Optional[str] = None,
    bounced_at_before: Optional[str] = None,
    bounced_at_after: Optional[str] = None,
    replied_at_before: Optional[str] = None,
    replied_at_after: Optional[str] = None,
    emailer_campaign_ids: StringList = None,
    contact_ids: StringList = None,
    page: PageNumber = 1,
    per_page: PerPage = 25,
) -> dict:
    """Search for outreach emails sent via Apollo sequences.

    Requires a master API key.  Limited to 50,000 results (500 pages).  Not
    available on free plans.  Date filters take ISO 8601 strings.

    Returns:
        results: [{id, subject, body_text, from_email, to_email, campaign_id,
                   contact_id, sent_at, completed_at, status, recipients, ...}]
        pagination: {current_page, total_results, note}; total pages are not
                    reported by Apollo for this endpoint.
    """
    return await _run(
        "outreach_email_search", outreach.outreach_email_search, OutreachEmailSearchParams, dict(locals())
    )


# =============================================================================
# Server entry point
# =============================================================================
def _handle_sigterm(signum, frame) -> None:
    logging.info("Shutting down Apollo MCP server...")
    sys.exit(0)


def main() -> None:
    """Start the MCP server on stdio.

    Exits with status 1 when APOLLO_API_KEY is missing or when an uncaught
    exception escapes the server loop.
    """
    try:
        settings = get_settings()
    except ConfigError as e:
        logging.critical(f"Failed to start server: {e}")
        sys.exit(1)

    logging.getLogger().setLevel(settings.logging_level)
    signal.signal(signal.SIGTERM, _handle_sigterm)

    logging.info("Starting Apollo MCP server...")
    try:
        mcp.run()
    except KeyboardInterrupt:
        logging.info("Shutting down Apollo MCP server...")
    except Exception:
        logging.exception("Uncaught exception in Apollo MCP server")
        sys.exit(1)


if __name__ == "__main__":
    main()
