# =============================================================================
# core/models.py  -  Output models (what the agent receives back)
# =============================================================================
#
# These dataclasses define the *shape* of every reshaped Apollo response.
# Apollo's raw payloads are large and deeply nested; each model here keeps
# only the fields an agent needs to reason about a person, company, contact,
# job posting or outreach email.
#
# SERIALIZATION:
#   The tool layer turns any of these into plain JSON with to_payload(), which
#   drops keys whose value is None.  A field Apollo did not return therefore
#   never shows up as null in the tool output.
#
# DERIVED FIELDS:
#   join_location() builds the "City, State, Country" display string used by
#   every model with a location, skipping the parts Apollo left empty.
# =============================================================================

from dataclasses import asdict, dataclass, field
from typing import Any, Mapping, Optional


def join_location(*parts: Optional[str]) -> str:
    """Join location parts with ", ", skipping empty ones.

    >>> join_location("Austin", None, "US")
    'Austin, US'
    """
    return ", ".join(part for part in parts if part)


def _drop_none(items: list[tuple[str, Any]]) -> dict[str, Any]:
    return {key: value for key, value in items if value is not None}


def to_payload(result: Any) -> dict[str, Any]:
    """Convert an output dataclass (recursively) into a JSON-ready dict."""
    return asdict(result, dict_factory=_drop_none)


# -----------------------------------------------------------------------------
# PageInfo - pagination block with caller-facing names
# -----------------------------------------------------------------------------
# Apollo says {page, per_page, total_entries, total_pages}.  Agents get
# {current_page, total_pages, total_results, results_per_page}.
# -----------------------------------------------------------------------------
@dataclass
class PageInfo:
    current_page: int
    total_pages: Optional[int] = None
    total_results: Optional[int] = None
    results_per_page: Optional[int] = None
    note: Optional[str] = None         # only set when totals are unavailable

    @classmethod
    def from_upstream(cls, pagination: Optional[Mapping[str, Any]], requested_page: int = 1) -> "PageInfo":
        pagination = pagination or {}
        return cls(
            current_page=pagination.get("page", requested_page),
            total_pages=pagination.get("total_pages"),
            total_results=pagination.get("total_entries"),
            results_per_page=pagination.get("per_page"),
        )


# -----------------------------------------------------------------------------
# Search result rows
# -----------------------------------------------------------------------------
@dataclass
class PersonSummary:
    """One row of a people_search result."""

    id: str
    name: Optional[str] = None
    title: Optional[str] = None
    email: Optional[str] = None
    company: Optional[str] = None          # organization.name
    company_domain: Optional[str] = None   # organization.domain
    location: str = ""                     # "City, State, Country"
    linkedin_url: Optional[str] = None
    seniority: Optional[str] = None
    functions: Optional[list[str]] = None


@dataclass
class OrganizationSummary:
    """One row of an organization_search result."""

    id: str
    name: Optional[str] = None
    domain: Optional[str] = None
    website_url: Optional[str] = None
    industry: Optional[str] = None
    industries: Optional[list[str]] = None
    location: str = ""
    employee_count: Optional[int] = None
    employee_count_range: Optional[str] = None
    revenue: Optional[float] = None
    revenue_range: Optional[str] = None
    technologies: Optional[list[str]] = None
    funding_raised: Optional[float] = None
    founded_year: Optional[int] = None
    description: Optional[str] = None
    linkedin_url: Optional[str] = None


@dataclass
class ContactSummary:
    """One row of a contact_search result (the team's own contacts)."""

    id: str
    name: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    title: Optional[str] = None
    email: Optional[str] = None
    email_status: Optional[str] = None
    company: Optional[str] = None
    company_domain: Optional[str] = None
    location: str = ""
    linkedin_url: Optional[str] = None
    direct_phone: Optional[str] = None
    mobile_phone: Optional[str] = None
    seniority: Optional[str] = None
    functions: Optional[list[str]] = None
    labels: Optional[list[str]] = None     # Apollo's label_names
    visibility: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


@dataclass
class JobPostingSummary:
    id: str
    title: Optional[str] = None
    department: Optional[str] = None
    location: Optional[str] = None
    posted_at: Optional[str] = None
    job_type: Optional[str] = None
    seniority_level: Optional[str] = None
    description: Optional[str] = None
    apply_url: Optional[str] = None


@dataclass
class OutreachEmailSummary:
    """One email sent through an Apollo sequence."""

    id: str
    subject: Optional[str] = None
    body_text: Optional[str] = None
    from_email: Optional[str] = None
    from_name: Optional[str] = None
    to_email: Optional[str] = None
    to_name: Optional[str] = None
    cc_emails: Optional[list[str]] = None
    bcc_emails: Optional[list[str]] = None
    campaign_id: Optional[str] = None      # emailer_campaign_id
    contact_id: Optional[str] = None
    sent_at: Optional[str] = None          # Apollo's due_at
    completed_at: Optional[str] = None
    status: Optional[str] = None
    type: Optional[str] = None
    tracking_disabled_reason: Optional[str] = None
    recipients: Optional[list[dict[str, Any]]] = None


@dataclass
class SearchPage:
    """A page of reshaped search results plus its pagination block."""

    results: list[Any]
    pagination: PageInfo
    note: Optional[str] = None


# -----------------------------------------------------------------------------
# Enrichment / match results
# -----------------------------------------------------------------------------
@dataclass
class CompanyRef:
    """The employer attached to an enriched or matched person."""

    id: Optional[str] = None
    name: Optional[str] = None
    domain: Optional[str] = None
    industry: Optional[str] = None
    employee_count: Optional[int] = None   # people_match only


@dataclass
class EnrichedPerson:
    id: str
    name: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    title: Optional[str] = None
    email: Optional[str] = None
    phone_numbers: Optional[list[Any]] = None
    linkedin_url: Optional[str] = None
    photo_url: Optional[str] = None
    location: str = ""
    company: Optional[CompanyRef] = None
    seniority: Optional[str] = None
    functions: Optional[list[str]] = None


@dataclass
class MatchedPerson:
    """people_match output; list fields default to [] rather than absent."""

    id: str
    name: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    title: Optional[str] = None
    email: Optional[str] = None
    email_status: Optional[str] = None
    personal_emails: list[str] = field(default_factory=list)
    phone_numbers: list[Any] = field(default_factory=list)
    linkedin_url: Optional[str] = None
    photo_url: Optional[str] = None
    location: str = ""
    company: Optional[CompanyRef] = None
    seniority: Optional[str] = None
    functions: list[str] = field(default_factory=list)
    employment_history: list[dict[str, Any]] = field(default_factory=list)


@dataclass
class Location:
    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None
    full: str = ""                     # "Austin, TX, US"


@dataclass
class SocialMedia:
    linkedin_url: Optional[str] = None
    twitter_url: Optional[str] = None
    facebook_url: Optional[str] = None


@dataclass
class EnrichedOrganization:
    id: str
    name: Optional[str] = None
    domain: Optional[str] = None
    domains: Optional[list[str]] = None
    website_url: Optional[str] = None
    logo_url: Optional[str] = None
    industry: Optional[str] = None
    industries: Optional[list[str]] = None
    location: Location = field(default_factory=Location)
    employee_count: Optional[int] = None
    employee_count_range: Optional[str] = None
    revenue: Optional[float] = None
    revenue_range: Optional[str] = None
    phone: Optional[str] = None
    social_media: SocialMedia = field(default_factory=SocialMedia)
    technologies: Optional[list[str]] = None
    funding_raised: Optional[float] = None
    founded_year: Optional[int] = None
    description: Optional[str] = None


# -----------------------------------------------------------------------------
# Lookup results: "found" is a normal outcome either way
# -----------------------------------------------------------------------------
@dataclass
class PersonLookup:
    found: bool
    person: Optional[Any] = None       # EnrichedPerson or MatchedPerson
    message: Optional[str] = None      # set when found is False
    credits_used: Optional[int] = None  # people_match only


@dataclass
class OrganizationLookup:
    found: bool
    organization: Optional[EnrichedOrganization] = None
    message: Optional[str] = None


# -----------------------------------------------------------------------------
# Contact creation: success, upstream-reported error, or neither
# -----------------------------------------------------------------------------
@dataclass
class CreatedContact:
    id: str
    name: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    title: Optional[str] = None
    email: Optional[str] = None
    organization: Optional[dict[str, Any]] = None
    direct_phone: Optional[str] = None
    mobile_phone: Optional[str] = None
    labels: Optional[list[str]] = None
    visibility: Optional[str] = None
    created_at: Optional[str] = None


@dataclass
class ContactCreation:
    success: bool
    contact: Optional[CreatedContact] = None
    error: Optional[Any] = None
    note: Optional[str] = None
