# =============================================================================
# core/params.py  -  Validated input for each capability
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   One pydantic model per capability.  A model instance is the only input an
#   adapter accepts, so an adapter never sees arguments that break the
#   capability's rules:
#     - field types, enums and numeric bounds (page 1-500, per_page 1-100)
#     - defaults (page 1, per_page 25, reveal_personal_emails True ...)
#     - "at least one of" identifier rules for enrichment and match
#
# IDENTIFIER RULES:
#   Each model with such a rule has a missing_identifier() predicate that
#   returns None when the rule holds, or the message naming the violated
#   rule.  The model validator calls it after parsing, so no invalid instance
#   can be built and nothing invalid is ever sent to Apollo.
#
# ENTRY POINT:
#   parse_params(Model, arguments) -> Model, or ParameterValidationError with
#   every problem listed as "field: message".
# =============================================================================

from typing import Annotated, Any, Literal, Mapping, Optional, TypeVar

from pydantic import (
    AfterValidator,
    BaseModel,
    EmailStr,
    Field,
    HttpUrl,
    TypeAdapter,
    ValidationError,
    model_validator,
)

from core.errors import ParameterValidationError

MAX_PAGE = 500
MAX_PER_PAGE = 100
DEFAULT_PER_PAGE = 25

PageNumber = Annotated[int, Field(ge=1, le=MAX_PAGE, description="Page number (max 500)")]
PerPage = Annotated[int, Field(ge=1, le=MAX_PER_PAGE, description="Results per page (max 100)")]

_HTTP_URL = TypeAdapter(HttpUrl)


def _check_url(value: str) -> str:
    """Reject anything that is not an http(s) URL, but keep the caller's text."""
    try:
        _HTTP_URL.validate_python(value)
    except ValidationError as e:
        raise ValueError(e.errors()[0]["msg"]) from e
    return value


# Validated as an http(s) URL; sent upstream unchanged ("https://acme.com" stays
# without a trailing slash).
UrlString = Annotated[str, AfterValidator(_check_url)]


class CapabilityParams(BaseModel):
    """Base for every capability's parameters."""

    def missing_identifier(self) -> Optional[str]:
        """Return the violated identifier rule, or None when satisfied."""
        return None

    @model_validator(mode="after")
    def check_identifiers(self):
        problem = self.missing_identifier()
        if problem is not None:
            raise ValueError(problem)
        return self

    def to_upstream(self) -> dict[str, Any]:
        """The request body / query for Apollo, without unset fields."""
        return self.model_dump(mode="json", exclude_none=True)


M = TypeVar("M", bound=CapabilityParams)


def _describe(error: Mapping[str, Any]) -> str:
    message = error["msg"]
    if message.startswith("Value error, "):
        message = message[len("Value error, "):]
    location = ".".join(str(part) for part in error.get("loc", ()))
    return f"{location}: {message}" if location else message


def parse_params(model: type[M], arguments: Mapping[str, Any]) -> M:
    """Validate raw tool arguments against a capability model.

    Raises:
        ParameterValidationError: listing every problem found.
    """
    try:
        return model.model_validate(dict(arguments))
    except ValidationError as e:
        raise ParameterValidationError([_describe(error) for error in e.errors()]) from e


# -----------------------------------------------------------------------------
# Searches over Apollo's global database
# -----------------------------------------------------------------------------
class PeopleSearchParams(CapabilityParams):
    q_keywords: Optional[str] = Field(None, description="Keywords to search for in people profiles")
    name: Optional[str] = Field(None, description="Person's full name")
    email: Optional[str] = Field(None, description="Person's email address")
    title: Optional[str] = Field(None, description="Job title")
    company: Optional[str] = Field(None, description="Company name")
    location: Optional[str] = Field(None, description="Location (city, state, or country)")
    industry: Optional[str] = Field(None, description="Industry")
    person_titles: Optional[list[str]] = Field(None, description="List of job titles")
    organization_domains: Optional[list[str]] = Field(None, description="List of company domains")
    person_locations: Optional[list[str]] = Field(None, description="List of locations")
    organization_locations: Optional[list[str]] = Field(None, description="List of company locations")
    q_organization_domains: Optional[list[str]] = Field(None, description="Query by organization domains")
    organization_ids: Optional[list[str]] = Field(None, description="List of organization IDs")
    person_seniorities: Optional[list[str]] = Field(
        None, description="Seniority levels (e.g., 'senior', 'manager', 'director')"
    )
    person_functions: Optional[list[str]] = Field(
        None, description="Job functions (e.g., 'sales', 'engineering', 'marketing')"
    )
    organization_num_employees_ranges: Optional[list[str]] = Field(
        None, description="Employee count ranges (e.g., '1,10', '11,20', '21,50')"
    )
    page: PageNumber = 1
    per_page: PerPage = DEFAULT_PER_PAGE


class OrganizationSearchParams(CapabilityParams):
    q_keywords: Optional[str] = Field(None, description="Keywords to search for in company profiles")
    name: Optional[str] = Field(None, description="Company name")
    domains: Optional[list[str]] = Field(None, description="List of company domains")
    locations: Optional[list[str]] = Field(None, description="List of locations")
    industries: Optional[list[str]] = Field(None, description="List of industries")
    employee_count_min: Optional[float] = Field(None, description="Minimum number of employees")
    employee_count_max: Optional[float] = Field(None, description="Maximum number of employees")
    revenue_min: Optional[float] = Field(None, description="Minimum revenue in USD")
    revenue_max: Optional[float] = Field(None, description="Maximum revenue in USD")
    technologies: Optional[list[str]] = Field(None, description="Technologies used by the company")
    funding_raised_min: Optional[float] = Field(None, description="Minimum funding raised in USD")
    funding_raised_max: Optional[float] = Field(None, description="Maximum funding raised in USD")
    page: PageNumber = 1
    per_page: PerPage = DEFAULT_PER_PAGE

    def to_upstream(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "q_keywords": self.q_keywords,
            "name": self.name,
            "domains": self.domains,
            "locations": self.locations,
            "industries": self.industries,
            "technologies": self.technologies,
            "page": self.page,
            "per_page": self.per_page,
            "employee_count_range": numeric_range(self.employee_count_min, self.employee_count_max),
            "revenue_range": numeric_range(self.revenue_min, self.revenue_max),
            "funding_raised_range": numeric_range(self.funding_raised_min, self.funding_raised_max),
        }
        return {key: value for key, value in payload.items() if value is not None}


def numeric_range(minimum: Optional[float], maximum: Optional[float]) -> Optional[dict[str, float]]:
    """Combine two flat bounds into {min, max}, omitting whichever is missing.

    Returns None when both are missing, so no empty range is ever sent.
    Whole-number floats are sent as ints.
    """
    bounds = {}
    if minimum is not None:
        bounds["min"] = _as_number(minimum)
    if maximum is not None:
        bounds["max"] = _as_number(maximum)
    return bounds or None


def _as_number(value: float):
    return int(value) if float(value).is_integer() else value


# -----------------------------------------------------------------------------
# Enrichment and match: at least one identifier is required
# -----------------------------------------------------------------------------
class PeopleEnrichmentParams(CapabilityParams):
    email: Optional[EmailStr] = Field(None, description="Email address to enrich")
    linkedin_url: Optional[UrlString] = Field(None, description="LinkedIn profile URL")
    name: Optional[str] = Field(None, description="Person's full name")
    organization_name: Optional[str] = Field(None, description="Company name")
    domain: Optional[str] = Field(None, description="Company domain")

    def missing_identifier(self) -> Optional[str]:
        if self.email or self.linkedin_url:
            return None
        if self.name and (self.organization_name or self.domain):
            return None
        return "Must provide either email, linkedin_url, or name with organization information"


class OrganizationEnrichmentParams(CapabilityParams):
    domain: Optional[str] = Field(None, description="Company domain (e.g., 'example.com')")
    name: Optional[str] = Field(None, description="Company name")

    def missing_identifier(self) -> Optional[str]:
        if self.domain or self.name:
            return None
        return "Must provide either domain or company name"


class PeopleMatchParams(CapabilityParams):
    email: Optional[EmailStr] = Field(None, description="Email address to match")
    first_name: Optional[str] = Field(None, description="Person's first name")
    last_name: Optional[str] = Field(None, description="Person's last name")
    name: Optional[str] = Field(None, description="Person's full name")
    organization_name: Optional[str] = Field(None, description="Company name")
    domain: Optional[str] = Field(None, description="Company domain")
    linkedin_url: Optional[UrlString] = Field(None, description="LinkedIn profile URL")
    reveal_personal_emails: bool = Field(True, description="Enable retrieval of personal email addresses")
    reveal_phone_number: bool = Field(False, description="Enable retrieval of phone numbers")

    def missing_identifier(self) -> Optional[str]:
        if self.email or self.linkedin_url or self.name:
            return None
        if self.first_name and self.last_name:
            return None
        return "Must provide at least one identifier: email, linkedin_url, name, or first_name + last_name"


# -----------------------------------------------------------------------------
# Job postings
# -----------------------------------------------------------------------------
class JobPostingsParams(CapabilityParams):
    organization_id: str = Field(..., min_length=1, description="Apollo organization ID")
    page: int = Field(1, ge=1, description="Page number")
    per_page: PerPage = DEFAULT_PER_PAGE


# -----------------------------------------------------------------------------
# The team's own account data
# -----------------------------------------------------------------------------
class CreateContactParams(CapabilityParams):
    first_name: str = Field(..., min_length=1, description="The contact's first name")
    last_name: str = Field(..., min_length=1, description="The contact's last name")
    title: Optional[str] = Field(None, description="The contact's job title")
    organization_name: Optional[str] = Field(None, description="The company name")
    email: Optional[EmailStr] = Field(None, description="Email address")
    website_url: Optional[UrlString] = Field(None, description="Company website URL")
    direct_phone: Optional[str] = Field(None, description="Direct phone number")
    mobile_phone: Optional[str] = Field(None, description="Mobile phone number")
    label_names: Optional[list[str]] = Field(None, description="Labels to assign to the contact")
    visibility: Optional[Literal["all", "only-me"]] = Field(
        None, description="Contact visibility (default: 'all')"
    )


class ContactSearchParams(CapabilityParams):
    q_keywords: Optional[str] = Field(None, description="Keywords to search for in contact profiles")
    name: Optional[str] = Field(None, description="Contact's full name")
    email: Optional[str] = Field(None, description="Contact's email address")
    title: Optional[str] = Field(None, description="Job title")
    company: Optional[str] = Field(None, description="Company name")
    location: Optional[str] = Field(None, description="Location (city, state, or country)")
    industry: Optional[str] = Field(None, description="Industry")
    person_titles: Optional[list[str]] = Field(None, description="List of job titles")
    organization_domains: Optional[list[str]] = Field(None, description="List of company domains")
    person_locations: Optional[list[str]] = Field(None, description="List of locations")
    organization_locations: Optional[list[str]] = Field(None, description="List of company locations")
    person_seniorities: Optional[list[str]] = Field(None, description="Seniority levels")
    person_functions: Optional[list[str]] = Field(None, description="Job functions")
    organization_num_employees_ranges: Optional[list[str]] = Field(
        None, description="Employee count ranges (e.g., '1,10', '11,20')"
    )
    contact_type: Optional[Literal["person", "company"]] = Field(
        None, description="Filter by contact type (person or company)"
    )
    contact_email_status: Optional[str] = Field(None, description="Filter by email verification status")
    label_names: Optional[list[str]] = Field(None, description="Filter by label names")
    page: PageNumber = 1
    per_page: PerPage = DEFAULT_PER_PAGE


class OutreachEmailSearchParams(CapabilityParams):
    subject: Optional[str] = Field(None, description="Filter by email subject")
    body: Optional[str] = Field(None, description="Filter by email body content")
    from_address: Optional[str] = Field(None, description="Filter by sender email address")
    to_address: Optional[str] = Field(None, description="Filter by recipient email address")
    bounce_type: Optional[str] = Field(None, description="Filter by bounce type")
    sent_at_before: Optional[str] = Field(None, description="Sent before this date (ISO 8601)")
    sent_at_after: Optional[str] = Field(None, description="Sent after this date (ISO 8601)")
    delivered_at_before: Optional[str] = None
    delivered_at_after: Optional[str] = None
    opened_at_before: Optional[str] = None
    opened_at_after: Optional[str] = None
    clicked_at_before: Optional[str] = None
    clicked_at_after: Optional[str] = None
    bounced_at_before: Optional[str] = None
    bounced_at_after: Optional[str] = None
    replied_at_before: Optional[str] = None
    replied_at_after: Optional[str] = None
    emailer_campaign_ids: Optional[list[str]] = Field(None, description="Filter by emailer campaign IDs")
    contact_ids: Optional[list[str]] = Field(None, description="Filter by contact IDs")
    page: PageNumber = 1
    per_page: PerPage = DEFAULT_PER_PAGE
