"""
Pydantic models for FMC REST payloads.

Policies and rules are opaque documents and are passed through as plain dicts;
only the envelope fields the client reads are modelled explicitly.
"""
from typing import Any, Callable, Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator


def default_validate_status(status_code: int) -> bool:
    """Accept every status below 500 so 4xx responses reach the API functions."""
    return 200 <= status_code < 500


class ClientConfig(BaseModel):
    """Connection settings for the FMC REST client."""
    base_url: str = Field(..., description="FMC origin, e.g. https://fmc.example.com")
    verify_ssl: bool = Field(True, description="Verify the FMC TLS certificate")
    timeout: float = Field(30.0, description="Socket timeout in seconds")
    validate_status: Callable[[int], bool] = Field(
        default_validate_status,
        description="Predicate deciding whether a status code is handed back to the caller",
    )


class AuthTokens(BaseModel):
    """Token pair returned by FMC in the X-auth-* response headers."""
    access_token: str
    refresh_token: Optional[str] = None


class Domain(BaseModel):
    model_config = ConfigDict(extra="allow")

    uuid: str
    name: Optional[str] = None
    type: Optional[str] = None


class Paging(BaseModel):
    model_config = ConfigDict(extra="allow")

    count: Optional[int] = None
    limit: Optional[int] = None
    offset: Optional[int] = None
    pages: Optional[int] = None


class Page(BaseModel):
    """One page of a list endpoint. Unknown top-level keys are kept as extras."""
    model_config = ConfigDict(extra="allow")

    items: List[Dict[str, Any]] = Field(default_factory=list)
    paging: Paging = Field(default_factory=Paging)
    links: Dict[str, Any] = Field(default_factory=dict)

    @field_validator("items", "paging", "links", mode="before")
    @classmethod
    def _null_as_default(cls, value: Any, info: ValidationInfo) -> Any:
        # null envelope fields fall back to the empty default
        if value is None:
            return {"items": [], "paging": {}, "links": {}}[info.field_name]
        return value
