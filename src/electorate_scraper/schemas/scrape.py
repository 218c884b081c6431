"""Pydantic v2 schemas for the scrape endpoints.

Bodies use camelCase on the wire, matching the ScrapeResult envelope.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

# --- Request schemas ---


class ScrapeRequest(BaseModel):
    """Request body for running one scrape.

    Blank values are accepted here; the pipeline reports them in the envelope.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    region_code: str = Field(default="", max_length=10, description="Jurisdiction code, e.g. 'qld'")
    period_id: str = Field(default="", max_length=10, description="Election year, e.g. '2024'")

    @field_validator("region_code", "period_id", mode="before")
    @classmethod
    def coerce_to_string(cls, v: Any) -> Any:
        if v is None:
            return ""
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v


# --- Response schemas ---


class RegionSummary(BaseModel):
    """A region the scraper has source configuration for."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    region_code: str
    periods: list[str] = Field(description="Election years with a known results publish date")
    total_seats: int
    has_regional_fallback: bool


class RegionListResponse(BaseModel):
    """Response for the region listing endpoint."""

    items: list[RegionSummary]
