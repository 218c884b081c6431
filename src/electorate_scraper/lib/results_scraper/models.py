"""Canonical output models for the results scraper.

Field names are snake_case in Python and serialize with camelCase aliases
(``model_dump(by_alias=True)``) so JSON consumers see ``firstName``,
``currentMarginPercent``, ``totalFound`` and so on.
"""

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CanonicalMemberRecord(BaseModel):
    """One normalized electorate result: the leading candidate and the seat's numbers."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    first_name: str = Field(min_length=1)
    last_name: str = Field(min_length=1)
    party_name: str
    party_short_code: str
    electorate_name: str = Field(min_length=1)
    total_votes_cast: int = Field(default=0, ge=0)
    current_margin_votes: int = 0
    current_margin_percent: float = 0.0
    winner_tpp_percent: float = 0.0
    loser_tpp_percent: float = 0.0
    winner_tpp_votes: int = Field(default=0, ge=0)
    loser_tpp_votes: int = Field(default=0, ge=0)
    previous_margin_percent: float = 0.0
    swing_percent: float = 0.0
    source_url: str
    scraped_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @property
    def natural_key(self) -> tuple[str, str, str]:
        """``(first_name, last_name, electorate_name)``, the dedupe identity."""
        return (self.first_name, self.last_name, self.electorate_name)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


class ScrapeResult(BaseModel):
    """Envelope returned by every scrape run; failures are encoded, never raised."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    success: bool
    records: list[CanonicalMemberRecord] = Field(default_factory=list)
    errors: list[str] = Field(default_factory=list)
    total_found: int = 0

    @classmethod
    def from_records(cls, records: list[CanonicalMemberRecord], errors: list[str]) -> "ScrapeResult":
        """Successful when at least one record survived."""
        return cls(
            success=bool(records),
            records=list(records),
            errors=list(errors),
            total_found=len(records),
        )

    @classmethod
    def failure(cls, errors: list[str]) -> "ScrapeResult":
        return cls(success=False, records=[], errors=list(errors), total_found=0)
