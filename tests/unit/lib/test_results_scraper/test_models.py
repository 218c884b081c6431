"""Unit tests for the canonical output models."""

import pytest
from pydantic import ValidationError

from electorate_scraper.lib.results_scraper.models import CanonicalMemberRecord, ScrapeResult


class TestCanonicalMemberRecord:
    """Tests for CanonicalMemberRecord."""

    def test_camel_case_serialization(self, make_record):
        data = make_record().model_dump(mode="json", by_alias=True)

        assert data["firstName"] == "Jane"
        assert data["electorateName"] == "Brisbane Central"
        assert data["currentMarginPercent"] == 5.0
        assert data["winnerTppVotes"] == 27500
        assert "scrapedAt" in data
        assert "first_name" not in data

    def test_populate_by_alias(self):
        record = CanonicalMemberRecord.model_validate(
            {
                "firstName": "Jane",
                "lastName": "Smith",
                "partyName": "Independent",
                "partyShortCode": "IND",
                "electorateName": "Cook",
                "sourceUrl": "https://example.com",
            }
        )
        assert record.full_name == "Jane Smith"
        assert record.total_votes_cast == 0
        assert record.swing_percent == 0.0
        assert record.scraped_at.tzinfo is not None

    def test_frozen(self, make_record):
        record = make_record()
        with pytest.raises(ValidationError):
            record.first_name = "John"

    @pytest.mark.parametrize("field", ["first_name", "last_name", "electorate_name"])
    def test_mandatory_text_fields_non_empty(self, make_record, field):
        with pytest.raises(ValidationError):
            make_record(**{field: ""})

    def test_negative_votes_rejected(self, make_record):
        with pytest.raises(ValidationError):
            make_record(total_votes_cast=-1)

    def test_natural_key(self, make_record):
        assert make_record().natural_key == ("Jane", "Smith", "Brisbane Central")


class TestScrapeResult:
    """Tests for ScrapeResult."""

    def test_from_records(self, make_record):
        result = ScrapeResult.from_records([make_record()], ["A: boom"])

        assert result.success is True
        assert result.total_found == 1
        assert result.errors == ["A: boom"]

    def test_from_no_records_is_failure(self):
        result = ScrapeResult.from_records([], [])
        assert result.success is False
        assert result.total_found == 0

    def test_failure(self):
        result = ScrapeResult.failure(["Region code is required"])

        assert result.success is False
        assert result.records == []
        assert result.errors == ["Region code is required"]

    def test_envelope_aliases(self, make_record):
        data = ScrapeResult.from_records([make_record()], []).model_dump(by_alias=True)
        assert set(data) == {"success", "records", "errors", "totalFound"}
