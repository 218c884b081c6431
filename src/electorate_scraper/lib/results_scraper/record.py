"""Turn one upstream electorate object into a :class:`CanonicalMemberRecord`.

The feed has no published schema. Every field is therefore resolved by
probing an ordered list of candidate names; the tuples below record what has
been observed in the wild and are tried first to last. Items missing an
electorate name or a usable winner name are rejected (``None``); every other
field degrades to zero.
"""

from collections.abc import Mapping
from typing import Any

from loguru import logger
from pydantic import ValidationError

from electorate_scraper.lib.results_scraper.extractors import (
    first_resolved,
    parse_percentage,
    parse_swing,
    parse_votes,
)
from electorate_scraper.lib.results_scraper.models import CanonicalMemberRecord
from electorate_scraper.lib.results_scraper.parties import PartyCanonicalizer

ELECTORATE_NAME_FIELDS: tuple[str, ...] = (
    "name",
    "electorate",
    "seat",
    "electorateName",
    "division",
    "district",
    "constituency",
)
TOTAL_VOTES_FIELDS: tuple[str, ...] = ("totalVotes", "formalVotes", "validVotes", "totalBallots", "totalEnrolment")
PREVIOUS_MARGIN_FIELDS: tuple[str, ...] = ("marginPercent", "previousMargin", "lastMargin")
# Some feeds put the total vote count in ``margin``; small values are real margins.
MARGIN_TOTAL_VOTES_FIELD = "margin"
MARGIN_TOTAL_VOTES_FLOOR = 1000

LEADING_CANDIDATE_FIELDS: tuple[str, ...] = (
    "leadingCandidate",
    "winner",
    "elected",
    "candidate",
    "member",
    "incumbent",
    "declared",
)
TRAILING_CANDIDATE_FIELDS: tuple[str, ...] = ("trailingCandidate", "runnerUp", "loser", "challenger", "secondCandidate")

CANDIDATE_NAME_FIELDS: tuple[str, ...] = ("name", "candidateName", "fullName", "memberName", "personName")
CANDIDATE_PARTY_FIELDS: tuple[str, ...] = ("party", "partyName", "politicalParty", "partyAffiliation", "affiliation")
# Item-level party used when the leading candidate carries none.
HOLDING_PARTY_FIELD = "holdingParty"

# Two-candidate-preferred sub-object on a candidate, and its fields.
TPP_FIELDS: tuple[str, ...] = (
    "predicted2CP",
    "twoCandidatePreferred",
    "twoPartyPreferred",
    "tcp",
    "tpp",
    "2cp",
    "afterPreferences",
)
TPP_PERCENT_FIELDS: tuple[str, ...] = ("pct", "percent", "percentage", "share", "value")
TPP_VOTES_FIELDS: tuple[str, ...] = ("votes", "voteCount", "count", "total", "tppVotes")
SWING_FIELDS: tuple[str, ...] = ("swing", "swingPct", "swingPercent", "swingPercentage")
CANDIDATE_SWING_FIELDS: tuple[str, ...] = (*SWING_FIELDS, "swingTowards", "swingAgainst")

# Item-level ``parties`` array, ranked by after-preference share.
PARTY_LIST_FIELD = "parties"
PARTY_TPP_PERCENT_FIELDS: tuple[str, ...] = ("afterPreference", "afterRPeference", "tppPercent")
PARTY_TPP_VOTES_FIELDS: tuple[str, ...] = (
    "afterPreferenceVotes",
    "afterRPreferenceVotes",
    "tppVotes",
    "twoPartyPreferredVotes",
    "voteCount",
    "votes",
)


def _first_mapping(source: Mapping[str, Any], fields: tuple[str, ...]) -> Mapping[str, Any] | None:
    for field in fields:
        value = source.get(field)
        if isinstance(value, Mapping):
            return value
    return None


def _first_text(source: Mapping[str, Any], fields: tuple[str, ...]) -> str:
    for field in fields:
        value = source.get(field)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return ""


def _first_present(source: Mapping[str, Any], fields: tuple[str, ...]) -> Any:
    for field in fields:
        if source.get(field) is not None:
            return source[field]
    return None


def split_full_name(full_name: str) -> tuple[str, str]:
    """Split on the first whitespace boundary: ``"Mary Jo Smith"`` -> ``("Mary", "Jo Smith")``."""
    parts = full_name.split(None, 1)
    if len(parts) < 2:
        return (parts[0] if parts else "", "")
    return parts[0], parts[1].strip()


def _candidate_full_name(candidate: Mapping[str, Any]) -> str:
    full_name = _first_text(candidate, CANDIDATE_NAME_FIELDS)
    if full_name:
        return full_name
    first = _first_text(candidate, ("firstName", "givenName"))
    last = _first_text(candidate, ("lastName", "surname", "familyName"))
    return f"{first} {last}".strip()


def _tpp_figures(candidate: Mapping[str, Any] | None) -> tuple[float, int, float | None]:
    """Return ``(percent, votes, swing)`` from a candidate's TPP sub-object."""
    if candidate is None:
        return 0.0, 0, None
    tpp = _first_mapping(candidate, TPP_FIELDS)
    if tpp is None:
        return 0.0, 0, None
    percent = first_resolved(tpp, TPP_PERCENT_FIELDS, parse_percentage) or 0.0
    votes = first_resolved(tpp, TPP_VOTES_FIELDS, parse_votes) or 0
    swing = first_resolved(tpp, SWING_FIELDS, parse_swing)
    return percent, votes, swing


def _party_tpp_votes(party: Mapping[str, Any], percent: float) -> int:
    votes = first_resolved(party, PARTY_TPP_VOTES_FIELDS, parse_votes)
    if votes is not None:
        return votes
    # Booth feeds suffix the count, e.g. "ordinary_voteCount".
    suffixed = [key for key in party if isinstance(key, str) and key.endswith("voteCount")]
    votes = first_resolved(party, suffixed, parse_votes)
    if votes is not None:
        return votes
    total = first_resolved(party, ("totalVotes",), parse_votes)
    if total:
        return round(percent / 100 * total)
    return 0


def _ranked_party_tpp(item: Mapping[str, Any]) -> list[tuple[float, int]]:
    """``(percent, votes)`` for the item's parties, highest after-preference share first."""
    parties = item.get(PARTY_LIST_FIELD)
    if not isinstance(parties, list):
        return []
    ranked: list[tuple[float, int]] = []
    for party in parties:
        if not isinstance(party, Mapping):
            continue
        percent = first_resolved(party, PARTY_TPP_PERCENT_FIELDS, parse_percentage)
        if percent is None:
            continue
        ranked.append((percent, _party_tpp_votes(party, percent)))
    ranked.sort(key=lambda entry: entry[0], reverse=True)
    return ranked


def _resolve_swing(item: Mapping[str, Any], winner: Mapping[str, Any], tpp_swing: float | None) -> float:
    if tpp_swing is not None:
        return tpp_swing
    candidate_swing = first_resolved(winner, CANDIDATE_SWING_FIELDS, parse_swing)
    if candidate_swing is not None:
        return candidate_swing
    dial = item.get("swingDial")
    if isinstance(dial, Mapping):
        dial_swing = first_resolved(dial, ("swing", "value"), parse_swing)
        if dial_swing is not None:
            return dial_swing
    return first_resolved(item, SWING_FIELDS, parse_swing) or 0.0


class RecordExtractor:
    """Extracts canonical records from upstream electorate objects.

    Args:
        canonicalizer: Party canonicalizer used for the winner's party.
    """

    def __init__(self, canonicalizer: PartyCanonicalizer | None = None) -> None:
        self._canonicalizer = canonicalizer or PartyCanonicalizer()

    @property
    def canonicalizer(self) -> PartyCanonicalizer:
        return self._canonicalizer

    def extract(self, item: Any, source_url: str) -> CanonicalMemberRecord | None:
        """Build a record from ``item``, or return None when a mandatory field is missing.

        Args:
            item: One element of the located record array (shape unknown).
            source_url: URL or endpoint the item was fetched from.

        Returns:
            The canonical record, or None if the item was rejected.
        """
        if not isinstance(item, Mapping):
            return None

        electorate = _first_text(item, ELECTORATE_NAME_FIELDS)
        if not electorate:
            logger.debug("Rejected item without electorate name (keys: {})", list(item.keys()))
            return None

        total_votes = first_resolved(item, TOTAL_VOTES_FIELDS, parse_votes) or 0
        margin_as_total = parse_votes(item.get(MARGIN_TOTAL_VOTES_FIELD))
        if margin_as_total is not None and margin_as_total > MARGIN_TOTAL_VOTES_FLOOR:
            total_votes = margin_as_total
        previous_margin = first_resolved(item, PREVIOUS_MARGIN_FIELDS, parse_percentage) or 0.0

        winner = _first_mapping(item, LEADING_CANDIDATE_FIELDS)
        if winner is None:
            logger.debug("Rejected {}: no leading candidate", electorate)
            return None

        first_name, last_name = split_full_name(_candidate_full_name(winner))
        if not first_name or not last_name:
            logger.debug("Rejected {}: incomplete winner name", electorate)
            return None

        raw_party = _first_present(winner, CANDIDATE_PARTY_FIELDS)
        if raw_party is None:
            raw_party = item.get(HOLDING_PARTY_FIELD)
        party_name = self._canonicalizer.canonicalize(raw_party)

        winner_pct, winner_votes, tpp_swing = _tpp_figures(winner)
        loser_pct, loser_votes, _ = _tpp_figures(_first_mapping(item, TRAILING_CANDIDATE_FIELDS))

        if not winner_pct and not loser_pct:
            ranked = _ranked_party_tpp(item)
            if len(ranked) >= 2:
                (winner_pct, winner_votes), (loser_pct, loser_votes) = ranked[0], ranked[1]

        margin_votes = 0
        margin_pct = 0.0
        if winner_votes > 0 and loser_votes > 0:
            margin_votes = winner_votes - loser_votes
            margin_pct = round(winner_pct - 50.0, 2)

        try:
            return CanonicalMemberRecord(
                first_name=first_name,
                last_name=last_name,
                party_name=party_name,
                party_short_code=self._canonicalizer.short_code_for(party_name),
                electorate_name=electorate,
                total_votes_cast=total_votes,
                current_margin_votes=margin_votes,
                current_margin_percent=margin_pct,
                winner_tpp_percent=winner_pct,
                loser_tpp_percent=loser_pct,
                winner_tpp_votes=winner_votes,
                loser_tpp_votes=loser_votes,
                previous_margin_percent=previous_margin,
                swing_percent=_resolve_swing(item, winner, tpp_swing),
                source_url=source_url,
            )
        except ValidationError as exc:
            logger.debug("Rejected {}: {}", electorate, exc)
            return None


_default_extractor = RecordExtractor()


def extract_record(item: Any, source_url: str) -> CanonicalMemberRecord | None:
    """Extract one record with the built-in party taxonomy."""
    return _default_extractor.extract(item, source_url)


def extract_records(
    items: list[Any],
    source_url: str,
    extractor: RecordExtractor | None = None,
) -> list[CanonicalMemberRecord]:
    """Extract every acceptable record from ``items``, skipping rejects and items that fail to extract."""
    extractor = extractor or _default_extractor
    records: list[CanonicalMemberRecord] = []
    for index, item in enumerate(items):
        try:
            record = extractor.extract(item, source_url)
        except Exception:
            logger.exception("Failed to extract item {} from {}", index, source_url)
            continue
        if record is not None:
            records.append(record)
    return records
