"""HTML handling for the page-based tiers.

Two extraction modes over a fetched results page:

* embedded JSON: the page bootstraps its client-side state from script blocks
  (``window.__INITIAL_STATE__ = {...}``, ``<script type="application/json">``,
  ``__NEXT_DATA__``), which are decoded and returned as raw payloads;
* markup patterns: candidate cards, result rows and articles are reduced to
  text lines and matched line by line for name, party, electorate, margin
  and swing.
"""

import json
import re
from typing import Any

from bs4 import BeautifulSoup, Tag
from loguru import logger
from pydantic import ValidationError

from electorate_scraper.lib.results_scraper.extractors import parse_percentage, parse_swing, parse_votes
from electorate_scraper.lib.results_scraper.models import CanonicalMemberRecord
from electorate_scraper.lib.results_scraper.parties import PartyCanonicalizer
from electorate_scraper.lib.results_scraper.record import split_full_name

HTML_PARSER = "html.parser"

# Globals assigned in inline scripts, tried first in this order.
PREFERRED_GLOBALS: tuple[str, ...] = ("__INITIAL_STATE__", "__ABC_DATA__")
JSON_SCRIPT_TYPES: frozenset[str] = frozenset({"application/json", "application/ld+json"})
NEXT_DATA_ID = "__NEXT_DATA__"

_ASSIGNMENT_RE = re.compile(r"window\.(__[A-Za-z0-9_]+__)\s*=\s*")

# Candidate cards, result blocks, candidate table rows and articles.
BLOCK_SELECTORS: tuple[str, ...] = (
    'div[class*="candidate"]',
    'div[class*="result"]',
    'tr[class*="candidate"]',
    "article",
)
HEADING_TAGS: tuple[str, ...] = ("h1", "h2", "h3", "h4")

_ELECTORATE_LINE_RE = re.compile(r"^(?:Electorate|Seat|District|Division)\s*:?\s+(?P<name>.+)$", re.IGNORECASE)
_MEMBER_LINE_RE = re.compile(r"^(?:Candidate|Member|Winner|Elected)\s*:?\s+(?P<name>.+)$", re.IGNORECASE)
_NAME_LINE_RE = re.compile(r"^[A-Z][A-Za-z'’.-]+(?:\s+[A-Z][A-Za-z'’.-]+)+$")
_MARGIN_RE = re.compile(r"(?P<votes>\d[\d,]*)\s*(?:votes?)?\s*\((?P<pct>\d+(?:\.\d+)?)%\)", re.IGNORECASE)
_SWING_RE = re.compile(
    r"(?P<swing>[+-]?\d+(?:\.\d+)?)\s*%?\s*swing|swing\s*:\s*(?P<labelled>[+-]?\d+(?:\.\d+)?)",
    re.IGNORECASE,
)


def _script_text(script: Tag) -> str:
    return (script.string or "").strip()


def extract_embedded_payloads(html: str) -> list[Any]:
    """Decode every JSON payload embedded in the page's script blocks.

    Args:
        html: Results page body.

    Returns:
        Decoded payloads, preferred globals first and the rest in document
        order. Scripts that fail to decode are skipped.
    """
    soup = BeautifulSoup(html, HTML_PARSER)
    decoder = json.JSONDecoder()
    preferred: dict[str, Any] = {}
    others: list[Any] = []

    for script in soup.find_all("script"):
        text = _script_text(script)
        if not text:
            continue

        script_type = str(script.get("type") or "").lower()
        if script_type in JSON_SCRIPT_TYPES or script.get("id") == NEXT_DATA_ID:
            try:
                others.append(json.loads(text))
            except ValueError:
                logger.debug("Skipping undecodable JSON script block")
            continue

        for match in _ASSIGNMENT_RE.finditer(text):
            try:
                payload, _ = decoder.raw_decode(text, match.end())
            except ValueError:
                logger.debug("Skipping undecodable assignment to window.{}", match.group(1))
                continue
            if match.group(1) in PREFERRED_GLOBALS:
                preferred.setdefault(match.group(1), payload)
            else:
                others.append(payload)

    ordered = [preferred[name] for name in PREFERRED_GLOBALS if name in preferred]
    return ordered + others


def _text_lines(block: Tag) -> list[str]:
    lines = []
    for line in block.get_text("\n").splitlines():
        collapsed = " ".join(line.split())
        if collapsed:
            lines.append(collapsed)
    return lines


def _electorate_name(block: Tag, lines: list[str]) -> str:
    for line in lines:
        match = _ELECTORATE_LINE_RE.match(line)
        if match:
            return match.group("name").strip()
    heading = block.find(list(HEADING_TAGS))
    if heading is not None:
        return " ".join(heading.get_text(" ").split())
    return ""


def _member_name(lines: list[str], electorate: str, canonicalizer: PartyCanonicalizer) -> str:
    for line in lines:
        match = _MEMBER_LINE_RE.match(line)
        if match:
            return match.group("name").strip()
    for line in lines:
        if line == electorate or _ELECTORATE_LINE_RE.match(line) or not _NAME_LINE_RE.match(line):
            continue
        if canonicalizer.find_party_mention(line) is not None:
            continue
        return line
    return ""


def extract_record_from_block(
    block: Tag,
    source_url: str,
    canonicalizer: PartyCanonicalizer,
) -> CanonicalMemberRecord | None:
    """Build a record from one candidate/result block, or None if incomplete.

    A block must yield an electorate, a two-part name and a party mention.
    """
    lines = _text_lines(block)
    if not lines:
        return None

    text = " ".join(lines)
    party_name = canonicalizer.find_party_mention(text)
    if party_name is None:
        return None

    electorate = _electorate_name(block, lines)
    if not electorate:
        return None

    first_name, last_name = split_full_name(_member_name(lines, electorate, canonicalizer))
    if not first_name or not last_name:
        return None

    margin_votes = 0
    margin_pct = 0.0
    margin = _MARGIN_RE.search(text)
    if margin:
        margin_votes = parse_votes(margin.group("votes")) or 0
        margin_pct = parse_percentage(margin.group("pct")) or 0.0

    swing = _SWING_RE.search(text)
    swing_pct = 0.0
    if swing:
        swing_pct = parse_swing(swing.group("swing") or swing.group("labelled")) or 0.0

    try:
        return CanonicalMemberRecord(
            first_name=first_name,
            last_name=last_name,
            party_name=party_name,
            party_short_code=canonicalizer.short_code_for(party_name),
            electorate_name=electorate,
            current_margin_votes=margin_votes,
            current_margin_percent=margin_pct,
            swing_percent=swing_pct,
            source_url=source_url,
        )
    except ValidationError as exc:
        logger.debug("Rejected markup block for {}: {}", electorate, exc)
        return None


def extract_records_from_markup(
    html: str,
    source_url: str,
    canonicalizer: PartyCanonicalizer | None = None,
) -> list[CanonicalMemberRecord]:
    """Scrape records from candidate/result markup blocks.

    Blocks that wrap other matching blocks are skipped so each card is read
    once, at its innermost level.

    Args:
        html: Results page body.
        source_url: Page URL recorded on each record.
        canonicalizer: Party canonicalizer; defaults to the built-in taxonomy.

    Returns:
        Records in document order.
    """
    canonicalizer = canonicalizer or PartyCanonicalizer()
    soup = BeautifulSoup(html, HTML_PARSER)
    selector = ", ".join(BLOCK_SELECTORS)

    records: list[CanonicalMemberRecord] = []
    for block in soup.select(selector):
        if block.select_one(selector) is not None:
            continue
        record = extract_record_from_block(block, source_url, canonicalizer)
        if record is not None:
            records.append(record)
    return records
