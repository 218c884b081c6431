"""Natural-key deduplication of canonical records."""

from collections.abc import Iterable

from electorate_scraper.lib.results_scraper.models import CanonicalMemberRecord


def dedupe_records(records: Iterable[CanonicalMemberRecord]) -> list[CanonicalMemberRecord]:
    """Drop records whose ``(first_name, last_name, electorate_name)`` was already seen.

    The first occurrence wins and order is otherwise preserved. Fields are
    never merged across duplicates.
    """
    seen: set[tuple[str, str, str]] = set()
    unique: list[CanonicalMemberRecord] = []
    for record in records:
        key = record.natural_key
        if key in seen:
            continue
        seen.add(key)
        unique.append(record)
    return unique
