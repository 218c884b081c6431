"""Member service: persists scraped records into parties, electorates and members.

Records are written one at a time. A record whose party is not registered
fails on its own and does not stop the rest of the batch.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field

from loguru import logger
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from electorate_scraper.lib.results_scraper import (
    DEFAULT_PARTY_TAXONOMY,
    CanonicalMemberRecord,
    PartyCanonicalizer,
    PartyTaxonomy,
)
from electorate_scraper.models.electorate import Electorate
from electorate_scraper.models.member import Member
from electorate_scraper.models.party import Party

_ELECTORATE_RESULT_FIELDS: tuple[str, ...] = (
    "total_votes_cast",
    "current_margin_votes",
    "current_margin_percent",
    "winner_tpp_percent",
    "loser_tpp_percent",
    "winner_tpp_votes",
    "loser_tpp_votes",
    "previous_margin_percent",
    "swing_percent",
    "source_url",
    "scraped_at",
)


class UnregisteredPartyError(LookupError):
    """Raised when a record names a party that has not been registered."""

    def __init__(self, party_name: str) -> None:
        self.party_name = party_name
        super().__init__(f"Party '{party_name}' is not registered")


@dataclass
class PersistResult:
    """Outcome of persisting a batch of records."""

    saved: int = 0
    failures: list[str] = field(default_factory=list)


async def get_party_by_name(session: AsyncSession, name: str) -> Party | None:
    result = await session.execute(select(Party).where(Party.name == name))
    return result.scalar_one_or_none()


async def upsert_electorate(session: AsyncSession, record: CanonicalMemberRecord, region_code: str) -> Electorate:
    """Create or update the electorate keyed by ``(name, region_code)`` from a record.

    Args:
        session: Async database session.
        record: Scraped record supplying the result figures.
        region_code: Lowercase region code.

    Returns:
        The new or updated Electorate (flushed, not committed).
    """
    result = await session.execute(
        select(Electorate).where(
            Electorate.name == record.electorate_name,
            Electorate.region_code == region_code,
        )
    )
    electorate = result.scalar_one_or_none()
    if electorate is None:
        electorate = Electorate(name=record.electorate_name, region_code=region_code)
        session.add(electorate)

    for field_name in _ELECTORATE_RESULT_FIELDS:
        setattr(electorate, field_name, getattr(record, field_name))
    await session.flush()
    return electorate


async def persist_record(session: AsyncSession, record: CanonicalMemberRecord, region_code: str) -> Member:
    """Persist one record: resolve its party, upsert its electorate, insert its member.

    Raises:
        UnregisteredPartyError: If ``record.party_name`` has no Party row.
    """
    party = await get_party_by_name(session, record.party_name)
    if party is None:
        raise UnregisteredPartyError(record.party_name)

    electorate = await upsert_electorate(session, record, region_code)
    member = Member(
        first_name=record.first_name,
        last_name=record.last_name,
        party_id=party.id,
        electorate_id=electorate.id,
        start_date=record.scraped_at.date(),
    )
    session.add(member)
    await session.flush()

    electorate.current_member_id = member.id
    await session.flush()
    return member


async def persist_records(
    session: AsyncSession,
    records: Iterable[CanonicalMemberRecord],
    region_code: str,
) -> PersistResult:
    """Persist records one at a time and commit.

    Args:
        session: Async database session.
        records: Scraped records, typically ``ScrapeResult.records``.
        region_code: Lowercase region code the records belong to.

    Returns:
        PersistResult with the saved count and one message per failed record.
    """
    region_code = region_code.strip().lower()
    outcome = PersistResult()
    for record in records:
        try:
            await persist_record(session, record, region_code)
        except UnregisteredPartyError as exc:
            msg = f"{record.full_name} ({record.electorate_name}): {exc}"
            logger.warning("Skipping record: {}", msg)
            outcome.failures.append(msg)
            continue
        outcome.saved += 1

    await session.commit()
    logger.info("Persisted {} members for {} ({} failed)", outcome.saved, region_code, len(outcome.failures))
    return outcome


async def seed_parties(session: AsyncSession, taxonomy: PartyTaxonomy = DEFAULT_PARTY_TAXONOMY) -> int:
    """Register every canonical party in ``taxonomy`` that is not yet present.

    Returns:
        Number of parties created.
    """
    canonicalizer = PartyCanonicalizer(taxonomy)
    result = await session.execute(select(Party.name))
    existing = set(result.scalars().all())

    created = 0
    for name in taxonomy.canonical_names:
        if name in existing:
            continue
        session.add(Party(name=name, short_name=canonicalizer.short_code_for(name)))
        created += 1

    await session.commit()
    logger.info("Registered {} parties ({} already present)", created, len(existing))
    return created
