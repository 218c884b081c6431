"""Elected member linked to a party and an electorate."""

import uuid
from datetime import date

from sqlalchemy import Date, ForeignKey, Index, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from electorate_scraper.models.base import Base, TimestampMixin, UUIDMixin
from electorate_scraper.models.electorate import Electorate
from electorate_scraper.models.party import Party


class Member(Base, UUIDMixin, TimestampMixin):
    """A member as scraped from one result; a new row is inserted per save."""

    __tablename__ = "members"

    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    party_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("parties.id"), nullable=False)
    electorate_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("electorates.id", ondelete="CASCADE"),
        nullable=False,
    )
    start_date: Mapped[date | None] = mapped_column(Date, nullable=True)

    party: Mapped[Party] = relationship()
    electorate: Mapped[Electorate] = relationship(foreign_keys=[electorate_id])

    __table_args__ = (Index("idx_members_electorate_id", "electorate_id"),)
