"""Registered political party."""

from sqlalchemy import String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from electorate_scraper.models.base import Base, TimestampMixin, UUIDMixin


class Party(Base, UUIDMixin, TimestampMixin):
    """A party members may be saved against. Rows are pre-registered, never created by a scrape."""

    __tablename__ = "parties"

    name: Mapped[str] = mapped_column(String(200), nullable=False)
    short_name: Mapped[str | None] = mapped_column(String(20), nullable=True)

    __table_args__ = (UniqueConstraint("name", name="uq_party_name"),)
