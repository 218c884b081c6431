"""Electorate (single-member district) with its latest scraped result figures."""

import uuid
from datetime import datetime

from sqlalchemy import DateTime, Float, ForeignKey, Index, Integer, String, Text, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from electorate_scraper.models.base import Base, TimestampMixin, UUIDMixin


class Electorate(Base, UUIDMixin, TimestampMixin):
    """An electorate keyed by ``(name, region_code)``, upserted on every save."""

    __tablename__ = "electorates"

    name: Mapped[str] = mapped_column(String(200), nullable=False)
    region_code: Mapped[str] = mapped_column(String(10), nullable=False)
    total_votes_cast: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    current_margin_votes: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    current_margin_percent: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    winner_tpp_percent: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    loser_tpp_percent: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    winner_tpp_votes: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    loser_tpp_votes: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    previous_margin_percent: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    swing_percent: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    source_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    scraped_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    current_member_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid,
        ForeignKey("members.id", ondelete="SET NULL", use_alter=True, name="fk_electorate_current_member"),
        nullable=True,
    )

    current_member: Mapped["Member | None"] = relationship(  # noqa: F821
        foreign_keys=[current_member_id],
        post_update=True,
    )

    __table_args__ = (
        UniqueConstraint("name", "region_code", name="uq_electorate_name_region"),
        Index("idx_electorates_region_code", "region_code"),
    )
