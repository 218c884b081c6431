"""ORM model registry: import all models so Alembic autogenerate discovers them."""

from electorate_scraper.models.base import Base
from electorate_scraper.models.electorate import Electorate
from electorate_scraper.models.member import Member
from electorate_scraper.models.party import Party

__all__ = [
    "Base",
    "Electorate",
    "Member",
    "Party",
]
