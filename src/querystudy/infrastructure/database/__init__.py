"""Database engine, ORM mapping, and sample data via SQLAlchemy."""

from querystudy.infrastructure.database.engine import Database, create_db_engine, init_database
from querystudy.infrastructure.database.models import Base, Member, Team
from querystudy.infrastructure.database.seed import seed_sample_data

__all__ = [
    "Base",
    "Database",
    "Member",
    "Team",
    "create_db_engine",
    "init_database",
    "seed_sample_data",
]
