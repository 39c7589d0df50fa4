"""querystudy: type-safe query construction on top of the SQLAlchemy ORM."""

__version__ = "0.1.0"
