"""Infrastructure layer: database engine, ORM mapping, and query repositories."""
