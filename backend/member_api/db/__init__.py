"""Database Metadata: SQLAlchemy Base shared by models and schema bootstrap."""
