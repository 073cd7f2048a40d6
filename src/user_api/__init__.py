"""User CRUD API over a single SQLAlchemy-backed resource."""

__version__ = "1.0.0"
