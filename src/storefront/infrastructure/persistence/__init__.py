"""Persistence layer built on SQLAlchemy async."""
