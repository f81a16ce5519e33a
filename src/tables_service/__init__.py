"""HTTP CRUD service for tables backed by a relational store."""

__version__ = "0.1.0"
