"""Building blocks for versioned database schema migrations: SQL parsing, version
resolution, dialect-specific version tables, session locking and file statistics."""

__version__ = "0.1.0"