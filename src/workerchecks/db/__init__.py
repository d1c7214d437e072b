"""Database engines and table definitions used by the SQL observations."""
