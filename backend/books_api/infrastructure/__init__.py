"""Infrastructure Layer: database pool and logging setup."""
