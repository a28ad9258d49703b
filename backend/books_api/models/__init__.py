"""ORM Models: one module per table."""
