"""Books API: asynchronous CRUD service for a single books table.

Invariants:
    - Package root contains no executable code (no import side effects)
"""
