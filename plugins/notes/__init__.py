# plugins/notes/__init__.py
"""In-memory notes: create, read, list and delete."""
