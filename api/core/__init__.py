"""
Shared, cross-cutting code for the API.

`core/` holds the small building blocks every feature uses (the store
handle, error signals, input checks, settings). Keep entity-specific SQL in
the corresponding feature package (e.g. `articles/`).
"""
