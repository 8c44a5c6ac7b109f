"""
Shared, cross-cutting code for the API.

`core/` should contain small building blocks that multiple features use
(in-memory stores, settings, logging, stream buffers). Keep feature-specific
queries and business logic in the corresponding feature package
(e.g. `news/`).
"""

