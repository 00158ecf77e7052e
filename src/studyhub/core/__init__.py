"""Core business logic.

Modules:
- models: Record types and the collection registry
- aggregator: Recent uploads feed across collections
- pdf_inspector: Checks on uploaded PDFs
- admin: Admin service used by the web API and CLI
"""

__all__ = [
    "models",
    "aggregator",
    "pdf_inspector",
    "admin",
]
