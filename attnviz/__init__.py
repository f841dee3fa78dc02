"""
AttnViz Backend: Application Package
======================================

What: Text record CRUD plus a token relevance-matrix ("attention") endpoint.

Architecture Note:
    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns, payload decoding
    ├─────────────────────────────────────┤
    │     Services (TextStore, Visualize) │  ← Validation, tokenize → score
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy engine
    └─────────────────────────────────────┘

    Services are constructed once by create_app() and injected into routes,
    so each layer can be tested without the ones above it.
"""

__version__ = "1.0.0"
