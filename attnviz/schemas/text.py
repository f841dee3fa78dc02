"""
AttnViz Backend: Pydantic Request/Response Schemas
=====================================================

What:  Pydantic models defining the API contract between frontend and backend.
Why:   Validation of decoded payloads, serialization of responses, and
       OpenAPI doc generation.
How:   Request bodies are decoded through attnviz.payloads (so the
       permissive/strict policy applies); responses are returned as these models.

Schemas are kept separate from the SQLAlchemy model so the API contract can
change independently of the table.
"""

from typing import List

from pydantic import BaseModel, Field


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class TextPayload(BaseModel):
    """
    Body of POST /api/texts, PUT /api/texts/{id} and POST /api/visualize.

    A missing `text` field decodes to the empty string. Unknown fields are
    ignored. Length is checked by TextStore, not here, so that an over-long
    text is a 400 with the store's message rather than a schema error.
    """
    text: str = Field(default="", description="The text to store or visualize")


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class TextResponse(BaseModel):
    """A stored text record: `{"id": 1, "text": "hello"}`."""
    id: int = Field(description="Record identifier, assigned on create")
    text: str = Field(description="Stored text (at most 100 characters)")

    model_config = {"from_attributes": True}


# Relevance matrix returned by POST /api/visualize: N rows of N floats
RelevanceMatrix = List[List[float]]


class HealthResponse(BaseModel):
    """
    What:  Health check response showing service and dependency status.
    Who:   Returned by GET /health for monitoring and load balancer probes.
    """
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
