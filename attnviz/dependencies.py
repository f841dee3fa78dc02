"""
AttnViz Backend: FastAPI Dependencies
========================================

What:  Resolves the shared services a route needs from the running app.
Why:   The store and visualizer are constructed once by create_app() and kept
       on app.state; routes receive them through Depends() instead of
       importing module-level singletons, so tests can build isolated apps.
"""

from fastapi import Request

from attnviz.config import Settings
from attnviz.payloads import decode_text_payload
from attnviz.schemas.text import TextPayload
from attnviz.services.relevance import VisualizationService
from attnviz.services.text_store import TextStore


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_text_store(request: Request) -> TextStore:
    return request.app.state.text_store


def get_visualizer(request: Request) -> VisualizationService:
    return request.app.state.visualizer


async def read_text_payload(request: Request) -> TextPayload:
    """Decode the request body under the configured strict/permissive policy."""
    raw = await request.body()
    return decode_text_payload(raw, strict=get_settings(request).strict_payload_decoding)
