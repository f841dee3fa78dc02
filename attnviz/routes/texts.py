"""
AttnViz Backend: Text Record Route Handlers
==============================================

What:  CRUD endpoints for the `texts` collection.
How:   Resolve the injected TextStore, decode the body where there is one,
       delegate, return the result. Errors raised by the store are mapped to
       status codes by the global handlers in main.py.

Route Inventory:
    GET    /api/texts         → 200 [{id, text}, ...]
    GET    /api/texts/{id}    → 200 {id, text} | 404
    POST   /api/texts         → 200 {id, text} | 400 | 500
    PUT    /api/texts/{id}    → 200 {id, text} | 400 | 404 | 500
    DELETE /api/texts/{id}    → 204 | 500

Path ids are typed as int; anything else is a FastAPI 422.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, Response

from attnviz.dependencies import get_text_store, read_text_payload
from attnviz.schemas.text import TextPayload, TextResponse
from attnviz.services.text_store import TextStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Texts"])

# Bodies are decoded by read_text_payload, so describe them for the docs here
_TEXT_BODY = {
    "requestBody": {
        "content": {"application/json": {"schema": TextPayload.model_json_schema()}},
        "required": True,
    }
}

_PLAIN_TEXT_ERROR = {"content": {"text/plain": {"schema": {"type": "string"}}}}


@router.get(
    "/texts",
    response_model=List[TextResponse],
    responses={500: {"description": "Store error", **_PLAIN_TEXT_ERROR}},
    summary="List saved texts",
)
async def list_texts(store: TextStore = Depends(get_text_store)) -> List[TextResponse]:
    """All saved texts in creation order. An empty collection is `[]`."""
    return await store.list_texts()


@router.get(
    "/texts/{text_id}",
    response_model=TextResponse,
    responses={404: {"description": "Text not found", **_PLAIN_TEXT_ERROR}},
    summary="Get a saved text by ID",
)
async def get_text(text_id: int, store: TextStore = Depends(get_text_store)) -> TextResponse:
    return await store.get_text(text_id)


@router.post(
    "/texts",
    response_model=TextResponse,
    responses={
        400: {"description": "Text exceeds the length limit", **_PLAIN_TEXT_ERROR},
        500: {"description": "Store error", **_PLAIN_TEXT_ERROR},
    },
    summary="Save a new text",
    description="Stores a text of at most 100 characters and returns it with its new ID.",
    openapi_extra=_TEXT_BODY,
)
async def create_text(
    payload: TextPayload = Depends(read_text_payload),
    store: TextStore = Depends(get_text_store),
) -> TextResponse:
    return await store.create_text(payload.text)


@router.put(
    "/texts/{text_id}",
    response_model=TextResponse,
    responses={
        400: {"description": "Text exceeds the length limit", **_PLAIN_TEXT_ERROR},
        404: {"description": "Text not found", **_PLAIN_TEXT_ERROR},
        500: {"description": "Store error", **_PLAIN_TEXT_ERROR},
    },
    summary="Replace a saved text",
    openapi_extra=_TEXT_BODY,
)
async def update_text(
    text_id: int,
    payload: TextPayload = Depends(read_text_payload),
    store: TextStore = Depends(get_text_store),
) -> TextResponse:
    """
    Replace the text of record `text_id`; the ID is unchanged.

    Updating an ID that has no record is a 404, not a success response
    describing a record that does not exist.
    """
    return await store.update_text(text_id, payload.text)


@router.delete(
    "/texts/{text_id}",
    status_code=204,
    response_class=Response,
    responses={500: {"description": "Store error", **_PLAIN_TEXT_ERROR}},
    summary="Delete a saved text",
)
async def delete_text(text_id: int, store: TextStore = Depends(get_text_store)) -> Response:
    """Idempotent: deleting an ID that has no record still answers 204."""
    await store.delete_text(text_id)
    return Response(status_code=204)
