"""
AttnViz Backend: Visualize Route Handler
===========================================

What:  POST /api/visualize turns a text into its token relevance matrix.
Who:   Called by the frontend heat-map view.

Request Flow:
    1. Body decoded to TextPayload (malformed bodies → empty text unless
       strict decoding is enabled)
    2. VisualizationService: tokenize → RelevanceScorer.build
    3. Return the N×N matrix as a JSON array of arrays

Nothing is persisted; the matrix lives for the request only.
"""

import logging

from fastapi import APIRouter, Depends

from attnviz.dependencies import get_visualizer, read_text_payload
from attnviz.schemas.text import RelevanceMatrix, TextPayload
from attnviz.services.relevance import VisualizationService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Visualize"])


@router.post(
    "/visualize",
    response_model=RelevanceMatrix,
    responses={
        200: {"description": "N×N relevance matrix, one row per token"},
        400: {"description": "Malformed payload (strict decoding only)"},
    },
    summary="Build the token relevance matrix for a text",
    description=(
        "Splits the text on whitespace and returns a square matrix of relevance "
        "scores indexed by token position. The current scorer is a fixed "
        "placeholder: 1.0 on the diagonal, 0.5 everywhere else."
    ),
    openapi_extra={
        "requestBody": {
            "content": {"application/json": {"schema": TextPayload.model_json_schema()}},
            "required": True,
        }
    },
)
async def visualize_text(
    payload: TextPayload = Depends(read_text_payload),
    visualizer: VisualizationService = Depends(get_visualizer),
) -> RelevanceMatrix:
    return visualizer.visualize(payload.text)
