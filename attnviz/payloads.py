"""
AttnViz Backend: Request Payload Decoding
============================================

What:  Decodes raw request bodies into TextPayload under an explicit policy.
Why:   FastAPI's own body parsing answers malformed JSON with 422. The
       frontend expects a body that cannot be decoded to be treated as an
       empty text, so decoding is done here instead.
How:   The body is read as a stream of JSON values and only the first one is
       used, so `{"text": "a"} trailing` decodes to "a". Pydantic then
       validates that value against TextPayload.

Policy (Settings.strict_payload_decoding):
    permissive (default):  empty body, invalid JSON, non-object JSON or a
                           non-string `text` → TextPayload(text=""), logged
                           at WARNING; data after the first value is ignored
    strict:                the same inputs, and data after the first value
                           → DecodeError (400)
"""

import json
import logging
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from attnviz.exceptions import DecodeError
from attnviz.schemas.text import TextPayload

logger = logging.getLogger(__name__)

_decoder = json.JSONDecoder()


def _first_json_value(raw: bytes, strict: bool) -> Any:
    document = raw.decode("utf-8")
    start = len(document) - len(document.lstrip())
    value, end = _decoder.raw_decode(document, start)
    if strict and document[end:].strip():
        raise ValueError("unexpected data after the JSON value")
    return value


def _reason(exc: Exception) -> str:
    if isinstance(exc, PydanticValidationError):
        return exc.errors()[0]["msg"] if exc.errors() else "invalid payload"
    if isinstance(exc, json.JSONDecodeError):
        return exc.msg
    return str(exc)


def decode_text_payload(raw: bytes, strict: bool = False) -> TextPayload:
    """
    Decode a `{"text": "..."}` body.

    Args:
        raw:     Request body bytes, possibly empty
        strict:  Raise DecodeError instead of falling back to an empty text

    Returns:
        The decoded payload; unknown fields are ignored.
    """
    try:
        return TextPayload.model_validate(_first_json_value(raw, strict))
    except (ValueError, PydanticValidationError) as e:
        # ValueError covers UnicodeDecodeError and json.JSONDecodeError
        reason = _reason(e)
        if strict:
            raise DecodeError(
                message=f"Malformed request payload: {reason}",
                context={"body_length": len(raw)},
            ) from e
        logger.warning("Ignoring undecodable payload (%d bytes): %s", len(raw), reason)
        return TextPayload()
