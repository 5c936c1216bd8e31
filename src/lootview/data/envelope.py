"""Unwrapping of the base64 payload carried by a file content envelope."""
from __future__ import annotations

import base64
import binascii

from .errors import EncodingError, ProtocolError


def extract_payload(envelope: object) -> str:
    """Return the cleaned base64 text of the envelope's ``content`` field."""
    if not isinstance(envelope, dict):
        raise ProtocolError("File envelope must be a JSON object.")
    content = envelope.get("content")
    if not isinstance(content, str):
        raise ProtocolError("File envelope has no string 'content' field.")
    return content.replace("\\n", "").replace("\n", "").replace('"', "")


def decode_envelope_text(envelope: object) -> str:
    """Decode the envelope payload into text."""
    payload = extract_payload(envelope)
    try:
        raw = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise EncodingError(f"Payload is not valid base64: {exc}") from exc
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise EncodingError(f"Payload is not valid UTF-8: {exc}") from exc
