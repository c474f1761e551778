"""JSON-safe encoding of metadata payloads.

Metadata may carry binary attachments, which vector databases that store
JSON payloads cannot hold directly. Binary values are stored as tagged
base64 objects and restored on read. A user mapping that itself uses one
of the tag keys is wrapped in an escape tag so it is never mistaken for an
encoded value.

JSON has no tuples and only string keys: tuples come back as lists, and
non-string keys come back as their ``str()``.
"""

import base64
from typing import Any

_BYTES_TAG = "__bytes__"
_DICT_TAG = "__dict__"
_TAGS = frozenset({_BYTES_TAG, _DICT_TAG})


def encode_metadata(metadata: dict[str, Any] | None) -> dict[str, Any] | None:
    """Encode a metadata mapping into a JSON-safe payload."""
    if metadata is None:
        return None
    return {str(key): _encode_value(value) for key, value in metadata.items()}


def decode_metadata(payload: dict[str, Any] | None) -> dict[str, Any] | None:
    """Restore a metadata mapping produced by ``encode_metadata``."""
    if payload is None:
        return None
    return {key: _decode_value(value) for key, value in payload.items()}


def _encode_value(value: Any) -> Any:
    if isinstance(value, (bytes, bytearray, memoryview)):
        return {_BYTES_TAG: base64.b64encode(bytes(value)).decode("ascii")}
    if isinstance(value, dict):
        encoded = {str(k): _encode_value(v) for k, v in value.items()}
        if _TAGS.intersection(encoded):
            return {_DICT_TAG: encoded}
        return encoded
    if isinstance(value, (list, tuple)):
        return [_encode_value(v) for v in value]
    return value


def _decode_value(value: Any) -> Any:
    if isinstance(value, dict):
        if set(value) == {_BYTES_TAG}:
            return base64.b64decode(value[_BYTES_TAG])
        if set(value) == {_DICT_TAG}:
            value = value[_DICT_TAG]
        return {k: _decode_value(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_decode_value(v) for v in value]
    return value
