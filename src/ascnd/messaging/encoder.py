"""
MessagePack encoder/decoder for Ascnd RPC payloads.

Messages travel as MessagePack maps of their model fields. Unset optional
fields are omitted on encode and restored as None on decode.
"""

from collections.abc import Callable
from typing import Any, TypeVar

import msgpack
from pydantic import BaseModel, ValidationError


class DecodeError(Exception):
    """Error raised when a payload cannot be decoded into a message."""


# Size limits to prevent resource exhaustion from malicious payloads.
MAX_BUFFER_LEN = 4 * 1024 * 1024  # 4MB, the gRPC default max message size
MAX_STR_LEN = 64 * 1024  # 64KB per string
MAX_BIN_LEN = 64 * 1024  # 64KB per binary (score metadata)
MAX_ARRAY_LEN = 1024  # max array elements
MAX_MAP_LEN = 256  # max map entries
MAX_EXT_LEN = 1024  # max extension data


def encode(message: BaseModel) -> bytes:
    """
    Encode a message model to MessagePack bytes.
    """
    return msgpack.packb(message.model_dump(mode="python", exclude_none=True))


def decode(data: bytes) -> dict[str, Any]:
    """
    Decode MessagePack bytes to a dict.

    Raises DecodeError if data is invalid, not a dict, or exceeds size limits.
    """
    if len(data) > MAX_BUFFER_LEN:
        raise DecodeError(f"payload too large: {len(data)} bytes (max {MAX_BUFFER_LEN})")
    try:
        result = msgpack.unpackb(
            data,
            raw=False,
            max_str_len=MAX_STR_LEN,
            max_bin_len=MAX_BIN_LEN,
            max_array_len=MAX_ARRAY_LEN,
            max_map_len=MAX_MAP_LEN,
            max_ext_len=MAX_EXT_LEN,
        )
    except (msgpack.UnpackException, ValueError) as e:
        raise DecodeError(f"failed to decode MessagePack data: {e}") from e

    if not isinstance(result, dict):
        raise DecodeError(f"expected dict, got {type(result).__name__}")

    return result


M = TypeVar("M", bound=BaseModel)


def decoder_for(model: type[M]) -> Callable[[bytes], M]:
    """Return a deserializer that decodes bytes into an instance of model."""

    def _decode(data: bytes) -> M:
        try:
            return model.model_validate(decode(data))
        except ValidationError as e:
            raise DecodeError(f"invalid {model.__name__} payload: {e}") from e

    return _decode
