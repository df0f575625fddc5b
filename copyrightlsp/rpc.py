"""Encoding and decoding of language server protocol base messages.

Messages consist of a header part and a JSON content part separated by an
empty line, as described by version 3.17 of the protocol specification.
"""

from __future__ import annotations

import json
import re
from collections.abc import Iterator
from typing import Any, BinaryIO

_SEPARATOR = b"\r\n\r\n"
_FIELD_SEPARATOR = b"\r\n"
_CONTENT_LENGTH_PREFIX = b"Content-Length: "
_CONTENT_TYPE_PREFIX = b"Content-Type: "
_VALID_CONTENT_TYPE = b"Content-Type: application/vscode-jsonrpc; charset=utf-8"
_INTEGER = re.compile(rb"[+-]?[0-9]+")
_CHUNK_SIZE = 4096


class RpcError(ValueError):
    """Raised when a message cannot be framed or decoded."""


def _json_default(value: Any) -> Any:
    to_dict = getattr(value, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    raise TypeError(f"object of type {type(value).__name__} is not JSON serializable")


def encode_message(msg: Any) -> str:
    """Encode ``msg`` as JSON preceded by a Content-Length header."""
    content = json.dumps(msg, separators=(",", ":"), ensure_ascii=False, default=_json_default)
    return f"Content-Length: {len(content.encode('utf-8'))}\r\n\r\n{content}"


def _parse_content_length_header(field: bytes) -> int:
    if not field.startswith(_CONTENT_LENGTH_PREFIX):
        raise RpcError("header did not start with content length")

    value = field[len(_CONTENT_LENGTH_PREFIX) :]
    if not _INTEGER.fullmatch(value):
        raise RpcError(f"failed to parse content length header: {value!r}")

    length = int(value)
    if length < 0:
        raise RpcError(f"content length must not be negative: {length}")
    return length


def parse_message_header(header: bytes) -> int:
    """Return the content length announced by a message header."""
    first, separator, second = header.partition(_FIELD_SEPARATOR)
    if not separator:
        return _parse_content_length_header(first)

    if first.startswith(_CONTENT_TYPE_PREFIX):
        if first != _VALID_CONTENT_TYPE:
            raise RpcError("unsupported content type provided")
        return _parse_content_length_header(second)

    if second.startswith(_CONTENT_TYPE_PREFIX):
        if second != _VALID_CONTENT_TYPE:
            raise RpcError("unsupported content type provided")
        return _parse_content_length_header(first)

    raise RpcError("invalid header fields provided")


def decode_message(msg: bytes | None) -> tuple[str, bytes]:
    """Decode a framed message into its method name and JSON content."""
    header, separator, content = (msg or b"").partition(_SEPARATOR)
    if not separator:
        raise RpcError("did not find separator between header and content")

    try:
        length = parse_message_header(header)
    except RpcError as err:
        raise RpcError(f"failed to parse header: {err}") from err

    if len(content) < length:
        raise RpcError("content is shorter than the announced content length")
    body = content[:length]

    try:
        data = json.loads(body)
    except ValueError as err:
        raise RpcError(f"failed to unmarshal message: {err}") from err

    if data is None:
        return "", body
    if not isinstance(data, dict):
        raise RpcError("failed to unmarshal message: content is not an object")

    method = data.get("method")
    if method is None:
        method = ""
    elif not isinstance(method, str):
        raise RpcError("failed to unmarshal message: method is not a string")
    return method, body


def split(data: bytes | None) -> bytes | None:
    """Return the first complete message at the start of ``data``.

    Returns None while the message is still incomplete and raises
    :class:`RpcError` if the header is malformed.
    """
    data = data or b""
    header, separator, content = data.partition(_SEPARATOR)
    if not separator:
        return None

    length = parse_message_header(header)
    if len(content) < length:
        return None

    total = len(header) + len(_SEPARATOR) + length
    return data[:total]


def read_messages(stream: BinaryIO) -> Iterator[bytes]:
    """Yield complete framed messages read from a binary stream until EOF."""
    read = getattr(stream, "read1", None) or stream.read
    buffer = b""
    while True:
        while (message := split(buffer)) is not None:
            buffer = buffer[len(message) :]
            yield message

        chunk = read(_CHUNK_SIZE)
        if not chunk:
            return
        buffer += chunk