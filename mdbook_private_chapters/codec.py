"""JSON transport between mdbook and the preprocessor.

mdbook writes ``[context, book]`` to the preprocessor's stdin and reads the
book back from stdout. An object carrying the context under ``context`` or
``root`` next to ``book`` (or a flat object whose non-book fields are the
context) is also accepted; in that case the whole object is written back with
only the book replaced.
"""

from __future__ import annotations

import json
from typing import IO, Any

from .errors import InputDecodeError, OutputEncodeError
from .schema import Request


def _split_envelope(data: Any) -> tuple[Any, Any, dict[str, Any] | None]:
    if isinstance(data, list):
        if len(data) != 2:
            raise InputDecodeError(
                f"Expected a [context, book] pair, got an array of {len(data)} elements"
            )
        return data[0], data[1], None

    if isinstance(data, dict):
        if "book" not in data:
            raise InputDecodeError("Request object has no 'book' field")
        root = data.get("root")
        if "context" in data:
            context = data["context"]
        elif isinstance(root, dict) and "mdbook_version" in root:
            context = root
        else:
            context = {k: v for k, v in data.items() if k != "book"}
        return context, data["book"], data

    raise InputDecodeError(f"Expected a JSON array or object, got {type(data).__name__}")


def decode_request(raw: str) -> Request:
    """Parse a preprocessor request.

    Raises:
        InputDecodeError: If ``raw`` is not JSON or not shaped like a request.
    """
    try:
        data = json.loads(raw)
    except (ValueError, RecursionError) as e:
        raise InputDecodeError(f"Unable to parse the input: {e}") from e

    context, book, envelope = _split_envelope(data)

    if not isinstance(context, dict):
        raise InputDecodeError("The preprocessor context must be a JSON object")
    if not isinstance(context.get("mdbook_version"), str):
        raise InputDecodeError("The preprocessor context has no 'mdbook_version' string")
    if not isinstance(book, dict):
        raise InputDecodeError("The book must be a JSON object")
    if not isinstance(book.get("sections"), list):
        raise InputDecodeError("The book has no 'sections' array")

    return Request(context=context, book=book, envelope=envelope)


def encode_response(request: Request) -> str:
    """Serialize the response in the shape the request arrived in.

    Raises:
        OutputEncodeError: If the payload cannot be serialized.
    """
    if request.envelope is None:
        payload: Any = request.book
    else:
        payload = {**request.envelope, "book": request.book}

    try:
        text = json.dumps(payload, ensure_ascii=False)
        # lone surrogates survive json.loads but are not valid UTF-8
        text.encode("utf-8")
    except (TypeError, ValueError, RecursionError) as e:
        raise OutputEncodeError(f"Unable to serialize the book: {e}") from e
    return text


def read_request(stream: IO[str]) -> Request:
    """Read all of ``stream`` and decode it."""
    try:
        raw = stream.read()
    except (OSError, UnicodeDecodeError) as e:
        raise InputDecodeError(f"Unable to read the input: {e}") from e
    return decode_request(raw)


def write_response(request: Request, stream: IO[str]) -> None:
    """Encode the response and write it to ``stream`` in one call."""
    text = encode_response(request)
    try:
        stream.write(text)
        stream.flush()
    except (OSError, UnicodeError) as e:
        raise OutputEncodeError(f"Unable to write the output: {e}") from e
