"""
Tolerant decoding of xlwings-rpc response bodies.

Some xlwings-rpc builds serialize values with ``str()`` instead of a JSON
encoder, so bodies can contain Python literals (``True``/``False``/``None``),
single-quoted strings, or call-like reprs such as ``VersionNumber('16.0')``.
``loads`` first tries the standard parser; only bodies that fail go through
``normalize``, a text pre-pass that rewrites those tokens into JSON.
"""

import json
import re
import string
from typing import Any, Optional, Tuple

from ..exceptions import XlwingsDecodeError

_LITERALS = {"True": "true", "False": "false", "None": "null"}
_IDENTIFIER = re.compile(r"[A-Za-z_][A-Za-z0-9_]*(?:\.[A-Za-z_][A-Za-z0-9_]*)*")
_SINGLE_QUOTE_ESCAPES = {"n": "\n", "t": "\t", "r": "\r", "\\": "\\", "'": "'", '"': '"', "0": "\0"}
_HEX_ESCAPE_WIDTHS = {"x": 2, "u": 4, "U": 8}


def loads(text: str, lenient: bool = True) -> Any:
    """
    Decode a response body

    Args:
        text: Raw response body
        lenient: Apply the normalization pass when strict parsing fails

    Returns:
        The decoded JSON value

    Raises:
        XlwingsDecodeError: If the body cannot be decoded
    """
    try:
        return json.loads(text)
    except (ValueError, RecursionError) as exc:
        if not lenient:
            raise XlwingsDecodeError(f"Invalid JSON in response: {exc}", text) from exc

    normalized = normalize(text)
    try:
        return json.loads(normalized)
    except (ValueError, RecursionError) as exc:
        raise XlwingsDecodeError(f"Invalid JSON in response after normalization: {exc}", text) from exc


def normalize(text: str) -> str:
    """Rewrite Python literals and wrapper calls into JSON. Never raises."""
    out = []
    i = 0
    length = len(text)

    while i < length:
        ch = text[i]

        if ch == '"':
            end = _string_end(text, i)
            out.append(text[i:end])
            i = end
            continue

        if ch == "'":
            literal, end = _single_quoted(text, i)
            out.append(literal)
            i = end
            continue

        match = _IDENTIFIER.match(text, i)
        if match is None:
            out.append(ch)
            i += 1
            continue

        name = match.group(0)
        end = match.end()
        # Part of a number such as 1e10
        if i > 0 and (text[i - 1].isalnum() or text[i - 1] in "_."):
            out.append(name)
            i = end
            continue

        paren = end
        while paren < length and text[paren].isspace():
            paren += 1

        if paren < length and text[paren] == "(":
            close = _matching_paren(text, paren)
            if close is None:
                out.append(json.dumps(text[i:]))
                break
            out.append(_reduce_call(name, text[paren + 1:close], text[i:close + 1]))
            i = close + 1
            continue

        out.append(_LITERALS.get(name, name))
        i = end

    return "".join(out)


def _reduce_call(name: str, inner: str, raw: str) -> str:
    try:
        args = json.loads(f"[{normalize(inner)}]")
        if len(args) == 1:
            return json.dumps(args[0])
        return json.dumps({"typeName": name, "args": args})
    except (ValueError, RecursionError):
        # unparseable or nested too deep, keep the call text
        return json.dumps(raw)


def _string_end(text: str, start: int) -> int:
    """Index just past the double-quoted string opening at ``start``."""
    i = start + 1
    while i < len(text):
        if text[i] == "\\":
            i += 2
            continue
        if text[i] == '"':
            return i + 1
        i += 1
    return len(text)


def _single_quoted(text: str, start: int) -> Tuple[str, int]:
    chars = []
    i = start + 1
    while i < len(text):
        ch = text[i]
        if ch == "\\" and i + 1 < len(text):
            nxt = text[i + 1]
            if nxt in _HEX_ESCAPE_WIDTHS:
                decoded = _hex_escape(text, i + 2, _HEX_ESCAPE_WIDTHS[nxt])
                if decoded is not None:
                    chars.append(decoded)
                    i += 2 + _HEX_ESCAPE_WIDTHS[nxt]
                    continue
            chars.append(_SINGLE_QUOTE_ESCAPES.get(nxt, "\\" + nxt))
            i += 2
            continue
        if ch == "'":
            return json.dumps("".join(chars)), i + 1
        chars.append(ch)
        i += 1
    # unterminated, keep as-is
    return text[start:], len(text)


def _hex_escape(text: str, start: int, width: int) -> Optional[str]:
    """Character for the ``\\xHH``/``\\uHHHH``/``\\UHHHHHHHH`` digits at ``start``, if valid."""
    digits = text[start:start + width]
    if len(digits) != width or not all(d in string.hexdigits for d in digits):
        return None
    code = int(digits, 16)
    if code > 0x10FFFF:
        return None
    return chr(code)


def _matching_paren(text: str, start: int) -> Optional[int]:
    depth = 0
    i = start
    while i < len(text):
        ch = text[i]
        if ch == '"':
            i = _string_end(text, i)
            continue
        if ch == "'":
            _, i = _single_quoted(text, i)
            continue
        if ch == "(":
            depth += 1
        elif ch == ")":
            depth -= 1
            if depth == 0:
                return i
        i += 1
    return None
