"""Source map fragments pointing a generated style back at its source location."""

from __future__ import annotations

import base64
import json

from .ast import Loc
from .options import Options

_BASE64_DIGITS = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789+/"


def vlq_encode(value: int) -> str:
    """Base64 VLQ encoding of one signed integer."""
    vlq = (value << 1) if value >= 0 else ((-value) << 1) | 1
    out: list[str] = []
    while True:
        digit = vlq & 31
        vlq >>= 5
        if vlq:
            digit |= 32
        out.append(_BASE64_DIGITS[digit])
        if not vlq:
            return "".join(out)


def source_map_document(loc: Loc, filename: str, source: str | None) -> dict[str, object]:
    """Source Map v3 with one mapping: generated 1:0 -> loc."""
    mappings = vlq_encode(0) + vlq_encode(0) + vlq_encode(loc.line - 1) + vlq_encode(loc.col)
    doc: dict[str, object] = {
        "version": 3,
        "sources": [filename],
        "names": [],
        "mappings": mappings,
        "file": filename,
    }
    if source is not None:
        doc["sourcesContent"] = [source]
    return doc


def source_map_comment(loc: Loc, options: Options) -> str:
    """Inline source map comment for loc, or "" when the file name is unknown."""
    if not options.filename or options.filename == "unknown":
        return ""
    doc = source_map_document(loc, options.filename, options.source)
    encoded = base64.b64encode(
        json.dumps(doc, separators=(",", ":"), ensure_ascii=False).encode("utf-8")
    ).decode("ascii")
    return f"/*# sourceMappingURL=data:application/json;charset=utf-8;base64,{encoded} */"
