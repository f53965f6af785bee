"""
Output-time cleanup and input decoding.

Responsibilities:
- field whitespace normalization (applied only when writing)
- decoding raw input bytes to text before tokenizing
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Tuple

from charset_normalizer import from_bytes

logger = logging.getLogger(__name__)


def normalize_field(value: str) -> str:
    """
    Collapse every whitespace run to a single space and trim the ends.

    Stitched values keep their raw newlines in memory ("from\\nBodorna");
    this is where they become "from Bodorna". Idempotent.
    """
    return " ".join(value.split())


def normalize_row(row: Iterable[str]) -> List[str]:
    return [normalize_field(v) for v in row]


def decode_input(raw: bytes) -> Tuple[str, Dict[str, Any]]:
    """
    Decode input bytes to text.

    Rules:
    - Detect encoding best-effort via charset-normalizer.
    - A UTF-8 BOM is stripped (utf-8-sig) so it never lands in the first header.
    - If decode fails, fall back to UTF-8, then to UTF-8 with replacement characters.
    """
    detected = None
    match = from_bytes(raw).best()
    if match is not None:
        detected = match.encoding

    decode_used = detected or "utf-8"
    if raw.startswith(b"\xef\xbb\xbf"):
        decode_used = "utf-8-sig"

    decode_fallback = False
    try:
        text = raw.decode(decode_used)
    except (UnicodeDecodeError, LookupError):
        decode_fallback = True
        try:
            text = raw.decode("utf-8")
            decode_used = "utf-8"
        except UnicodeDecodeError:
            text = raw.decode("utf-8", errors="replace")
            decode_used = "utf-8"

    if decode_fallback:
        logger.warning("Decoding with %s failed; fell back to %s", detected, decode_used)

    report = {
        "detected": detected,
        "decode_used": decode_used,
        "decode_fallback": decode_fallback,
    }
    return text, report
