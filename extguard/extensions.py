"""
Extension Parsing Module

Canonicalizes extension tokens and splits filenames into every candidate
extension, so that names like ``document.pdf.exe`` cannot hide a blocked
extension behind a harmless-looking suffix.
"""

import re
from typing import List

_NUMERIC_SEGMENT = re.compile(r"^[0-9]+$")


def normalize_extension(token: str | None) -> str:
    """
    Canonicalize a raw extension token.

    Surrounding whitespace is trimmed, a single leading dot is removed and the
    result is lowercased. ``None`` and blank input yield an empty string.
    Applying it twice changes nothing unless the input starts with two dots;
    ``"..exe"`` becomes ``".exe"``, which custom-extension validation rejects.

    Args:
        token (str | None): Raw extension such as ``".EXE"`` or ``" exe "``.

    Returns:
        str: The normalized token, possibly empty.
    """
    if token is None:
        return ""

    normalized = token.strip()
    if normalized.startswith("."):
        normalized = normalized[1:].strip()

    return normalized.lower()


def extract_candidate_extensions(filename: str | None) -> List[str]:
    """
    Return every dot-delimited segment after the first as a candidate extension.

    Candidates are normalized and returned left to right without duplicates.
    Empty segments (``"a..b"``, trailing dots) and purely numeric segments
    (``"backup.2024.txt"``) are never candidates.

    Args:
        filename (str | None): Filename as supplied by the client.

    Returns:
        List[str]: Ordered candidate tokens; empty when the name has no extension.
    """
    if not filename:
        return []

    parts = filename.split(".")
    if len(parts) < 2:
        return []

    candidates: List[str] = []
    for part in parts[1:]:
        token = normalize_extension(part)
        if not token or _NUMERIC_SEGMENT.match(token):
            continue
        if token not in candidates:
            candidates.append(token)

    return candidates


def primary_extension(filename: str | None) -> str:
    """
    Return the rightmost candidate extension of a filename, or ``""``.

    This is the extension recorded on stored files and matched by cascading
    deletion.
    """
    if not filename:
        return ""

    parts = filename.split(".")
    for part in reversed(parts[1:]):
        token = normalize_extension(part)
        if token and not _NUMERIC_SEGMENT.match(token):
            return token

    return ""
