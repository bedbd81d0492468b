"""XML loading and typed field helpers for ``svn --xml`` output."""

from __future__ import annotations

import logging
import re
import xml.etree.ElementTree as ET
from datetime import datetime, timedelta, timezone
from typing import Optional, Union

logger = logging.getLogger(__name__)

Document = Union[ET.Element, ET.ElementTree, str, bytes, None]

_ISO_RE = re.compile(
    r"^(\d{4})-(\d{2})-(\d{2})T(\d{2}):(\d{2}):(\d{2})(?:\.(\d+))?"
    r"(Z|[+-]\d{2}:?\d{2})?$"
)


def looks_like_xml(text: str) -> bool:
    """True if *text* appears to be XML rather than plain svn output."""
    return text.lstrip("\ufeff \t\r\n").startswith("<")


def load_document(text: Union[str, bytes, None]) -> Optional[ET.Element]:
    """Parse XML text into its root element. Returns None if malformed."""
    if text is None:
        return None
    if isinstance(text, bytes):
        text = text.decode("utf-8", errors="replace")
    text = text.lstrip("\ufeff").strip()
    if not text:
        return None
    try:
        return ET.fromstring(text)
    except ET.ParseError as exc:
        logger.debug("discarding malformed XML document: %s", exc)
        return None


def as_root(document: Document) -> Optional[ET.Element]:
    """Normalise any accepted document form to a root element."""
    if document is None:
        return None
    if isinstance(document, ET.ElementTree):
        return document.getroot()
    if isinstance(document, (str, bytes)):
        return load_document(document)
    return document


def child_text(node: ET.Element, path: str) -> Optional[str]:
    """Text of the first element matching *path*, or None if absent."""
    found = node.find(path)
    if found is None:
        return None
    return "".join(found.itertext())


def parse_int(value: Optional[str]) -> Optional[int]:
    """Non-negative integer or None."""
    if value is None:
        return None
    value = value.strip()
    if not value.isdigit():
        return None
    return int(value)


def parse_iso_datetime(value: Optional[str]) -> Optional[datetime]:
    """Parse an ISO-8601 timestamp as svn writes it (``...T12:34:56.123456Z``).

    Timestamps without an offset are taken as UTC. Anything else is None.
    """
    if not value:
        return None
    m = _ISO_RE.match(value.strip())
    if not m:
        return None
    year, month, day, hour, minute, second = (int(g) for g in m.groups()[:6])
    fraction = m.group(7) or ""
    micro = int(fraction[:6].ljust(6, "0")) if fraction else 0
    tz = timezone.utc
    offset = m.group(8)
    if offset and offset != "Z":
        digits = offset[1:].replace(":", "")
        delta = timedelta(hours=int(digits[:2]), minutes=int(digits[2:]))
        tz = timezone(delta if offset[0] == "+" else -delta)
    try:
        parsed = datetime(year, month, day, hour, minute, second, micro, tzinfo=tz)
    except ValueError:
        return None
    return parsed.astimezone(timezone.utc)
