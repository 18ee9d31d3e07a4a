"""
Strategy A: inventory arrays embedded in inline <script> blocks.

Profile pages ship their state as something like ``inventory = [...]`` or
``items: [...]``. The literal is cut out by bracket matching and parsed as
strict JSON; anything that does not parse is skipped.
"""
import json
import re
from typing import Any, List, Optional, Sequence

from bs4 import BeautifulSoup

from core.logger import get_logger
from core.models import InventoryItem
from core.urls import absolute_url

logger = get_logger(__name__)

ASSIGNMENT_RE = re.compile(r"(?:inventory|items)\s*[=:]\s*(?=\[)", re.IGNORECASE)

NAME_KEYS = ("name", "title", "displayName", "itemName")
IMAGE_KEYS = ("img", "image", "icon", "icon_url")
RARITY_KEYS = ("rarity", "rarityName", "tier")


def find_array_literal(text: str, start: int) -> Optional[str]:
    """
    Return the bracketed literal opening at text[start], up to its matching
    close bracket. Brackets inside quoted strings are ignored. None when the
    literal is never closed.
    """
    depth = 0
    quote = None
    escaped = False
    for pos in range(start, len(text)):
        ch = text[pos]
        if quote:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == quote:
                quote = None
            continue
        if ch in "\"'":
            quote = ch
        elif ch == "[":
            depth += 1
        elif ch == "]":
            depth -= 1
            if depth == 0:
                return text[start:pos + 1]
    return None


def _first_value(record: Any, keys: Sequence[str]) -> str:
    if not isinstance(record, dict):
        return ""
    for key in keys:
        value = record.get(key)
        if value:
            return value if isinstance(value, str) else json.dumps(value)
    return ""


def _reject_constant(name: str):
    raise ValueError(f"non-standard JSON constant {name}")


def _parse_script(text: str) -> Optional[list]:
    m = ASSIGNMENT_RE.search(text)
    if not m:
        return None
    literal = find_array_literal(text, m.end())
    if literal is None:
        logger.debug("Unterminated array literal after %r; skipping script.", m.group(0).strip())
        return None
    try:
        data = json.loads(literal, parse_constant=_reject_constant)
    except ValueError as e:
        logger.debug("Embedded inventory literal is not valid JSON (%s); skipping script.", e)
        return None
    if not isinstance(data, list):
        return None
    return data


def record_to_item(record: Any, origin: str) -> InventoryItem:
    return InventoryItem(
        name=_first_value(record, NAME_KEYS),
        image=absolute_url(_first_value(record, IMAGE_KEYS), origin),
        rarity=_first_value(record, RARITY_KEYS),
        raw=record,
    )


def extract_items(html: str, origin: str) -> List[InventoryItem]:
    soup = BeautifulSoup(html, "html.parser")
    for script in soup.find_all("script"):
        records = _parse_script(script.get_text())
        if records is None:
            continue
        logger.debug("Found embedded inventory array with %d records.", len(records))
        return [record_to_item(rec, origin) for rec in records]
    return []
