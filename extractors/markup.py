"""
Strategy B: item cards in the rendered markup.

SELECTORS is tried in order. The first selector that matches anything ends
the search, even when none of its elements carry a name or an image.
"""
from typing import List, Sequence

from bs4 import BeautifulSoup
from bs4.element import Tag

from core.logger import get_logger
from core.models import InventoryItem
from core.urls import absolute_url

logger = get_logger(__name__)

# Grid containers first, then progressively more generic item classes.
SELECTORS = [
    ".inventory .item",
    ".inventory-item",
    ".inv-item",
    ".item",
    ".item-card",
    ".card.item",
]

NAME_SELECTOR = ".name, .item-name, .title, .item-title"
RARITY_SELECTOR = ".rarity, .item-rarity, .tier"


def _text_or_empty(tag: Tag | None) -> str:
    return tag.get_text().strip() if tag is not None else ""


def _attr(el: Tag, *names: str) -> str:
    for name in names:
        val = el.get(name)
        if isinstance(val, str) and val.strip():
            return val.strip()
    return ""


def parse_item_element(el: Tag, origin: str) -> InventoryItem:
    name = _text_or_empty(el.select_one(NAME_SELECTOR)) or _attr(el, "data-name")

    src = ""
    img_el = el.select_one("img")
    if img_el is not None:
        src = _attr(img_el, "src")
    src = src or _attr(el, "data-img", "data-image")

    rarity = _text_or_empty(el.select_one(RARITY_SELECTOR)) or _attr(el, "data-rarity")

    return InventoryItem(name=name, image=absolute_url(src, origin), rarity=rarity)


def extract_items(
    html: str, origin: str, selectors: Sequence[str] = SELECTORS
) -> List[InventoryItem]:
    soup = BeautifulSoup(html, "html.parser")
    for sel in selectors:
        elements = soup.select(sel)
        if not elements:
            continue

        items: List[InventoryItem] = []
        for el in elements:
            item = parse_item_element(el, origin)
            if item.name or item.image:
                items.append(item)
        logger.debug(
            "Selector %r matched %d elements; admitted %d items.",
            sel, len(elements), len(items),
        )
        return items
    return []
