"""Strategy C: any <img> that looks like an item picture."""
from typing import List

from bs4 import BeautifulSoup

from core.models import InventoryItem
from core.urls import absolute_url

KEYWORDS = ("item", "skin")
PLACEHOLDER_NAME = "item"


def looks_like_item(src: str, alt: str) -> bool:
    lower = src.lower()
    return bool(alt) or any(k in lower for k in KEYWORDS)


def extract_items(html: str, origin: str) -> List[InventoryItem]:
    soup = BeautifulSoup(html, "html.parser")
    items: List[InventoryItem] = []
    for img in soup.find_all("img"):
        src = img.get("src") or ""
        alt = img.get("alt") or ""
        if looks_like_item(src, alt):
            items.append(
                InventoryItem(name=alt or PLACEHOLDER_NAME, image=absolute_url(src, origin))
            )
    return items
