# core/models.py
from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass
class InventoryItem:
    """
    Normalized representation of an inventory item, whichever strategy found it.
    Image URLs are absolute (or empty).
    """
    name: str = ""
    image: str = ""
    rarity: str = ""
    raw: Optional[Any] = field(default=None, repr=False, compare=False)

    def to_dict(self) -> Dict[str, str]:
        return {"name": self.name, "image": self.image, "rarity": self.rarity}


@dataclass
class CacheEntry:
    identity: str
    timestamp: float
    payload: Dict[str, Any]
