# extractors/__init__.py
from typing import Callable, List, Optional, Sequence, Tuple

from core.logger import get_logger
from core.models import InventoryItem

from . import heuristic, markup, structured

logger = get_logger(__name__)

Extractor = Callable[[str, str], List[InventoryItem]]

# Tried in order; the first one returning items wins.
STRATEGIES: List[Tuple[str, Extractor]] = [
    ("structured", structured.extract_items),
    ("markup", markup.extract_items),
    ("heuristic", heuristic.extract_items),
]


def run_strategies(
    html: str, origin: str, strategies: Sequence[Tuple[str, Extractor]] = STRATEGIES
) -> Tuple[Optional[str], List[InventoryItem]]:
    for name, extract in strategies:
        items = extract(html, origin)
        if items:
            return name, items
        logger.debug("Strategy '%s' found no items.", name)
    return None, []
