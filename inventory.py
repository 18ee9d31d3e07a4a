import os
import re
import sys
import json
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Tuple

from core.cache import ResultCache, make_cache
from core.errors import UpstreamUnavailable
from core.logger import get_logger
from core.urls import ORIGIN, profile_url
from extractors import STRATEGIES, Extractor, run_strategies
from fetchers import FETCHERS
from fetchers.kirka import FetchResponse

logger = get_logger(__name__)

DEFAULT_IDENTITY = os.getenv("DEFAULT_IDENTITY", "KGJN53")
DEBUG_DUMP_HTML = os.getenv("INVENTORY_DEBUG_DUMP_HTML", "false").lower() == "true"
DEBUG_DIR = os.getenv("INVENTORY_DEBUG_DIR", "/data/inventory_debug")

Fetcher = Callable[[str], FetchResponse]


def resolve_identity(params: Optional[Mapping[str, Any]] = None) -> str:
    """Pick the identity from caller parameters: 'user', then 'id', then the default."""
    params = params or {}
    for key in ("user", "id"):
        value = params.get(key)
        if value is not None and str(value).strip():
            return str(value).strip()
    return DEFAULT_IDENTITY


def upstream_error_payload(exc: UpstreamUnavailable) -> Dict[str, Any]:
    return {
        "ok": False,
        "error": "Failed to fetch profile",
        "status": exc.status,
        "bodySnippet": exc.body_snippet,
    }


def internal_error_payload(exc: BaseException) -> Dict[str, Any]:
    return {"ok": False, "error": "internal", "message": str(exc)}


class InventoryService:
    """
    Fetches a profile page, runs the extraction strategies over it and caches
    the resulting payload per identity.
    """

    def __init__(
        self,
        fetcher: Fetcher = FETCHERS["kirka"],
        cache: Optional[ResultCache] = None,
        origin: str = ORIGIN,
        strategies: Sequence[Tuple[str, Extractor]] = STRATEGIES,
    ):
        self.fetcher = fetcher
        self.cache = cache if cache is not None else make_cache()
        self.origin = origin
        self.strategies = strategies

    def lookup(self, identity: Optional[str] = None) -> Dict[str, Any]:
        identity = ("" if identity is None else str(identity)).strip() or DEFAULT_IDENTITY
        try:
            return self._lookup(identity)
        except UpstreamUnavailable as e:
            logger.error("Profile fetch for %s failed with status %s.", identity, e.status)
            return upstream_error_payload(e)
        except Exception as e:
            logger.exception("Inventory lookup for %s failed: %s", identity, e)
            return internal_error_payload(e)

    def _lookup(self, identity: str) -> Dict[str, Any]:
        cached = self.cache.get(identity)
        if cached is not None:
            logger.debug("Serving cached inventory for %s.", identity)
            return cached.payload

        url = profile_url(identity, self.origin)
        logger.info("Checking Kirka inventory for '%s' at %s", identity, url)
        resp = self.fetcher(url)
        if not resp.ok:
            raise UpstreamUnavailable(resp.status, resp.text)

        strategy, items = run_strategies(resp.text, self.origin, self.strategies)
        if strategy is None:
            logger.warning("No items found for %s at %s.", identity, url)
            _dump_html(url, resp.text)
        else:
            logger.info("Found %d items for %s via %s strategy.", len(items), identity, strategy)

        payload = {
            "ok": True,
            "identity": identity,
            "sourceUrl": url,
            "items": [it.to_dict() for it in items],
        }
        self.cache.put(identity, payload)
        return payload


def _dump_html(url: str, html: str) -> None:
    """Keep pages that no strategy could read, for tuning selectors later."""
    if not DEBUG_DUMP_HTML:
        return
    try:
        os.makedirs(DEBUG_DIR, exist_ok=True)
        safe = re.sub(r"[^A-Za-z0-9_.-]+", "_", url)
        fname = os.path.join(DEBUG_DIR, f"{safe}.html")
        with open(fname, "w", encoding="utf-8") as f:
            f.write(html)
        logger.warning("Saved unparsed HTML for %s to %s.", url, fname)
    except OSError as e:
        logger.warning("Failed to save debug HTML for %s: %s", url, e)


def identities_from_env() -> List[str]:
    raw = os.getenv("IDENTITIES", "")
    return [p.strip() for p in raw.split(",") if p.strip()]


def main(argv: Optional[Sequence[str]] = None, service: Optional[InventoryService] = None) -> int:
    args = list(sys.argv[1:] if argv is None else argv)
    identities = args or identities_from_env() or [DEFAULT_IDENTITY]
    service = service or InventoryService()

    all_ok = True
    for identity in identities:
        payload = service.lookup(identity)
        all_ok = all_ok and bool(payload.get("ok"))
        print(json.dumps(payload))
    return 0 if all_ok else 1


if __name__ == "__main__":
    try:
        raise SystemExit(main())
    except Exception as e:
        logger.exception("Fatal inventory error: %s", e)
        raise SystemExit(2)
