import os
from dataclasses import dataclass

import requests

from core.logger import get_logger

logger = get_logger(__name__)

USER_AGENT = os.getenv(
    "KIRKA_USER_AGENT",
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/124.0.0.0 Safari/537.36",
)
PROXY_URL = os.getenv("KIRKA_PROXY_URL", "").strip()
TIMEOUT = float(os.getenv("KIRKA_TIMEOUT", "30"))

SESSION = requests.Session()
SESSION.headers.update({"User-Agent": USER_AGENT})
if PROXY_URL:
    SESSION.proxies.update({"http": PROXY_URL, "https": PROXY_URL})


@dataclass
class FetchResponse:
    status: int
    text: str

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300


def fetch_page(url: str) -> FetchResponse:
    """
    Fetch a profile page once. HTTP error statuses are returned, not raised;
    connection errors and timeouts propagate as requests exceptions.
    """
    logger.debug("Fetching Kirka page: %s", url)
    r = SESSION.get(url, timeout=TIMEOUT)
    if not 200 <= r.status_code < 300:
        logger.warning("Kirka returned status %s at %s.", r.status_code, url)
    return FetchResponse(status=r.status_code, text=r.text)
