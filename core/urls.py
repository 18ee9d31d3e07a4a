# core/urls.py
import os
from urllib.parse import quote

ORIGIN = os.getenv("KIRKA_ORIGIN", "https://kirka.io").rstrip("/")

# Sub-delimiters kept unescaped in profile paths, on top of quote's defaults
IDENTITY_SAFE = "!*'()"


def absolute_url(ref: str, origin: str = ORIGIN) -> str:
    """Make an image reference found on a profile page absolute."""
    if not ref:
        return ""
    if ref.startswith("http://") or ref.startswith("https://"):
        return ref
    if ref.startswith("//"):
        return "https:" + ref
    if ref.startswith("/"):
        return origin + ref
    return f"{origin}/{ref}"


def profile_url(identity: str, origin: str = ORIGIN) -> str:
    return f"{origin}/profile/{quote(identity, safe=IDENTITY_SAFE)}"
