# core/errors.py

SNIPPET_LENGTH = 200


class InventoryError(Exception):
    """Base error for inventory lookups."""


class UpstreamUnavailable(InventoryError):
    """The profile page came back with a non-success status."""

    def __init__(self, status: int, body: str = ""):
        self.status = status
        self.body_snippet = (body or "")[:SNIPPET_LENGTH]
        super().__init__(f"Bad status code {status}")
