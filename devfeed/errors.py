"""Upstream fetch errors."""


class FetchError(Exception):
    """Base error for a failed upstream fetch."""

    def __init__(self, resource: str, message: str):
        super().__init__(f"{resource}: {message}")
        self.resource = resource


class TransportError(FetchError):
    """The HTTP call failed: connection, timeout or non-success status."""


class PayloadError(FetchError):
    """The upstream body is not the JSON shape the adapter expects."""
