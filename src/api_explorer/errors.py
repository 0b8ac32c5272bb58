"""Exceptions raised inside api-explorer."""


class ExplorerError(RuntimeError):
    """Base error for api-explorer failures."""


class DiscoveryError(ExplorerError):
    """Raised when the API description cannot be retrieved or normalized."""
