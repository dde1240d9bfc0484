"""Backend API access for dashbridge.

Public API:
    BackendApi -- Abstract base class
    BackendError -- Failure reported by the backend
    HttpBackendApi -- HTTP client for the backend gateway
"""

from dashbridge.api.base import BackendApi, BackendError

__all__ = ["BackendApi", "BackendError", "HttpBackendApi"]


def __getattr__(name: str) -> type:
    """Lazy import for concrete implementations that require external deps."""
    if name == "HttpBackendApi":
        from dashbridge.api.http_backend import HttpBackendApi
        return HttpBackendApi
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
