"""Error taxonomy for report conversion and delivery."""

from __future__ import annotations


class SarifBridgeError(Exception):
    """Base error for all SarifBridge failures."""


class MalformedReportError(SarifBridgeError, ValueError):
    """Raised when the input cannot be read as a SARIF document with a first run."""


class ConfigurationError(SarifBridgeError, ValueError):
    """Raised when credentials or target coordinates are missing."""


class DeliveryError(SarifBridgeError):
    """Raised when the reporting API rejects or fails a request."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
