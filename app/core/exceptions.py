"""Custom exception classes for the application."""

from typing import Any


class LiveServiceError(Exception):
    """Base exception for all application errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


# Configuration Errors
class UpstreamConfigMissingError(LiveServiceError):
    """Required upstream credentials are not configured."""

    def __init__(self, api_name: str, missing: list[str]) -> None:
        self.api_name = api_name
        self.missing = missing
        super().__init__(
            f"{api_name} configuration missing: {', '.join(missing)}",
            details={"missing": missing},
        )


# External API Errors
class ExternalAPIError(LiveServiceError):
    """Error calling external API."""

    def __init__(self, api_name: str, message: str, status_code: int | None = None) -> None:
        self.api_name = api_name
        self.status_code = status_code
        super().__init__(f"{api_name} API error: {message}")


class UpstreamTimeoutError(ExternalAPIError):
    """External API did not answer within the request timeout."""

    def __init__(self, api_name: str, timeout: float) -> None:
        self.timeout = timeout
        super().__init__(api_name, f"timed out after {timeout:g}s")
