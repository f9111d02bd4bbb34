"""Custom exception classes for the application."""

from typing import Any


class AquariumAnalyserError(Exception):
    """Base exception for all application errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


# External API Errors
class ExternalAPIError(AquariumAnalyserError):
    """Error calling external API."""

    def __init__(self, api_name: str, message: str) -> None:
        self.api_name = api_name
        super().__init__(f"{api_name} API error: {message}")


class APIKeyMissingError(ExternalAPIError):
    """API key not configured."""

    def __init__(self, api_name: str) -> None:
        super().__init__(api_name, "API key not configured")


class ArticleFetchError(ExternalAPIError):
    """The source article could not be fetched or parsed."""

    def __init__(self, url: str, message: str) -> None:
        self.url = url
        super().__init__("Article source", f"{url}: {message}")


# Analysis Errors
class AnalysisError(AquariumAnalyserError):
    """Base class for tank image analysis errors."""

    pass


class InvalidUploadError(AnalysisError):
    """Uploaded image was missing, empty, too large, or of a disallowed type."""

    def __init__(self, message: str, status_code: int = 400) -> None:
        self.status_code = status_code
        super().__init__(message)


class AnalysisValidationError(AnalysisError):
    """Model output did not match the analysis schema."""

    def __init__(self, message: str, errors: list[Any] | None = None) -> None:
        self.errors = errors or []
        super().__init__(message, {"errors": self.errors})
