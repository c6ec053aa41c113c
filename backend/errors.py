from typing import Optional


class AnalyzerError(Exception):
    """Base class for every failure raised by the analysis core."""


class InvalidInput(AnalyzerError):
    """A required argument was empty. Raised before any network call."""


class UpstreamError(AnalyzerError):
    """The Gemini call itself failed (network, auth, quota, safety block)."""

    def __init__(self, message: str, cause: Optional[Exception] = None):
        super().__init__(message)
        self.cause = cause


class ResponseFormatError(AnalyzerError):
    """The model answered, but its output could not be turned into an analysis."""


class MalformedPayload(ResponseFormatError):
    """The extracted payload is not valid JSON."""


class SchemaMismatch(ResponseFormatError):
    """The payload is valid JSON but not shaped like an analysis result."""
