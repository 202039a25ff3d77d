"""Typed failures raised by the itinerary and flight-search services."""


class TriponicError(Exception):
    """Base class for service-level failures."""

    kind = "TriponicError"

    def __init__(self, details: str = ""):
        super().__init__(details or self.kind)
        self.details = details or self.kind


class InvalidRequest(TriponicError):
    """Caller-supplied input failed validation."""

    kind = "InvalidRequest"


class NotFound(TriponicError):
    kind = "NotFound"


class GenerationError(TriponicError):
    """The language model did not produce a usable result."""

    kind = "GenerationError"


class EmptyResponse(GenerationError):
    kind = "EmptyResponse"


class MalformedResponse(GenerationError):
    kind = "MalformedResponse"


class DayCountMismatch(GenerationError):
    kind = "DayCountMismatch"

    def __init__(self, expected: int, actual: int):
        super().__init__(
            f"Generated itinerary has {actual} days instead of the requested {expected} days"
        )
        self.expected = expected
        self.actual = actual


class LLMError(GenerationError):
    """The model call itself failed (network, auth, quota)."""

    kind = "ModelUnavailable"


class ProviderError(TriponicError):
    """The flight-search provider failed. ``code`` is the provider's own code when known."""

    kind = "ProviderError"

    def __init__(self, details: str, code: str | None = None):
        super().__init__(details)
        self.code = code
