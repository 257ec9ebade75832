"""Custom exceptions for appforge."""

from typing import Any


class AppForgeError(Exception):
    """Base exception for appforge."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class InvalidBlueprintError(AppForgeError):
    """The blueprint cannot drive a run. Fatal, raised before any completion call."""

    def __init__(self, message: str, errors: list[dict[str, Any]] | None = None):
        super().__init__(
            f"Invalid blueprint: {message}",
            {"errors": errors or []},
        )


class RunNotFoundError(AppForgeError):
    """Generation run not found."""

    def __init__(self, run_id: str):
        super().__init__(f"Run not found: {run_id}", {"run_id": run_id})


class CompletionError(AppForgeError):
    """The completion service failed to return text."""

    retryable = True


class CompletionTimeoutError(CompletionError):
    """The completion call timed out."""


class RateLimitedError(CompletionError):
    """The completion service rejected the call for rate limiting."""

    def __init__(
        self,
        message: str,
        retry_after: float | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, {**(details or {}), "retry_after": retry_after})
        self.retry_after = retry_after


class TransportError(CompletionError):
    """Connection or HTTP-level failure talking to the completion service."""


class MalformedResponseError(CompletionError):
    """The response is empty or not parseable as the expected JSON/code."""

    retryable = False


class TruncatedContentError(AppForgeError):
    """Content was cut off. Resolved locally by fallback substitution."""

    def __init__(self, path: str, reason: str):
        super().__init__(
            f"Truncated content for '{path}': {reason}",
            {"path": path, "reason": reason},
        )
        self.path = path
        self.reason = reason


class PartialBatchError(AppForgeError):
    """A batched response held fewer valid items than required."""

    def __init__(self, valid: int, expected: int, minimum: int):
        super().__init__(
            f"Batch returned {valid}/{expected} valid items (minimum {minimum})",
            {"valid": valid, "expected": expected, "minimum": minimum},
        )
        self.valid = valid
        self.expected = expected
        self.minimum = minimum
