"""Error types raised across the proxy."""


class ProxyError(Exception):
    """Base class for proxy errors."""


class InputValidationError(ProxyError):
    """A required input is missing or malformed."""

    def __init__(self, message: str, example: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.example = example

    def to_body(self) -> dict[str, str]:
        """Render the error as a JSON response body."""
        body = {"error": self.message}
        if self.example:
            body["example"] = self.example
        return body


class UpstreamError(ProxyError):
    """The upstream API call failed or returned an unusable body."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class OperationFailedError(ProxyError):
    """An operation could not be completed because the upstream call failed."""

    def __init__(self, error: str, details: str) -> None:
        super().__init__(f"{error}: {details}")
        self.error = error
        self.details = details

    def to_body(self) -> dict[str, str]:
        """Render the error as a JSON response body."""
        return {"error": self.error, "details": self.details}
