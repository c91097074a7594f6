"""Exception hierarchy for the poll and action pipeline.

Every error here is caught at the boundary where it occurs and turned into a
log line; none of them are meant to reach the host.
"""


class NtfyClientError(Exception):
    """Base class for all client errors."""


class ParseError(NtfyClientError):
    """A message payload or action list could not be parsed."""


class MissingRequiredFieldError(ParseError):
    """A payload is missing a field that cannot be defaulted."""

    def __init__(self, field: str) -> None:
        super().__init__(f"Missing required field: {field}")
        self.field = field


class CannotReconstructMessageError(ParseError):
    """Notification metadata no longer describes a valid message."""


class FetchError(NtfyClientError):
    """Polling a subscription failed."""

    def __init__(self, subscription_url: str, cause: str) -> None:
        super().__init__(f"Failed to poll {subscription_url}: {cause}")
        self.subscription_url = subscription_url
        self.cause = cause


class ActionError(NtfyClientError):
    """A user action could not be executed."""


class InvalidUrlError(ActionError):
    """An action or click URL cannot be resolved to an openable URL."""

    def __init__(self, url: str | None) -> None:
        super().__init__(f"Invalid URL: {url!r}")
        self.url = url


class HttpActionFailedError(ActionError):
    """An http action returned a non-2xx status or failed in transport."""

    def __init__(self, url: str, status: int | None = None, cause: str | None = None) -> None:
        detail = f"status {status}" if status is not None else cause
        super().__init__(f"HTTP action to {url} failed: {detail}")
        self.url = url
        self.status = status
        self.cause = cause
