from enum import Enum


class ErrorKind(str, Enum):
    NOT_CONFIGURED = "not_configured"
    PROVIDER_FAILURE = "provider_failure"
    INVALID_INPUT = "invalid_input"


class CaptionGatewayError(Exception):
    """Base error raised by the caption gateway; `kind` drives the HTTP status."""

    kind: ErrorKind = ErrorKind.PROVIDER_FAILURE

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NotConfiguredError(CaptionGatewayError):
    kind = ErrorKind.NOT_CONFIGURED


class ProviderFailureError(CaptionGatewayError):
    kind = ErrorKind.PROVIDER_FAILURE


class InvalidInputError(CaptionGatewayError):
    kind = ErrorKind.INVALID_INPUT
