from dataclasses import dataclass
from enum import Enum
from typing import Optional


class WebgenError(Exception):
    """Base class for errors raised by the generation backend."""


class InvalidInput(WebgenError):
    """The user instruction is empty or not text."""


class ConfigurationError(WebgenError):
    """Process-level settings are missing or malformed. Fatal at startup."""


class PersistenceError(WebgenError):
    """A generated bundle could not be written to the bundle store."""


class TransportError(WebgenError):
    """
    The model provider could not be reached or answered with a non-2xx status.

    status_code is None when the request never produced an HTTP response.
    """

    def __init__(self, message: str, status_code: Optional[int] = None, body: str = ""):
        super().__init__(message)
        self.status_code = status_code
        self.body = body

    def to_dict(self) -> dict:
        return {
            "message": str(self),
            "status_code": self.status_code,
            "body": self.body,
        }


class NormalizationErrorKind(Enum):
    EMPTY_RESPONSE = "empty_response"
    UNPARSABLE_RESPONSE = "unparsable_response"
    MISSING_FIELD = "missing_field"
    INVALID_FIELD_TYPE = "invalid_field_type"


@dataclass(frozen=True)
class NormalizationError:
    """Why a completion could not be turned into a CodeBundle."""
    kind: NormalizationErrorKind
    text: str           # text state at the point of classification
    diagnostic: str     # terminal parser / validation message
    stage: Optional[str] = None
