"""
Transient/permanent classification of request failures.

The retry driver only ever asks one question of an error: is it worth
trying again with the identical request? classify_error answers it from
the error's ErrorKind alone.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict

from .transport_errors import ErrorKind


class Classification(Enum):
    TRANSIENT = "transient"
    PERMANENT = "permanent"


KIND_CLASSIFICATION: Dict[ErrorKind, Classification] = {
    ErrorKind.TRANSPORT: Classification.TRANSIENT,
    ErrorKind.SERVER_ERROR: Classification.TRANSIENT,
    ErrorKind.RATE_LIMITED: Classification.TRANSIENT,
    ErrorKind.CLIENT_ERROR: Classification.PERMANENT,
    ErrorKind.MALFORMED_RESPONSE: Classification.PERMANENT,
    ErrorKind.APPLICATION_TRANSIENT: Classification.TRANSIENT,
    ErrorKind.APPLICATION_PERMANENT: Classification.PERMANENT,
    ErrorKind.INVALID_REQUEST: Classification.PERMANENT,
}


@dataclass(frozen=True)
class ClassifiedError:
    """An error tagged as transient or permanent."""

    classification: Classification
    error: BaseException

    @classmethod
    def transient(cls, error: BaseException) -> "ClassifiedError":
        return cls(Classification.TRANSIENT, error)

    @classmethod
    def permanent(cls, error: BaseException) -> "ClassifiedError":
        return cls(Classification.PERMANENT, error)

    @property
    def is_transient(self) -> bool:
        return self.classification is Classification.TRANSIENT

    @property
    def is_permanent(self) -> bool:
        return self.classification is Classification.PERMANENT

    def __str__(self) -> str:
        return f"{self.classification.value} error: {self.error}"


def classify_error(error: BaseException) -> ClassifiedError:
    """
    Classify an error raised by a request attempt.

    Errors from this package are classified by their kind. Anything else
    is an unexpected failure and is treated as permanent.

    Args:
        error: The exception raised by the attempt

    Returns:
        ClassifiedError wrapping the same exception object
    """
    kind = getattr(error, "kind", None)
    if isinstance(kind, ErrorKind):
        return ClassifiedError(KIND_CLASSIFICATION[kind], error)
    return ClassifiedError.permanent(error)
