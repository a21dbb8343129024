"""Transform results and the error taxonomy.

Data problems found by a transform are reported as values (TransformError
inside a TransformResult). Exceptions are reserved for configuration
problems detected at startup.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field


class ErrorKind(str, enum.Enum):
    # Record does not have the shape the transform expects; it is skipped.
    MALFORMED_RECORD = "MalformedRecord"
    # Exact-encoding match with an invalid shape; the transform stops.
    CORRUPT_FIXED_FORM = "CorruptFixedForm"


class TransformRegistrationError(ValueError):
    """Duplicate or missing transform registration."""


class ConfigError(ValueError):
    """Invalid cleanup configuration."""


@dataclass(frozen=True)
class TransformError:
    """One data error reported by a transform."""

    kind: ErrorKind
    message: str
    transform: str = ""
    record_index: int | None = None
    mnemonic: str = ""

    def describe(self) -> str:
        where = f"[{self.transform}]" if self.transform else ""
        if self.record_index is not None:
            where += f" record #{self.record_index}"
        return f"{where} {self.message}".strip()


@dataclass
class TransformResult:
    """Outcome of one transform run: success, or the errors it reported.

    Errors accumulate in the order they were observed; ``last_error`` is
    the single error a caller sees when only one status is surfaced.
    """

    transform: str = ""
    errors: list[TransformError] = field(default_factory=list)
    records_modified: int = 0

    @property
    def ok(self) -> bool:
        return not self.errors

    @property
    def last_error(self) -> TransformError | None:
        return self.errors[-1] if self.errors else None

    def add_error(
        self,
        message: str,
        kind: ErrorKind = ErrorKind.MALFORMED_RECORD,
        record_index: int | None = None,
        mnemonic: str = "",
    ) -> TransformError:
        error = TransformError(
            kind=kind,
            message=message,
            transform=self.transform,
            record_index=record_index,
            mnemonic=mnemonic,
        )
        self.errors.append(error)
        return error
