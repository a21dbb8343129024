"""Transform protocol: every transform rewrites a document in place and reports a result."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from loguru import logger

from isa_cleanup.core.document import InstructionRecord, InstructionSetDocument
from isa_cleanup.core.status import ErrorKind, TransformError, TransformResult


@runtime_checkable
class Transform(Protocol):
    """Protocol for all cleanup transforms."""

    name: str

    def apply(self, document: InstructionSetDocument) -> TransformResult:
        """Rewrite matching records of ``document`` in place.

        Must match records narrowly (by mnemonic and/or exact encoding) and
        must be idempotent on its own output.
        """
        ...

    def describe(self) -> str:
        """Human-readable description of this transform."""
        ...


def report_error(
    result: TransformResult,
    message: str,
    index: int,
    record: InstructionRecord,
    kind: ErrorKind = ErrorKind.MALFORMED_RECORD,
) -> TransformError:
    """Log a data error for one record and add it to ``result``."""
    error = result.add_error(
        message, kind=kind, record_index=index, mnemonic=record.mnemonic,
    )
    logger.error("{}: {}", result.transform, message)
    return error
