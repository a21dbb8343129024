"""Resolve the generic ``reg`` operand to a concrete general-purpose register size.

Each input record with a ``reg`` operand -> one record with r8/r16/r32, or,
for mnemonics valid with both 32- and 64-bit registers, 2 outputs:
- the record itself, with r32
- an appended copy with r64 and a ``REX.W + `` encoding prefix

This order is fixed: the record in place is always the 32-bit form and the
appended record is always the 64-bit one.
"""

from __future__ import annotations

from isa_cleanup.core.document import InstructionRecord, InstructionSetDocument
from isa_cleanup.core.status import TransformResult
from isa_cleanup.transforms.base import report_error

REG_OPERAND = "reg"
REX_W_PREFIX = "REX.W + "

# Mnemonics that get one entry per register size.
EXPAND_TO_ALL_SIZES: frozenset[str] = frozenset({"LAR"})

RENAME_TO_REG8: frozenset[str] = frozenset({"VPBROADCASTB"})
RENAME_TO_REG16: frozenset[str] = frozenset({"VPBROADCASTW"})
RENAME_TO_REG32: frozenset[str] = frozenset({
    "EXTRACTPS",
    "MOVMSKPD",
    "MOVMSKPS",
    "PEXTRB",
    "PEXTRW",
    "PMOVMSKB",
    "VMOVMSKPD",
    "VMOVMSKPS",
    "VPEXTRB",
    "VPEXTRW",
    "VPMOVMSKB",
})


def _single_size_for(mnemonic: str) -> str | None:
    if mnemonic in RENAME_TO_REG8:
        return "r8"
    if mnemonic in RENAME_TO_REG16:
        return "r16"
    if mnemonic in RENAME_TO_REG32:
        return "r32"
    return None


class FixRegOperands:
    """Replace ``reg`` placeholders by r8/r16/r32, or split into r32 + r64."""

    name = "FixRegOperands"

    def apply(self, document: InstructionSetDocument) -> TransformResult:
        result = TransformResult(transform=self.name)
        # Copies are appended once the scan is over, never while iterating.
        new_records: list[InstructionRecord] = []
        for index, record in enumerate(document):
            positions = [
                i for i, op in enumerate(record.vendor_syntax) if op.name == REG_OPERAND
            ]
            if not positions:
                continue
            mnemonic = record.mnemonic
            if mnemonic in EXPAND_TO_ALL_SIZES:
                wide = record.copy_record(
                    binary_encoding=REX_W_PREFIX + record.binary_encoding,
                )
                for i in positions:
                    record.vendor_syntax[i].name = "r32"
                    wide.vendor_syntax[i].name = "r64"
                new_records.append(wide)
                result.records_modified += 1
                continue
            size = _single_size_for(mnemonic)
            if size is None:
                report_error(
                    result, f"Unexpected instruction mnemonic: {mnemonic}", index, record,
                )
                continue
            for i in positions:
                record.vendor_syntax[i].name = size
            result.records_modified += 1
        document.extend(new_records)
        return result

    def describe(self) -> str:
        return (
            "reg -> r8/r16/r32 by mnemonic; LAR is split into an r32 record and "
            "an appended REX.W r64 record."
        )
