"""Rename synonym operand tokens to their canonical spelling."""

from __future__ import annotations

from isa_cleanup.core.document import InstructionSetDocument
from isa_cleanup.core.status import TransformResult

OPERAND_RENAMING: dict[str, str] = {
    # Different names used for the same type in different parts of the manual.
    "m80dec": "m80bcd",
    "r8/m8": "r/m8",
    "r16/m16": "r/m16",
    "r32/m32": "r/m32",
    "r64/m64": "r/m64",
    "ST": "ST(0)",
    # Mode-dependent sizes; 32- and 64-bit modes use the larger one.
    "m14/28byte": "m28byte",
    "m94/108byte": "m108byte",
}


class RenameOperands:
    """Apply the synonym table to every operand of every record."""

    name = "RenameOperands"

    def apply(self, document: InstructionSetDocument) -> TransformResult:
        result = TransformResult(transform=self.name)
        for record in document:
            renamed = False
            for operand in record.vendor_syntax:
                canonical = OPERAND_RENAMING.get(operand.name)
                if canonical is not None:
                    operand.name = canonical
                    renamed = True
            if renamed:
                result.records_modified += 1
        return result

    def describe(self) -> str:
        pairs = ", ".join(f"{k}->{v}" for k, v in OPERAND_RENAMING.items())
        return f"Operand synonyms renamed: {pairs}."
