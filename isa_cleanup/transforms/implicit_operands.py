"""Remove implicit operands that assemblers do not accept in the operand list."""

from __future__ import annotations

from isa_cleanup.core.document import InstructionSetDocument
from isa_cleanup.core.status import TransformResult

IMPLICIT_ST0_OPERAND = "ST(0)"
IMPLICIT_XMM0_OPERAND = "<XMM0>"

# x87 register-register forms where ST(0) is implied by the opcode.
ST0_IMPLICIT_ENCODINGS: frozenset[str] = frozenset({
    "D8 C0+i", "D8 C8+i", "D8 E0+i", "D8 E8+i", "D8 F0+i", "D8 F8+i",
    "DB E8+i", "DB F0+i",
    "DE C0+i", "DE C8+i", "DE E0+i", "DE E8+i", "DE F0+i", "DE F8+i",
    "DF E8+i", "DF F0+i",
})


class RemoveImplicitST0Operand:
    """Drop ST(0) from the x87 forms listed in ST0_IMPLICIT_ENCODINGS."""

    name = "RemoveImplicitST0Operand"

    def apply(self, document: InstructionSetDocument) -> TransformResult:
        result = TransformResult(transform=self.name)
        for record in document:
            if record.binary_encoding not in ST0_IMPLICIT_ENCODINGS:
                continue
            if record.remove_operands(IMPLICIT_ST0_OPERAND):
                result.records_modified += 1
        return result

    def describe(self) -> str:
        return "ST(0) removed from x87 register-register forms where it is implicit."


class RemoveImplicitXmm0Operand:
    """Drop the <XMM0> operand of the SSE4.1 blend instructions and the like."""

    name = "RemoveImplicitXmm0Operand"

    def apply(self, document: InstructionSetDocument) -> TransformResult:
        result = TransformResult(transform=self.name)
        for record in document:
            if record.remove_operands(IMPLICIT_XMM0_OPERAND):
                result.records_modified += 1
        return result

    def describe(self) -> str:
        return "<XMM0> removed from every record."
