"""Fixed-form operand override for the VEX-encoded VMOVQ load.

The manual lists ``VMOVQ xmm1, xmm2`` for this encoding although the
ModRM operand may also be a 64-bit memory location.
"""

from __future__ import annotations

from isa_cleanup.core.document import InstructionSetDocument
from isa_cleanup.core.status import ErrorKind, TransformResult
from isa_cleanup.transforms.base import report_error

VMOVQ_ENCODING = "VEX.128.F3.0F.WIG 7E /r"
REGISTER_OR_MEMORY_OPERAND = "xmm2/m64"


class FixOperandsOfVMovq:
    """Rename operand 1 of the exact VMOVQ encoding to ``xmm2/m64``.

    A matching record with the wrong operand count is a corrupt hand-curated
    entry: the transform stops and returns the error immediately.
    """

    name = "FixOperandsOfVMovq"

    def apply(self, document: InstructionSetDocument) -> TransformResult:
        result = TransformResult(transform=self.name)
        for index, record in enumerate(document):
            if record.binary_encoding != VMOVQ_ENCODING:
                continue
            if len(record.vendor_syntax) != 2:
                report_error(
                    result,
                    "Unexpected number of operands of a VMOVQ instruction: "
                    f"{record.to_dict()}",
                    index,
                    record,
                    kind=ErrorKind.CORRUPT_FIXED_FORM,
                )
                return result
            if record.vendor_syntax[1].name != REGISTER_OR_MEMORY_OPERAND:
                record.vendor_syntax[1].name = REGISTER_OR_MEMORY_OPERAND
                result.records_modified += 1
        return result

    def describe(self) -> str:
        return f"'{VMOVQ_ENCODING}': operand 1 -> {REGISTER_OR_MEMORY_OPERAND}."
