"""Operand fix-ups for the x86 string instructions.

The vendor manual writes string instructions with generic memory operands
(``MOVS m8, m8``). Assemblers expect the fixed index-register forms
(``MOVS BYTE PTR [RDI], BYTE PTR [RSI]``), plus the implicit accumulator
and DX operands that the manual leaves out.
"""

from __future__ import annotations

from isa_cleanup.core.document import (
    InstructionSetDocument,
    OperandDescriptor,
    OperandEncoding,
    OperandUsage,
)
from isa_cleanup.core.status import TransformResult
from isa_cleanup.transforms.base import report_error

# Memory operand -> pointer size keyword of the Intel assembly syntax.
OPERAND_TO_POINTER_SIZE: dict[str, str] = {
    "m8": "BYTE",
    "m16": "WORD",
    "m32": "DWORD",
    "m64": "QWORD",
}

# Memory operand -> accumulator register of the same width.
OPERAND_TO_REGISTER: dict[str, str] = {
    "m8": "AL",
    "m16": "AX",
    "m32": "EAX",
    "m64": "RAX",
}

RSI_INDEX = "[RSI]"
RDI_INDEX = "[RDI]"


def indexed_operand(pointer_size: str, index: str) -> str:
    return f"{pointer_size} PTR {index}"


RSI_INDEXED_OPERANDS: frozenset[str] = frozenset(
    indexed_operand(size, RSI_INDEX) for size in OPERAND_TO_POINTER_SIZE.values()
)
RDI_INDEXED_OPERANDS: frozenset[str] = frozenset(
    indexed_operand(size, RDI_INDEX) for size in OPERAND_TO_POINTER_SIZE.values()
)


def pointer_size_of(operand_name: str) -> str | None:
    """Pointer size keyword for a memory token or an already-indexed operand."""
    if operand_name in OPERAND_TO_POINTER_SIZE:
        return OPERAND_TO_POINTER_SIZE[operand_name]
    if operand_name in RSI_INDEXED_OPERANDS or operand_name in RDI_INDEXED_OPERANDS:
        return operand_name.split(" ", 1)[0]
    return None


class FixOperandsOfCmpsAndMovs:
    """Rewrite CMPS/MOVS memory operands to [RSI]/[RDI] indexed forms.

    MOVS takes the destination on the left (``MOVSB BYTE PTR [RDI], BYTE
    PTR [RSI]``) while CMPS is written source first (``CMPSB BYTE PTR
    [RSI], BYTE PTR [RDI]``), which is the only form LLVM accepts.
    """

    name = "FixOperandsOfCmpsAndMovs"
    MNEMONICS = frozenset({"CMPS", "MOVS"})

    def apply(self, document: InstructionSetDocument) -> TransformResult:
        result = TransformResult(transform=self.name)
        for index, record in enumerate(document):
            if record.mnemonic not in self.MNEMONICS:
                continue
            operands = record.vendor_syntax
            if len(operands) != 2:
                report_error(
                    result,
                    "Unexpected number of operands of a CMPS/MOVS instruction.",
                    index,
                    record,
                )
                continue
            pointer_size = pointer_size_of(operands[0].name)
            if pointer_size is None:
                report_error(
                    result,
                    f"Unexpected operand of a CMPS/MOVS instruction: {operands[0].name}",
                    index,
                    record,
                )
                continue

            destination = 0 if record.mnemonic == "MOVS" else 1
            indexings = (RDI_INDEX, RSI_INDEX) if destination == 0 else (RSI_INDEX, RDI_INDEX)
            operands[0].name = indexed_operand(pointer_size, indexings[0])
            operands[0].usage = (
                OperandUsage.WRITE if destination == 0 else OperandUsage.READ
            )
            operands[1].name = indexed_operand(pointer_size, indexings[1])
            operands[1].usage = OperandUsage.READ
            result.records_modified += 1
        return result

    def describe(self) -> str:
        return (
            "CMPS/MOVS: memory operands -> '<size> PTR [RDI]' (destination) and "
            "'<size> PTR [RSI]' (source); MOVS writes operand 0, CMPS only reads."
        )


class FixOperandsOfInsAndOuts:
    """Rewrite INS/OUTS to the explicit DX port and indexed memory operand."""

    name = "FixOperandsOfInsAndOuts"

    def apply(self, document: InstructionSetDocument) -> TransformResult:
        result = TransformResult(transform=self.name)
        for index, record in enumerate(document):
            is_ins = record.mnemonic == "INS"
            is_outs = record.mnemonic == "OUTS"
            if not is_ins and not is_outs:
                continue
            operands = record.vendor_syntax
            if len(operands) != 2:
                report_error(
                    result,
                    "Unexpected number of operands of an INS/OUTS instruction.",
                    index,
                    record,
                )
                continue
            pointer_size = pointer_size_of(operands[0].name) or pointer_size_of(
                operands[1].name
            )
            if pointer_size is None:
                report_error(
                    result,
                    "Unexpected operands of an INS/OUTS instruction: "
                    f"{operands[0].name}, {operands[1].name}",
                    index,
                    record,
                )
                continue

            if is_ins:
                operands[0].name = indexed_operand(pointer_size, RDI_INDEX)
                operands[0].usage = OperandUsage.WRITE
                operands[1].name = "DX"
                operands[1].usage = OperandUsage.READ
            else:
                operands[0].name = "DX"
                operands[0].usage = OperandUsage.READ
                operands[1].name = indexed_operand(pointer_size, RSI_INDEX)
                operands[1].usage = OperandUsage.READ
            result.records_modified += 1
        return result

    def describe(self) -> str:
        return "INS/OUTS: operands -> '<size> PTR [RDI]', DX (INS) or DX, '<size> PTR [RSI]' (OUTS)."


class FixOperandsOfLodsScasAndStos:
    """Expand LODS/SCAS/STOS to their implicit accumulator and memory operands.

    Only the operand-taking forms are matched: their mnemonic carries no
    size suffix (LODSB, STOSQ, ... take no operands and are left alone).
    """

    name = "FixOperandsOfLodsScasAndStos"
    MNEMONICS = frozenset({"LODS", "SCAS", "STOS"})

    def apply(self, document: InstructionSetDocument) -> TransformResult:
        result = TransformResult(transform=self.name)
        for index, record in enumerate(document):
            mnemonic = record.mnemonic
            if mnemonic not in self.MNEMONICS or len(record.vendor_syntax) != 1:
                continue
            operand_name = record.vendor_syntax[0].name
            register = OPERAND_TO_REGISTER.get(operand_name)
            pointer_size = OPERAND_TO_POINTER_SIZE.get(operand_name)
            if register is None or pointer_size is None:
                report_error(
                    result,
                    f"Unexpected operand of a LODS/SCAS/STOS instruction: {operand_name}",
                    index,
                    record,
                )
                continue

            names: list[str] = []
            if mnemonic == "STOS":
                names.append(indexed_operand(pointer_size, RDI_INDEX))
            names.append(register)
            if mnemonic == "LODS":
                names.append(indexed_operand(pointer_size, RSI_INDEX))
            elif mnemonic == "SCAS":
                names.append(indexed_operand(pointer_size, RDI_INDEX))
            record.set_operands([
                OperandDescriptor(
                    name=name,
                    usage=OperandUsage.READ,
                    encoding=OperandEncoding.IMPLICIT,
                )
                for name in names
            ])
            result.records_modified += 1
        return result

    def describe(self) -> str:
        return (
            "LODS/SCAS/STOS: single memory operand -> implicit accumulator plus "
            "'<size> PTR [RSI]' (LODS) or '<size> PTR [RDI]' (SCAS, STOS)."
        )
