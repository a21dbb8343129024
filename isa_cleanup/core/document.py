"""Document model for the x86 instruction-set database.

Instruction records are mutable: every cleanup transform rewrites
operands in place. Fields the transforms never touch
(timing, feature names, descriptions, ...) are kept as pydantic extras so
they survive a load -> transform -> save round trip unchanged.
"""

from __future__ import annotations

import enum
import json
from typing import Iterator

from pydantic import BaseModel, Field


class OperandUsage(str, enum.Enum):
    """How the instruction accesses an operand."""

    READ = "READ"
    WRITE = "WRITE"
    READ_WRITE = "READ_WRITE"


class OperandEncoding(str, enum.Enum):
    """Whether the operand is present in the opcode/ModRM bytes."""

    EXPLICIT = "EXPLICIT"
    IMPLICIT = "IMPLICIT"


class OperandDescriptor(BaseModel):
    """One operand as written in vendor assembly syntax."""

    model_config = {"extra": "allow"}

    name: str
    usage: OperandUsage | None = None
    encoding: OperandEncoding | None = None


class InstructionRecord(BaseModel):
    """One instruction-mnemonic entry of the database."""

    model_config = {"extra": "allow"}

    mnemonic: str
    binary_encoding: str = ""
    vendor_syntax: list[OperandDescriptor] = Field(default_factory=list)

    def operand_names(self) -> list[str]:
        return [op.name for op in self.vendor_syntax]

    def set_operands(self, operands: list[OperandDescriptor]) -> None:
        """Replace the whole operand list."""
        self.vendor_syntax = list(operands)

    def add_operand(
        self,
        name: str,
        usage: OperandUsage | None = None,
        encoding: OperandEncoding | None = None,
    ) -> OperandDescriptor:
        """Append an operand and return it."""
        operand = OperandDescriptor(name=name, usage=usage, encoding=encoding)
        self.vendor_syntax.append(operand)
        return operand

    def remove_operands(self, name: str) -> int:
        """Remove every operand called ``name``; keep the order of the rest.

        Returns the number of operands removed.
        """
        kept = [op for op in self.vendor_syntax if op.name != name]
        removed = len(self.vendor_syntax) - len(kept)
        if removed:
            self.vendor_syntax = kept
        return removed

    def copy_record(self, **updates: object) -> "InstructionRecord":
        """Independent deep copy, optionally with fields overridden."""
        copy = self.model_copy(deep=True)
        for key, value in updates.items():
            setattr(copy, key, value)
        return copy

    def to_dict(self) -> dict:
        return self.model_dump(mode="json", exclude_none=True)


class InstructionSetDocument:
    """Ordered collection of instruction records.

    Records keep their insertion order. Transforms may append new records
    but never reorder or delete existing ones.
    """

    def __init__(self, instructions: list[InstructionRecord] | None = None) -> None:
        self._instructions: list[InstructionRecord] = list(instructions or [])

    def append(self, record: InstructionRecord) -> InstructionRecord:
        self._instructions.append(record)
        return record

    def extend(self, records: list[InstructionRecord]) -> list[InstructionRecord]:
        for record in records:
            self.append(record)
        return records

    def filter(self, mnemonic: str | None = None) -> list[InstructionRecord]:
        if mnemonic is None:
            return list(self._instructions)
        return [r for r in self._instructions if r.mnemonic == mnemonic]

    def clone(self) -> "InstructionSetDocument":
        """Deep copy; records of the clone are independently owned."""
        return InstructionSetDocument(
            [r.model_copy(deep=True) for r in self._instructions]
        )

    def to_dict(self) -> dict:
        return {"instructions": [r.to_dict() for r in self._instructions]}

    def to_json(self) -> str:
        """Serialize to a JSON string with stable key order."""
        return json.dumps(self.to_dict(), indent=2, sort_keys=True)

    @classmethod
    def from_dict(cls, data: dict) -> "InstructionSetDocument":
        if not isinstance(data, dict):
            raise ValueError("Instruction-set document must be a JSON object")
        records = data.get("instructions", [])
        if not isinstance(records, list):
            raise ValueError("'instructions' must be a JSON array")
        for i, rd in enumerate(records):
            if not isinstance(rd, dict):
                raise ValueError(f"Instruction record #{i} must be a JSON object")
        return cls([InstructionRecord(**rd) for rd in records])

    @classmethod
    def from_json(cls, json_str: str) -> "InstructionSetDocument":
        return cls.from_dict(json.loads(json_str))

    def __iter__(self) -> Iterator[InstructionRecord]:
        return iter(self._instructions)

    def __len__(self) -> int:
        return len(self._instructions)

    def __getitem__(self, index: int) -> InstructionRecord:
        return self._instructions[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, InstructionSetDocument):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    __hash__ = None  # type: ignore[assignment]
