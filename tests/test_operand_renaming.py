"""Tests for RenameOperands, FixOperandsOfVMovq and implicit-operand removal."""

from __future__ import annotations

import pytest

from isa_cleanup.core.document import (
    InstructionRecord,
    InstructionSetDocument,
    OperandDescriptor,
    OperandUsage,
)
from isa_cleanup.core.status import ErrorKind
from isa_cleanup.transforms.implicit_operands import (
    ST0_IMPLICIT_ENCODINGS,
    RemoveImplicitST0Operand,
    RemoveImplicitXmm0Operand,
)
from isa_cleanup.transforms.rename_operands import OPERAND_RENAMING, RenameOperands
from isa_cleanup.transforms.vmovq import VMOVQ_ENCODING, FixOperandsOfVMovq


class TestRenameOperands:
    def test_synonyms_renamed_in_place(self) -> None:
        doc = InstructionSetDocument([
            InstructionRecord(
                mnemonic="ADD",
                vendor_syntax=[
                    OperandDescriptor(name="r64/m64", usage=OperandUsage.READ_WRITE),
                    OperandDescriptor(name="imm8"),
                ],
            )
        ])
        assert RenameOperands().apply(doc).ok
        assert doc[0].operand_names() == ["r/m64", "imm8"]
        assert doc[0].vendor_syntax[0].usage == OperandUsage.READ_WRITE

    @pytest.mark.parametrize("old,new", sorted(OPERAND_RENAMING.items()))
    def test_table(self, old, new) -> None:
        doc = InstructionSetDocument([
            InstructionRecord(mnemonic="X", vendor_syntax=[OperandDescriptor(name=old)]),
        ])
        RenameOperands().apply(doc)
        assert doc[0].operand_names() == [new]

    def test_synonym_closure(self, mixed_document) -> None:
        RenameOperands().apply(mixed_document)
        names = {op.name for r in mixed_document for op in r.vendor_syntax}
        assert not names & set(OPERAND_RENAMING)

    def test_canonical_names_are_not_synonyms(self) -> None:
        assert not set(OPERAND_RENAMING.values()) & set(OPERAND_RENAMING)


class TestFixOperandsOfVMovq:
    def test_operand_renamed(self) -> None:
        doc = InstructionSetDocument([
            InstructionRecord(
                mnemonic="VMOVQ",
                binary_encoding=VMOVQ_ENCODING,
                vendor_syntax=[OperandDescriptor(name="xmm1"), OperandDescriptor(name="xmm2")],
            )
        ])
        result = FixOperandsOfVMovq().apply(doc)
        assert result.ok
        assert doc[0].operand_names() == ["xmm1", "xmm2/m64"]

    def test_matches_by_encoding_only(self) -> None:
        doc = InstructionSetDocument([
            InstructionRecord(
                mnemonic="VMOVQ",
                binary_encoding="VEX.128.66.0F.W1 7E /r",
                vendor_syntax=[OperandDescriptor(name="r64/m64"), OperandDescriptor(name="xmm1")],
            )
        ])
        FixOperandsOfVMovq().apply(doc)
        assert doc[0].operand_names() == ["r64/m64", "xmm1"]

    def test_corrupt_entry_stops_the_transform(self) -> None:
        doc = InstructionSetDocument([
            InstructionRecord(
                mnemonic="VMOVQ",
                binary_encoding=VMOVQ_ENCODING,
                vendor_syntax=[OperandDescriptor(name="xmm1")],
            ),
            InstructionRecord(
                mnemonic="VMOVQ",
                binary_encoding=VMOVQ_ENCODING,
                vendor_syntax=[OperandDescriptor(name="xmm1"), OperandDescriptor(name="xmm2")],
            ),
        ])
        result = FixOperandsOfVMovq().apply(doc)
        assert not result.ok
        assert result.last_error.kind == ErrorKind.CORRUPT_FIXED_FORM
        assert "VMOVQ" in result.last_error.message
        # Records after the corrupt one are not processed.
        assert doc[1].operand_names() == ["xmm1", "xmm2"]


class TestRemoveImplicitOperands:
    def test_st0_removed_for_listed_encoding(self, fadd_record) -> None:
        doc = InstructionSetDocument([fadd_record])
        assert RemoveImplicitST0Operand().apply(doc).ok
        assert doc[0].operand_names() == ["ST(i)"]

    def test_st0_kept_for_other_encodings(self) -> None:
        doc = InstructionSetDocument([
            InstructionRecord(
                mnemonic="FADD",
                binary_encoding="DC C0+i",
                vendor_syntax=[OperandDescriptor(name="ST(i)"), OperandDescriptor(name="ST(0)")],
            )
        ])
        RemoveImplicitST0Operand().apply(doc)
        assert doc[0].operand_names() == ["ST(i)", "ST(0)"]

    def test_st0_stripping_complete(self) -> None:
        doc = InstructionSetDocument([
            InstructionRecord(
                mnemonic="F",
                binary_encoding=encoding,
                vendor_syntax=[OperandDescriptor(name="ST(0)"), OperandDescriptor(name="ST(i)")],
            )
            for encoding in sorted(ST0_IMPLICIT_ENCODINGS)
        ])
        RemoveImplicitST0Operand().apply(doc)
        assert all(r.operand_names() == ["ST(i)"] for r in doc)

    def test_xmm0_removed_everywhere(self, blendvps_record, fadd_record) -> None:
        doc = InstructionSetDocument([blendvps_record, fadd_record])
        result = RemoveImplicitXmm0Operand().apply(doc)
        assert result.ok
        assert result.records_modified == 1
        assert doc[0].operand_names() == ["xmm1", "xmm2/m128"]
        assert doc[1].operand_names() == ["ST(0)", "ST(i)"]

    def test_idempotent(self, blendvps_record, fadd_record) -> None:
        doc = InstructionSetDocument([blendvps_record, fadd_record])
        for transform in (RemoveImplicitST0Operand(), RemoveImplicitXmm0Operand()):
            transform.apply(doc)
            once = doc.clone()
            transform.apply(doc)
            assert doc == once
