"""Shared fixtures for isa-cleanup tests."""

from __future__ import annotations

import pytest

from isa_cleanup.core.document import (
    InstructionRecord,
    InstructionSetDocument,
    OperandDescriptor,
    OperandEncoding,
    OperandUsage,
)


@pytest.fixture
def movs_record() -> InstructionRecord:
    """MOVS m8, m8 as written in the vendor manual."""
    return InstructionRecord(
        mnemonic="MOVS",
        binary_encoding="A4",
        vendor_syntax=[
            OperandDescriptor(name="m8", usage=OperandUsage.WRITE, encoding=OperandEncoding.IMPLICIT),
            OperandDescriptor(name="m8", usage=OperandUsage.READ, encoding=OperandEncoding.IMPLICIT),
        ],
        description="For legacy mode, Move byte from address DS:(E)SI to ES:(E)DI.",
    )


@pytest.fixture
def lar_record() -> InstructionRecord:
    """LAR reg, r32/m16 with the generic reg placeholder."""
    return InstructionRecord(
        mnemonic="LAR",
        binary_encoding="0F 02 /r",
        vendor_syntax=[
            OperandDescriptor(name="reg", usage=OperandUsage.WRITE),
            OperandDescriptor(name="r32/m16", usage=OperandUsage.READ),
        ],
    )


@pytest.fixture
def fadd_record() -> InstructionRecord:
    """FADD ST(0), ST(i) in a form where ST(0) is implied by the opcode."""
    return InstructionRecord(
        mnemonic="FADD",
        binary_encoding="D8 C0+i",
        vendor_syntax=[
            OperandDescriptor(name="ST(0)", usage=OperandUsage.READ_WRITE),
            OperandDescriptor(name="ST(i)", usage=OperandUsage.READ),
        ],
    )


@pytest.fixture
def blendvps_record() -> InstructionRecord:
    """BLENDVPS xmm1, xmm2/m128, <XMM0>."""
    return InstructionRecord(
        mnemonic="BLENDVPS",
        binary_encoding="66 0F 38 14 /r",
        vendor_syntax=[
            OperandDescriptor(name="xmm1", usage=OperandUsage.READ_WRITE),
            OperandDescriptor(name="xmm2/m128", usage=OperandUsage.READ),
            OperandDescriptor(name="<XMM0>", usage=OperandUsage.READ, encoding=OperandEncoding.IMPLICIT),
        ],
    )


@pytest.fixture
def mixed_document(
    movs_record: InstructionRecord,
    lar_record: InstructionRecord,
    fadd_record: InstructionRecord,
    blendvps_record: InstructionRecord,
) -> InstructionSetDocument:
    """A small database touching most of the transforms."""
    return InstructionSetDocument([
        InstructionRecord(
            mnemonic="ADD",
            binary_encoding="00 /r",
            vendor_syntax=[
                OperandDescriptor(name="r8/m8", usage=OperandUsage.READ_WRITE),
                OperandDescriptor(name="r8", usage=OperandUsage.READ),
            ],
            feature_name="",
        ),
        movs_record,
        InstructionRecord(
            mnemonic="CMPS",
            binary_encoding="A7",
            vendor_syntax=[OperandDescriptor(name="m32"), OperandDescriptor(name="m32")],
        ),
        InstructionRecord(
            mnemonic="INS",
            binary_encoding="6C",
            vendor_syntax=[OperandDescriptor(name="m8"), OperandDescriptor(name="DX")],
        ),
        InstructionRecord(
            mnemonic="STOS",
            binary_encoding="REX.W + AB",
            vendor_syntax=[OperandDescriptor(name="m64")],
        ),
        InstructionRecord(
            mnemonic="VMOVQ",
            binary_encoding="VEX.128.F3.0F.WIG 7E /r",
            vendor_syntax=[OperandDescriptor(name="xmm1"), OperandDescriptor(name="xmm2")],
            feature_name="AVX",
        ),
        lar_record,
        InstructionRecord(
            mnemonic="PEXTRB",
            binary_encoding="66 0F 3A 14 /r ib",
            vendor_syntax=[
                OperandDescriptor(name="reg"),
                OperandDescriptor(name="xmm2"),
                OperandDescriptor(name="imm8"),
            ],
        ),
        fadd_record,
        InstructionRecord(
            mnemonic="FLD",
            binary_encoding="D9 C0+i",
            vendor_syntax=[OperandDescriptor(name="ST(i)")],
        ),
        blendvps_record,
    ])


@pytest.fixture
def empty_document() -> InstructionSetDocument:
    return InstructionSetDocument()
