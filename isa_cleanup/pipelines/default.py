"""Default cleanup pipeline: registry composition and the load -> run -> save driver."""

from __future__ import annotations

from pathlib import Path

from isa_cleanup.config import CleanupConfig
from isa_cleanup.core.document import InstructionSetDocument
from isa_cleanup.core.serialize import export_document, import_document
from isa_cleanup.pipelines.runner import PipelineResult, PipelineRunner
from isa_cleanup.transforms.implicit_operands import (
    RemoveImplicitST0Operand,
    RemoveImplicitXmm0Operand,
)
from isa_cleanup.transforms.registry import TransformRegistry
from isa_cleanup.transforms.rename_operands import RenameOperands
from isa_cleanup.transforms.reg_operands import FixRegOperands
from isa_cleanup.transforms.string_instructions import (
    FixOperandsOfCmpsAndMovs,
    FixOperandsOfInsAndOuts,
    FixOperandsOfLodsScasAndStos,
)
from isa_cleanup.transforms.vmovq import FixOperandsOfVMovq

OPERAND_CLEANUP_PRIORITY = 2000


def default_registry() -> TransformRegistry:
    """Fresh registry holding every operand cleanup transform."""
    registry = TransformRegistry()
    for transform in (
        FixOperandsOfCmpsAndMovs(),
        FixOperandsOfInsAndOuts(),
        FixOperandsOfLodsScasAndStos(),
        FixOperandsOfVMovq(),
        FixRegOperands(),
        RenameOperands(),
        RemoveImplicitST0Operand(),
        RemoveImplicitXmm0Operand(),
    ):
        registry.register(transform.name, OPERAND_CLEANUP_PRIORITY, transform)
    return registry


def cleanup_document(
    document: InstructionSetDocument,
    config: CleanupConfig | None = None,
    registry: TransformRegistry | None = None,
) -> PipelineResult:
    """Run the configured transforms over ``document`` in place."""
    config = config or CleanupConfig()
    registry = registry or default_registry()
    selected = registry.select(only=config.only, skip=config.skip)
    return PipelineRunner(fail_fast=config.fail_fast).run(document, selected)


def cleanup_file(
    input_path: str | Path,
    output_path: str | Path,
    config: CleanupConfig | None = None,
) -> PipelineResult:
    """Load a database, clean it up and write it back, even if a transform failed."""
    document = import_document(input_path)
    result = cleanup_document(document, config=config)
    export_document(result.document, output_path)
    return result
