"""PipelineRunner: applies transforms in order to one document.

Best-effort by default: a failing transform does not stop the run, later
transforms still see the partially normalized document. Every error is
kept; ``last_error`` is the most recent one.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from loguru import logger

from isa_cleanup.core.document import InstructionSetDocument
from isa_cleanup.core.status import TransformError, TransformResult
from isa_cleanup.transforms.base import Transform
from isa_cleanup.transforms.registry import RegisteredTransform


@dataclass
class PipelineResult:
    """Result of running a sequence of transforms over a document."""

    document: InstructionSetDocument
    results: list[TransformResult] = field(default_factory=list)
    stage_log: list[dict[str, Any]] = field(default_factory=list)
    stopped_early: bool = False

    @property
    def errors(self) -> list[TransformError]:
        return [e for r in self.results for e in r.errors]

    @property
    def ok(self) -> bool:
        return all(r.ok for r in self.results)

    @property
    def last_error(self) -> TransformError | None:
        errors = self.errors
        return errors[-1] if errors else None

    @property
    def failed_transforms(self) -> list[str]:
        return [r.transform for r in self.results if not r.ok]


class PipelineRunner:
    """Runs transforms sequentially against the same document."""

    def __init__(self, fail_fast: bool = False) -> None:
        self.fail_fast = fail_fast

    def run(
        self,
        document: InstructionSetDocument,
        transforms: list[Transform] | list[RegisteredTransform],
    ) -> PipelineResult:
        pipeline = PipelineResult(document=document)
        for item in transforms:
            transform = item.transform if isinstance(item, RegisteredTransform) else item
            name = item.name
            records_before = len(document)

            result = transform.apply(document)
            if not result.transform:
                result.transform = name
            pipeline.results.append(result)

            pipeline.stage_log.append({
                "stage": name,
                "records_before": records_before,
                "records_after": len(document),
                "records_modified": result.records_modified,
                "errors": [e.describe() for e in result.errors],
            })
            logger.debug(
                "{}: {} record(s) modified, {} error(s)",
                name, result.records_modified, len(result.errors),
            )

            if not result.ok and self.fail_fast:
                logger.warning("Stopping after failed transform {}", name)
                pipeline.stopped_early = True
                break

        if pipeline.ok:
            logger.info("Cleanup finished: {} transform(s), no errors", len(pipeline.results))
        else:
            logger.info(
                "Cleanup finished with {} error(s) in {}; last: {}",
                len(pipeline.errors),
                ", ".join(pipeline.failed_transforms),
                pipeline.last_error.describe(),
            )
        return pipeline
