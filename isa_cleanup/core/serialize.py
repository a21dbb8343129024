"""JSON import/export helpers."""

from __future__ import annotations

import json
from pathlib import Path

from isa_cleanup.core.document import InstructionSetDocument


def export_document(document: InstructionSetDocument, path: str | Path) -> None:
    """Write a document to a JSON file."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(document.to_json() + "\n")


def import_document(path: str | Path) -> InstructionSetDocument:
    """Read a document from a JSON file."""
    path = Path(path)
    return InstructionSetDocument.from_json(path.read_text())


def import_dict(path: str | Path) -> dict:
    """Read JSON file as dict."""
    path = Path(path)
    return json.loads(path.read_text())
