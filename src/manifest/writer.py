"""Manifest sorting and serialization."""

from __future__ import annotations

import json
from pathlib import Path
from typing import List, Sequence

from loguru import logger
from pydantic import BaseModel


def sort_projects(records: Sequence[BaseModel]) -> List[BaseModel]:
    """Order records by ``end_date`` descending with undated records last.

    Dates are compared as strings. Python's sort is stable (also with
    ``reverse=True``), so equal end dates keep their assembly order.
    """
    dated = [r for r in records if getattr(r, "end_date", "")]
    undated = [r for r in records if not getattr(r, "end_date", "")]
    dated.sort(key=lambda r: str(r.end_date), reverse=True)
    return dated + undated


def render_manifest(records: Sequence[BaseModel]) -> str:
    """Serialize records as a two-space indented JSON array."""
    payload = [record.model_dump(mode="json", by_alias=True) for record in records]
    return json.dumps(payload, ensure_ascii=False, indent=2)


def write_manifest(
    records: Sequence[BaseModel],
    output_path: str | Path,
    *,
    create_parents: bool = False,
) -> Path:
    """Sort records and overwrite ``output_path`` with the rendered manifest.

    Args:
        records: Assembled project records in enumeration order
        output_path: Manifest file location
        create_parents: Create the parent directory when missing

    Returns:
        The path written
    """
    output_path = Path(output_path)
    if create_parents:
        output_path.parent.mkdir(parents=True, exist_ok=True)

    ordered = sort_projects(records)
    output_path.write_text(render_manifest(ordered), encoding="utf-8")
    logger.debug("Wrote {} records to {}", len(ordered), output_path)
    return output_path
