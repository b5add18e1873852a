"""Tests for manifest sorting and serialization."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from src.manifest.models import DatabaseProjectRecord, DatabaseTechItem, ProjectRecord
from src.manifest.writer import render_manifest, sort_projects, write_manifest


def _record(project_id: int, end_date: str = "", title: str | None = None) -> ProjectRecord:
    return ProjectRecord(id=project_id, title=title or f"Project {project_id}", end_date=end_date)


def test_sort_orders_by_end_date_descending() -> None:
    records = [
        _record(1, "2023-05-01"),
        _record(2, "2024-06-30"),
        _record(3, "2024-01-15"),
    ]

    ordered = sort_projects(records)

    assert [r.id for r in ordered] == [2, 3, 1]


def test_sort_puts_undated_records_last() -> None:
    records = [_record(1), _record(2, "2020-01-01"), _record(3), _record(4, "2021-01-01")]

    ordered = sort_projects(records)

    assert [r.id for r in ordered] == [4, 2, 1, 3]
    dated = [r for r in ordered if r.end_date]
    for earlier, later in zip(dated, dated[1:]):
        assert earlier.end_date >= later.end_date


def test_sort_keeps_assignment_order_for_ties() -> None:
    records = [_record(1, "2024-01-01"), _record(2, "2024-01-01"), _record(3, "2024-01-01")]

    assert [r.id for r in sort_projects(records)] == [1, 2, 3]


def test_sort_returns_new_list() -> None:
    records = [_record(1), _record(2, "2024-01-01")]

    ordered = sort_projects(records)

    assert [r.id for r in records] == [1, 2]
    assert ordered is not records


def test_render_uses_two_space_indent_and_null_defaults() -> None:
    text = render_manifest([_record(1, "2024-01-01", title="Café")])

    assert text.startswith("[\n  {\n    \"id\": 1,")
    assert "Café" in text
    payload = json.loads(text)
    assert payload[0]["subtitle"] is None
    assert payload[0]["image_layout"] == "grid"
    assert payload[0]["images"] == []


def test_render_uses_icon_type_alias() -> None:
    record = DatabaseProjectRecord(
        id=1,
        title="Export",
        tech=[DatabaseTechItem(name="Python", icon="/portfolio/icons/python.svg", icon_type="svg")],
    )

    payload = json.loads(render_manifest([record]))

    assert payload[0]["tech"] == [
        {"name": "Python", "icon": "/portfolio/icons/python.svg", "iconType": "svg"}
    ]


def test_write_manifest_overwrites_existing_file(tmp_path: Path) -> None:
    output = tmp_path / "projects.json"
    output.write_text("stale content that is longer than the manifest" * 100, encoding="utf-8")

    write_manifest([_record(1, "2024-01-01")], output)

    payload = json.loads(output.read_text(encoding="utf-8"))
    assert [p["id"] for p in payload] == [1]


def test_write_manifest_requires_parent_unless_asked(tmp_path: Path) -> None:
    output = tmp_path / "public" / "projects.json"

    with pytest.raises(FileNotFoundError):
        write_manifest([_record(1)], output)

    write_manifest([_record(1)], output, create_parents=True)
    assert output.exists()


def test_records_are_immutable() -> None:
    record = _record(1, "2024-01-01")

    with pytest.raises(ValidationError):
        record.title = "changed"
