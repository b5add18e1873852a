"""Tests for the filesystem manifest build."""

from __future__ import annotations

import json
from pathlib import Path
from typing import List

import pytest
from loguru import logger

from src.pipeline.filesystem_pipeline import FilesystemPipeline
from src.sources.asset_scanner import AssetScanner
from src.utils.config import Config


@pytest.fixture
def site(tmp_path: Path) -> Path:
    """Site root with public/projects and public/icons."""
    (tmp_path / "public" / "projects").mkdir(parents=True)
    icons = tmp_path / "public" / "icons"
    icons.mkdir()
    (icons / "react.svg").write_text("<svg/>", encoding="utf-8")
    (icons / "mongodb.png").write_bytes(b"")
    return tmp_path


@pytest.fixture
def config(site: Path) -> Config:
    cfg = Config()
    cfg.paths.base_dir = site
    return cfg


@pytest.fixture
def log_messages() -> List[str]:
    messages: List[str] = []
    handler_id = logger.add(lambda msg: messages.append(msg.record["message"]), level="DEBUG")
    yield messages
    logger.remove(handler_id)


def _add_project(site: Path, folder: str, sidecar: str | None, *files: str) -> Path:
    project_dir = site / "public" / "projects" / folder
    project_dir.mkdir()
    if sidecar is not None:
        (project_dir / "project.yml").write_text(sidecar, encoding="utf-8")
    for name in files:
        (project_dir / name).write_bytes(b"")
    return project_dir


def _read_manifest(site: Path) -> list:
    return json.loads((site / "public" / "projects.json").read_text(encoding="utf-8"))


def test_build_assembles_full_record(site: Path, config: Config) -> None:
    _add_project(
        site,
        "shop",
        "title: Shop\n"
        "subtitle: Storefront\n"
        "description: Online store\n"
        "start_date: 2024-01-15\n"
        "end_date: 2024-06-30\n"
        "tech: React, Node.js,  MongoDB\n"
        "image_layout: carousel\n"
        "github_url: https://github.com/example/shop\n",
        "cover.png",
        "demo.mp4",
        "demo-thumb.png",
    )

    report = FilesystemPipeline(config).build()

    assert not report.aborted
    manifest = _read_manifest(site)
    assert len(manifest) == 1
    project = manifest[0]
    assert project["id"] == 1
    assert project["title"] == "Shop"
    assert project["subtitle"] == "Storefront"
    assert project["start_date"] == "2024-01-15"
    assert project["end_date"] == "2024-06-30"
    assert project["tech"] == [
        {"name": "React", "icon": "/portfolio/icons/react.svg"},
        {"name": "Node.js", "icon": None},
        {"name": "MongoDB", "icon": "/portfolio/icons/mongodb.png"},
    ]
    assert project["videos"] == [
        {
            "path": "/portfolio/projects/shop/demo.mp4",
            "thumbnail": "/portfolio/projects/shop/demo-thumb.png",
        }
    ]
    assert "/portfolio/projects/shop/cover.png" in [i["path"] for i in project["images"]]
    assert project["image_layout"] == "carousel"
    assert project["github_url"] == "https://github.com/example/shop"
    assert project["live_url"] is None


def test_optional_fields_fall_back_to_defaults(site: Path, config: Config) -> None:
    _add_project(site, "bare", "title: Bare\nsubtitle: ''\n")

    FilesystemPipeline(config).build()

    project = _read_manifest(site)[0]
    assert project["subtitle"] is None
    assert project["description"] == ""
    assert project["start_date"] == ""
    assert project["end_date"] == ""
    assert project["tech"] == []
    assert project["images"] == []
    assert project["videos"] == []
    assert project["image_layout"] == "grid"


def test_missing_sidecar_skips_only_that_project(
    site: Path, config: Config, log_messages: List[str]
) -> None:
    _add_project(site, "alpha", "title: Alpha\n")
    _add_project(site, "beta", None, "cover.png")
    _add_project(site, "gamma", "title: Gamma\n")

    report = FilesystemPipeline(config).build()

    manifest = _read_manifest(site)
    assert len(manifest) == 2
    assert {p["title"] for p in manifest} == {"Alpha", "Gamma"}
    assert [s.source for s in report.skipped] == ["beta"]
    assert any("beta" in m and "project.yml not found" in m for m in log_messages)


def test_ids_are_dense_in_enumeration_order(site: Path, config: Config) -> None:
    _add_project(site, "a-old", "title: Old\nend_date: 2020-01-01\n")
    _add_project(site, "b-broken", "title: [oops\n")
    _add_project(site, "c-new", "title: New\nend_date: 2024-01-01\n")
    _add_project(site, "d-undated", "title: Undated\n")

    FilesystemPipeline(config).build()

    manifest = _read_manifest(site)
    assert [(p["id"], p["title"]) for p in manifest] == [
        (2, "New"),
        (1, "Old"),
        (3, "Undated"),
    ]


def test_files_in_projects_root_are_ignored(site: Path, config: Config) -> None:
    (site / "public" / "projects" / "README.md").write_text("notes", encoding="utf-8")
    _add_project(site, "only", "title: Only\n")

    report = FilesystemPipeline(config).build()

    assert [r.title for r in report.records] == ["Only"]


def test_missing_projects_root_writes_nothing(
    tmp_path: Path, log_messages: List[str]
) -> None:
    (tmp_path / "public").mkdir()
    cfg = Config()
    cfg.paths.base_dir = tmp_path

    report = FilesystemPipeline(cfg).build()

    assert report.aborted
    assert not report.written
    assert not (tmp_path / "public" / "projects.json").exists()
    assert any("Projects directory not found" in m for m in log_messages)


def test_rebuild_is_byte_identical(site: Path, config: Config) -> None:
    _add_project(site, "one", "title: One\nend_date: 2023-01-01\ntech: React\n", "a.png")
    _add_project(site, "two", "title: Two\nend_date: 2023-01-01\n", "b.mp4")
    output = site / "public" / "projects.json"

    FilesystemPipeline(config).build()
    first = output.read_bytes()
    FilesystemPipeline(config).build()

    assert output.read_bytes() == first


def test_build_overwrites_previous_manifest(site: Path, config: Config) -> None:
    output = site / "public" / "projects.json"
    output.write_text(json.dumps([{"id": 99, "title": "Stale"}]), encoding="utf-8")
    _add_project(site, "fresh", "title: Fresh\n")

    FilesystemPipeline(config).build()

    assert [p["title"] for p in _read_manifest(site)] == ["Fresh"]


def test_summary_logs_media_counts(
    site: Path, config: Config, log_messages: List[str]
) -> None:
    _add_project(site, "media", "title: Media\n", "a.png", "b.jpg", "c.webm")
    _add_project(site, "plain", "title: Plain\n")

    FilesystemPipeline(config).build()

    assert any("Media (2 images, 1 videos)" in m for m in log_messages)
    assert any("Plain (no media)" in m for m in log_messages)


def test_non_string_sidecar_values_keep_the_project(
    site: Path, config: Config
) -> None:
    _add_project(site, "p", "title: Yes-man\nsubtitle: yes\nlive_url: no\n")
    _add_project(site, "q", "title: Listy\ndescription: [a, b]\n")

    report = FilesystemPipeline(config).build()

    assert len(report.records) == 2
    assert report.skipped == []
    manifest = {p["title"]: p for p in _read_manifest(site)}
    assert manifest["Yes-man"]["subtitle"] is True
    assert manifest["Yes-man"]["live_url"] is None
    assert manifest["Listy"]["description"] == ["a", "b"]


def test_asset_scan_failure_keeps_record_without_media(
    site: Path, config: Config, monkeypatch: pytest.MonkeyPatch, log_messages: List[str]
) -> None:
    _add_project(site, "locked", "title: Locked\n", "cover.png", "clip.mp4")

    def _denied(self, video_path):
        raise PermissionError(f"Permission denied: {video_path}")

    monkeypatch.setattr(AssetScanner, "find_thumbnail", _denied)

    report = FilesystemPipeline(config).build()

    assert [r.title for r in report.records] == ["Locked"]
    project = _read_manifest(site)[0]
    assert project["images"] == []
    assert project["videos"] == []
    assert any("Error scanning media" in m for m in log_messages)
