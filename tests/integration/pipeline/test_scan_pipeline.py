from __future__ import annotations

"""
Integration tests for the full scan pipeline.

Runs run_pipeline against real directory trees and archives:
expansion, scanning, aggregation and the all-or-nothing error contract.
"""

from pathlib import Path
from typing import Any, Dict

from stringfinder.core.pipeline.components.writer import render_markdown_report
from stringfinder.core.pipeline.engine import run_pipeline


def _config(root: Path, markers: Path, **extra: Any) -> Dict[str, Any]:
    cfg: Dict[str, Any] = {"input_path": str(root), "marker_file": str(markers)}
    cfg.update(extra)
    return cfg


def test_reference_scenario(scenario_tree: Path, marker_file) -> None:
    markers = marker_file("secretkey\nmissingterm\n")

    result = run_pipeline(_config(scenario_tree, markers))

    assert result.ok, result.error
    assert result.expanded is True
    assert (scenario_tree / "data" / "b.txt").is_file()
    assert [(m.display_form, m.paths) for m in result.found] == [
        ("secretkey", [str(scenario_tree / "a.txt")]),
    ]
    assert result.not_found == ["missingterm"]

    report = render_markdown_report(result.found, result.not_found)
    assert f"### secretkey\n\n- {scenario_tree / 'a.txt'}\n" in report
    assert report.endswith("## Strings not found\n\n- missingterm\n")


def test_matches_inside_expanded_archives(tmp_path: Path, make_zip, zip_payload, marker_file) -> None:
    root = tmp_path / "root"
    make_zip(root / "outer.zip", {
        "top.txt": "Level one",
        "inner.zip": zip_payload({"deep.txt": "TOKEN at level two"}),
    })
    markers = marker_file("token\nlevel\n")

    result = run_pipeline(_config(root, markers))

    assert result.ok, result.error
    found = {m.display_form: m.paths for m in result.found}
    deep = str(root / "outer" / "inner" / "deep.txt")
    assert found["token"] == [deep]
    assert sorted(found["level"]) == sorted([str(root / "outer" / "top.txt"), deep])
    # Archive files themselves are never reported
    assert not any(p.endswith(".zip") for paths in found.values() for p in paths)


def test_report_order_follows_marker_file(tmp_path: Path, marker_file) -> None:
    root = tmp_path / "root"
    root.mkdir()
    (root / "1.txt").write_text("alpha", encoding="utf-8")
    (root / "2.txt").write_text("beta", encoding="utf-8")
    markers = marker_file("Beta\n# comment\n\nalpha\n")

    result = run_pipeline(_config(root, markers))

    assert [m.display_form for m in result.found] == ["Beta", "alpha"]
    assert result.summary["markers"] == 2


def test_second_run_is_idempotent(scenario_tree: Path, marker_file, tree_snapshot) -> None:
    markers = marker_file("secretkey\n")

    first = run_pipeline(_config(scenario_tree, markers))
    snapshot = tree_snapshot(scenario_tree)
    second = run_pipeline(_config(scenario_tree, markers))

    assert first.ok and second.ok
    assert second.expanded is False
    assert tree_snapshot(scenario_tree) == snapshot
    assert second.found == first.found


def test_skip_expansion_scans_tree_as_is(scenario_tree: Path, marker_file, tree_snapshot) -> None:
    markers = marker_file("nothing interesting\nsecretkey\n")
    before = tree_snapshot(scenario_tree)

    result = run_pipeline(_config(scenario_tree, markers, skip_expansion=True))

    assert result.ok
    assert result.skip_expansion is True
    assert tree_snapshot(scenario_tree) == before
    assert result.not_found == ["nothing interesting"]
    assert result.summary["archives_skipped"] == 1


def test_missing_marker_file_aborts_before_disk_work(scenario_tree: Path, tmp_path: Path) -> None:
    result = run_pipeline(_config(scenario_tree, tmp_path / "absent.txt"))

    assert not result.ok
    assert "absent.txt" in result.error
    assert result.found == [] and result.not_found == []
    assert not (scenario_tree / "data").exists()


def test_input_not_directory(tmp_path: Path, marker_file) -> None:
    markers = marker_file("x\n")
    a_file = tmp_path / "file.txt"
    a_file.write_text("x", encoding="utf-8")

    result = run_pipeline(_config(a_file, markers))

    assert not result.ok
    assert result.summary["failed_path"] == str(a_file)


def test_missing_required_parameters() -> None:
    result = run_pipeline({"input_path": ""})

    assert not result.ok
    assert "input_path" in result.error


def test_traversal_entry_aborts_run(tmp_path: Path, make_zip, marker_file) -> None:
    root = tmp_path / "root"
    make_zip(root / "evil.zip", {"../escaped.txt": "needle"})
    markers = marker_file("needle\n")

    result = run_pipeline(_config(root, markers))

    assert not result.ok
    assert "outside of the target dir" in result.error
    assert not (root / "escaped.txt").exists()
    assert result.found == []


def test_corrupt_archive_aborts_run(tmp_path: Path, marker_file) -> None:
    root = tmp_path / "root"
    root.mkdir()
    (root / "broken.zip").write_bytes(b"this is not a zip file")
    markers = marker_file("x\n")

    result = run_pipeline(_config(root, markers))

    assert not result.ok
    assert result.summary["failed_path"] == str(root / "broken.zip")


def test_undecodable_file_aborts_run(tmp_path: Path, marker_file) -> None:
    root = tmp_path / "root"
    root.mkdir()
    (root / "blob.bin").write_bytes(b"\xff\xfe\x00\x81")
    markers = marker_file("x\n")

    result = run_pipeline(_config(root, markers, skip_expansion=True))

    assert not result.ok
    assert result.summary["failed_path"] == str(root / "blob.bin")


def test_unwritable_archive_entry_aborts_run(tmp_path: Path, make_zip, marker_file) -> None:
    root = tmp_path / "root"
    make_zip(root / "d.zip", {"a": "file", "a/b.txt": "x"})
    markers = marker_file("x\n")

    result = run_pipeline(_config(root, markers))

    assert not result.ok
    assert "a/b.txt" in result.error
    assert result.summary["failed_path"] == str(root / "d.zip")
