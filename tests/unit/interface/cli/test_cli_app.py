from __future__ import annotations

"""
Unit tests for the CLI Application Controller.

Drives main() in-process and checks exit codes, stream separation and
configuration layering. Logging bootstrap is patched out so no handler
outlives the captured streams.
"""

import json
from pathlib import Path
from unittest.mock import patch

import pytest

from stringfinder.domain.config import save_config
from stringfinder.domain.constants import CONFIG_FILE_NAME
from stringfinder.interface.cli import app
from stringfinder.interface.cli.app import EXIT_FAILURE, EXIT_INTERRUPTED, EXIT_OK, EXIT_USAGE, main


@pytest.fixture(autouse=True)
def no_logging_bootstrap():
    with patch("stringfinder.interface.cli.app.configure_logging") as mock_conf:
        yield mock_conf


def test_markdown_report_to_stdout(scenario_tree: Path, marker_file, capsys) -> None:
    markers = marker_file("secretkey\nmissingterm\n")

    code = main(["-d", str(scenario_tree), "-s", str(markers), "--use-defaults"])

    out = capsys.readouterr().out
    assert code == EXIT_OK
    assert out.startswith("# Scan Results\n")
    assert f"- {scenario_tree / 'a.txt'}" in out
    assert out.endswith("- missingterm\n")


def test_report_to_file_and_json(scenario_tree: Path, marker_file, tmp_path: Path, capsys) -> None:
    markers = marker_file("secretkey\n")
    out_file = tmp_path / "out" / "report.json"

    code = main([
        "-d", str(scenario_tree), "-s", str(markers),
        "-o", str(out_file), "--json", "--use-defaults",
    ])

    assert code == EXIT_OK
    assert capsys.readouterr().out == ""
    payload = json.loads(out_file.read_text(encoding="utf-8"))
    assert payload["found"] == {"secretkey": [str(scenario_tree / "a.txt")]}
    assert payload["not_found"] == []


def test_missing_required_arguments(capsys) -> None:
    code = main(["--use-defaults"])

    err = capsys.readouterr().err
    assert code == EXIT_USAGE
    assert "usage:" in err
    assert "-s" in err


def test_pipeline_failure_writes_nothing(tmp_path: Path, marker_file, capsys) -> None:
    markers = marker_file("x\n")
    out_file = tmp_path / "report.md"

    code = main([
        "-d", str(tmp_path / "missing"), "-s", str(markers),
        "-o", str(out_file), "--use-defaults",
    ])

    captured = capsys.readouterr()
    assert code == EXIT_FAILURE
    assert "Scan aborted" in captured.err
    assert captured.out == ""
    assert not out_file.exists()


def test_unexpected_exception_maps_to_failure(scenario_tree: Path, marker_file, capsys) -> None:
    markers = marker_file("x\n")

    with patch.object(app, "run_pipeline", side_effect=PermissionError("denied")):
        code = main(["-d", str(scenario_tree), "-s", str(markers), "--use-defaults"])

    assert code == EXIT_FAILURE
    assert "denied" in capsys.readouterr().err


def test_keyboard_interrupt(scenario_tree: Path, marker_file) -> None:
    markers = marker_file("x\n")

    with patch.object(app, "run_pipeline", side_effect=KeyboardInterrupt):
        code = main(["-d", str(scenario_tree), "-s", str(markers), "--use-defaults"])

    assert code == EXIT_INTERRUPTED


def test_unwritable_output_path(scenario_tree: Path, marker_file, tmp_path: Path, capsys) -> None:
    markers = marker_file("secretkey\n")
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")

    code = main([
        "-d", str(scenario_tree), "-s", str(markers),
        "-o", str(blocker / "report.md"), "--use-defaults",
    ])

    assert code == EXIT_FAILURE
    assert "Could not write the report" in capsys.readouterr().err


def test_dump_config_applies_overrides(capsys) -> None:
    code = main(["--use-defaults", "--dump-config", "--ext", "JAR", "-nz"])

    dumped = json.loads(capsys.readouterr().out)
    assert code == EXIT_OK
    assert dumped["archive_extension"] == ".jar"
    assert dumped["skip_expansion"] is True


def test_persisted_config_is_the_base_layer(tmp_path: Path, capsys) -> None:
    config_file = tmp_path / "config.json"
    save_config({"encoding": "latin-1", "skip_expansion": True}, str(config_file))

    with patch("stringfinder.domain.config.get_config_file_path", return_value=str(config_file)):
        code = main(["--dump-config", "--encoding", "utf-8"])

    dumped = json.loads(capsys.readouterr().out)
    assert code == EXIT_OK
    assert dumped["skip_expansion"] is True
    assert dumped["encoding"] == "utf-8"


def test_debug_flag_sets_logging_level(no_logging_bootstrap, capsys) -> None:
    main(["--use-defaults", "--dump-config", "--debug"])

    logging_conf = no_logging_bootstrap.call_args.args[0]
    assert logging_conf.level == "DEBUG"


def test_unzip_flag_overrides_persisted_nounzip(tmp_path: Path, capsys) -> None:
    config_file = tmp_path / "config.json"
    save_config({"skip_expansion": True, "json_output": True}, str(config_file))

    with patch("stringfinder.domain.config.get_config_file_path", return_value=str(config_file)):
        code = main(["--dump-config", "--unzip", "--markdown"])

    dumped = json.loads(capsys.readouterr().out)
    assert code == EXIT_OK
    assert dumped["skip_expansion"] is False
    assert dumped["json_output"] is False


def test_save_config_persists_resolved_configuration(tmp_path: Path) -> None:
    with patch("stringfinder.domain.config.get_user_data_dir", return_value=str(tmp_path)):
        code = main(["--use-defaults", "--save-config", "-nz", "--ext", "jar"])

    saved = json.loads((tmp_path / CONFIG_FILE_NAME).read_text(encoding="utf-8"))
    assert code == EXIT_OK
    assert saved["skip_expansion"] is True
    assert saved["archive_extension"] == ".jar"


def test_save_config_failure(tmp_path: Path, capsys) -> None:
    with patch.object(app, "save_config", side_effect=PermissionError("read-only")):
        code = main(["--use-defaults", "--save-config"])

    assert code == EXIT_FAILURE
    assert "read-only" in capsys.readouterr().err
