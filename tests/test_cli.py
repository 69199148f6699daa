# flake8: noqa

import json
from pathlib import Path

from typer.testing import CliRunner

from run import app, load_cfg

CONFIG = str(Path(__file__).resolve().parents[1] / "discharge_ingest" / "configs" / "settings.yaml")

REPORT = """General Hospital Discharges for Jan 1st, 2024
Doe, JohnEP12345678901-01-2024Home
Roe, JaneEP98765432101-01-2024SNF
"""

runner = CliRunner()


def test_bundled_settings_load():
    cfg = load_cfg(CONFIG)
    assert cfg["parser"]["penalties"]["date_missing"] == 0.2
    assert "*.pdf" in cfg["transport"]["documents"]["file"]["filename_globs"]


def test_parse_writes_payload(tmp_path):
    src = tmp_path / "export.txt"
    src.write_text(REPORT, encoding="utf-8")
    out = tmp_path / "out.json"

    result = runner.invoke(app, ["parse", str(src), "--output", str(out), "--config", CONFIG])

    assert result.exit_code == 0, result.output
    assert "2 record(s) written" in result.output
    payload = json.loads(out.read_text(encoding="utf-8"))
    assert payload["facilityName"] == "General Hospital"
    assert [r["outcome"] for r in payload["records"]] == ["Home", "SNF"]


def test_parse_missing_file_fails(tmp_path):
    result = runner.invoke(app, ["parse", str(tmp_path / "nope.pdf"), "--config", CONFIG])
    assert result.exit_code != 0


def test_relative_config_resolves_from_working_dir(tmp_path, monkeypatch):
    (tmp_path / "settings.yaml").write_text(Path(CONFIG).read_text(encoding="utf-8"), encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    # a leftover bundle dir must not redirect the lookup
    monkeypatch.setattr("sys._MEIPASS", str(tmp_path / "bundle"), raising=False)

    cfg = load_cfg("settings.yaml")
    assert cfg["validation"]["strict"] is True
