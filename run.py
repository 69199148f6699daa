import asyncio
import json
import os
from pathlib import Path
from typing import Optional

import typer
import yaml

from discharge_ingest.commons.discharge_engine import DischargeEngine
from discharge_ingest.commons.logger import setup_logging
from discharge_ingest.commons.types import Settings
from discharge_ingest.services.ingest_service import IngestService

app = typer.Typer(add_completion=False, help="Discharge List Ingest")

DEFAULT_CONFIG = "discharge_ingest/configs/settings.yaml"


def load_cfg(path: str = DEFAULT_CONFIG) -> dict:
    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}
    # fail fast on a malformed settings file
    Settings.model_validate(raw)
    return raw


@app.command()
def parse(
    path: Path = typer.Argument(..., exists=True, dir_okay=False, help="PDF or text export"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="write JSON here"),
    config: str = typer.Option(DEFAULT_CONFIG, help="settings YAML"),
):
    """Parse one discharge list and print (or write) its JSON payload."""
    engine = DischargeEngine(load_cfg(config))
    result = engine.parse_document(path.read_bytes())
    text = json.dumps(engine.to_payload(result), ensure_ascii=False, indent=2)
    if output:
        output.write_text(text, encoding="utf-8")
        typer.echo(f"{len(result.records)} record(s) written to {output}")
    else:
        typer.echo(text)


@app.command()
def results(config: str = typer.Option(DEFAULT_CONFIG, help="settings YAML")):
    """Process the inbox backlog, then keep watching it for new discharge lists."""
    cfg = load_cfg(config)
    logger = setup_logging(cfg["paths"]["logs_root"], os.getenv("LOG_LEVEL", "INFO"))
    logger.info("Starting discharge list ingest")

    engine = DischargeEngine(cfg)
    svc = IngestService(engine, cfg["paths"], cfg.get("validation", {}).get("strict", True))
    patterns = cfg["transport"]["documents"]["file"]["filename_globs"]
    asyncio.run(svc.run_file_mode(patterns))


if __name__ == "__main__":
    app()
