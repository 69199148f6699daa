# discharge_ingest/services/ingest_service.py
import asyncio
import json
import os
import re
import shutil
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Sequence

from pydantic import ValidationError

from discharge_ingest.commons.discharge_engine import DischargeEngine
from discharge_ingest.commons.logger import logger
from discharge_ingest.helpers.file_transport import FileWatcher, read_when_ready
from discharge_ingest.validation.validators import validate_payload_or_raise


def generate_archive_filename(source: str, origin: str = "file", extension: str = "json") -> str:
    """
    Timestamped archive name derived from the source document.
    Ex: 20250821-170605-123456_file_Sacred_Heart_Discharges.json
    """
    ts = datetime.now(timezone.utc).strftime("%Y%m%d-%H%M%S-%f")
    base_name = os.path.splitext(os.path.basename(source))[0] or "document"
    safe_base = re.sub(r"[^a-zA-Z0-9_\-]", "_", base_name)
    return f"{ts}_{origin}_{safe_base}.{extension}"


class IngestService:
    def __init__(self, engine: DischargeEngine, paths, strict_validation: bool = True):
        self.engine = engine
        self.paths = paths
        self.strict_validation = strict_validation
        Path(paths["archive"]).mkdir(parents=True, exist_ok=True)
        Path(paths["error"]).mkdir(parents=True, exist_ok=True)

    def _move_to_error(self, data: bytes, src: str) -> Path:
        err_name = Path(src).name if src else "document.err"
        errp = Path(self.paths["error"]) / err_name
        errp.write_bytes(data)
        if src and Path(src).exists():
            Path(src).unlink()
        return errp

    def _archive_source(self, src: str):
        if src and Path(src).exists():
            dst_dir = Path(self.paths["archive"]) / "source"
            dst_dir.mkdir(parents=True, exist_ok=True)
            shutil.move(src, dst_dir / Path(src).name)

    async def process_document(self, data: bytes, src: str = "") -> Optional[Path]:
        """Parse one document and write its payload JSON to the archive.

        Returns the JSON path, or None when the document was routed to error/.
        """
        try:
            result = self.engine.parse_document(data)
            payload = self.engine.to_payload(result)
            try:
                validate_payload_or_raise(payload, self.engine.outcomes)
            except ValidationError as ve:
                if self.strict_validation:
                    errp = self._move_to_error(data, src)
                    logger.error(f"Validation failed for {errp.name}: {ve}")
                    return None
                logger.warning(f"Validation failed for {src or 'document'}, archiving anyway: {ve}")

            filename = generate_archive_filename(src or "document")
            out_json = Path(self.paths["archive"]) / filename
            out_json.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")
            low = sum(1 for r in result.records if r.confidence < 1.0)
            logger.info(
                f"{len(result.records)} discharge record(s) archived to {out_json} "
                f"({low} need review)"
            )
            self._archive_source(src)
            return out_json

        except Exception as ex:
            # Unreadable/corrupt documents also go to error/
            errp = self._move_to_error(data, src)
            logger.exception(f"Error processing document: {ex}. Moved to {errp}")
            return None

    async def process_backlog(self, patterns: Sequence[str]):
        inbox = Path(self.paths["inbox"])
        files = sorted({f for pat in patterns for f in inbox.glob(pat)})
        if not files:
            return
        logger.info(f"Backlog detected: {len(files)} file(s) in {inbox}")
        for f in files:
            try:
                data = read_when_ready(f)
            except FileNotFoundError:
                logger.warning(f"{f} disappeared before it could be read")
                continue
            # One bad file must not stop the rest of the backlog
            try:
                await self.process_document(data, str(f))
            except Exception as ex:
                logger.exception(f"Unexpected failure with {f}: {ex}")

    async def run_file_mode(self, patterns: Sequence[str], stop_event: Optional[asyncio.Event] = None):
        loop = asyncio.get_running_loop()

        # 1) existing backlog
        await self.process_backlog(patterns)

        # 2) watcher for new documents
        watcher = FileWatcher(self.paths["inbox"], patterns, self.process_document, loop)
        watcher.start()
        logger.info(f"Watching {self.paths['inbox']} for discharge lists...")
        try:
            await (stop_event or asyncio.Event()).wait()
        finally:
            watcher.stop()
