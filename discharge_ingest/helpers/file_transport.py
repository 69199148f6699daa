import asyncio
import time
from pathlib import Path
from typing import Sequence

from watchdog.events import PatternMatchingEventHandler
from watchdog.observers import Observer


def read_when_ready(path: Path, attempts: int = 10, delay: float = 0.05) -> bytes:
    """Read a file that may still be being written by the exporter."""
    for _ in range(attempts - 1):
        try:
            return path.read_bytes()
        except FileNotFoundError:
            raise
        except OSError:
            time.sleep(delay)
    return path.read_bytes()


class FileWatcher:
    """Watchdog consumer: hands every new document in the inbox to the event loop."""

    def __init__(
        self,
        inbox: str,
        patterns: Sequence[str],
        on_document_async,
        loop: asyncio.AbstractEventLoop,
    ):
        self.inbox = Path(inbox)
        self.inbox.mkdir(parents=True, exist_ok=True)
        self.loop = loop
        self.on_document_async = on_document_async
        self.handler = PatternMatchingEventHandler(
            patterns=list(patterns), ignore_directories=True
        )

        inbox_dir = self.inbox.resolve()

        def _submit(path: Path):
            # Renamed out of the inbox, or already moved to archive/error
            if path.parent.resolve() != inbox_dir or not path.exists():
                return
            try:
                data = read_when_ready(path)
            except FileNotFoundError:
                return
            # Opened but nothing written yet; the close after the write resubmits it
            if not data:
                return
            asyncio.run_coroutine_threadsafe(self.on_document_async(data, str(path)), self.loop)

        # Only complete files: closed after writing, or renamed into the inbox.
        # A created event fires before the writer has written anything.
        self.handler.on_closed = lambda e: _submit(Path(e.src_path))
        self.handler.on_moved = lambda e: _submit(Path(e.dest_path))

        self.observer = Observer()

    def start(self):
        self.observer.schedule(self.handler, str(self.inbox), recursive=False)
        self.observer.start()

    def stop(self):
        self.observer.stop()
        self.observer.join()
