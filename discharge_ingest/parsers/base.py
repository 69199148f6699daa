import re
from typing import List, Optional, Tuple

from .vocab import UNKNOWN_FACILITY

# Two uppercase letters + nine digits. No trailing boundary: in concatenated
# rows the phone digits follow the identifier directly.
RECORD_ID_RE = re.compile(r"[A-Z]{2}\d{9}", re.ASCII)

_DELIMITER_RE = re.compile(r"\s*\|\s*")
_WHITESPACE_RUN_RE = re.compile(r"\s{2,}")
_HEADER_RE = re.compile(r"^(.+?)\s+Discharges\s+for\s+(.+)$", re.IGNORECASE)

FACILITY_MARKER = "hospital"
REPORT_MARKER = "discharges"


def normalize_lines(text: Optional[str]) -> List[str]:
    """Split into lines, drop table delimiters and blank lines."""
    lines = []
    for line in (text or "").split("\n"):
        line = _DELIMITER_RE.sub(" ", line)
        line = _WHITESPACE_RUN_RE.sub(" ", line).strip()
        if line:
            lines.append(line)
    return lines


def extract_header(lines: List[str]) -> Tuple[str, str]:
    """Return (facility_name, report_date) from the title line, or the defaults."""
    header = next(
        (
            line
            for line in lines
            if FACILITY_MARKER in line.lower() and REPORT_MARKER in line.lower()
        ),
        "",
    )
    m = _HEADER_RE.match(header)
    if not m:
        return UNKNOWN_FACILITY, ""
    return m.group(1).strip(), m.group(2).strip()


def is_data_line(line: str) -> bool:
    return RECORD_ID_RE.search(line) is not None


def locate_records(lines: List[str]) -> List[str]:
    return [line for line in lines if is_data_line(line)]
