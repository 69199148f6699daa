from typing import Optional

from discharge_ingest.commons.types import ParserCfg

from .base import extract_header, locate_records, normalize_lines
from .discharge_row import parse_discharge_row
from .models import ParseResult


def parse(text: Optional[str], cfg: Optional[ParserCfg] = None) -> ParseResult:
    """Parse a discharge-list export into header fields and one record per data row.

    Never raises: lines without a record identifier are skipped, and rows
    with missing fields come back with placeholders and lower confidence.
    """
    lines = normalize_lines(text)
    facility_name, report_date = extract_header(lines)
    records = tuple(parse_discharge_row(line, cfg) for line in locate_records(lines))
    return ParseResult(
        facility_name=facility_name,
        report_date=report_date,
        records=records,
        source_text=text or "",
    )
