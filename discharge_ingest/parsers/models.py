# ===============================
# File: discharge_ingest/parsers/models.py
# ===============================
from dataclasses import dataclass
from typing import Optional, Tuple

from .vocab import UNKNOWN_FACILITY


@dataclass(frozen=True)
class ParsedRecord:
    patient_name: str
    record_id: str
    phone_number: Optional[str]  # XXX-XXX-XXXX, None when the row has no phone
    attending_provider: str
    event_date: str  # MM-DD-YYYY
    primary_care_provider: Optional[str]
    payer: str
    outcome: str
    confidence: float
    source_text: str
    phone_confidence: float = 0.0


@dataclass(frozen=True)
class ParseResult:
    facility_name: str = UNKNOWN_FACILITY
    report_date: str = ""
    records: Tuple[ParsedRecord, ...] = ()
    source_text: str = ""
