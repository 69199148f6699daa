from typing import Dict, Optional

from discharge_ingest.commons.types import ParserCfg
from discharge_ingest.parsers.discharges import parse
from discharge_ingest.parsers.models import ParsedRecord, ParseResult


class DischargeNormalizer:
    def __init__(self, cfg: Optional[ParserCfg] = None):
        self.cfg = cfg or ParserCfg()

    def normalize(self, text: str) -> ParseResult:
        return parse(text, self.cfg)

    def record_to_payload(self, rec: ParsedRecord) -> Dict:
        return {
            "patientName": rec.patient_name,
            "recordId": rec.record_id,
            "phoneNumber": rec.phone_number,
            "phoneConfidence": rec.phone_confidence,
            "attendingProvider": rec.attending_provider,
            "eventDate": rec.event_date,
            "primaryCareProvider": rec.primary_care_provider,
            "payer": rec.payer,
            "outcome": rec.outcome,
            "confidence": rec.confidence,
            "sourceText": rec.source_text,
        }

    def to_payload(self, norm: ParseResult) -> Dict:
        """Map a parse result into the payload persisted by the review app.
        Absent phone/PCP stay None so they serialize as null, never "".
        """
        return {
            "facilityName": norm.facility_name,
            "reportDate": norm.report_date,
            "recordCount": len(norm.records),
            "records": [self.record_to_payload(r) for r in norm.records],
            "sourceText": norm.source_text,
        }
