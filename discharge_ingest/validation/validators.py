# discharge_ingest/validation/validators.py
import re
from typing import Dict, List, Optional, Sequence

from pydantic import BaseModel, ValidationInfo, field_validator

from discharge_ingest.parsers.vocab import OUTCOMES, UNKNOWN

_RECORD_ID_RE = re.compile(r"[A-Z]{2}\d{9}", re.ASCII)
_PHONE_RE = re.compile(r"\d{3}-\d{3}-\d{4}", re.ASCII)
_DATE_RE = re.compile(r"\d{2}-\d{2}-\d{4}", re.ASCII)


class DischargeRecordPayload(BaseModel):
    patientName: str
    recordId: str
    phoneNumber: Optional[str] = None
    phoneConfidence: float = 0.0
    attendingProvider: str
    eventDate: str
    primaryCareProvider: Optional[str] = None
    payer: str
    outcome: str
    confidence: float
    sourceText: str

    @field_validator("recordId")
    @classmethod
    def _record_id_format(cls, v: str):
        if v and not _RECORD_ID_RE.fullmatch(v):
            raise ValueError(f"recordId must be two letters + nine digits, got {v!r}")
        return v

    @field_validator("phoneNumber", "primaryCareProvider")
    @classmethod
    def _absent_is_none(cls, v: Optional[str]):
        # absence travels as null; an empty string would read as a real value
        if v is not None and not v.strip():
            raise ValueError("absent values must be null, not empty")
        return v

    @field_validator("phoneNumber")
    @classmethod
    def _phone_format(cls, v: Optional[str]):
        if v is not None and not _PHONE_RE.fullmatch(v):
            raise ValueError(f"phoneNumber must be XXX-XXX-XXXX, got {v!r}")
        return v

    @field_validator("eventDate")
    @classmethod
    def _date_format(cls, v: str):
        if v and not _DATE_RE.fullmatch(v):
            raise ValueError(f"eventDate must be MM-DD-YYYY, got {v!r}")
        return v

    @field_validator("outcome")
    @classmethod
    def _outcome_closed(cls, v: str, info: ValidationInfo):
        outcomes = (info.context or {}).get("outcomes") or OUTCOMES
        if v != UNKNOWN and v not in outcomes:
            raise ValueError(f"outcome {v!r} not in vocabulary")
        return v

    @field_validator("confidence", "phoneConfidence")
    @classmethod
    def _confidence_bounds(cls, v: float):
        if not 0.0 <= v <= 1.0:
            raise ValueError(f"confidence {v} out of [0, 1]")
        if round(v, 2) != v:
            raise ValueError(f"confidence {v} has more than 2 decimals")
        return v


class DischargeListPayload(BaseModel):
    facilityName: str
    reportDate: str = ""
    recordCount: int
    records: List[DischargeRecordPayload] = []
    sourceText: str = ""

    @field_validator("records")
    @classmethod
    def _count_matches(cls, v: List[DischargeRecordPayload], info: ValidationInfo):
        expected = info.data.get("recordCount")
        if expected is not None and expected != len(v):
            raise ValueError(f"recordCount {expected} != {len(v)} records")
        return v


def validate_payload_or_raise(payload: Dict, outcomes: Optional[Sequence[str]] = None):
    """Build the model and raise ValidationError if the payload breaks the contract."""
    return DischargeListPayload.model_validate(payload, context={"outcomes": outcomes})
