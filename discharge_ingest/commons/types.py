from typing import Any, Dict, List, Literal, Tuple

from pydantic import BaseModel, Field, field_validator

from discharge_ingest.parsers.vocab import OUTCOMES, PAYERS, by_length_desc


class ConfidencePenalties(BaseModel):
    """Deductions from a row's 1.0 starting confidence, applied in field order."""

    record_id_missing: float = Field(0.2, ge=0.0, le=1.0)
    date_missing: float = Field(0.2, ge=0.0, le=1.0)
    outcome_unknown: float = Field(0.1, ge=0.0, le=1.0)
    name_missing: float = Field(0.2, ge=0.0, le=1.0)
    phone_missing: float = Field(0.1, ge=0.0, le=1.0)
    pcp_missing: float = Field(0.1, ge=0.0, le=1.0)
    payer_unknown: float = Field(0.1, ge=0.0, le=1.0)


class ParserCfg(BaseModel):
    outcomes: List[str] = Field(default_factory=lambda: list(OUTCOMES))
    payers: List[str] = Field(default_factory=lambda: list(PAYERS))
    penalties: ConfidencePenalties = Field(default_factory=ConfidencePenalties)

    @field_validator("outcomes", "payers")
    @classmethod
    def _no_blank_entries(cls, v: List[str]):
        if any(not entry or not entry.strip() for entry in v):
            raise ValueError("vocabulary entries must be non-empty")
        return v

    @property
    def payers_by_length(self) -> Tuple[str, ...]:
        return by_length_desc(self.payers)


class TransportCfg(BaseModel):
    type: Literal["file"] = "file"
    file: Dict[str, Any] = {}


class Settings(BaseModel):
    app: Dict[str, Any] = {}
    paths: Dict[str, str]
    transport: Dict[str, TransportCfg] = {}
    validation: Dict[str, Any] = {}
    parser: ParserCfg = Field(default_factory=ParserCfg)
