import re
from typing import Optional, Sequence, Tuple

from discharge_ingest.commons.types import ParserCfg

from .base import RECORD_ID_RE
from .models import ParsedRecord
from .providers import normalize_provider_name, split_pcp_and_payer
from .vocab import UNKNOWN

DATE_RE = re.compile(r"\d{2}-\d{2}-\d{4}", re.ASCII)

# Phone forms, only ever tried right after the identifier
_PHONE_MISSING_RE = re.compile(r"^\s*\(missing\)\s*", re.IGNORECASE)
_PHONE_FORMATTED_RE = re.compile(r"^\s*(\d{3}-\d{3}-\d{4})", re.ASCII)
# Must be followed by a space or a letter, otherwise a run like
# "0101202" would eat into the date that follows.
_PHONE_RAW_RE = re.compile(r"^\s*(\d{10})(?=\s|[A-Za-z])", re.ASCII)

_DEFAULT_CFG = ParserCfg()


def match_phone(after_id: str) -> Tuple[Optional[str], float, int]:
    """Return (phone, phone_confidence, consumed) for the text after the identifier.

    `consumed` is how many characters the matched phone form covers, so the
    attending span can start right after it. Zero when nothing matched.
    """
    m = _PHONE_MISSING_RE.match(after_id)
    if m:
        return None, 0.0, m.end()

    m = _PHONE_FORMATTED_RE.match(after_id)
    if m:
        return m.group(1), 1.0, m.end()

    m = _PHONE_RAW_RE.match(after_id)
    if m:
        d = m.group(1)
        return f"{d[:3]}-{d[3:6]}-{d[6:]}", 0.9, m.end()

    return None, 0.0, 0


def match_outcome(line: str, outcomes: Sequence[str]) -> Optional[str]:
    for outcome in outcomes:
        if line.endswith(outcome):
            return outcome
    return None


def parse_discharge_row(line: str, cfg: Optional[ParserCfg] = None) -> ParsedRecord:
    """Carve one concatenated discharge row into fields.

    Anchors are resolved left to right: identifier, date, phone (right after
    the identifier), then the outcome suffix. The variable-length spans are
    whatever lies between those anchors:

        <name><ID><phone?><attending><date><pcp?><payer?><outcome>

    Missing anchors never raise; they fall back to placeholders and lower the
    row's confidence.
    """
    cfg = cfg or _DEFAULT_CFG
    penalties = cfg.penalties
    text = line.strip()
    confidence = 1.0

    # 1) Identifier
    id_match = RECORD_ID_RE.search(text)
    record_id = id_match.group(0) if id_match else ""
    if not record_id:
        confidence -= penalties.record_id_missing

    # 2) Date, searched after the identifier
    date_match = DATE_RE.search(text, id_match.end() if id_match else 0)
    event_date = date_match.group(0) if date_match else ""
    if not event_date:
        confidence -= penalties.date_missing

    # 3) Phone
    phone_number: Optional[str] = None
    phone_confidence = 0.0
    attending_start = 0
    if id_match:
        phone_number, phone_confidence, consumed = match_phone(text[id_match.end():])
        attending_start = id_match.end() + consumed

    # 4) Outcome suffix
    outcome = match_outcome(text, cfg.outcomes)
    if not outcome:
        outcome = UNKNOWN
        confidence -= penalties.outcome_unknown
        middle_end = len(text)
    else:
        middle_end = len(text) - len(outcome)

    # 5) Name
    patient_name = text[: id_match.start()].strip() if id_match else ""
    if not patient_name:
        patient_name = UNKNOWN
        confidence -= penalties.name_missing

    # 6, 7) Spans between anchors
    attending = ""
    pcp: Optional[str] = None
    payer = UNKNOWN
    if id_match and date_match:
        attending = text[attending_start: date_match.start()].strip()
        pcp, payer = split_pcp_and_payer(
            text[date_match.end(): middle_end], cfg.payers_by_length
        )

    attending = normalize_provider_name(attending)
    if pcp:
        pcp = normalize_provider_name(pcp)

    if not phone_number:
        confidence -= penalties.phone_missing
    if not pcp:
        confidence -= penalties.pcp_missing
    if payer == UNKNOWN:
        confidence -= penalties.payer_unknown

    return ParsedRecord(
        patient_name=patient_name,
        record_id=record_id,
        phone_number=phone_number,
        attending_provider=attending,
        event_date=event_date,
        primary_care_provider=pcp or None,
        payer=payer,
        outcome=outcome,
        confidence=max(0.0, round(confidence, 2)),
        source_text=line,
        phone_confidence=phone_confidence,
    )
