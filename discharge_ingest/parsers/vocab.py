# ===============================
# File: discharge_ingest/parsers/vocab.py
# ===============================
from typing import Iterable, Tuple

OUTCOMES: Tuple[str, ...] = ("Home", "SNF", "HHS", "Rehab", "AMA", "Hospice", "LTAC", "Deceased")

PAYERS: Tuple[str, ...] = (
    "BCBS",
    "Blue Cross",
    "Aetna",
    "Aetna Health",
    "Humana",
    "Humana Health",
    "UnitedHealthcare",
    "United",
    "Cigna",
    "Medicare",
    "Medicaid",
    "Self Pay",
    "Self-Pay",
    "Tricare",
    "Kaiser",
)

# Credentials that mark a bare PCP span as a provider name
PCP_CREDENTIALS: Tuple[str, ...] = ("MD", "DO", "PA", "NP", "RN")

# Credentials the source system sometimes puts between surname and given name
PROVIDER_CREDENTIALS: Tuple[str, ...] = ("MD", "DO", "PA", "NP", "PA-C", "RN", "BSN")

UNKNOWN = "Unknown"
UNKNOWN_FACILITY = "Unknown Hospital"
MISSING_MARKER = "missing"


def by_length_desc(entries: Iterable[str]) -> Tuple[str, ...]:
    """Longest entries first; ties keep their declared order."""
    return tuple(sorted(entries, key=len, reverse=True))
