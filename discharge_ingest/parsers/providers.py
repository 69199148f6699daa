import re
from typing import Optional, Sequence, Tuple

from .vocab import (
    MISSING_MARKER,
    PAYERS,
    PCP_CREDENTIALS,
    PROVIDER_CREDENTIALS,
    UNKNOWN,
    by_length_desc,
)

_CRED_ALT = "|".join(re.escape(c) for c in PROVIDER_CREDENTIALS)

# "Sloan, MD Mark" -> surname, credential, given name(s). The given part may not
# start with another credential, so a rewritten name never matches again.
_MISPLACED_CRED_RE = re.compile(
    rf"^([^,]+),\s+({_CRED_ALT})\s+(?!\s|(?:{_CRED_ALT})(?:\s|$))(.+)$",
    re.IGNORECASE,
)

_PCP_CRED_RE = re.compile(
    r"\b(?:" + "|".join(re.escape(c) for c in PCP_CREDENTIALS) + r")\b",
    re.IGNORECASE,
)

_DEFAULT_PAYERS = by_length_desc(PAYERS)


def normalize_provider_name(raw: Optional[str]) -> str:
    """Move a credential placed after the comma to the end of the name.

    "Sloan, MD Mark" -> "Sloan, Mark MD"
    "Manning, Steward Wallace PA" stays as-is.
    """
    if not raw:
        return ""
    trimmed = raw.strip()
    m = _MISPLACED_CRED_RE.match(trimmed)
    if m:
        return f"{m.group(1)}, {m.group(3)} {m.group(2).upper()}"
    return trimmed


def _absent_if_missing(pcp: Optional[str]) -> Optional[str]:
    if pcp and MISSING_MARKER in pcp.lower():
        return None
    return pcp or None


def split_pcp_and_payer(
    text: str, payers: Sequence[str] = _DEFAULT_PAYERS
) -> Tuple[Optional[str], str]:
    """Split the span between date and outcome into (pcp, payer).

    `payers` must already be ordered longest first so "Aetna Health" wins over
    "Aetna".
    """
    text = (text or "").strip()
    if not text:
        return None, UNKNOWN

    for payer in payers:
        idx = text.find(payer)
        if idx >= 0:
            return _absent_if_missing(text[:idx].strip()), payer

    # No known payer: a credential means the span is only a provider name
    if _PCP_CRED_RE.search(text):
        return _absent_if_missing(text), UNKNOWN

    return None, text
