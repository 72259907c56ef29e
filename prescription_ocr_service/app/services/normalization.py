# app/services/normalization.py
import re
from types import MappingProxyType
from typing import Mapping, Tuple

# order matters: rules are applied in this order, one pass each
NORMALIZATION_MAP: Mapping[str, str] = MappingProxyType({
    "qhs": "at bedtime",
    "od": "once daily",
    "bid": "twice daily",
    "tid": "three times daily",
    "qid": "four times daily",
    "prn": "as needed",
    "tab": "tablet",
    "tabs": "tablets",
    "cap": "capsule",
    "caps": "capsules",
    "po": "by mouth",
    "qam": "every morning",
    "qpm": "every evening",
    "ac": "before meals",
    "pc": "after meals",
    "hs": "at bedtime",
    "qd": "once daily",
    "mg": "milligrams",
    "ml": "milliliters",
})

_WS_RE = re.compile(r"\s+")

def _whole_word(abbrev: str) -> re.Pattern:
    # lookarounds instead of \b so keys like "q.d." still anchor on both sides
    return re.compile(rf"(?<!\w){re.escape(abbrev)}(?!\w)", re.IGNORECASE)

_RULES: Tuple[Tuple[re.Pattern, str], ...] = tuple(
    (_whole_word(abbrev), full) for abbrev, full in NORMALIZATION_MAP.items()
)

def normalize_text(text: str) -> str:
    """Expand prescription shorthand (tab, qhs, po...) and collapse whitespace."""
    normalized = text or ""
    for pattern, full in _RULES:
        normalized = pattern.sub(full, normalized)
    return _WS_RE.sub(" ", normalized).strip()
