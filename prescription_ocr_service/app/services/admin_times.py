# app/services/admin_times.py
from typing import List, Tuple

ADMIN_TIMES: Tuple[str, ...] = (
    "at bedtime",
    "in the morning",
    "in the evening",
    "before meals",
    "after meals",
    "every morning",
    "every evening",
    "once daily",
    "twice daily",
    "three times daily",
    "four times daily",
)

def detect_admin_times(text: str) -> List[str]:
    """
    Returns the admin-time phrases contained in text.
    Order follows ADMIN_TIMES, not the position in the text.
    """
    low = (text or "").lower()
    found: List[str] = []
    for phrase in ADMIN_TIMES:
        if phrase.lower() in low and phrase not in found:
            found.append(phrase)
    return found
