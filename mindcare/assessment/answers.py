"""Answer encoding.

Every stored answer is a single string so the session mapping stays
homogeneous. Structured kinds use ``"<head> - <elaboration>"``:

* closed:  ``"Yes - mostly at work"``  (head is the binary choice)
* scaling: ``"7 - worse in the evenings"``  (head is the 1-10 rating)

Without an elaboration only the head is stored. Free-text kinds store the
raw text. ``parse_answer`` turns the string back into a tagged pair so
callers never re-split it themselves.
"""
from dataclasses import dataclass
from typing import Optional
import re

from ..catalog.questions import KIND_SCALING, STRUCTURED_KINDS

SEPARATOR = " - "
RATING_MIN = 1
RATING_MAX = 10
RATING_MIDPOINT = 5

# digit runs longer than three fail the match and never reach int()
_LEADING_INT = re.compile(r"^\s*(\d{1,3})(?!\d|\.\d)")

@dataclass(frozen=True)
class Answer:
    kind: str
    head: str
    elaboration: Optional[str] = None

    @property
    def rating(self) -> Optional[int]:
        if self.kind != KIND_SCALING:
            return None
        return parse_rating(self.head)

def compose_answer(kind: str, head, elaboration: Optional[str] = None) -> str:
    head_s = str(head).strip()
    if kind not in STRUCTURED_KINDS:
        return head_s
    extra = (elaboration or "").strip()
    return f"{head_s}{SEPARATOR}{extra}" if extra else head_s

def parse_answer(kind: str, raw: str) -> Answer:
    raw = (raw or "").strip()
    if kind in STRUCTURED_KINDS and SEPARATOR in raw:
        head, extra = raw.split(SEPARATOR, 1)
        return Answer(kind, head.strip(), extra.strip() or None)
    return Answer(kind, raw, None)

def parse_rating(raw: Optional[str]) -> Optional[int]:
    """Leading integer of a scaling answer, or None when absent or outside 1..10."""
    if not raw:
        return None
    m = _LEADING_INT.match(raw)
    if not m:
        return None
    value = int(m.group(1))
    if value < RATING_MIN or value > RATING_MAX:
        return None
    return value
