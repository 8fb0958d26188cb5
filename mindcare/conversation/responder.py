from dataclasses import dataclass
import re

ACT_ASSESSMENT_PROMPT = "ASSESSMENT_PROMPT"
ACT_ACKNOWLEDGE = "ACKNOWLEDGE"

ASSESSMENT_PATTERNS = [
    r"help",
    r"start",
]

ASSESSMENT_PROMPT = (
    "I can help you with various mental health concerns. "
    "Would you like to start an assessment to get personalized therapy recommendations?"
)
ACKNOWLEDGEMENT = (
    "I understand. Feel free to ask me anything about mental health "
    "or start an assessment when you're ready."
)

@dataclass
class Reply:
    act: str
    text: str | None

def respond(user_text: str, busy: bool) -> Reply:
    """Keyword reply for chat text outside the structured flow.

    ``busy`` is True while an assessment or a pending plan owns the screen; the
    generic acknowledgment is suppressed then.
    """
    t = user_text.strip().lower()
    for pat in ASSESSMENT_PATTERNS:
        if re.search(pat, t):
            return Reply(ACT_ASSESSMENT_PROMPT, ASSESSMENT_PROMPT)
    if busy:
        return Reply(ACT_ACKNOWLEDGE, None)
    return Reply(ACT_ACKNOWLEDGE, ACKNOWLEDGEMENT)
