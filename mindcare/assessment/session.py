from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

from ..catalog.questions import Question, Topic, get_topic, questions_for
from .errors import AtStart, EmptyAnswer, InvalidState


@dataclass
class AssessmentSession:
    """One traversal of a topic's questionnaire.

    ``questions`` is a snapshot taken at start, so the list length is fixed
    for the life of the session. ``position`` runs from 0 to
    ``len(questions)``; reaching the end marks the session complete and it is
    not reused afterwards. Answers are keyed by question id and are never
    removed by backward navigation.
    """

    topic: Topic
    questions: Tuple[Question, ...]
    position: int = 0
    answers: Dict[str, str] = field(default_factory=dict)

    @property
    def total(self) -> int:
        return len(self.questions)

    @property
    def is_complete(self) -> bool:
        return self.position >= self.total

    @property
    def current_question(self) -> Optional[Question]:
        if self.is_complete:
            return None
        return self.questions[self.position]

    def prefill(self) -> str:
        q = self.current_question
        if q is None:
            return ""
        return self.answers.get(q.id, "")


def start(topic_id: str) -> AssessmentSession:
    topic = get_topic(topic_id)
    return AssessmentSession(topic=topic, questions=tuple(questions_for(topic_id)))


def submit_answer(session: AssessmentSession, raw_value: str) -> bool:
    """Record an answer for the current question and advance. Returns True once complete."""
    if session.is_complete:
        raise InvalidState("Assessment already completed")
    value = (raw_value or "").strip()
    if not value:
        raise EmptyAnswer()
    q = session.questions[session.position]
    session.answers[q.id] = value
    session.position += 1
    return session.is_complete


def go_to_previous(session: AssessmentSession) -> str:
    """Step back one question and return its stored answer (empty if none)."""
    if session.is_complete:
        raise InvalidState("Assessment already completed")
    if session.position == 0:
        raise AtStart()
    session.position -= 1
    return session.prefill()
