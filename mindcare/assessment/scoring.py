from __future__ import annotations
from dataclasses import dataclass
from typing import List
import logging

from ..catalog.questions import KIND_SCALING
from .answers import RATING_MIDPOINT, parse_answer
from .errors import InvalidState, NoScaleData
from .session import AssessmentSession

logger = logging.getLogger(__name__)

SEVERITY_MILD = "mild"
SEVERITY_MODERATE = "moderate"
SEVERITY_SEVERE = "severe"

MILD_MAX_MEAN = 3
SEVERE_MIN_MEAN = 7

PLAN_DAYS = {
    SEVERITY_MILD: 7,
    SEVERITY_MODERATE: 15,
    SEVERITY_SEVERE: 30,
}

@dataclass(frozen=True)
class Score:
    severity: str
    duration_days: int
    mean: float
    ratings: List[int]
    defaulted: int = 0  # scaling answers that fell back to the midpoint

def classify(mean: float) -> str:
    if mean <= MILD_MAX_MEAN:
        return SEVERITY_MILD
    if mean >= SEVERE_MIN_MEAN:
        return SEVERITY_SEVERE
    return SEVERITY_MODERATE

def score(session: AssessmentSession) -> Score:
    if not session.is_complete:
        raise InvalidState("Cannot score an unfinished assessment")

    scaling = [q for q in session.questions if q.kind == KIND_SCALING]
    if not scaling:
        raise NoScaleData(session.topic.id)

    ratings: List[int] = []
    defaulted = 0
    for q in scaling:
        value = parse_answer(q.kind, session.answers.get(q.id, "")).rating
        if value is None:
            # missing or unparseable ratings count as the midpoint
            logger.warning("topic=%s question=%s: no usable rating, using %d", session.topic.id, q.id, RATING_MIDPOINT)
            value = RATING_MIDPOINT
            defaulted += 1
        ratings.append(value)

    mean = sum(ratings) / len(ratings)
    severity = classify(mean)
    logger.info("topic=%s mean=%.2f severity=%s", session.topic.id, mean, severity)
    return Score(severity=severity, duration_days=PLAN_DAYS[severity], mean=mean, ratings=ratings, defaulted=defaulted)
