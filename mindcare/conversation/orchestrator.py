from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, List, Optional, Tuple, Union
import logging

from .responder import Reply, respond
from .state import (
    ChatMessage,
    ConversationState,
    IDLE,
    IN_ASSESSMENT,
    PLAN_READY,
    ROLE_BOT,
    ROLE_USER,
)
from ..assessment import session as assessment
from ..assessment.errors import AssessmentError, EmptyAnswer, InvalidState
from ..assessment.plan import Plan, PlanHandoff, build_plan
from ..assessment.recommend import recommend
from ..assessment.scoring import score
from ..catalog.questions import Question, Topic, list_topics as catalog_topics

logger = logging.getLogger(__name__)

MAX_MESSAGES = 200

# collaborators supplied by the caller on accept
PersistFn = Callable[[PlanHandoff], None]
NavigateFn = Callable[[str], None]

@dataclass(frozen=True)
class SessionView:
    question: Question
    position: int
    total: int
    prefill: str = ""

@dataclass(frozen=True)
class PlanView:
    plan: Plan

View = Union[SessionView, PlanView]

def _say(state: ConversationState, role: str, text: str, paced: bool = False) -> None:
    state.messages.append(ChatMessage(role=role, text=text, paced=paced))
    if len(state.messages) > MAX_MESSAGES:
        del state.messages[: len(state.messages) - MAX_MESSAGES]

def _session_view(state: ConversationState) -> SessionView:
    s = state.session
    return SessionView(question=s.current_question, position=s.position, total=s.total, prefill=s.prefill())

def _require(state: ConversationState, phase: str, action: str) -> None:
    if state.phase != phase:
        raise InvalidState(f"Cannot {action} while {state.phase}")

def _reset(state: ConversationState) -> None:
    state.phase = IDLE
    state.session = None
    state.plan = None

def new_state(user_name: str | None = None) -> ConversationState:
    state = ConversationState()
    who = f" {user_name}" if user_name else ""
    _say(state, ROLE_BOT, (
        f"Hello{who}! I'm your AI mental health assistant. I'm here to provide personalized "
        "support and create a therapy plan tailored just for you.\n\n"
        "Would you like me to help you identify the best therapy approach for your current needs?"
    ))
    return state

def list_topics() -> List[Topic]:
    return catalog_topics()

def current_view(state: ConversationState) -> Optional[View]:
    if state.phase == IN_ASSESSMENT and state.session:
        return _session_view(state)
    if state.phase == PLAN_READY and state.plan:
        return PlanView(state.plan)
    return None

def start_topic(state: ConversationState, topic_id: str) -> Tuple[ConversationState, SessionView]:
    # validate before touching the state so an unknown topic leaves it as it was
    session = assessment.start(topic_id)
    if state.phase != IDLE:
        logger.info("abandoning %s to start topic=%s", state.phase, topic_id)

    state.session = session
    state.plan = None
    state.phase = IN_ASSESSMENT

    name = session.topic.name
    _say(state, ROLE_USER, f"I'd like to start an assessment for {name}. This will help me understand your specific situation better.")
    _say(state, ROLE_BOT, f"Great! I'll ask you some questions about {name.lower()} to create the best therapy plan for you. Let's begin:", paced=True)
    return state, _session_view(state)

def answer_current(state: ConversationState, raw_value: str) -> Tuple[ConversationState, View]:
    _require(state, IN_ASSESSMENT, "submit an answer")
    s = state.session
    question = s.current_question
    completed = assessment.submit_answer(s, raw_value)

    _say(state, ROLE_BOT, question.text)
    _say(state, ROLE_USER, s.answers[question.id])

    if not completed:
        return state, _session_view(state)

    try:
        result = score(s)
        recommendations = recommend(s.topic)
    except AssessmentError:
        logger.exception("could not build a plan for topic=%s", s.topic.id)
        _reset(state)
        raise

    plan = build_plan(s.topic, result.severity, result.duration_days, recommendations)
    state.session = None
    state.plan = plan
    state.phase = PLAN_READY

    issue = s.topic.name.lower()
    _say(state, ROLE_BOT, (
        f"Based on your responses, I've created a personalized {plan.duration_days}-day therapy plan for {issue}. "
        f"This plan includes {len(plan.recommendations)} evidence-based therapies tailored to your specific needs."
    ), paced=True)
    logger.info("plan ready topic=%s severity=%s days=%d", s.topic.id, plan.severity, plan.duration_days)
    return state, PlanView(plan)

def previous_question(state: ConversationState) -> Tuple[ConversationState, SessionView]:
    _require(state, IN_ASSESSMENT, "go back")
    assessment.go_to_previous(state.session)
    return state, _session_view(state)

def accept_plan(
    state: ConversationState,
    user_id: str,
    persist: PersistFn | None = None,
    navigate: NavigateFn | None = None,
    route: str = "/therapy-modules",
) -> Tuple[ConversationState, PlanHandoff]:
    _require(state, PLAN_READY, "accept a plan")
    handoff = PlanHandoff(user_id=user_id, plan=state.plan, accepted_at=datetime.now(timezone.utc))
    if persist is not None:
        persist(handoff)
    _reset(state)
    if navigate is not None:
        navigate(route)
    logger.info("plan %s accepted by user=%s", handoff.plan.id, user_id)
    return state, handoff

def defer_plan(state: ConversationState) -> ConversationState:
    _require(state, PLAN_READY, "defer a plan")
    logger.info("plan %s deferred", state.plan.id)
    _reset(state)
    return state

def reply_to(state: ConversationState, user_text: str) -> Tuple[ConversationState, Reply]:
    text = user_text.strip()
    if not text:
        raise EmptyAnswer()
    _say(state, ROLE_USER, text)
    reply = respond(text, busy=state.phase != IDLE)
    if reply.text:
        _say(state, ROLE_BOT, reply.text, paced=True)
    return state, reply
