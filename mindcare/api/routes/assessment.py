from contextlib import contextmanager
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import List

from ...core.db import get_db
from ...core.config import settings
from ..deps import get_current_user_id
from ..schemas import AcceptResponse, AnswerRequest, ConversationOut, StartRequest, TopicOut
from ..views import conversation_out, iso, new_paced, plan_out
from ...assessment.answers import compose_answer
from ...assessment.errors import AssessmentError, InvalidState
from ...catalog.questions import KIND_CLOSED, KIND_SCALING, STRUCTURED_KINDS, Question
from ...conversation import orchestrator
from ...conversation.pacing import thinking_pause
from ...services.conversation_store import load_state, save_state
from ...services.progress_store import load_progress, save_accepted_plan

router = APIRouter(prefix="/assessment", tags=["assessment"])

def http_error(err: AssessmentError) -> HTTPException:
    return HTTPException(status_code=err.status_code, detail={"code": err.code, "message": str(err)})

@contextmanager
def conversation(db: Session, user_id: str):
    """Load the user's state, run one operation, save it.

    Nothing inside may await: load, mutate and save happen as one step so two
    requests for the same user never see the same position.
    """
    row, state = load_state(db, user_id)
    try:
        yield state
    except AssessmentError as e:
        # state changes made before the failure (e.g. a discarded session) are kept
        save_state(row, state)
        db.commit()
        raise http_error(e) from e
    save_state(row, state)
    db.commit()

def _raw_answer(payload: AnswerRequest, question: Question) -> str:
    if payload.choice is not None:
        if question.kind != KIND_CLOSED:
            raise HTTPException(status_code=422, detail="choice is only valid for closed questions")
        return compose_answer(KIND_CLOSED, payload.choice, payload.elaboration)
    if payload.rating is not None:
        if question.kind != KIND_SCALING:
            raise HTTPException(status_code=422, detail="rating is only valid for scaling questions")
        return compose_answer(KIND_SCALING, payload.rating, payload.elaboration)
    value = payload.value or ""
    if question.kind in STRUCTURED_KINDS and value.strip():
        return compose_answer(question.kind, value, payload.elaboration)
    return value

@router.get("/topics", response_model=List[TopicOut])
def topics():
    return [TopicOut(id=t.id, name=t.name, description=t.description) for t in orchestrator.list_topics()]

@router.get("/state", response_model=ConversationOut)
async def get_state(include_messages: bool = False, db: Session = Depends(get_db), user_id: str = Depends(get_current_user_id)):
    with conversation(db, user_id) as state:
        pass
    return conversation_out(state, include_messages=include_messages)

@router.post("/start", response_model=ConversationOut)
async def start(payload: StartRequest, db: Session = Depends(get_db), user_id: str = Depends(get_current_user_id)):
    with conversation(db, user_id) as state:
        before = {m.id for m in state.messages}
        orchestrator.start_topic(state, payload.topicId)
    if new_paced(state, before):
        await thinking_pause()
    return conversation_out(state)

@router.post("/answer", response_model=ConversationOut)
async def answer(payload: AnswerRequest, db: Session = Depends(get_db), user_id: str = Depends(get_current_user_id)):
    with conversation(db, user_id) as state:
        before = {m.id for m in state.messages}
        if state.session is None or state.session.current_question is None:
            raise InvalidState(f"Cannot submit an answer while {state.phase}")
        raw = _raw_answer(payload, state.session.current_question)
        orchestrator.answer_current(state, raw)
    if new_paced(state, before):
        await thinking_pause()
    return conversation_out(state)

@router.post("/previous", response_model=ConversationOut)
async def previous(db: Session = Depends(get_db), user_id: str = Depends(get_current_user_id)):
    with conversation(db, user_id) as state:
        orchestrator.previous_question(state)
    return conversation_out(state)

@router.post("/plan/accept", response_model=AcceptResponse)
async def accept(db: Session = Depends(get_db), user_id: str = Depends(get_current_user_id)):
    routed: List[str] = []
    with conversation(db, user_id) as state:
        _, handoff = orchestrator.accept_plan(
            state,
            user_id,
            persist=lambda h: save_accepted_plan(db, h),
            navigate=routed.append,
            route=settings.PLAN_ACCEPT_REDIRECT,
        )
    return AcceptResponse(
        plan=plan_out(handoff.plan),
        acceptedAt=iso(handoff.accepted_at),
        navigateTo=routed[-1] if routed else None,
    )

@router.post("/plan/defer", response_model=ConversationOut)
async def defer(db: Session = Depends(get_db), user_id: str = Depends(get_current_user_id)):
    with conversation(db, user_id) as state:
        orchestrator.defer_plan(state)
    return conversation_out(state)

@router.get("/progress")
def progress(db: Session = Depends(get_db), user_id: str = Depends(get_current_user_id)):
    record = load_progress(db, user_id)
    if record is None:
        raise HTTPException(status_code=404, detail="No accepted plan")
    return record
