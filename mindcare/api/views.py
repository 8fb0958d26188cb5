from typing import Iterable, List, Set

from ..assessment.plan import Plan, plan_to_dict
from ..conversation.orchestrator import SessionView, current_view
from ..conversation.state import ChatMessage, ConversationState
from ..core.config import settings
from .schemas import (
    ConversationOut,
    MessageOut,
    PlanOut,
    QuestionOut,
    SessionViewOut,
)

def iso(dt) -> str:
    return dt.replace(microsecond=0).isoformat()

def plan_out(plan: Plan) -> PlanOut:
    return PlanOut(**plan_to_dict(plan))

def session_view_out(view: SessionView) -> SessionViewOut:
    q = view.question
    return SessionViewOut(
        question=QuestionOut(id=q.id, text=q.text, kind=q.kind, required=q.required),
        position=view.position,
        total=view.total,
        prefill=view.prefill,
    )

def messages_out(messages: Iterable[ChatMessage]) -> List[MessageOut]:
    return [MessageOut(id=m.id, role=m.role, text=m.text, createdAt=iso(m.created_at)) for m in messages]

def new_paced(state: ConversationState, before: Set[str]) -> bool:
    return any(m.paced and m.id not in before for m in state.messages)

def conversation_out(state: ConversationState, include_messages: bool = False) -> ConversationOut:
    view = current_view(state)
    out = ConversationOut(phase=state.phase)
    if isinstance(view, SessionView):
        out.session = session_view_out(view)
    elif view is not None:
        out.plan = plan_out(view.plan)
    if include_messages:
        out.messages = messages_out(state.messages)
    if settings.ALLOW_DEV_DEBUG_META and state.session is not None:
        out.meta = {"answers": dict(state.session.answers), "topicId": state.session.topic.id}
    return out
