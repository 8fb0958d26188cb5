from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
import uuid

from ..assessment.plan import Plan, plan_from_dict, plan_to_dict
from ..assessment.session import AssessmentSession
from ..catalog.questions import Question, Topic

IDLE = "IDLE"
IN_ASSESSMENT = "IN_ASSESSMENT"
PLAN_READY = "PLAN_READY"

ROLE_USER = "user"
ROLE_BOT = "bot"

def _now() -> datetime:
    return datetime.now(timezone.utc)

@dataclass
class ChatMessage:
    role: str
    text: str
    created_at: datetime = field(default_factory=_now)
    paced: bool = False  # released to the client after the thinking pause
    id: str = field(default_factory=lambda: uuid.uuid4().hex)

@dataclass
class ConversationState:
    phase: str = IDLE
    session: Optional[AssessmentSession] = None
    plan: Optional[Plan] = None
    messages: List[ChatMessage] = field(default_factory=list)

# ---- serialization ---------------------------------------------------------

def _session_to_dict(s: AssessmentSession) -> Dict[str, Any]:
    return {
        "topic": {"id": s.topic.id, "name": s.topic.name, "description": s.topic.description},
        "questions": [{"id": q.id, "text": q.text, "kind": q.kind, "required": q.required} for q in s.questions],
        "position": s.position,
        "answers": dict(s.answers),
    }

def _session_from_dict(d: Dict[str, Any]) -> AssessmentSession:
    t = d["topic"]
    # the stored snapshot wins over the current catalog
    return AssessmentSession(
        topic=Topic(id=t["id"], name=t["name"], description=t.get("description", "")),
        questions=tuple(Question(**q) for q in d["questions"]),
        position=int(d["position"]),
        answers=dict(d.get("answers") or {}),
    )

def state_to_dict(state: ConversationState) -> Dict[str, Any]:
    return {
        "phase": state.phase,
        "session": _session_to_dict(state.session) if state.session else None,
        "plan": plan_to_dict(state.plan) if state.plan else None,
        "messages": [
            {"id": m.id, "role": m.role, "text": m.text, "createdAt": m.created_at.isoformat(), "paced": m.paced}
            for m in state.messages
        ],
    }

def state_from_dict(data: Dict[str, Any] | None) -> ConversationState:
    if not data:
        return ConversationState()
    return ConversationState(
        phase=data.get("phase", IDLE),
        session=_session_from_dict(data["session"]) if data.get("session") else None,
        plan=plan_from_dict(data["plan"]) if data.get("plan") else None,
        messages=[
            ChatMessage(
                id=m["id"],
                role=m["role"],
                text=m["text"],
                created_at=datetime.fromisoformat(m["createdAt"]),
                paced=bool(m.get("paced", False)),
            )
            for m in data.get("messages") or []
        ],
    )
