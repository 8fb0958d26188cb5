from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from ...core.db import get_db
from ..deps import get_current_user_id
from ..schemas import ChatMessageIn, ChatReplyOut
from ..views import messages_out, new_paced
from .assessment import conversation
from ...conversation import orchestrator
from ...conversation.pacing import thinking_pause

router = APIRouter(prefix="/chat", tags=["chat"])

@router.post("/message", response_model=ChatReplyOut)
async def message(payload: ChatMessageIn, db: Session = Depends(get_db), user_id: str = Depends(get_current_user_id)):
    text = payload.message.strip()
    if not text:
        raise HTTPException(status_code=422, detail="message required")

    with conversation(db, user_id) as state:
        before = {m.id for m in state.messages}
        _, reply = orchestrator.reply_to(state, text)
    fresh = [m for m in state.messages if m.id not in before]
    if new_paced(state, before):
        await thinking_pause()
    return ChatReplyOut(phase=state.phase, reply=reply.text, messages=messages_out(fresh))

@router.get("/messages", response_model=ChatReplyOut)
async def history(limit: int = Query(50, ge=1, le=200), db: Session = Depends(get_db), user_id: str = Depends(get_current_user_id)):
    with conversation(db, user_id) as state:
        pass
    return ChatReplyOut(phase=state.phase, reply=None, messages=messages_out(state.messages[-limit:]))
