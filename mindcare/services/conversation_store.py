import json
import logging
from datetime import datetime
from typing import Optional, Tuple

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..conversation.orchestrator import new_state
from ..conversation.state import ConversationState, state_from_dict, state_to_dict
from ..models import ConversationRecord

logger = logging.getLogger(__name__)

def _select_row(db: Session, user_id: str) -> Optional[ConversationRecord]:
    # row lock keeps two requests for the same user from observing one position
    return db.execute(
        select(ConversationRecord).where(ConversationRecord.user_id == user_id).with_for_update()
    ).scalar_one_or_none()

def _create_row(db: Session, user_id: str) -> Tuple[ConversationRecord, ConversationState]:
    """Insert a fresh IDLE row; if another request inserted it first, use theirs."""
    state = new_state()
    row = ConversationRecord(user_id=user_id, state_json=json.dumps(state_to_dict(state)))
    db.add(row)
    try:
        db.flush()
    except IntegrityError:
        db.rollback()
        logger.info("user=%s: conversation row created concurrently, reloading", user_id)
        row = _select_row(db, user_id)
        if row is None:
            raise
        return row, state_from_dict(json.loads(row.state_json or "{}"))
    return row, state

def load_state(db: Session, user_id: str) -> Tuple[ConversationRecord, ConversationState]:
    row = _select_row(db, user_id)
    if row is None:
        return _create_row(db, user_id)
    return row, state_from_dict(json.loads(row.state_json or "{}"))

def save_state(row: ConversationRecord, state: ConversationState) -> None:
    row.state_json = json.dumps(state_to_dict(state))
    row.updated_at = datetime.utcnow()
