import json
import uuid

from mindcare.conversation.orchestrator import new_state, start_topic
from mindcare.conversation.state import IN_ASSESSMENT, state_to_dict
from mindcare.core.db import SessionLocal
from mindcare.models import ConversationRecord
from mindcare.services import conversation_store
from mindcare.services.conversation_store import load_state, save_state


def test_first_load_creates_idle_row():
    user = f"user-{uuid.uuid4().hex[:8]}"
    with SessionLocal() as db:
        row, state = load_state(db, user)
        assert state.phase == "IDLE"
        save_state(row, state)
        db.commit()
    with SessionLocal() as db:
        assert db.get(ConversationRecord, user) is not None


def test_concurrent_first_insert_reloads_existing_row(monkeypatch):
    user = f"user-{uuid.uuid4().hex[:8]}"

    # another request created the row and started an assessment first
    other = new_state()
    start_topic(other, "stress")
    with SessionLocal() as db:
        db.add(ConversationRecord(user_id=user, state_json=json.dumps(state_to_dict(other))))
        db.commit()

    # this request's initial lookup ran before that commit
    real_select = conversation_store._select_row
    calls = []

    def stale_then_real(db, user_id):
        calls.append(user_id)
        return None if len(calls) == 1 else real_select(db, user_id)

    monkeypatch.setattr(conversation_store, "_select_row", stale_then_real)

    with SessionLocal() as db:
        row, state = load_state(db, user)
        assert len(calls) == 2
        assert row.user_id == user
        assert state.phase == IN_ASSESSMENT
        assert state.session.topic.id == "stress"
        save_state(row, state)
        db.commit()
