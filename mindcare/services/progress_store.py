import json
import logging
from datetime import datetime
from typing import Any, Dict, Optional

from sqlalchemy.orm import Session

from ..assessment.plan import PlanHandoff
from ..models import UserProgress

logger = logging.getLogger(__name__)

def save_accepted_plan(db: Session, handoff: PlanHandoff) -> UserProgress:
    """Store the accepted plan as the user's current plan, resetting progress.

    One record per user; accepting a new plan replaces the previous one.
    The caller owns the transaction.
    """
    record = handoff.to_progress_record()
    row = db.get(UserProgress, handoff.user_id)
    if row is None:
        row = UserProgress(user_id=handoff.user_id)
        db.add(row)
    row.plan_id = handoff.plan.id
    row.plan_json = json.dumps(record["currentPlan"])
    row.start_date = handoff.accepted_at.replace(tzinfo=None)
    row.completed_therapies_json = json.dumps(record["completedTherapies"])
    row.daily_progress_json = json.dumps(record["dailyProgress"])
    row.updated_at = datetime.utcnow()
    logger.info("stored plan %s for user=%s", handoff.plan.id, handoff.user_id)
    return row

def load_progress(db: Session, user_id: str) -> Optional[Dict[str, Any]]:
    row = db.get(UserProgress, user_id)
    if row is None:
        return None
    return {
        "userId": row.user_id,
        "currentPlan": json.loads(row.plan_json),
        "startDate": row.start_date.isoformat(),
        "completedTherapies": json.loads(row.completed_therapies_json or "[]"),
        "dailyProgress": json.loads(row.daily_progress_json or "{}"),
    }
