from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Tuple
import uuid

from ..catalog.questions import Topic
from .recommend import Recommendation

@dataclass(frozen=True)
class Plan:
    id: str
    topic: Topic
    severity: str
    duration_days: int
    recommendations: Tuple[Recommendation, ...]
    created_at: datetime
    description: str

@dataclass(frozen=True)
class PlanHandoff:
    user_id: str
    plan: Plan
    accepted_at: datetime

    def to_progress_record(self) -> Dict[str, Any]:
        # shape expected by the progress store: fresh, nothing completed yet
        return {
            "userId": self.user_id,
            "currentPlan": plan_to_dict(self.plan),
            "startDate": self.accepted_at.isoformat(),
            "completedTherapies": [],
            "dailyProgress": {},
        }

def _now() -> datetime:
    return datetime.now(timezone.utc)

def build_plan(topic: Topic, severity: str, duration_days: int, recommendations) -> Plan:
    return Plan(
        id=uuid.uuid4().hex,
        topic=topic,
        severity=severity,
        duration_days=duration_days,
        recommendations=tuple(recommendations),
        created_at=_now(),
        description=f"A {duration_days}-day personalized plan for {topic.name.lower()}",
    )

def plan_to_dict(plan: Plan) -> Dict[str, Any]:
    return {
        "id": plan.id,
        "topic": {"id": plan.topic.id, "name": plan.topic.name, "description": plan.topic.description},
        "severity": plan.severity,
        "durationDays": plan.duration_days,
        "recommendations": [
            {
                "moduleId": r.module_id,
                "title": r.title,
                "description": r.description,
                "priority": r.priority,
                "estimatedDuration": r.estimated_duration,
                "benefits": list(r.benefits),
            }
            for r in plan.recommendations
        ],
        "createdAt": plan.created_at.isoformat(),
        "description": plan.description,
    }

def plan_from_dict(data: Dict[str, Any]) -> Plan:
    t = data["topic"]
    return Plan(
        id=data["id"],
        topic=Topic(id=t["id"], name=t["name"], description=t.get("description", "")),
        severity=data["severity"],
        duration_days=int(data["durationDays"]),
        recommendations=tuple(
            Recommendation(
                module_id=r["moduleId"],
                title=r["title"],
                description=r["description"],
                priority=int(r["priority"]),
                estimated_duration=r["estimatedDuration"],
                benefits=tuple(r["benefits"]),
            )
            for r in data["recommendations"]
        ),
        created_at=datetime.fromisoformat(data["createdAt"]),
        description=data["description"],
    )
