from dataclasses import dataclass
from typing import List

from .loader import load_topics
from ..assessment.errors import UnknownTopic

KIND_OPEN = "open"
KIND_CLOSED = "closed"
KIND_SCALING = "scaling"
KIND_BEHAVIORAL = "behavioral"
KIND_REFLECTIVE = "reflective"
KIND_FUTURE = "future"

# closed and scaling carry a structured head ahead of the free-text elaboration
STRUCTURED_KINDS = (KIND_CLOSED, KIND_SCALING)

@dataclass(frozen=True)
class Topic:
    id: str
    name: str
    description: str

@dataclass(frozen=True)
class Question:
    id: str
    text: str
    kind: str
    required: bool = True

def _question(raw: dict) -> Question:
    return Question(
        id=str(raw["id"]),
        text=str(raw["text"]),
        kind=raw["kind"],
        required=bool(raw.get("required", True)),
    )

def list_topics() -> List[Topic]:
    return [
        Topic(id=tid, name=data["name"], description=data.get("description", ""))
        for tid, data in load_topics().items()
    ]

def get_topic(topic_id: str) -> Topic:
    data = load_topics().get(topic_id)
    if data is None:
        raise UnknownTopic(topic_id)
    return Topic(id=topic_id, name=data["name"], description=data.get("description", ""))

def questions_for(topic_id: str) -> List[Question]:
    data = load_topics().get(topic_id)
    if data is None:
        raise UnknownTopic(topic_id)
    return [_question(q) for q in data["questions"]]
