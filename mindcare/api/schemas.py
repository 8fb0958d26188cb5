from pydantic import BaseModel, Field, model_validator
from typing import Optional, Dict, Any, List, Literal

# every answer and chat line is kept in the stored conversation state
MAX_ANSWER_CHARS = 2000
MAX_MESSAGE_CHARS = 2000

class TopicOut(BaseModel):
    id: str
    name: str
    description: str

class QuestionOut(BaseModel):
    id: str
    text: str
    kind: str
    required: bool

class StartRequest(BaseModel):
    topicId: str = Field(max_length=80)

class AnswerRequest(BaseModel):
    # either a ready-encoded value, or the structured parts for closed/scaling questions
    value: Optional[str] = Field(default=None, max_length=MAX_ANSWER_CHARS)
    choice: Optional[Literal["Yes", "No"]] = None
    rating: Optional[int] = Field(default=None, ge=1, le=10)
    elaboration: Optional[str] = Field(default=None, max_length=MAX_ANSWER_CHARS)

    @model_validator(mode="after")
    def _one_head(self):
        heads = [h for h in (self.value, self.choice, self.rating) if h is not None]
        if len(heads) > 1:
            raise ValueError("send only one of value, choice or rating")
        return self

class RecommendationOut(BaseModel):
    moduleId: str
    title: str
    description: str
    priority: int
    estimatedDuration: str
    benefits: List[str]

class PlanOut(BaseModel):
    id: str
    topic: TopicOut
    severity: str
    durationDays: int
    recommendations: List[RecommendationOut]
    createdAt: str
    description: str

class MessageOut(BaseModel):
    id: str
    role: str
    text: str
    createdAt: str

class SessionViewOut(BaseModel):
    question: QuestionOut
    position: int
    total: int
    prefill: str = ""

class ConversationOut(BaseModel):
    phase: str
    session: Optional[SessionViewOut] = None
    plan: Optional[PlanOut] = None
    messages: List[MessageOut] = []
    meta: Optional[Dict[str, Any]] = None

class AcceptResponse(BaseModel):
    plan: PlanOut
    acceptedAt: str
    navigateTo: Optional[str] = None

class ChatMessageIn(BaseModel):
    message: str = Field(max_length=MAX_MESSAGE_CHARS)

class ChatReplyOut(BaseModel):
    phase: str
    reply: Optional[str] = None
    messages: List[MessageOut]
