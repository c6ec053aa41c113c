from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ActionItemStatus(str, Enum):
    TO_DO = "To Do"
    IN_PROGRESS = "In Progress"
    DONE = "Done"


class ActionItemUrgency(str, Enum):
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


UNNAMED_TOPIC = "Unnamed Topic"
UNASSIGNED = "Unassigned"


class _Value(BaseModel):
    # camelCase on the wire, snake_case in Python
    model_config = ConfigDict(frozen=True, populate_by_name=True)


class Topic(_Value):
    name: str = UNNAMED_TOPIC
    transcript_sections: List[str] = Field(default_factory=list, alias="transcriptSections")


class Summary(_Value):
    overview: str = ""
    main_points: List[str] = Field(default_factory=list, alias="mainPoints")
    conclusion: str = ""
    unanswered_questions: List[str] = Field(default_factory=list, alias="unansweredQuestions")


class ActionItem(_Value):
    id: str
    task: str
    assigned_to: str = Field(UNASSIGNED, alias="assignedTo")
    urgency: ActionItemUrgency = ActionItemUrgency.MEDIUM
    status: ActionItemStatus = ActionItemStatus.TO_DO


class AnalysisResult(_Value):
    topics: List[Topic]
    summary: Summary
    action_items: List[ActionItem] = Field(alias="actionItems")


class AnalyzeRequest(BaseModel):
    transcript: str
    api_key: str = Field(alias="apiKey")

    model_config = ConfigDict(populate_by_name=True)


class QuestionRequest(BaseModel):
    transcript: str
    question: str
    api_key: str = Field(alias="apiKey")

    model_config = ConfigDict(populate_by_name=True)


class AnswerResponse(BaseModel):
    answer: str


class ExportRequest(BaseModel):
    action_items: List[ActionItem] = Field(alias="actionItems")
    status: Optional[ActionItemStatus] = None
    urgency: Optional[ActionItemUrgency] = None
    assignee: str = ""

    model_config = ConfigDict(populate_by_name=True)


class StatusUpdateRequest(BaseModel):
    action_items: List[ActionItem] = Field(alias="actionItems")
    id: str
    status: ActionItemStatus

    model_config = ConfigDict(populate_by_name=True)
