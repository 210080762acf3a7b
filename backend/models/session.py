"""Workflow session model: one user's trip from content input to export"""
from datetime import datetime
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field
import uuid

from models.content import ContentAnalysis, ContentInput


class WorkflowStep(str, Enum):
    INPUT = "input"
    PROCESSING = "processing"
    PREVIEW = "preview"
    EDITING = "editing"
    EXPORT = "export"


class WorkflowSession(BaseModel):
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    step: WorkflowStep = WorkflowStep.INPUT
    content: Optional[ContentInput] = None
    analysis: Optional[ContentAnalysis] = None
    selected_suggestion_id: Optional[str] = None
    theme_id: str = "professional"
    error: Optional[str] = None
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    def touch(self) -> None:
        self.updated_at = datetime.utcnow()


class ExportResult(BaseModel):
    session_id: str
    format: str
    media_type: str
    content: str
