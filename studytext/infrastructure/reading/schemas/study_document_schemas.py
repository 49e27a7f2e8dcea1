"""Pydantic schemas for the composite study document."""

from datetime import datetime

from pydantic import BaseModel, Field

from studytext.domain.common.value_objects import MasteryLevel


class StudyAnnotation(BaseModel):
    """Client-side annotation as stored inside a study document."""

    id: str = Field(..., min_length=1)
    original_text: str = Field(..., min_length=1)
    display_text: str
    color: str = "yellow"
    note: str = ""
    type: str = "highlight"
    bot_reply: str | None = None
    created_at: datetime | None = None


class StudyDocumentPayload(BaseModel):
    """Schema for saving a study document. The payload replaces any stored one."""

    annotations: list[StudyAnnotation] = Field(default_factory=list)
    keyword_mastery: dict[str, MasteryLevel] = Field(default_factory=dict)
    personal_notes: dict[str, list[str]] = Field(default_factory=dict)
    elapsed_seconds: int = Field(0, ge=0, description="Total study time in seconds")


class StudyDocumentResponse(StudyDocumentPayload):
    """Schema for a stored study document."""

    student_id: str
    summary_id: str
    updated_at: datetime
