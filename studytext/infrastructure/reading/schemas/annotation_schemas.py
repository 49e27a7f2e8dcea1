"""Pydantic schemas for server-side annotation request/response validation."""

from datetime import datetime

from pydantic import BaseModel, Field

from studytext.domain.common.value_objects import AnnotationColor, AnnotationKind


class AnnotationCreateRequest(BaseModel):
    """Schema for creating an annotation record on a summary."""

    student_id: str = Field(..., min_length=1, max_length=255, description="Owning student")
    original_text: str = Field(..., min_length=1, description="Exact annotated text")
    display_text: str | None = Field(
        None, description="Text shown in side panels (derived from original_text if missing)"
    )
    color: AnnotationColor | None = Field(None, description="Highlighter color")
    note: str | None = Field(None, description="Note or question body")
    type: AnnotationKind | None = Field(None, description="highlight, note or question")
    bot_reply: str | None = Field(None, description="Assistant reply to a question")


class AnnotationUpdateRequest(BaseModel):
    """Schema for a partial annotation update. Omitted fields are unchanged."""

    display_text: str | None = Field(None, min_length=1)
    color: AnnotationColor | None = None
    note: str | None = None
    type: AnnotationKind | None = None
    bot_reply: str | None = None


class Annotation(BaseModel):
    """Schema for an annotation record response."""

    id: int
    student_id: str
    summary_id: str
    original_text: str
    display_text: str
    color: AnnotationColor
    note: str
    type: AnnotationKind
    bot_reply: str | None = None
    created_at: datetime
    updated_at: datetime
    deleted_at: datetime | None = Field(None, description="Tombstone; set when soft-deleted")


class AnnotationsResponse(BaseModel):
    """Schema for the list of active annotations on a summary."""

    annotations: list[Annotation] = Field(default_factory=list)
