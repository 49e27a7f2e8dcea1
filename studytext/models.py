"""Database models."""

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, DateTime, Index, Integer, String, Text, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column

from studytext.database import Base


class TextAnnotation(Base):
    """Text annotation anchored to a summary. Rows are tombstoned, never deleted."""

    __tablename__ = "text_annotations"
    __table_args__ = (
        Index("ix_text_annotations_student_summary", "student_id", "summary_id"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    student_id: Mapped[str] = mapped_column(String(255), nullable=False)
    summary_id: Mapped[str] = mapped_column(String(255), nullable=False)
    original_text: Mapped[str] = mapped_column(Text, nullable=False)
    display_text: Mapped[str] = mapped_column(Text, nullable=False)
    color: Mapped[str] = mapped_column(String(20), nullable=False, default="yellow")
    note: Mapped[str] = mapped_column(Text, nullable=False, default="")
    type: Mapped[str] = mapped_column(String(20), nullable=False, default="highlight")
    bot_reply: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )
    deleted_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    def __repr__(self) -> str:
        """String representation of TextAnnotation."""
        return f"<TextAnnotation(id={self.id}, text='{self.original_text[:50]}...')>"


class StudyDocument(Base):
    """Composite study document saved per student and summary."""

    __tablename__ = "study_documents"
    __table_args__ = (
        UniqueConstraint("student_id", "summary_id", name="uq_study_documents_student_summary"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    student_id: Mapped[str] = mapped_column(String(255), nullable=False)
    summary_id: Mapped[str] = mapped_column(String(255), nullable=False)
    annotations: Mapped[list[dict[str, Any]]] = mapped_column(JSON, nullable=False, default=list)
    keyword_mastery: Mapped[dict[str, str]] = mapped_column(JSON, nullable=False, default=dict)
    personal_notes: Mapped[dict[str, list[str]]] = mapped_column(
        JSON, nullable=False, default=dict
    )
    elapsed_seconds: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    def __repr__(self) -> str:
        """String representation of StudyDocument."""
        return (
            f"<StudyDocument(id={self.id}, student_id='{self.student_id}', "
            f"summary_id='{self.summary_id}')>"
        )
