"""Custom exception hierarchy for the studytext application."""


class StudyTextError(Exception):
    """Base exception for all studytext errors."""

    def __init__(self, message: str, status_code: int = 500) -> None:
        """Initialize exception with message and optional status code."""
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class NotFoundError(StudyTextError):
    """Resource not found error."""

    def __init__(self, message: str) -> None:
        """Initialize with message and 404 status code."""
        super().__init__(message, status_code=404)


class AnnotationNotFoundError(NotFoundError):
    """Annotation record not found error."""

    def __init__(self, annotation_id: int | None = None, *, message: str | None = None) -> None:
        """Initialize with annotation ID or custom message."""
        self.annotation_id = annotation_id
        if message:
            super().__init__(message)
        elif annotation_id is not None:
            super().__init__(f"Annotation with id {annotation_id} not found")
        else:
            super().__init__("Annotation not found")


class StudyDocumentNotFoundError(NotFoundError):
    """No study document saved yet for a student/summary pair."""

    def __init__(self, student_id: str, summary_id: str) -> None:
        """Initialize with the composite key that was looked up."""
        self.student_id = student_id
        self.summary_id = summary_id
        super().__init__(
            f"Study document for student {student_id} and summary {summary_id} not found"
        )


class ValidationError(StudyTextError):
    """Validation error."""

    def __init__(self, message: str, status_code: int = 422) -> None:
        """Initialize with message and 422 status code by default."""
        super().__init__(message, status_code=status_code)


class NetworkError(StudyTextError):
    """Transient failure talking to the remote store."""

    def __init__(self, message: str, status_code: int = 503) -> None:
        """Initialize with message and the status code that caused it."""
        super().__init__(message, status_code=status_code)
