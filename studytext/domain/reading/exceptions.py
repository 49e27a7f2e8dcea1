"""Domain errors raised by reading entities and use cases.

Routers translate these into HTTP responses; nothing here knows about
status codes.
"""


class DomainError(Exception):
    """A business rule was violated."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(DomainError):
    """An entity was given a value it cannot hold, e.g. empty annotated text."""

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


class AnnotationDeletedError(DomainError):
    """Raised when mutating an annotation that has been soft-deleted."""

    def __init__(self, annotation_id: int) -> None:
        super().__init__(f"Annotation {annotation_id} is deleted")
        self.annotation_id = annotation_id


class AnnotationAlreadyDeletedError(DomainError):
    """Raised when soft-deleting an annotation that is already deleted."""

    def __init__(self, annotation_id: int) -> None:
        super().__init__(f"Annotation {annotation_id} is already deleted")
        self.annotation_id = annotation_id


class AnnotationNotDeletedError(DomainError):
    """Raised when restoring an annotation that is not deleted."""

    def __init__(self, annotation_id: int) -> None:
        super().__init__(f"Annotation {annotation_id} is not deleted")
        self.annotation_id = annotation_id
