import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query
from starlette import status

from studytext.application.reading.use_cases.annotations import (
    AnnotationPatch,
    CreateAnnotationUseCase,
    GetActiveAnnotationsUseCase,
    RestoreAnnotationUseCase,
    SoftDeleteAnnotationUseCase,
    UpdateAnnotationUseCase,
)
from studytext.core import container
from studytext.domain.reading.entities.persisted_annotation import PersistedAnnotation
from studytext.domain.reading.exceptions import (
    AnnotationAlreadyDeletedError,
    AnnotationDeletedError,
    AnnotationNotDeletedError,
    DomainError,
)
from studytext.domain.reading.exceptions import ValidationError as DomainValidationError
from studytext.exceptions import StudyTextError
from studytext.infrastructure.common.di import inject_use_case
from studytext.infrastructure.reading.schemas import (
    Annotation,
    AnnotationCreateRequest,
    AnnotationsResponse,
    AnnotationUpdateRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["annotations"])


def _to_schema(annotation: PersistedAnnotation) -> Annotation:
    return Annotation(
        id=annotation.id.value,
        student_id=annotation.student_id.value,
        summary_id=annotation.summary_id.value,
        original_text=annotation.original_text,
        display_text=annotation.display_text,
        color=annotation.color,
        note=annotation.note,
        type=annotation.kind,
        bot_reply=annotation.bot_reply,
        created_at=annotation.created_at,
        updated_at=annotation.updated_at,
        deleted_at=annotation.deleted_at,
    )


def _unexpected_error() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="An unexpected error occurred. Please try again later.",
    )


@router.get(
    "/summaries/{summary_id}/annotations",
    response_model=AnnotationsResponse,
    status_code=status.HTTP_200_OK,
)
def get_annotations(
    summary_id: str,
    student_id: Annotated[str, Query(min_length=1, description="Owning student")],
    use_case: GetActiveAnnotationsUseCase = Depends(
        inject_use_case(container.get_active_annotations_use_case)
    ),
) -> AnnotationsResponse:
    """
    Get the student's active annotations on a summary.

    Soft-deleted annotations are excluded. Results are ordered by
    creation time, oldest first.

    Args:
        summary_id: ID of the summary
        student_id: ID of the student owning the annotations
        use_case: GetActiveAnnotationsUseCase injected via dependency container

    Returns:
        List of active annotations

    Raises:
        HTTPException: If fetching fails
    """
    try:
        annotations = use_case.list_active(student_id, summary_id)
        return AnnotationsResponse(annotations=[_to_schema(a) for a in annotations])
    except StudyTextError:
        # Re-raise custom exceptions - handled by exception handlers
        raise
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    except Exception as e:
        logger.error(f"Failed to get annotations for summary {summary_id}: {e!s}", exc_info=True)
        raise _unexpected_error() from e


@router.post(
    "/summaries/{summary_id}/annotations",
    response_model=Annotation,
    status_code=status.HTTP_201_CREATED,
)
def create_annotation(
    summary_id: str,
    request: AnnotationCreateRequest,
    use_case: CreateAnnotationUseCase = Depends(
        inject_use_case(container.create_annotation_use_case)
    ),
) -> Annotation:
    """
    Create an annotation record on a summary.

    Args:
        summary_id: ID of the summary
        request: Annotation fields; only student_id and original_text are required
        use_case: CreateAnnotationUseCase injected via dependency container

    Returns:
        Created annotation

    Raises:
        HTTPException: If validation or creation fails
    """
    try:
        annotation = use_case.create_annotation(
            student_id=request.student_id,
            summary_id=summary_id,
            original_text=request.original_text,
            display_text=request.display_text,
            color=request.color,
            note=request.note,
            kind=request.type,
            bot_reply=request.bot_reply,
        )
        return _to_schema(annotation)
    except StudyTextError:
        # Re-raise custom exceptions - handled by exception handlers
        raise
    except DomainValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=e.message
        ) from e
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    except Exception as e:
        logger.error(f"Failed to create annotation for summary {summary_id}: {e!s}", exc_info=True)
        raise _unexpected_error() from e


@router.put(
    "/annotations/{annotation_id}",
    response_model=Annotation,
    status_code=status.HTTP_200_OK,
)
def update_annotation(
    annotation_id: int,
    request: AnnotationUpdateRequest,
    use_case: UpdateAnnotationUseCase = Depends(
        inject_use_case(container.update_annotation_use_case)
    ),
) -> Annotation:
    """
    Partially update an annotation.

    Returns 404 for unknown ids and 410 for soft-deleted annotations.
    """
    try:
        annotation = use_case.update_annotation(
            annotation_id,
            AnnotationPatch(
                note=request.note,
                color=request.color,
                kind=request.type,
                bot_reply=request.bot_reply,
                display_text=request.display_text,
            ),
        )
        return _to_schema(annotation)
    except StudyTextError:
        # Re-raise custom exceptions - handled by exception handlers
        raise
    except AnnotationDeletedError as e:
        raise HTTPException(status_code=status.HTTP_410_GONE, detail=str(e)) from e
    except DomainError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    except Exception as e:
        logger.error(f"Failed to update annotation {annotation_id}: {e!s}", exc_info=True)
        raise _unexpected_error() from e


@router.patch(
    "/annotations/{annotation_id}/soft-delete",
    response_model=Annotation,
    status_code=status.HTTP_200_OK,
)
def soft_delete_annotation(
    annotation_id: int,
    use_case: SoftDeleteAnnotationUseCase = Depends(
        inject_use_case(container.soft_delete_annotation_use_case)
    ),
) -> Annotation:
    """
    Soft delete an annotation.

    The record is tombstoned, not removed, so it can be restored later.
    Deleting an already-deleted annotation returns 409.
    """
    try:
        return _to_schema(use_case.soft_delete(annotation_id))
    except StudyTextError:
        # Re-raise custom exceptions - handled by exception handlers
        raise
    except AnnotationAlreadyDeletedError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e)) from e
    except DomainError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    except Exception as e:
        logger.error(f"Failed to soft delete annotation {annotation_id}: {e!s}", exc_info=True)
        raise _unexpected_error() from e


@router.patch(
    "/annotations/{annotation_id}/restore",
    response_model=Annotation,
    status_code=status.HTTP_200_OK,
)
def restore_annotation(
    annotation_id: int,
    use_case: RestoreAnnotationUseCase = Depends(
        inject_use_case(container.restore_annotation_use_case)
    ),
) -> Annotation:
    """
    Restore a soft-deleted annotation.

    Restoring an annotation that is not deleted returns 400.
    """
    try:
        return _to_schema(use_case.restore(annotation_id))
    except StudyTextError:
        # Re-raise custom exceptions - handled by exception handlers
        raise
    except AnnotationNotDeletedError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    except DomainError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    except Exception as e:
        logger.error(f"Failed to restore annotation {annotation_id}: {e!s}", exc_info=True)
        raise _unexpected_error() from e
