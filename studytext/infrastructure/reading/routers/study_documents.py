import logging

from fastapi import APIRouter, Depends, HTTPException
from starlette import status

from studytext.application.reading.use_cases.study_documents import (
    GetStudyDocumentUseCase,
    SaveStudyDocumentUseCase,
)
from studytext.core import container
from studytext.domain.reading.entities.study_document import (
    CompositeStudyDocument,
    StudyDocument,
)
from studytext.exceptions import StudyTextError
from studytext.infrastructure.common.di import inject_use_case
from studytext.infrastructure.reading.schemas import (
    StudyDocumentPayload,
    StudyDocumentResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/students", tags=["study-documents"])


def _to_schema(document: StudyDocument) -> StudyDocumentResponse:
    return StudyDocumentResponse.model_validate(
        {
            **document.content.to_json(),
            "student_id": document.student_id.value,
            "summary_id": document.summary_id.value,
            "updated_at": document.updated_at,
        }
    )


@router.get(
    "/{student_id}/summaries/{summary_id}/study-document",
    response_model=StudyDocumentResponse,
    status_code=status.HTTP_200_OK,
)
def get_study_document(
    student_id: str,
    summary_id: str,
    use_case: GetStudyDocumentUseCase = Depends(
        inject_use_case(container.get_study_document_use_case)
    ),
) -> StudyDocumentResponse:
    """
    Get the study document saved for a student and summary.

    Returns 404 when nothing has been saved yet.
    """
    try:
        return _to_schema(use_case.get_document(student_id, summary_id))
    except StudyTextError:
        # Re-raise custom exceptions - handled by exception handlers
        raise
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    except Exception as e:
        logger.error(
            f"Failed to get study document for student {student_id}, summary {summary_id}: {e!s}",
            exc_info=True,
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e


@router.put(
    "/{student_id}/summaries/{summary_id}/study-document",
    response_model=StudyDocumentResponse,
    status_code=status.HTTP_200_OK,
)
def save_study_document(
    student_id: str,
    summary_id: str,
    request: StudyDocumentPayload,
    use_case: SaveStudyDocumentUseCase = Depends(
        inject_use_case(container.save_study_document_use_case)
    ),
) -> StudyDocumentResponse:
    """
    Save the study document for a student and summary.

    Creates the document on first save and replaces it wholesale afterwards.

    Args:
        student_id: ID of the student
        summary_id: ID of the summary
        request: Full document content
        use_case: SaveStudyDocumentUseCase injected via dependency container

    Returns:
        The stored document
    """
    try:
        content = CompositeStudyDocument.from_json(request.model_dump(mode="json"))
        return _to_schema(use_case.save_document(student_id, summary_id, content))
    except StudyTextError:
        # Re-raise custom exceptions - handled by exception handlers
        raise
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    except Exception as e:
        logger.error(
            f"Failed to save study document for student {student_id}, summary {summary_id}: {e!s}",
            exc_info=True,
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e
