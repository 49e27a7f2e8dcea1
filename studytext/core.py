from dependency_injector import containers, providers
from sqlalchemy.orm import Session

from studytext.application.reading.use_cases.annotations.create_annotation_use_case import (
    CreateAnnotationUseCase,
)
from studytext.application.reading.use_cases.annotations.get_active_annotations_use_case import (
    GetActiveAnnotationsUseCase,
)
from studytext.application.reading.use_cases.annotations.restore_annotation_use_case import (
    RestoreAnnotationUseCase,
)
from studytext.application.reading.use_cases.annotations.soft_delete_annotation_use_case import (
    SoftDeleteAnnotationUseCase,
)
from studytext.application.reading.use_cases.annotations.update_annotation_use_case import (
    UpdateAnnotationUseCase,
)
from studytext.application.reading.use_cases.study_documents.get_study_document_use_case import (
    GetStudyDocumentUseCase,
)
from studytext.application.reading.use_cases.study_documents.save_study_document_use_case import (
    SaveStudyDocumentUseCase,
)
from studytext.infrastructure.reading.repositories import (
    AnnotationRepository,
    StudyDocumentRepository,
)


class Container(containers.DeclarativeContainer):
    """Dependency injection container."""

    # Request-scoped session, overridden per request by inject_use_case
    db = providers.Dependency(instance_of=Session)

    # Repositories
    annotation_repository = providers.Factory(AnnotationRepository, db=db)
    study_document_repository = providers.Factory(StudyDocumentRepository, db=db)

    # Reading module, annotation use cases
    create_annotation_use_case = providers.Factory(
        CreateAnnotationUseCase,
        annotation_repository=annotation_repository,
    )
    get_active_annotations_use_case = providers.Factory(
        GetActiveAnnotationsUseCase,
        annotation_repository=annotation_repository,
    )
    update_annotation_use_case = providers.Factory(
        UpdateAnnotationUseCase,
        annotation_repository=annotation_repository,
    )
    soft_delete_annotation_use_case = providers.Factory(
        SoftDeleteAnnotationUseCase,
        annotation_repository=annotation_repository,
    )
    restore_annotation_use_case = providers.Factory(
        RestoreAnnotationUseCase,
        annotation_repository=annotation_repository,
    )

    # Reading module, study document use cases
    get_study_document_use_case = providers.Factory(
        GetStudyDocumentUseCase,
        study_document_repository=study_document_repository,
    )
    save_study_document_use_case = providers.Factory(
        SaveStudyDocumentUseCase,
        study_document_repository=study_document_repository,
    )


container = Container()
