"""Client-side study session: annotations, autosave and the API client."""

from studytext.client.annotation_manager import (
    AnchorRect,
    AnnotationLifecycleManager,
    PendingAnnotation,
)
from studytext.client.api_client import StudyTextClient
from studytext.client.persistence import PersistenceCoordinator, SaveStatus
from studytext.client.session import RenderedSpan, StudySession
from studytext.client.timers import AsyncioScheduler, Scheduler, TimerHandle, VirtualScheduler

__all__ = [
    "AnchorRect",
    "AnnotationLifecycleManager",
    "AsyncioScheduler",
    "PendingAnnotation",
    "PersistenceCoordinator",
    "RenderedSpan",
    "SaveStatus",
    "Scheduler",
    "StudySession",
    "StudyTextClient",
    "TimerHandle",
    "VirtualScheduler",
]
