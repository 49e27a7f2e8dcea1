"""
Load-then-autosave coordination for a study document.

On mount the stored document is loaded once and merged into the session.
Only after that load has finished does any change arm the autosave
debounce. Every autosave carries a sequence number and only the most
recently started save may change the reported status.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Coroutine
from enum import StrEnum
from typing import Any, Protocol

import structlog

from studytext.client.timers import Scheduler, TimerHandle
from studytext.domain.reading.entities.study_document import CompositeStudyDocument
from studytext.exceptions import StudyTextError

logger = structlog.get_logger(__name__)


class SaveStatus(StrEnum):
    IDLE = "idle"
    SAVING = "saving"
    SAVED = "saved"
    ERROR = "error"


class StudyDocumentStore(Protocol):
    """Remote storage for composite study documents."""

    async def load_study_document(
        self, student_id: str, summary_id: str
    ) -> CompositeStudyDocument | None: ...

    async def save_study_document(
        self, student_id: str, summary_id: str, document: CompositeStudyDocument
    ) -> object: ...


class DocumentSource(Protocol):
    """Session state the coordinator reads from and merges into."""

    def snapshot(self) -> CompositeStudyDocument: ...

    def merge(self, document: CompositeStudyDocument) -> None: ...


StatusListener = Callable[[SaveStatus], None]


class PersistenceCoordinator:
    """Debounced autosave of one (student, summary) study document."""

    def __init__(
        self,
        store: StudyDocumentStore,
        source: DocumentSource,
        scheduler: Scheduler,
        student_id: str,
        summary_id: str,
        *,
        debounce_seconds: float = 2.0,
        saved_display_seconds: float = 2.0,
        error_display_seconds: float = 3.0,
    ) -> None:
        self._store = store
        self._source = source
        self._scheduler = scheduler
        self.student_id = student_id
        self.summary_id = summary_id
        self._debounce_seconds = debounce_seconds
        self._saved_display_seconds = saved_display_seconds
        self._error_display_seconds = error_display_seconds

        self._status = SaveStatus.IDLE
        self._status_listeners: list[StatusListener] = []
        self._mount_started = False
        self._loaded = False
        self._unmounted = False
        self._sequence = 0
        self._debounce_handle: TimerHandle | None = None
        self._revert_handle: TimerHandle | None = None
        self._tasks: set[asyncio.Task[None]] = set()

    @property
    def status(self) -> SaveStatus:
        return self._status

    @property
    def loaded(self) -> bool:
        """True once the initial load has finished, successfully or not."""
        return self._loaded

    @property
    def autosave_armed(self) -> bool:
        return self._debounce_handle is not None

    def add_status_listener(self, listener: StatusListener) -> None:
        self._status_listeners.append(listener)

    async def mount(self) -> None:
        """
        Load the stored document once and merge it into the session.

        A failed load counts as "no prior data". Calling mount again is a
        no-op.
        """
        if self._mount_started:
            return
        self._mount_started = True

        try:
            document = await self._store.load_study_document(self.student_id, self.summary_id)
        except StudyTextError as e:
            logger.warning(
                "study_document_load_failed",
                student_id=self.student_id,
                summary_id=self.summary_id,
                error=e.message,
            )
            document = None
        except Exception as e:
            logger.error(
                "study_document_load_failed",
                student_id=self.student_id,
                summary_id=self.summary_id,
                error=str(e),
                exc_info=True,
            )
            document = None

        if self._unmounted:
            return
        if document is not None:
            self._source.merge(document)
        self._loaded = True
        logger.debug(
            "study_document_loaded",
            summary_id=self.summary_id,
            found=document is not None,
        )

    def notify_changed(self) -> None:
        """(Re)arm the autosave debounce. Ignored until the initial load is done."""
        if not self._loaded or self._unmounted:
            return
        if self._debounce_handle is not None:
            self._debounce_handle.cancel()
        self._debounce_handle = self._scheduler.call_later(
            self._debounce_seconds, self._on_debounce_elapsed
        )

    def unmount(self) -> asyncio.Task[None] | None:
        """
        Stop autosaving and fire one final save without waiting for it.

        The final save's outcome is ignored and never changes the status.
        Nothing is saved if the initial load never finished.

        Returns:
            The final save task, or None if no save was issued
        """
        if self._unmounted:
            return None
        self._unmounted = True

        if self._debounce_handle is not None:
            self._debounce_handle.cancel()
            self._debounce_handle = None
        self._cancel_revert()

        if not self._loaded:
            return None
        return self._spawn(self._final_save(self._source.snapshot()))

    async def drain(self) -> None:
        """Wait for every save that is still in flight."""
        while self._tasks:
            await asyncio.gather(*self._tasks, return_exceptions=True)

    def _on_debounce_elapsed(self) -> None:
        self._debounce_handle = None
        self._sequence += 1
        sequence = self._sequence

        self._cancel_revert()
        self._set_status(SaveStatus.SAVING)
        self._spawn(self._save(sequence, self._source.snapshot()))

    async def _save(self, sequence: int, document: CompositeStudyDocument) -> None:
        try:
            await self._store.save_study_document(self.student_id, self.summary_id, document)
        except StudyTextError as e:
            logger.error(
                "autosave_failed",
                student_id=self.student_id,
                summary_id=self.summary_id,
                sequence=sequence,
                error=e.message,
            )
            self._finish(sequence, SaveStatus.ERROR, self._error_display_seconds)
            return
        except Exception as e:
            logger.error(
                "autosave_failed",
                student_id=self.student_id,
                summary_id=self.summary_id,
                sequence=sequence,
                error=str(e),
                exc_info=True,
            )
            self._finish(sequence, SaveStatus.ERROR, self._error_display_seconds)
            return

        logger.debug("autosaved_study_document", summary_id=self.summary_id, sequence=sequence)
        self._finish(sequence, SaveStatus.SAVED, self._saved_display_seconds)

    async def _final_save(self, document: CompositeStudyDocument) -> None:
        try:
            await self._store.save_study_document(self.student_id, self.summary_id, document)
        except StudyTextError as e:
            logger.info("final_save_failed", summary_id=self.summary_id, error=e.message)
        except Exception as e:
            logger.warning(
                "final_save_failed", summary_id=self.summary_id, error=str(e), exc_info=True
            )

    def _finish(self, sequence: int, status: SaveStatus, display_seconds: float) -> None:
        # A newer save owns the status now
        if sequence != self._sequence or self._unmounted:
            return
        self._set_status(status)
        self._revert_handle = self._scheduler.call_later(display_seconds, self._revert_to_idle)

    def _revert_to_idle(self) -> None:
        self._revert_handle = None
        self._set_status(SaveStatus.IDLE)

    def _cancel_revert(self) -> None:
        if self._revert_handle is not None:
            self._revert_handle.cancel()
            self._revert_handle = None

    def _set_status(self, status: SaveStatus) -> None:
        if status is self._status:
            return
        self._status = status
        for listener in list(self._status_listeners):
            listener(status)

    def _spawn(self, coro: Coroutine[Any, Any, None]) -> asyncio.Task[None]:
        task = asyncio.get_running_loop().create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task
