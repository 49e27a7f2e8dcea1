"""Tests for load-then-autosave coordination and the save-status machine."""

import asyncio

import httpx
import pytest

from studytext.client.api_client import StudyTextClient
from studytext.client.persistence import PersistenceCoordinator, SaveStatus
from studytext.client.timers import VirtualScheduler
from studytext.domain.common.value_objects import MasteryLevel
from studytext.domain.reading.entities.study_document import CompositeStudyDocument
from studytext.domain.reading.entities.text_annotation import TextAnnotation
from studytext.exceptions import NetworkError


LOAD_SAVE_ERRORS = [
    pytest.param(NetworkError("offline", status_code=502), id="network"),
    pytest.param(RuntimeError("unexpected"), id="unexpected"),
]


class FakeStore:
    """In-memory store; with hold=True every save waits until the test resolves it."""

    def __init__(
        self,
        document: CompositeStudyDocument | None = None,
        load_error: Exception | None = None,
        save_error: Exception | None = None,
        hold: bool = False,
    ) -> None:
        self.document = document
        self.load_error = load_error
        self.save_error = save_error
        self.hold = hold
        self.load_calls = 0
        self.saved: list[CompositeStudyDocument] = []
        self.in_flight: list[asyncio.Future[None]] = []

    async def load_study_document(
        self, student_id: str, summary_id: str
    ) -> CompositeStudyDocument | None:
        self.load_calls += 1
        if self.load_error:
            raise self.load_error
        return self.document

    async def save_study_document(
        self, student_id: str, summary_id: str, document: CompositeStudyDocument
    ) -> CompositeStudyDocument:
        self.saved.append(document)
        if self.hold:
            future: asyncio.Future[None] = asyncio.get_running_loop().create_future()
            self.in_flight.append(future)
            await future
        if self.save_error:
            raise self.save_error
        return document


class FakeSource:
    def __init__(self) -> None:
        self.elapsed_seconds = 0
        self.merged: list[CompositeStudyDocument] = []

    def snapshot(self) -> CompositeStudyDocument:
        return CompositeStudyDocument(elapsed_seconds=self.elapsed_seconds)

    def merge(self, document: CompositeStudyDocument) -> None:
        self.merged.append(document)


async def _settle() -> None:
    for _ in range(5):
        await asyncio.sleep(0)


def _coordinator(
    store: FakeStore | StudyTextClient, source: FakeSource, scheduler: VirtualScheduler
) -> PersistenceCoordinator:
    return PersistenceCoordinator(
        store,
        source,
        scheduler,
        "student-001",
        "summary-1",
        debounce_seconds=2.0,
        saved_display_seconds=2.0,
        error_display_seconds=3.0,
    )


@pytest.fixture
def scheduler() -> VirtualScheduler:
    return VirtualScheduler()


@pytest.fixture
def source() -> FakeSource:
    return FakeSource()


class TestMount:
    @pytest.mark.asyncio
    async def test_mount_loads_once_and_merges(
        self, scheduler: VirtualScheduler, source: FakeSource
    ) -> None:
        stored = CompositeStudyDocument(
            annotations=[TextAnnotation.create("femur")],
            keyword_mastery={"femur": MasteryLevel.RED},
            elapsed_seconds=60,
        )
        store = FakeStore(document=stored)
        coordinator = _coordinator(store, source, scheduler)

        await coordinator.mount()
        await coordinator.mount()

        assert store.load_calls == 1
        assert source.merged == [stored]
        assert coordinator.loaded

    @pytest.mark.asyncio
    async def test_nothing_stored_is_not_merged(
        self, scheduler: VirtualScheduler, source: FakeSource
    ) -> None:
        coordinator = _coordinator(FakeStore(), source, scheduler)

        await coordinator.mount()

        assert source.merged == []
        assert coordinator.loaded

    @pytest.mark.asyncio
    @pytest.mark.parametrize("error", LOAD_SAVE_ERRORS)
    async def test_load_failure_counts_as_no_prior_data(
        self, scheduler: VirtualScheduler, source: FakeSource, error: Exception
    ) -> None:
        store = FakeStore(load_error=error)
        coordinator = _coordinator(store, source, scheduler)

        await coordinator.mount()

        assert source.merged == []
        assert coordinator.loaded
        assert coordinator.status is SaveStatus.IDLE

        coordinator.notify_changed()
        assert coordinator.autosave_armed

    @pytest.mark.asyncio
    async def test_no_autosave_before_load_completes(
        self, scheduler: VirtualScheduler, source: FakeSource
    ) -> None:
        store = FakeStore()
        coordinator = _coordinator(store, source, scheduler)

        coordinator.notify_changed()
        scheduler.advance(10)
        await _settle()

        assert store.saved == []
        assert not coordinator.autosave_armed

        await coordinator.mount()
        coordinator.notify_changed()

        assert coordinator.autosave_armed


class TestAutosave:
    @pytest.mark.asyncio
    async def test_debounce_restarts_on_each_change(
        self, scheduler: VirtualScheduler, source: FakeSource
    ) -> None:
        store = FakeStore()
        coordinator = _coordinator(store, source, scheduler)
        await coordinator.mount()

        coordinator.notify_changed()
        scheduler.advance(1.5)
        coordinator.notify_changed()
        scheduler.advance(1.5)
        await _settle()
        assert store.saved == []

        scheduler.advance(0.5)
        await coordinator.drain()

        assert len(store.saved) == 1

    @pytest.mark.asyncio
    async def test_save_sends_snapshot_at_fire_time(
        self, scheduler: VirtualScheduler, source: FakeSource
    ) -> None:
        store = FakeStore()
        coordinator = _coordinator(store, source, scheduler)
        await coordinator.mount()

        coordinator.notify_changed()
        source.elapsed_seconds = 42
        scheduler.advance(2)
        await coordinator.drain()

        assert store.saved[0].elapsed_seconds == 42

    @pytest.mark.asyncio
    async def test_status_goes_saving_saved_idle(
        self, scheduler: VirtualScheduler, source: FakeSource
    ) -> None:
        coordinator = _coordinator(FakeStore(), source, scheduler)
        transitions: list[SaveStatus] = []
        coordinator.add_status_listener(transitions.append)
        await coordinator.mount()

        coordinator.notify_changed()
        scheduler.advance(2)
        assert coordinator.status is SaveStatus.SAVING

        await coordinator.drain()
        assert coordinator.status is SaveStatus.SAVED

        scheduler.advance(1.5)
        assert coordinator.status is SaveStatus.SAVED
        scheduler.advance(0.5)
        assert coordinator.status is SaveStatus.IDLE

        assert transitions == [SaveStatus.SAVING, SaveStatus.SAVED, SaveStatus.IDLE]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("error", LOAD_SAVE_ERRORS)
    async def test_failed_save_shows_error_then_idle_without_retry(
        self, scheduler: VirtualScheduler, source: FakeSource, error: Exception
    ) -> None:
        store = FakeStore(save_error=error)
        coordinator = _coordinator(store, source, scheduler)
        await coordinator.mount()

        coordinator.notify_changed()
        scheduler.advance(2)
        await coordinator.drain()
        assert coordinator.status is SaveStatus.ERROR

        scheduler.advance(2.5)
        assert coordinator.status is SaveStatus.ERROR
        scheduler.advance(0.5)
        assert coordinator.status is SaveStatus.IDLE

        scheduler.advance(30)
        await _settle()
        assert len(store.saved) == 1

    @pytest.mark.asyncio
    async def test_next_change_after_failure_tries_again(
        self, scheduler: VirtualScheduler, source: FakeSource
    ) -> None:
        store = FakeStore(save_error=NetworkError("boom"))
        coordinator = _coordinator(store, source, scheduler)
        await coordinator.mount()

        coordinator.notify_changed()
        scheduler.advance(2)
        await coordinator.drain()

        store.save_error = None
        coordinator.notify_changed()
        scheduler.advance(2)
        await coordinator.drain()

        assert len(store.saved) == 2
        assert coordinator.status is SaveStatus.SAVED


class TestOverlappingSaves:
    @pytest.mark.asyncio
    async def test_stale_success_does_not_override_newer_save(
        self, scheduler: VirtualScheduler, source: FakeSource
    ) -> None:
        store = FakeStore(hold=True)
        coordinator = _coordinator(store, source, scheduler)
        await coordinator.mount()

        coordinator.notify_changed()
        scheduler.advance(2)
        await _settle()
        coordinator.notify_changed()
        scheduler.advance(2)
        await _settle()
        assert len(store.in_flight) == 2

        store.in_flight[0].set_result(None)
        await _settle()
        assert coordinator.status is SaveStatus.SAVING

        store.in_flight[1].set_result(None)
        await coordinator.drain()
        assert coordinator.status is SaveStatus.SAVED

    @pytest.mark.asyncio
    async def test_stale_failure_does_not_override_newer_success(
        self, scheduler: VirtualScheduler, source: FakeSource
    ) -> None:
        store = FakeStore(hold=True)
        coordinator = _coordinator(store, source, scheduler)
        await coordinator.mount()

        coordinator.notify_changed()
        scheduler.advance(2)
        await _settle()
        coordinator.notify_changed()
        scheduler.advance(2)
        await _settle()

        store.in_flight[1].set_result(None)
        await _settle()
        assert coordinator.status is SaveStatus.SAVED

        store.in_flight[0].set_exception(NetworkError("late failure"))
        await coordinator.drain()
        assert coordinator.status is SaveStatus.SAVED

    @pytest.mark.asyncio
    async def test_revert_timer_of_older_save_does_not_reset_newer_status(
        self, scheduler: VirtualScheduler, source: FakeSource
    ) -> None:
        store = FakeStore()
        coordinator = PersistenceCoordinator(
            store,
            source,
            scheduler,
            "student-001",
            "summary-1",
            debounce_seconds=1.0,
            saved_display_seconds=2.0,
        )
        await coordinator.mount()

        coordinator.notify_changed()
        scheduler.advance(1)
        await coordinator.drain()
        assert coordinator.status is SaveStatus.SAVED

        # Next save starts inside the "saved" display window and stays in flight
        store.hold = True
        coordinator.notify_changed()
        scheduler.advance(1)
        await _settle()
        assert coordinator.status is SaveStatus.SAVING

        scheduler.advance(5)
        assert coordinator.status is SaveStatus.SAVING

        store.in_flight[0].set_result(None)
        await coordinator.drain()
        assert coordinator.status is SaveStatus.SAVED


class TestUnmount:
    @pytest.mark.asyncio
    async def test_unmount_mid_debounce_saves_exactly_once(
        self, scheduler: VirtualScheduler, source: FakeSource
    ) -> None:
        store = FakeStore()
        coordinator = _coordinator(store, source, scheduler)
        await coordinator.mount()

        coordinator.notify_changed()
        scheduler.advance(1)
        task = coordinator.unmount()
        assert task is not None
        await task

        scheduler.advance(10)
        await _settle()

        assert len(store.saved) == 1
        assert coordinator.status is SaveStatus.IDLE

    @pytest.mark.asyncio
    @pytest.mark.parametrize("error", LOAD_SAVE_ERRORS)
    async def test_unmount_ignores_failure_and_keeps_status(
        self, scheduler: VirtualScheduler, source: FakeSource, error: Exception
    ) -> None:
        store = FakeStore(save_error=error)
        coordinator = _coordinator(store, source, scheduler)
        await coordinator.mount()

        task = coordinator.unmount()
        assert task is not None
        await task
        assert task.exception() is None

        assert len(store.saved) == 1
        assert coordinator.status is SaveStatus.IDLE

    @pytest.mark.asyncio
    async def test_unmount_twice_saves_once(
        self, scheduler: VirtualScheduler, source: FakeSource
    ) -> None:
        store = FakeStore()
        coordinator = _coordinator(store, source, scheduler)
        await coordinator.mount()

        first = coordinator.unmount()
        second = coordinator.unmount()
        assert first is not None
        await first

        assert second is None
        assert len(store.saved) == 1

    @pytest.mark.asyncio
    async def test_unmount_before_load_does_not_save(
        self, scheduler: VirtualScheduler, source: FakeSource
    ) -> None:
        store = FakeStore()
        coordinator = _coordinator(store, source, scheduler)

        assert coordinator.unmount() is None
        await _settle()
        assert store.saved == []

    @pytest.mark.asyncio
    async def test_changes_after_unmount_are_ignored(
        self, scheduler: VirtualScheduler, source: FakeSource
    ) -> None:
        store = FakeStore()
        coordinator = _coordinator(store, source, scheduler)
        await coordinator.mount()
        task = coordinator.unmount()
        assert task is not None
        await task

        coordinator.notify_changed()
        scheduler.advance(5)
        await _settle()

        assert len(store.saved) == 1


class TestWithHttpClient:
    @pytest.mark.asyncio
    async def test_maintenance_page_degrades_to_empty_document(
        self, scheduler: VirtualScheduler, source: FakeSource
    ) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                200, text="<html>maintenance</html>", headers={"content-type": "text/html"}
            )

        client = StudyTextClient("http://testserver", transport=httpx.MockTransport(handler))
        coordinator = _coordinator(client, source, scheduler)

        await coordinator.mount()
        assert coordinator.loaded
        assert source.merged == []

        coordinator.notify_changed()
        scheduler.advance(2)
        await coordinator.drain()
        assert coordinator.status is SaveStatus.ERROR

        scheduler.advance(3)
        assert coordinator.status is SaveStatus.IDLE
        await client.close()
