"""studytext REST API client."""

from __future__ import annotations

import logging
from types import TracebackType
from typing import Any

import httpx

from studytext.config import Settings
from studytext.domain.reading.entities.study_document import CompositeStudyDocument
from studytext.exceptions import NetworkError, NotFoundError, StudyTextError

logger = logging.getLogger(__name__)


class StudyTextClient:
    """HTTP client for the studytext REST API.

    Transport and protocol failures, 5xx responses and undecodable study
    documents raise `NetworkError`. 404 raises `NotFoundError` and any
    other error status raises `StudyTextError`.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        api_prefix: str = "/api/v1",
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.api_prefix = api_prefix.rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self.base_url, timeout=timeout, transport=transport
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> StudyTextClient:
        return cls(
            settings.API_BASE_URL,
            timeout=settings.API_TIMEOUT_SECONDS,
            api_prefix=settings.API_V1_PREFIX,
        )

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()

    async def __aenter__(self) -> StudyTextClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.close()

    async def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        """Make an API request, translating failures into studytext exceptions."""
        try:
            response = await self._client.request(method, self.api_prefix + path, **kwargs)
        except httpx.HTTPError as e:
            logger.warning(f"{method} {path} failed: {e!s}")
            raise NetworkError(f"Could not reach {self.base_url}: {e!s}") from e

        if response.is_success:
            return response

        detail = _error_detail(response)
        if response.status_code >= 500:
            logger.warning(f"{method} {path} returned {response.status_code}: {detail}")
            raise NetworkError(detail, status_code=response.status_code)
        if response.status_code == 404:
            raise NotFoundError(detail)
        raise StudyTextError(detail, status_code=response.status_code)

    # --- Study document endpoints ---

    async def load_study_document(
        self, student_id: str, summary_id: str
    ) -> CompositeStudyDocument | None:
        """Load the saved study document, or None if nothing was saved yet."""
        try:
            response = await self._request(
                "GET", f"/students/{student_id}/summaries/{summary_id}/study-document"
            )
        except NotFoundError:
            return None
        return _decode_document(response)

    async def save_study_document(
        self, student_id: str, summary_id: str, document: CompositeStudyDocument
    ) -> CompositeStudyDocument:
        """Replace the stored study document with this one."""
        response = await self._request(
            "PUT",
            f"/students/{student_id}/summaries/{summary_id}/study-document",
            json=document.to_json(),
        )
        return _decode_document(response)

    # --- Annotation endpoints ---

    async def list_annotations(self, student_id: str, summary_id: str) -> list[dict]:
        """List the student's active annotations on a summary."""
        response = await self._request(
            "GET", f"/summaries/{summary_id}/annotations", params={"student_id": student_id}
        )
        return response.json()["annotations"]

    async def create_annotation(
        self,
        student_id: str,
        summary_id: str,
        original_text: str,
        **fields: Any,
    ) -> dict:
        """Create an annotation record. Extra fields: display_text, color, note, type, bot_reply."""
        payload = {"student_id": student_id, "original_text": original_text, **fields}
        response = await self._request(
            "POST", f"/summaries/{summary_id}/annotations", json=payload
        )
        return response.json()

    async def update_annotation(self, annotation_id: int, **fields: Any) -> dict:
        """Partially update an annotation record."""
        response = await self._request("PUT", f"/annotations/{annotation_id}", json=fields)
        return response.json()

    async def soft_delete_annotation(self, annotation_id: int) -> dict:
        """Tombstone an annotation record."""
        response = await self._request("PATCH", f"/annotations/{annotation_id}/soft-delete")
        return response.json()

    async def restore_annotation(self, annotation_id: int) -> dict:
        """Restore a tombstoned annotation record."""
        response = await self._request("PATCH", f"/annotations/{annotation_id}/restore")
        return response.json()


def _error_detail(response: httpx.Response) -> str:
    try:
        data = response.json()
    except ValueError:
        data = None
    detail = data.get("detail") if isinstance(data, dict) else None
    if isinstance(detail, str) and detail:
        return detail
    return f"Request failed with status {response.status_code}"


def _decode_document(response: httpx.Response) -> CompositeStudyDocument:
    try:
        data = response.json()
        if not isinstance(data, dict):
            raise TypeError(f"expected a JSON object, got {type(data).__name__}")
        return CompositeStudyDocument.from_json(data)
    except (ValueError, KeyError, TypeError, AttributeError) as e:
        logger.warning(f"Malformed study document from {response.request.url}: {e!s}")
        raise NetworkError(f"Malformed study document response: {e!s}", status_code=502) from e
