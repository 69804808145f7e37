import os
import sys
from typing import List, Optional

import pytest

# Add the project root directory to the python path
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from operand_demos.core.config import Settings
from operand_demos.core.exceptions import OperandDemoError
from operand_demos.schemas.indexing import (
    BaseIndexRequest,
    IndexedObject,
    SearchContent,
    SearchContentsResponse,
)


class FakeOperandClient:
    """In-memory stand-in for OperandClient that records every call."""

    def __init__(
        self,
        fail_on_call: Optional[int] = None,
        error: Optional[OperandDemoError] = None,
        search_results: Optional[List[str]] = None,
        final_status: str = "ready",
    ):
        self.created: List[BaseIndexRequest] = []
        self.searches: List[dict] = []
        self.deleted: List[str] = []
        self._fail_on_call = fail_on_call
        self._error = error
        self._search_results = search_results or []
        self._final_status = final_status

    async def create_object(self, request: BaseIndexRequest) -> IndexedObject:
        if self._fail_on_call is not None and len(self.created) == self._fail_on_call:
            raise self._error
        self.created.append(request)
        return IndexedObject(id=f"obj-{len(self.created)}", indexing_status="indexing")

    async def wait_for_object(self, obj, poll_interval: float = 0.5) -> IndexedObject:
        return IndexedObject(id=obj.id, indexing_status=self._final_status)

    async def delete_object(self, object_id: str) -> None:
        self.deleted.append(object_id)

    async def search_contents(
        self, query, parent_ids=None, max_results=5, filter=None
    ) -> SearchContentsResponse:
        self.searches.append(
            {
                "query": query,
                "parent_ids": parent_ids,
                "max_results": max_results,
                "filter": filter,
            }
        )
        return SearchContentsResponse(
            contents=[SearchContent(content=text) for text in self._search_results]
        )


class FakeStorage:
    """Attachment storage that keeps uploads in memory."""

    def __init__(self, error: Optional[OperandDemoError] = None):
        self.stored: List[tuple] = []
        self._error = error

    def build_object_path(self, category: str) -> str:
        return f"imessage/{category}/fixed-id"

    async def store_file(self, path: str, data: bytes) -> str:
        if self._error is not None:
            raise self._error
        self.stored.append((path, data))
        return f"https://s3.example.com/bucket/{path}"


@pytest.fixture
def settings():
    return Settings(
        OPERAND_ENDPOINT="https://operand.test",
        OPERAND_API_KEY="test-key",
        OPERAND_PARENT_ID=None,
        OPERAND_POLL_INTERVAL_SECONDS=0,
        S3_KEY="",
        S3_SECRET="",
        S3_ENDPOINT="",
        S3_REGION="",
        S3_BUCKET="",
        OPENAI_KEY=None,
    )


@pytest.fixture
def operand_client():
    return FakeOperandClient()


@pytest.fixture
def storage():
    return FakeStorage()
