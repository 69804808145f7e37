"""Client for the Operand v3 indexing and search API."""

import asyncio
from typing import Any, Dict, List, Optional, Protocol, Type, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from operand_demos.core.config import Settings
from operand_demos.core.exceptions import IndexingError, OperandDemoError, SearchError
from operand_demos.core.logging import setup_logger
from operand_demos.schemas.indexing import (
    BaseIndexRequest,
    IndexedObject,
    SearchContentsRequest,
    SearchContentsResponse,
    encode_index_request,
)

logger = setup_logger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


def parse_response(
    response: httpx.Response,
    model: Type[ModelT],
    error_cls: Type[OperandDemoError],
) -> ModelT:
    """Validate a JSON response body, raising ``error_cls`` if it does not fit ``model``."""
    try:
        return model.model_validate(response.json())
    except (ValueError, ValidationError) as e:
        raise error_cls(
            f"unexpected response body: {response.text!r}",
            details={"status_code": response.status_code, "error": str(e)},
        ) from e


class OperandClientProtocol(Protocol):
    """Protocol for the indexing API client."""

    async def create_object(
        self, request: BaseIndexRequest
    ) -> Optional[IndexedObject]: ...

    async def wait_for_object(
        self, obj: IndexedObject, poll_interval: float = 0.5
    ) -> IndexedObject: ...

    async def delete_object(self, object_id: str) -> None: ...

    async def search_contents(
        self,
        query: str,
        parent_ids: Optional[List[str]] = None,
        max_results: int = 5,
        filter: Optional[Dict[str, Any]] = None,
    ) -> SearchContentsResponse: ...


class OperandClient:
    """Thin async wrapper around the Operand HTTP API."""

    def __init__(
        self,
        endpoint: str,
        api_key: str,
        http_client: httpx.AsyncClient,
    ) -> None:
        """
        Initialize the client.

        Args:
            endpoint: Base URL of the API, without the ``/v3`` suffix
            api_key: API key sent verbatim in the ``Authorization`` header
            http_client: Shared HTTP client (owned by the caller)
        """
        self.endpoint = endpoint.rstrip("/")
        self._api_key = api_key
        self._http = http_client

    @classmethod
    def from_settings(
        cls, settings: Settings, http_client: httpx.AsyncClient
    ) -> "OperandClient":
        return cls(
            endpoint=settings.OPERAND_ENDPOINT,
            api_key=settings.OPERAND_API_KEY or "",
            http_client=http_client,
        )

    @property
    def _headers(self) -> Dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Authorization": self._api_key,
        }

    async def create_object(
        self, request: BaseIndexRequest
    ) -> Optional[IndexedObject]:
        """
        Create (and start indexing) a new object.

        A 201 is success on its own. The body is parsed when it describes
        an object and ignored otherwise.

        Args:
            request: One of the index request variants

        Returns:
            The created object as reported by the API, or None when the
            response body does not describe one

        Raises:
            IndexingError: On transport failure or any status other than 201
        """
        body = encode_index_request(request)
        url = f"{self.endpoint}/v3/objects"

        try:
            response = await self._http.post(url, json=body, headers=self._headers)
        except httpx.HTTPError as e:
            raise IndexingError(f"Index request failed: {e}") from e

        if response.status_code != httpx.codes.CREATED:
            raise IndexingError(
                f"unexpected status code: {response.status_code} ({response.text})",
                details={"status_code": response.status_code, "type": body["type"]},
            )

        try:
            obj = IndexedObject.model_validate(response.json())
        except (ValueError, ValidationError):
            logger.warning(
                f"Created {body['type']} object, but the response body is not an object: "
                f"{response.text!r}"
            )
            return None

        logger.debug(f"Created {body['type']} object {obj.id}")
        return obj

    async def get_object(self, object_id: str) -> IndexedObject:
        """Fetch an object by ID."""
        url = f"{self.endpoint}/v3/objects/{object_id}"
        try:
            response = await self._http.get(url, headers=self._headers)
        except httpx.HTTPError as e:
            raise IndexingError(f"Failed to fetch object {object_id}: {e}") from e

        if response.status_code != httpx.codes.OK:
            raise IndexingError(
                f"unexpected status code: {response.status_code} ({response.text})",
                details={"status_code": response.status_code, "object_id": object_id},
            )
        return parse_response(response, IndexedObject, IndexingError)

    async def wait_for_object(
        self, obj: IndexedObject, poll_interval: float = 0.5
    ) -> IndexedObject:
        """
        Poll an object until it is no longer indexing.

        Args:
            obj: Object returned by ``create_object``
            poll_interval: Seconds to sleep between status checks

        Returns:
            The object in its final indexing state (ready or error)
        """
        while obj.is_indexing:
            await asyncio.sleep(poll_interval)
            obj = await self.get_object(obj.id)
        return obj

    async def delete_object(self, object_id: str) -> None:
        """Delete an object (and, for collections, its children)."""
        url = f"{self.endpoint}/v3/objects/{object_id}"
        try:
            response = await self._http.delete(url, headers=self._headers)
        except httpx.HTTPError as e:
            raise IndexingError(f"Failed to delete object {object_id}: {e}") from e

        if response.status_code != httpx.codes.OK:
            raise IndexingError(
                f"unexpected status code: {response.status_code} ({response.text})",
                details={"status_code": response.status_code, "object_id": object_id},
            )

    async def search_contents(
        self,
        query: str,
        parent_ids: Optional[List[str]] = None,
        max_results: int = 5,
        filter: Optional[Dict[str, Any]] = None,
    ) -> SearchContentsResponse:
        """
        Semantic search over indexed contents, most relevant first.

        Raises:
            SearchError: On transport failure, a non-200 response or an
                unreadable body
        """
        request = SearchContentsRequest(
            parent_ids=parent_ids or [],
            query=query,
            max=max_results,
            filter=filter,
        )
        url = f"{self.endpoint}/v3/search/contents"

        try:
            response = await self._http.post(
                url,
                json=request.model_dump(by_alias=True, exclude_none=True),
                headers=self._headers,
            )
        except httpx.HTTPError as e:
            raise SearchError(f"Search request failed: {e}") from e

        if response.status_code != httpx.codes.OK:
            raise SearchError(
                f"unexpected status code: {response.status_code} ({response.text})",
                details={"status_code": response.status_code},
            )
        return parse_response(response, SearchContentsResponse, SearchError)
