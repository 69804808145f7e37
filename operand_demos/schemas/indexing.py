"""Operand v3 object and search models.

Each object type is its own request model; ``IndexRequest`` is the tagged
union over them, discriminated by ``type``. Use ``encode_index_request``
to produce the JSON body so field aliases and optional-field omission are
applied consistently.
"""

from enum import Enum
from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, Field


class ObjectType(str, Enum):
    """Object types understood by the indexing API."""

    TEXT = "text"
    IMAGE = "image"
    PDF = "pdf"
    COLLECTION = "collection"


class IndexingStatus(str, Enum):
    """Indexing states reported for an object."""

    INDEXING = "indexing"
    READY = "ready"
    ERROR = "error"


class TextMetadata(BaseModel):
    text: str


class ImageMetadata(BaseModel):
    image_url: str = Field(..., alias="imageUrl")

    class Config:
        populate_by_name = True


class PdfMetadata(BaseModel):
    pdf_url: str = Field(..., alias="pdfUrl")

    class Config:
        populate_by_name = True


class CollectionMetadata(BaseModel):
    pass


class BaseIndexRequest(BaseModel):
    """Fields shared by every object creation request."""

    properties: Optional[Dict[str, Any]] = Field(
        default=None, description="Arbitrary properties usable as search filters"
    )
    label: Optional[str] = Field(default=None, description="Human readable label")
    parent_id: Optional[str] = Field(
        default=None, alias="parentId", description="Parent collection ID"
    )

    class Config:
        populate_by_name = True


class TextIndexRequest(BaseIndexRequest):
    type: Literal["text"] = "text"
    metadata: TextMetadata


class ImageIndexRequest(BaseIndexRequest):
    type: Literal["image"] = "image"
    metadata: ImageMetadata


class PdfIndexRequest(BaseIndexRequest):
    type: Literal["pdf"] = "pdf"
    metadata: PdfMetadata


class CollectionIndexRequest(BaseIndexRequest):
    type: Literal["collection"] = "collection"
    metadata: CollectionMetadata = Field(default_factory=CollectionMetadata)


IndexRequest = Annotated[
    Union[
        TextIndexRequest,
        ImageIndexRequest,
        PdfIndexRequest,
        CollectionIndexRequest,
    ],
    Field(discriminator="type"),
]


def encode_index_request(request: BaseIndexRequest) -> Dict[str, Any]:
    """Serialize an index request into the JSON body expected by ``/v3/objects``."""
    return request.model_dump(mode="json", by_alias=True, exclude_none=True)


class IndexedObject(BaseModel):
    """Object as returned by the indexing API."""

    id: str
    type: Optional[str] = None
    label: Optional[str] = None
    parent_id: Optional[str] = Field(default=None, alias="parentId")
    indexing_status: str = Field(
        default=IndexingStatus.INDEXING.value, alias="indexingStatus"
    )

    class Config:
        populate_by_name = True

    @property
    def is_indexing(self) -> bool:
        return self.indexing_status == IndexingStatus.INDEXING.value

    @property
    def is_ready(self) -> bool:
        return self.indexing_status == IndexingStatus.READY.value


class SearchContentsRequest(BaseModel):
    """Semantic search over the contents of one or more collections."""

    parent_ids: List[str] = Field(default_factory=list, alias="parentIds")
    query: str
    max: int = Field(default=5, ge=1)
    filter: Optional[Dict[str, Any]] = None

    class Config:
        populate_by_name = True


class SearchContent(BaseModel):
    object_id: Optional[str] = Field(default=None, alias="objectId")
    content: str
    score: Optional[float] = None

    class Config:
        populate_by_name = True


class SearchContentsResponse(BaseModel):
    contents: List[SearchContent] = Field(default_factory=list)
