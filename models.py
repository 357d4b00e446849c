from enum import Enum
from typing import Any, Dict, List, Optional, TypedDict

from pydantic import BaseModel, ConfigDict, Field, model_validator


# ===============================
# ADDRESSING
# ===============================

SCHEME = "figma"


def format_uri(container_key: str, category: Optional[str] = None, sub_id: Optional[str] = None) -> str:
    if sub_id is not None and category is None:
        raise ValueError("sub_id requires a category")

    uri = f"{SCHEME}:///file/{container_key}"
    if category is not None:
        uri += f"/{category}"
        if sub_id is not None:
            uri += f"/{sub_id}"
    return uri


class ResourceCategory(str, Enum):
    NODES = "nodes"
    IMAGES = "images"
    COMMENTS = "comments"
    VERSIONS = "versions"
    COMPONENTS = "components"
    STYLES = "styles"
    VARIABLES = "variables"


class ResourceAddress(BaseModel):
    """Parsed ``figma:///file/...`` identifier.

    ``category`` stays a bare string here; whether it names a supported
    resource is decided by the gateway.
    """

    model_config = ConfigDict(frozen=True)

    container_key: str = Field(min_length=1)
    category: Optional[str] = None
    sub_id: Optional[str] = None

    @model_validator(mode="after")
    def _sub_id_needs_category(self):
        if self.sub_id is not None and self.category is None:
            raise ValueError("sub_id requires a category")
        return self

    @property
    def is_whole_document(self) -> bool:
        return self.category is None

    @property
    def uri(self) -> str:
        return format_uri(self.container_key, self.category, self.sub_id)


# ===============================
# NORMALIZED DOCUMENT
# ===============================

class Color(TypedDict):
    r: float
    g: float
    b: float
    a: float


class _FillBase(TypedDict):
    type: str


class Fill(_FillBase, total=False):
    color: Color


class BoundingBox(TypedDict):
    x: float
    y: float
    width: float
    height: float


class NodeStyle(TypedDict, total=False):
    fontFamily: str
    fontSize: float
    fontWeight: float
    letterSpacing: float
    lineHeight: float
    textAlignHorizontal: str
    fills: List[Fill]


class _NodeIdentity(TypedDict):
    id: str
    name: str
    type: str


class MinimalNode(_NodeIdentity, total=False):
    absoluteBoundingBox: BoundingBox
    style: NodeStyle
    characters: str
    children: List["MinimalNode"]


# ===============================
# RESOURCE SURFACE
# ===============================

class ResourceModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)


class ResourceEntry(ResourceModel):
    uri: str
    type: str
    name: str
    description: Optional[str] = None
    metadata: Dict[str, Any] = Field(default_factory=dict)


class ResourceContents(ResourceModel):
    uri: str
    mime_type: str = Field(default="application/json", alias="mimeType")
    text: str


class WatchRequest(BaseModel):
    uri: str


class GetFileRequest(BaseModel):
    file_key: str = Field(alias="fileKey", description="The key of the Figma file")


class GetNodeRequest(BaseModel):
    file_key: str = Field(alias="fileKey", description="The key of the Figma file")
    node_id: str = Field(
        alias="nodeId",
        description="The ID of the node to get. Node ids have the format `<number>:<number>`",
    )
