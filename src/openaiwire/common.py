"""
Shapes shared across resources: list envelopes, tool definitions, tool
resources, content parts and error records.
"""

from typing import Annotated, Any, ClassVar, Dict, Generic, Literal, Optional, Tuple, TypeVar, Union

from pydantic import Field, NonNegativeInt

from ._builder import RequestBuilder
from ._wire import FrozenMap, Variant, WireEnum, WireModel

T = TypeVar("T")

Metadata = FrozenMap


class SortOrder(WireEnum):
    ASC = "asc"
    DESC = "desc"


class ListQuery(WireModel):
    """Cursor pagination parameters for list operations. Unset values are not sent."""

    limit: Optional[Annotated[int, Field(ge=1, le=100)]] = None
    order: Optional[SortOrder] = None
    after: Optional[str] = None
    before: Optional[str] = None


class ListResponse(WireModel, Generic[T]):
    object: str = "list"
    data: Tuple[T, ...] = ()
    first_id: Optional[str] = None
    last_id: Optional[str] = None
    has_more: bool = False


class DeleteResponse(WireModel):
    id: str
    object: str
    deleted: bool


class Usage(WireModel):
    prompt_tokens: NonNegativeInt
    completion_tokens: Optional[NonNegativeInt] = None
    total_tokens: NonNegativeInt


class LastError(WireModel):
    """Last error of a run or run step."""

    code: str  # server_error, rate_limit_exceeded, invalid_prompt
    message: str


# Content parts ---------------------------------------------------------------

class ImageDetail(WireEnum):
    AUTO = "auto"
    LOW = "low"
    HIGH = "high"


class ImageUrl(WireModel):
    url: str
    detail: Optional[ImageDetail] = None


class ImageFile(WireModel):
    file_id: str
    detail: Optional[ImageDetail] = None


class TextContentPart(Variant):
    type: Literal["text"] = "text"
    text: str

    @classmethod
    def of(cls, text: str) -> "TextContentPart":
        return cls(text=text)


class ImageUrlContentPart(Variant):
    type: Literal["image_url"] = "image_url"
    image_url: ImageUrl

    @classmethod
    def of(cls, url: str, detail: Optional[ImageDetail] = None) -> "ImageUrlContentPart":
        image_url = ImageUrl(url=url) if detail is None else ImageUrl(url=url, detail=detail)
        return cls(image_url=image_url)


class ImageFileContentPart(Variant):
    type: Literal["image_file"] = "image_file"
    image_file: ImageFile

    @classmethod
    def of(cls, file_id: str, detail: Optional[ImageDetail] = None) -> "ImageFileContentPart":
        image_file = ImageFile(file_id=file_id) if detail is None else ImageFile(file_id=file_id, detail=detail)
        return cls(image_file=image_file)


# Tools -----------------------------------------------------------------------

class FunctionDefinition(WireModel):
    name: str
    description: Optional[str] = None
    parameters: Optional[FrozenMap] = None  # JSON Schema


class FunctionTool(Variant):
    type: Literal["function"] = "function"
    function: FunctionDefinition

    @classmethod
    def of(cls, name: str, description: str = None, parameters: Dict[str, Any] = None) -> "FunctionTool":
        values: Dict[str, Any] = {"name": name}
        if description is not None:
            values["description"] = description
        if parameters is not None:
            values["parameters"] = parameters
        return cls(function=FunctionDefinition(**values))


class CodeInterpreterTool(Variant):
    type: Literal["code_interpreter"] = "code_interpreter"


class FileSearchTool(Variant):
    type: Literal["file_search"] = "file_search"


class RetrievalTool(Variant):
    type: Literal["retrieval"] = "retrieval"


AssistantTool = Annotated[
    Union[CodeInterpreterTool, FileSearchTool, RetrievalTool, FunctionTool],
    Field(discriminator="type"),
]


# Tool resources --------------------------------------------------------------

class CodeInterpreterResources(WireModel):
    """Files made available to the code_interpreter tool (at most 20)."""

    kind: ClassVar[str] = "code_interpreter"

    file_ids: Tuple[str, ...] = ()

    @classmethod
    def builder(cls) -> "CodeInterpreterResourcesBuilder":
        return CodeInterpreterResourcesBuilder()


class CodeInterpreterResourcesBuilder(RequestBuilder):
    target = CodeInterpreterResources

    def file_ids(self, file_ids) -> "CodeInterpreterResourcesBuilder":
        return self._set("file_ids", file_ids)

    def add_file_ids(self, *file_ids: str) -> "CodeInterpreterResourcesBuilder":
        return self._add("file_ids", file_ids)


class FileSearchResources(WireModel):
    """Vector stores attached to the file_search tool (at most 1)."""

    kind: ClassVar[str] = "file_search"

    vector_store_ids: Tuple[str, ...] = ()

    @classmethod
    def builder(cls) -> "FileSearchResourcesBuilder":
        return FileSearchResourcesBuilder()


class FileSearchResourcesBuilder(RequestBuilder):
    target = FileSearchResources

    def vector_store_ids(self, vector_store_ids) -> "FileSearchResourcesBuilder":
        return self._set("vector_store_ids", vector_store_ids)

    def add_vector_store_ids(self, *vector_store_ids: str) -> "FileSearchResourcesBuilder":
        return self._add("vector_store_ids", vector_store_ids)


ToolResourceBundle = Union[CodeInterpreterResources, FileSearchResources]


class ToolResources(WireModel):
    """Resource bundles keyed by the tool they serve.

    Unlike the other unions, bundles carry no ``type`` field: the bundle kind
    is discriminated by its object key, so each kind appears at most once.
    Combining bundles of the same kind keeps the last one.
    """

    code_interpreter: Optional[CodeInterpreterResources] = None
    file_search: Optional[FileSearchResources] = None

    @classmethod
    def of(cls, *bundles: ToolResourceBundle) -> "ToolResources":
        values = {}
        for bundle in bundles:
            if bundle is None:
                continue
            if not isinstance(bundle, (CodeInterpreterResources, FileSearchResources)):
                raise TypeError(f"Unknown tool resource bundle: {type(bundle).__name__}")
            values[bundle.kind] = bundle
        return cls(**values)

    def bundles(self) -> Tuple[ToolResourceBundle, ...]:
        return tuple(b for b in (self.code_interpreter, self.file_search) if b is not None)


class ToolResourcesMixin:
    """Builder methods for requests carrying ``tool_resources``."""

    def tool_resources(self, *bundles: ToolResourceBundle):
        return self._set("tool_resources", ToolResources.of(*bundles))

    def add_tool_resources(self, *bundles: ToolResourceBundle):
        bundles = tuple(b for b in bundles if b is not None)
        if not bundles:
            return self
        current = self._values.get("tool_resources")
        existing = current.bundles() if current is not None else ()
        return self._set("tool_resources", ToolResources.of(*existing, *bundles))


class MetadataMixin:
    """Builder methods for requests carrying a ``metadata`` map (16 pairs at most)."""

    def metadata(self, metadata: Metadata):
        return self._set("metadata", metadata)

    def put_metadata(self, key: str, value: Any):
        return self._put("metadata", key, value)
