"""
Assistants: the assistant object, create/modify requests and the resource.
"""

from typing import Annotated, Literal, Optional, Tuple, Union

from pydantic import Field, NonNegativeInt

from ._builder import RequestBuilder, model_id
from ._operations import ASSISTANTS_V2, ContentType, Operation, Resource
from ._wire import WireModel
from .chat import ChatModel, ResponseFormat
from .common import (
    AssistantTool,
    DeleteResponse,
    ListQuery,
    ListResponse,
    Metadata,
    MetadataMixin,
    ToolResources,
    ToolResourcesMixin,
)

AssistantResponseFormat = Union[Literal["auto"], ResponseFormat]

Temperature = Annotated[float, Field(ge=0.0, le=2.0)]
TopP = Annotated[float, Field(ge=0.0, le=1.0)]


class Assistant(WireModel):
    id: str
    object: str = "assistant"
    created_at: NonNegativeInt
    name: Optional[str] = None
    description: Optional[str] = None
    model: str
    instructions: Optional[str] = None
    tools: Tuple[AssistantTool, ...] = ()
    tool_resources: Optional[ToolResources] = None
    metadata: Optional[Metadata] = None
    temperature: Optional[float] = None
    top_p: Optional[float] = None
    response_format: Optional[AssistantResponseFormat] = None


class AssistantCreateRequest(WireModel):
    model: str
    name: Optional[Annotated[str, Field(max_length=256)]] = None
    description: Optional[Annotated[str, Field(max_length=512)]] = None
    instructions: Optional[str] = None
    tools: Optional[Tuple[AssistantTool, ...]] = None
    tool_resources: Optional[ToolResources] = None
    metadata: Optional[Metadata] = None
    temperature: Optional[Temperature] = None
    top_p: Optional[TopP] = None
    response_format: Optional[AssistantResponseFormat] = None

    @classmethod
    def builder(cls) -> "AssistantCreateRequestBuilder":
        return AssistantCreateRequestBuilder()


class AssistantModifyRequest(WireModel):
    """Same fields as creation, all optional; only the set ones are changed."""

    model: Optional[str] = None
    name: Optional[Annotated[str, Field(max_length=256)]] = None
    description: Optional[Annotated[str, Field(max_length=512)]] = None
    instructions: Optional[str] = None
    tools: Optional[Tuple[AssistantTool, ...]] = None
    tool_resources: Optional[ToolResources] = None
    metadata: Optional[Metadata] = None
    temperature: Optional[Temperature] = None
    top_p: Optional[TopP] = None
    response_format: Optional[AssistantResponseFormat] = None

    @classmethod
    def builder(cls) -> "AssistantModifyRequestBuilder":
        return AssistantModifyRequestBuilder()


class _AssistantFields(ToolResourcesMixin, MetadataMixin):
    def model(self, model: Union[str, ChatModel]):
        return self._set("model", model_id(model))

    def name(self, name: str):
        return self._set("name", name)

    def description(self, description: str):
        return self._set("description", description)

    def instructions(self, instructions: str):
        return self._set("instructions", instructions)

    def tools(self, tools):
        return self._set("tools", tools)

    def add_tools(self, *tools: AssistantTool):
        return self._add("tools", tools)

    def temperature(self, temperature: float):
        return self._set("temperature", temperature)

    def top_p(self, top_p: float):
        return self._set("top_p", top_p)

    def response_format(self, response_format: AssistantResponseFormat):
        return self._set("response_format", response_format)


class AssistantCreateRequestBuilder(_AssistantFields, RequestBuilder):
    target = AssistantCreateRequest


class AssistantModifyRequestBuilder(_AssistantFields, RequestBuilder):
    target = AssistantModifyRequest


class Assistants(Resource):
    CREATE = Operation("POST", "/assistants", Assistant, headers=ASSISTANTS_V2)
    RETRIEVE = Operation("GET", "/assistants/{assistant_id}", Assistant, ContentType.NONE, ASSISTANTS_V2)
    MODIFY = Operation("POST", "/assistants/{assistant_id}", Assistant, headers=ASSISTANTS_V2)
    DELETE = Operation("DELETE", "/assistants/{assistant_id}", DeleteResponse, ContentType.NONE, ASSISTANTS_V2)
    LIST = Operation("GET", "/assistants", ListResponse[Assistant], ContentType.NONE, ASSISTANTS_V2)

    def create(self, request: AssistantCreateRequest) -> Assistant:
        """Create an assistant with a model and instructions."""
        return self._call(self.CREATE, body=request)

    def retrieve(self, assistant_id: str) -> Assistant:
        return self._call(self.RETRIEVE, assistant_id=assistant_id)

    def modify(self, assistant_id: str, request: AssistantModifyRequest) -> Assistant:
        return self._call(self.MODIFY, body=request, assistant_id=assistant_id)

    def delete(self, assistant_id: str) -> DeleteResponse:
        return self._call(self.DELETE, assistant_id=assistant_id)

    def list(self, query: Optional[ListQuery] = None) -> ListResponse[Assistant]:
        """Returns a list of assistants."""
        return self._call(self.LIST, query=query)
