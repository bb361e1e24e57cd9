"""
Chat completions: role-tagged messages, the create request and its response.
"""

from typing import Annotated, Any, ClassVar, Dict, Literal, Optional, Tuple, Union

from pydantic import Field, NonNegativeInt

from ._builder import RequestBuilder, model_id
from ._operations import Operation, Resource
from ._wire import FrozenMap, WireEnum, WireModel, frozen_map
from .common import FunctionTool, ImageUrlContentPart, TextContentPart, Usage


class ChatModel(WireEnum):
    GPT_4O = "gpt-4o"
    GPT_4O_MINI = "gpt-4o-mini"
    GPT_4_TURBO = "gpt-4-turbo"
    GPT_4_1106_PREVIEW = "gpt-4-1106-preview"
    GPT_4 = "gpt-4"
    GPT_3_5_TURBO = "gpt-3.5-turbo"


class FinishReason(WireEnum):
    STOP = "stop"
    LENGTH = "length"
    TOOL_CALLS = "tool_calls"
    CONTENT_FILTER = "content_filter"
    FUNCTION_CALL = "function_call"


ChatContentPart = Annotated[Union[TextContentPart, ImageUrlContentPart], Field(discriminator="type")]


class FunctionCall(WireModel):
    name: str
    arguments: str  # JSON encoded, as generated by the model


class ToolCall(WireModel):
    """A function call generated by the model."""

    always_sent: ClassVar[Tuple[str, ...]] = ("type",)

    id: str
    type: Literal["function"] = "function"
    function: FunctionCall


# Messages -------------------------------------------------------------------

class _RoleMessage(WireModel):
    always_sent: ClassVar[Tuple[str, ...]] = ("role",)


class SystemMessage(_RoleMessage):
    role: Literal["system"] = "system"
    content: str
    name: Optional[str] = None

    @classmethod
    def of(cls, content: str, name: str = None) -> "SystemMessage":
        return cls(content=content) if name is None else cls(content=content, name=name)


class UserMessage(_RoleMessage):
    """User message with either plain text or a sequence of text/image parts."""

    role: Literal["user"] = "user"
    content: Union[str, Tuple[ChatContentPart, ...]]
    name: Optional[str] = None

    @classmethod
    def of(cls, content: Union[str, Tuple[ChatContentPart, ...]], name: str = None) -> "UserMessage":
        if isinstance(content, list):
            content = tuple(content)
        return cls(content=content) if name is None else cls(content=content, name=name)

    @classmethod
    def of_parts(cls, *parts: ChatContentPart) -> "UserMessage":
        return cls(content=tuple(parts))


class AssistantMessage(_RoleMessage):
    """Assistant message; ``content`` is always written, even when null."""

    always_sent: ClassVar[Tuple[str, ...]] = ("role", "content")

    role: Literal["assistant"] = "assistant"
    content: Optional[str] = None
    name: Optional[str] = None
    tool_calls: Optional[Tuple[ToolCall, ...]] = None

    @classmethod
    def of(cls, content: Union[str, "ResponseMessage", None], name: str = None,
           tool_calls: Tuple[ToolCall, ...] = None) -> "AssistantMessage":
        """Create an assistant message from text, or echo a message returned by the API."""
        if isinstance(content, ResponseMessage):
            values: Dict[str, Any] = {"content": content.content}
            if content.tool_calls is not None:
                values["tool_calls"] = tuple(content.tool_calls)
            return cls(**values)

        values = {"content": content}
        if name is not None:
            values["name"] = name
        if tool_calls is not None:
            values["tool_calls"] = tuple(tool_calls)
        return cls(**values)


class ToolMessage(_RoleMessage):
    role: Literal["tool"] = "tool"
    content: str
    tool_call_id: str

    @classmethod
    def of(cls, content: str, tool_call_id: str) -> "ToolMessage":
        return cls(content=content, tool_call_id=tool_call_id)


ChatMessage = Annotated[
    Union[SystemMessage, UserMessage, AssistantMessage, ToolMessage],
    Field(discriminator="role"),
]


# Request options ------------------------------------------------------------

class ResponseFormatType(WireEnum):
    TEXT = "text"
    JSON_OBJECT = "json_object"


class ResponseFormat(WireModel):
    always_sent: ClassVar[Tuple[str, ...]] = ("type",)

    type: ResponseFormatType = ResponseFormatType.TEXT

    @classmethod
    def text(cls) -> "ResponseFormat":
        return cls(type=ResponseFormatType.TEXT)

    @classmethod
    def json_object(cls) -> "ResponseFormat":
        return cls(type=ResponseFormatType.JSON_OBJECT)


class NamedFunction(WireModel):
    name: str


class NamedToolChoice(WireModel):
    """Forces the model to call one specific function."""

    always_sent: ClassVar[Tuple[str, ...]] = ("type",)

    type: Literal["function"] = "function"
    function: NamedFunction

    @classmethod
    def of(cls, name: str) -> "NamedToolChoice":
        return cls(function=NamedFunction(name=name))


ToolChoice = Union[Literal["none", "auto", "required"], NamedToolChoice]


class ChatCompletionCreateRequest(WireModel):
    messages: Tuple[ChatMessage, ...]
    model: str
    frequency_penalty: Optional[Annotated[float, Field(ge=-2.0, le=2.0)]] = None
    logit_bias: Optional[frozen_map(int)] = None
    logprobs: Optional[bool] = None
    top_logprobs: Optional[Annotated[int, Field(ge=0, le=20)]] = None
    max_tokens: Optional[Annotated[int, Field(gt=0)]] = None
    n: Optional[Annotated[int, Field(ge=1, le=128)]] = None
    presence_penalty: Optional[Annotated[float, Field(ge=-2.0, le=2.0)]] = None
    response_format: Optional[ResponseFormat] = None
    seed: Optional[int] = None
    stop: Optional[Union[str, Tuple[str, ...]]] = None
    temperature: Optional[Annotated[float, Field(ge=0.0, le=2.0)]] = None
    top_p: Optional[Annotated[float, Field(ge=0.0, le=1.0)]] = None
    tools: Optional[Tuple[FunctionTool, ...]] = None
    tool_choice: Optional[ToolChoice] = None
    parallel_tool_calls: Optional[bool] = None
    user: Optional[str] = None

    @classmethod
    def builder(cls) -> "ChatCompletionCreateRequestBuilder":
        return ChatCompletionCreateRequestBuilder()


class ChatCompletionCreateRequestBuilder(RequestBuilder):
    target = ChatCompletionCreateRequest

    def messages(self, messages) -> "ChatCompletionCreateRequestBuilder":
        return self._set("messages", messages)

    def add_messages(self, *messages: ChatMessage) -> "ChatCompletionCreateRequestBuilder":
        return self._add("messages", messages)

    def add_message(self, message: ChatMessage) -> "ChatCompletionCreateRequestBuilder":
        return self._add("messages", (message,))

    def model(self, model: Union[str, ChatModel]) -> "ChatCompletionCreateRequestBuilder":
        return self._set("model", model_id(model))

    def frequency_penalty(self, frequency_penalty: float) -> "ChatCompletionCreateRequestBuilder":
        return self._set("frequency_penalty", frequency_penalty)

    def logit_bias(self, logit_bias: Dict[str, int]) -> "ChatCompletionCreateRequestBuilder":
        return self._set("logit_bias", logit_bias)

    def put_logit_bias(self, token_id: Union[str, int], bias: int) -> "ChatCompletionCreateRequestBuilder":
        return self._put("logit_bias", str(token_id), bias)

    def logprobs(self, logprobs: bool) -> "ChatCompletionCreateRequestBuilder":
        return self._set("logprobs", logprobs)

    def top_logprobs(self, top_logprobs: int) -> "ChatCompletionCreateRequestBuilder":
        return self._set("top_logprobs", top_logprobs)

    def max_tokens(self, max_tokens: int) -> "ChatCompletionCreateRequestBuilder":
        return self._set("max_tokens", max_tokens)

    def n(self, n: int) -> "ChatCompletionCreateRequestBuilder":
        return self._set("n", n)

    def presence_penalty(self, presence_penalty: float) -> "ChatCompletionCreateRequestBuilder":
        return self._set("presence_penalty", presence_penalty)

    def response_format(self, response_format: ResponseFormat) -> "ChatCompletionCreateRequestBuilder":
        return self._set("response_format", response_format)

    def seed(self, seed: int) -> "ChatCompletionCreateRequestBuilder":
        return self._set("seed", seed)

    def stop(self, stop: Union[str, Tuple[str, ...]]) -> "ChatCompletionCreateRequestBuilder":
        return self._set("stop", stop)

    def temperature(self, temperature: float) -> "ChatCompletionCreateRequestBuilder":
        return self._set("temperature", temperature)

    def top_p(self, top_p: float) -> "ChatCompletionCreateRequestBuilder":
        return self._set("top_p", top_p)

    def tools(self, tools) -> "ChatCompletionCreateRequestBuilder":
        return self._set("tools", tools)

    def add_tools(self, *tools: FunctionTool) -> "ChatCompletionCreateRequestBuilder":
        return self._add("tools", tools)

    def tool_choice(self, tool_choice: ToolChoice) -> "ChatCompletionCreateRequestBuilder":
        return self._set("tool_choice", tool_choice)

    def parallel_tool_calls(self, parallel_tool_calls: bool) -> "ChatCompletionCreateRequestBuilder":
        return self._set("parallel_tool_calls", parallel_tool_calls)

    def user(self, user: str) -> "ChatCompletionCreateRequestBuilder":
        return self._set("user", user)


# Response --------------------------------------------------------------------

class ResponseMessage(WireModel):
    role: str
    content: Optional[str] = None
    tool_calls: Optional[Tuple[ToolCall, ...]] = None


class Choice(WireModel):
    index: NonNegativeInt
    message: ResponseMessage
    finish_reason: Optional[FinishReason] = None
    logprobs: Optional[FrozenMap] = None


class ChatCompletion(WireModel):
    id: str
    object: str = "chat.completion"
    created: NonNegativeInt
    model: str
    choices: Tuple[Choice, ...] = ()
    usage: Optional[Usage] = None
    system_fingerprint: Optional[str] = None


class ChatCompletions(Resource):
    CREATE = Operation("POST", "/chat/completions", ChatCompletion)

    def create(self, request: ChatCompletionCreateRequest) -> ChatCompletion:
        """Creates a model response for the given chat conversation."""
        return self._call(self.CREATE, body=request)
