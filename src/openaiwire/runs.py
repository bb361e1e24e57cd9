"""
Runs: executions of an assistant on a thread.
"""

from typing import Annotated, Callable, Literal, Optional, Tuple, Union

from pydantic import Field, NonNegativeInt

from ._builder import RequestBuilder, model_id
from ._operations import ASSISTANTS_V2, ContentType, Operation, Resource
from ._wire import WireEnum, WireModel
from .assistants import AssistantResponseFormat, Temperature, TopP
from .chat import ChatModel, NamedToolChoice, ToolCall
from .common import (
    AssistantTool,
    LastError,
    ListQuery,
    ListResponse,
    Metadata,
    MetadataMixin,
    ToolResources,
    ToolResourcesMixin,
    Usage,
)
from .threads import IncompleteDetails, ThreadCreateRequest, ThreadCreateRequestBuilder, ThreadMessageRequest


class RunStatus(WireEnum):
    QUEUED = "queued"
    IN_PROGRESS = "in_progress"
    REQUIRES_ACTION = "requires_action"
    CANCELLING = "cancelling"
    CANCELLED = "cancelled"
    FAILED = "failed"
    COMPLETED = "completed"
    INCOMPLETE = "incomplete"
    EXPIRED = "expired"

    @property
    def is_terminal(self) -> bool:
        return self in (RunStatus.CANCELLED, RunStatus.FAILED, RunStatus.COMPLETED,
                        RunStatus.INCOMPLETE, RunStatus.EXPIRED)


RunToolChoice = Union[Literal["none", "auto", "required"], NamedToolChoice]
PositiveTokens = Annotated[int, Field(ge=256)]


class SubmitToolOutputsAction(WireModel):
    tool_calls: Tuple[ToolCall, ...] = ()


class RequiredAction(WireModel):
    """Details on the action required to continue the run."""

    type: Literal["submit_tool_outputs"]
    submit_tool_outputs: SubmitToolOutputsAction


class ThreadRun(WireModel):
    id: str
    object: str = "thread.run"
    created_at: NonNegativeInt
    thread_id: str
    assistant_id: str
    status: RunStatus
    required_action: Optional[RequiredAction] = None
    last_error: Optional[LastError] = None
    expires_at: Optional[NonNegativeInt] = None
    started_at: Optional[NonNegativeInt] = None
    cancelled_at: Optional[NonNegativeInt] = None
    failed_at: Optional[NonNegativeInt] = None
    completed_at: Optional[NonNegativeInt] = None
    incomplete_details: Optional[IncompleteDetails] = None
    model: str
    instructions: Optional[str] = None
    tools: Tuple[AssistantTool, ...] = ()
    metadata: Optional[Metadata] = None
    usage: Optional[Usage] = None
    temperature: Optional[float] = None
    top_p: Optional[float] = None
    max_prompt_tokens: Optional[int] = None
    max_completion_tokens: Optional[int] = None
    response_format: Optional[AssistantResponseFormat] = None
    tool_choice: Optional[RunToolChoice] = None
    parallel_tool_calls: Optional[bool] = None


# Requests --------------------------------------------------------------------

class RunCreateRequest(WireModel):
    assistant_id: str
    model: Optional[str] = None
    instructions: Optional[str] = None
    additional_instructions: Optional[str] = None
    additional_messages: Optional[Tuple[ThreadMessageRequest, ...]] = None
    tools: Optional[Tuple[AssistantTool, ...]] = None
    metadata: Optional[Metadata] = None
    temperature: Optional[Temperature] = None
    top_p: Optional[TopP] = None
    max_prompt_tokens: Optional[PositiveTokens] = None
    max_completion_tokens: Optional[PositiveTokens] = None
    response_format: Optional[AssistantResponseFormat] = None
    tool_choice: Optional[RunToolChoice] = None
    parallel_tool_calls: Optional[bool] = None

    @classmethod
    def builder(cls) -> "RunCreateRequestBuilder":
        return RunCreateRequestBuilder()


class _RunFields(MetadataMixin):
    def assistant_id(self, assistant_id: str):
        return self._set("assistant_id", assistant_id)

    def model(self, model: Union[str, ChatModel]):
        """Overrides the model of the assistant for this run."""
        return self._set("model", model_id(model))

    def instructions(self, instructions: str):
        """Overrides the instructions of the assistant for this run."""
        return self._set("instructions", instructions)

    def tools(self, tools):
        return self._set("tools", tools)

    def add_tools(self, *tools: AssistantTool):
        return self._add("tools", tools)

    def temperature(self, temperature: float):
        return self._set("temperature", temperature)

    def top_p(self, top_p: float):
        return self._set("top_p", top_p)

    def max_prompt_tokens(self, max_prompt_tokens: int):
        return self._set("max_prompt_tokens", max_prompt_tokens)

    def max_completion_tokens(self, max_completion_tokens: int):
        return self._set("max_completion_tokens", max_completion_tokens)

    def response_format(self, response_format: AssistantResponseFormat):
        return self._set("response_format", response_format)

    def tool_choice(self, tool_choice: RunToolChoice):
        return self._set("tool_choice", tool_choice)

    def parallel_tool_calls(self, parallel_tool_calls: bool):
        return self._set("parallel_tool_calls", parallel_tool_calls)


class RunCreateRequestBuilder(_RunFields, RequestBuilder):
    target = RunCreateRequest

    def additional_instructions(self, additional_instructions: str) -> "RunCreateRequestBuilder":
        """Appended to the instructions of the run instead of replacing them."""
        return self._set("additional_instructions", additional_instructions)

    def additional_messages(self, messages) -> "RunCreateRequestBuilder":
        return self._set("additional_messages", messages)

    def add_additional_messages(self, *messages: ThreadMessageRequest) -> "RunCreateRequestBuilder":
        return self._add("additional_messages", messages)


class ThreadAndRunCreateRequest(WireModel):
    """Create a thread and run it in one request."""

    assistant_id: str
    thread: Optional[ThreadCreateRequest] = None
    model: Optional[str] = None
    instructions: Optional[str] = None
    tools: Optional[Tuple[AssistantTool, ...]] = None
    tool_resources: Optional[ToolResources] = None
    metadata: Optional[Metadata] = None
    temperature: Optional[Temperature] = None
    top_p: Optional[TopP] = None
    max_prompt_tokens: Optional[PositiveTokens] = None
    max_completion_tokens: Optional[PositiveTokens] = None
    response_format: Optional[AssistantResponseFormat] = None
    tool_choice: Optional[RunToolChoice] = None
    parallel_tool_calls: Optional[bool] = None

    @classmethod
    def builder(cls) -> "ThreadAndRunCreateRequestBuilder":
        return ThreadAndRunCreateRequestBuilder()


class ThreadAndRunCreateRequestBuilder(_RunFields, ToolResourcesMixin, RequestBuilder):
    target = ThreadAndRunCreateRequest

    def thread(self, thread: Union[ThreadCreateRequest, Callable[[ThreadCreateRequestBuilder],
                                                                  ThreadCreateRequestBuilder]]
               ) -> "ThreadAndRunCreateRequestBuilder":
        """Set the thread, either built already or configured on a fresh builder."""
        if not isinstance(thread, ThreadCreateRequest):
            thread = self._nested(ThreadCreateRequest.builder, thread)
        return self._set("thread", thread)


class RunModifyRequest(WireModel):
    metadata: Optional[Metadata] = None

    @classmethod
    def builder(cls) -> "RunModifyRequestBuilder":
        return RunModifyRequestBuilder()


class RunModifyRequestBuilder(MetadataMixin, RequestBuilder):
    target = RunModifyRequest


class ToolOutput(WireModel):
    tool_call_id: str
    output: str


class SubmitToolOutputsRequest(WireModel):
    tool_outputs: Tuple[ToolOutput, ...]

    @classmethod
    def builder(cls) -> "SubmitToolOutputsRequestBuilder":
        return SubmitToolOutputsRequestBuilder()


class SubmitToolOutputsRequestBuilder(RequestBuilder):
    target = SubmitToolOutputsRequest

    def tool_outputs(self, tool_outputs) -> "SubmitToolOutputsRequestBuilder":
        return self._set("tool_outputs", tool_outputs)

    def add_tool_outputs(self, *tool_outputs: ToolOutput) -> "SubmitToolOutputsRequestBuilder":
        return self._add("tool_outputs", tool_outputs)

    def add_tool_output(self, tool_call_id: str, output: str) -> "SubmitToolOutputsRequestBuilder":
        return self._add("tool_outputs", (ToolOutput(tool_call_id=tool_call_id, output=output),))


# Resource --------------------------------------------------------------------

class Runs(Resource):
    CREATE = Operation("POST", "/threads/{thread_id}/runs", ThreadRun, headers=ASSISTANTS_V2)
    CREATE_THREAD_AND_RUN = Operation("POST", "/threads/runs", ThreadRun, headers=ASSISTANTS_V2)
    RETRIEVE = Operation("GET", "/threads/{thread_id}/runs/{run_id}", ThreadRun,
                         ContentType.NONE, ASSISTANTS_V2)
    MODIFY = Operation("POST", "/threads/{thread_id}/runs/{run_id}", ThreadRun, headers=ASSISTANTS_V2)
    LIST = Operation("GET", "/threads/{thread_id}/runs", ListResponse[ThreadRun],
                     ContentType.NONE, ASSISTANTS_V2)
    SUBMIT_TOOL_OUTPUTS = Operation("POST", "/threads/{thread_id}/runs/{run_id}/submit_tool_outputs",
                                    ThreadRun, headers=ASSISTANTS_V2)
    CANCEL = Operation("POST", "/threads/{thread_id}/runs/{run_id}/cancel", ThreadRun,
                       ContentType.NONE, ASSISTANTS_V2)

    def create(self, thread_id: str, request: RunCreateRequest) -> ThreadRun:
        return self._call(self.CREATE, body=request, thread_id=thread_id)

    def create_thread_and_run(self, request: ThreadAndRunCreateRequest) -> ThreadRun:
        return self._call(self.CREATE_THREAD_AND_RUN, body=request)

    def retrieve(self, thread_id: str, run_id: str) -> ThreadRun:
        return self._call(self.RETRIEVE, thread_id=thread_id, run_id=run_id)

    def modify(self, thread_id: str, run_id: str, request: RunModifyRequest) -> ThreadRun:
        return self._call(self.MODIFY, body=request, thread_id=thread_id, run_id=run_id)

    def list(self, thread_id: str, query: Optional[ListQuery] = None) -> ListResponse[ThreadRun]:
        return self._call(self.LIST, query=query, thread_id=thread_id)

    def submit_tool_outputs(self, thread_id: str, run_id: str, request: SubmitToolOutputsRequest) -> ThreadRun:
        """Submit outputs for the tool calls of a run in status ``requires_action``."""
        return self._call(self.SUBMIT_TOOL_OUTPUTS, body=request, thread_id=thread_id, run_id=run_id)

    def cancel(self, thread_id: str, run_id: str) -> ThreadRun:
        """Cancels a run that is ``in_progress``."""
        return self._call(self.CANCEL, thread_id=thread_id, run_id=run_id)
