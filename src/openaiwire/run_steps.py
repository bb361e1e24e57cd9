"""
Run steps: one recorded unit of work inside a run.

``ThreadRunStep.step_details`` is a tagged union nested three levels deep:

    StepDetails          message_creation | tool_calls
      RunStepToolCall    code_interpreter | retrieval | file_search | function
        CodeInterpreterOutput   image | logs

Every level is closed. An unknown ``type`` anywhere in the tree fails the
decode instead of being dropped.
"""

from typing import Annotated, Literal, Optional, Tuple, Union

from pydantic import Field, NonNegativeInt, model_validator

from ._operations import ASSISTANTS_V2, ContentType, Operation, Resource
from ._wire import FrozenMap, Variant, WireEnum, WireModel
from .common import LastError, ListQuery, ListResponse, Metadata, Usage


class RunStepType(WireEnum):
    MESSAGE_CREATION = "message_creation"
    TOOL_CALLS = "tool_calls"


class RunStepStatus(WireEnum):
    IN_PROGRESS = "in_progress"
    CANCELLED = "cancelled"
    FAILED = "failed"
    COMPLETED = "completed"
    EXPIRED = "expired"


# Code interpreter outputs ------------------------------------------------------

class CodeInterpreterImage(WireModel):
    file_id: str


class ImageCodeInterpreterOutput(Variant):
    type: Literal["image"] = "image"
    image: CodeInterpreterImage


class LogCodeInterpreterOutput(Variant):
    type: Literal["logs"] = "logs"
    logs: str


CodeInterpreterOutput = Annotated[
    Union[ImageCodeInterpreterOutput, LogCodeInterpreterOutput],
    Field(discriminator="type"),
]


class CodeInterpreter(WireModel):
    input: str
    outputs: Tuple[CodeInterpreterOutput, ...] = ()


# Tool calls --------------------------------------------------------------------

class CodeToolCall(Variant):
    id: str
    type: Literal["code_interpreter"] = "code_interpreter"
    code_interpreter: CodeInterpreter


class RetrievalToolCall(Variant):
    id: str
    type: Literal["retrieval"] = "retrieval"
    retrieval: FrozenMap = Field(default_factory=dict, validate_default=True)  # always an empty object for now


class FileSearchToolCall(Variant):
    id: str
    type: Literal["file_search"] = "file_search"
    file_search: FrozenMap = Field(default_factory=dict, validate_default=True)


class FunctionCallDetails(WireModel):
    name: str
    arguments: str
    output: Optional[str] = None  # null until the outputs are submitted


class FunctionToolCall(Variant):
    id: str
    type: Literal["function"] = "function"
    function: FunctionCallDetails


RunStepToolCall = Annotated[
    Union[CodeToolCall, RetrievalToolCall, FileSearchToolCall, FunctionToolCall],
    Field(discriminator="type"),
]


# Step details ------------------------------------------------------------------

class MessageCreation(WireModel):
    message_id: str


class MessageCreationStepDetails(Variant):
    type: Literal["message_creation"] = "message_creation"
    message_creation: MessageCreation


class ToolCallsStepDetails(Variant):
    type: Literal["tool_calls"] = "tool_calls"
    tool_calls: Tuple[RunStepToolCall, ...] = ()


StepDetails = Annotated[
    Union[MessageCreationStepDetails, ToolCallsStepDetails],
    Field(discriminator="type"),
]

TERMINAL_TIMESTAMPS = ("expired_at", "cancelled_at", "failed_at", "completed_at")


class ThreadRunStep(WireModel):
    """Represents a step in execution of a run."""

    id: str
    object: str = "thread.run.step"
    created_at: NonNegativeInt
    assistant_id: str
    thread_id: str
    run_id: str
    type: RunStepType
    status: RunStepStatus
    step_details: StepDetails
    last_error: Optional[LastError] = None
    expired_at: Optional[NonNegativeInt] = None
    cancelled_at: Optional[NonNegativeInt] = None
    failed_at: Optional[NonNegativeInt] = None
    completed_at: Optional[NonNegativeInt] = None
    metadata: Optional[Metadata] = None
    usage: Optional[Usage] = None

    @model_validator(mode="after")
    def _check_consistency(self) -> "ThreadRunStep":
        finished = [name for name in TERMINAL_TIMESTAMPS if getattr(self, name) is not None]
        if len(finished) > 1:
            raise ValueError(f"at most one terminal timestamp may be set, got {', '.join(finished)}")
        if self.step_details.type != self.type.value:
            raise ValueError(
                f"step type '{self.type.value}' does not match step_details type '{self.step_details.type}'"
            )
        return self

    @property
    def finished_at(self) -> Optional[int]:
        """Timestamp of whichever terminal event happened, if any."""
        for name in TERMINAL_TIMESTAMPS:
            value = getattr(self, name)
            if value is not None:
                return value
        return None

    def tool_calls(self) -> Tuple[RunStepToolCall, ...]:
        if isinstance(self.step_details, ToolCallsStepDetails):
            return self.step_details.tool_calls
        return ()


class RunSteps(Resource):
    RETRIEVE = Operation("GET", "/threads/{thread_id}/runs/{run_id}/steps/{step_id}", ThreadRunStep,
                         ContentType.NONE, ASSISTANTS_V2)
    LIST = Operation("GET", "/threads/{thread_id}/runs/{run_id}/steps", ListResponse[ThreadRunStep],
                     ContentType.NONE, ASSISTANTS_V2)

    def retrieve(self, thread_id: str, run_id: str, step_id: str) -> ThreadRunStep:
        return self._call(self.RETRIEVE, thread_id=thread_id, run_id=run_id, step_id=step_id)

    def list(self, thread_id: str, run_id: str, query: Optional[ListQuery] = None) -> ListResponse[ThreadRunStep]:
        """Returns the steps of a run, newest first unless ``order`` says otherwise."""
        return self._call(self.LIST, query=query, thread_id=thread_id, run_id=run_id)
