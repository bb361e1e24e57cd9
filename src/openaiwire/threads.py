"""
Threads and thread messages.

Message content is a tagged union keyed by ``type``. Requests accept
``text``, ``image_url`` and ``image_file`` parts; the API answers with
``text`` (carrying annotations), ``image_url`` and ``image_file`` content.
"""

from typing import Annotated, Callable, Literal, Optional, Tuple, Union

from pydantic import Field, NonNegativeInt

from ._builder import RequestBuilder
from ._operations import ASSISTANTS_V2, ContentType, Operation, Resource
from ._wire import Variant, WireEnum, WireModel
from .common import (
    CodeInterpreterTool,
    DeleteResponse,
    FileSearchTool,
    ImageFileContentPart,
    ImageUrlContentPart,
    ListQuery,
    ListResponse,
    Metadata,
    MetadataMixin,
    TextContentPart,
    ToolResources,
    ToolResourcesMixin,
)


class MessageRole(WireEnum):
    USER = "user"
    ASSISTANT = "assistant"


class MessageStatus(WireEnum):
    IN_PROGRESS = "in_progress"
    INCOMPLETE = "incomplete"
    COMPLETED = "completed"


MessageContentPart = Annotated[
    Union[TextContentPart, ImageUrlContentPart, ImageFileContentPart],
    Field(discriminator="type"),
]

AttachmentTool = Annotated[Union[CodeInterpreterTool, FileSearchTool], Field(discriminator="type")]


class Attachment(WireModel):
    """A file attached to a message and the tools it should be added to."""

    file_id: str
    tools: Tuple[AttachmentTool, ...] = ()

    @classmethod
    def of(cls, file_id: str, *tools: AttachmentTool) -> "Attachment":
        return cls(file_id=file_id, tools=tools)


# Requests --------------------------------------------------------------------

class ThreadMessageRequest(WireModel):
    """A message to add to a thread, at creation time or later."""

    role: MessageRole
    content: Union[str, Tuple[MessageContentPart, ...]]
    attachments: Optional[Tuple[Attachment, ...]] = None
    metadata: Optional[Metadata] = None

    @classmethod
    def builder(cls) -> "ThreadMessageRequestBuilder":
        return ThreadMessageRequestBuilder()


class ThreadMessageRequestBuilder(MetadataMixin, RequestBuilder):
    target = ThreadMessageRequest

    def role(self, role: MessageRole) -> "ThreadMessageRequestBuilder":
        return self._set("role", role)

    def content(self, content: Union[str, Tuple[MessageContentPart, ...]]) -> "ThreadMessageRequestBuilder":
        return self._set("content", content)

    def add_content(self, *parts: MessageContentPart) -> "ThreadMessageRequestBuilder":
        """Append content parts; plain-string content set earlier becomes the first text part."""
        current = self._values.get("content")
        if isinstance(current, str) and any(part is not None for part in parts):
            self._values["content"] = [TextContentPart.of(current)]
        return self._add("content", parts)

    def attachments(self, attachments) -> "ThreadMessageRequestBuilder":
        return self._set("attachments", attachments)

    def add_attachments(self, *attachments: Attachment) -> "ThreadMessageRequestBuilder":
        return self._add("attachments", attachments)


class ThreadMessageModifyRequest(WireModel):
    metadata: Optional[Metadata] = None

    @classmethod
    def builder(cls) -> "ThreadMessageModifyRequestBuilder":
        return ThreadMessageModifyRequestBuilder()


class ThreadMessageModifyRequestBuilder(MetadataMixin, RequestBuilder):
    target = ThreadMessageModifyRequest


class ThreadCreateRequest(WireModel):
    messages: Optional[Tuple[ThreadMessageRequest, ...]] = None
    tool_resources: Optional[ToolResources] = None
    metadata: Optional[Metadata] = None

    @classmethod
    def builder(cls) -> "ThreadCreateRequestBuilder":
        return ThreadCreateRequestBuilder()


class ThreadCreateRequestBuilder(ToolResourcesMixin, MetadataMixin, RequestBuilder):
    target = ThreadCreateRequest

    def messages(self, messages) -> "ThreadCreateRequestBuilder":
        """A list of messages to start the thread with."""
        return self._set("messages", messages)

    def add_messages(self, *messages: ThreadMessageRequest) -> "ThreadCreateRequestBuilder":
        return self._add("messages", messages)

    def add_message(self, configure: Callable[[ThreadMessageRequestBuilder], ThreadMessageRequestBuilder]
                    ) -> "ThreadCreateRequestBuilder":
        """Add a message configured on a fresh ThreadMessageRequest builder."""
        return self._add("messages", (self._nested(ThreadMessageRequest.builder, configure),))


class ThreadModifyRequest(WireModel):
    tool_resources: Optional[ToolResources] = None
    metadata: Optional[Metadata] = None

    @classmethod
    def builder(cls) -> "ThreadModifyRequestBuilder":
        return ThreadModifyRequestBuilder()


class ThreadModifyRequestBuilder(ToolResourcesMixin, MetadataMixin, RequestBuilder):
    target = ThreadModifyRequest


# Responses -------------------------------------------------------------------

class Thread(WireModel):
    id: str
    object: str = "thread"
    created_at: NonNegativeInt
    tool_resources: Optional[ToolResources] = None
    metadata: Optional[Metadata] = None


class FileCitation(WireModel):
    file_id: str
    quote: Optional[str] = None


class FileCitationAnnotation(Variant):
    type: Literal["file_citation"] = "file_citation"
    text: str
    file_citation: FileCitation
    start_index: NonNegativeInt
    end_index: NonNegativeInt


class FilePath(WireModel):
    file_id: str


class FilePathAnnotation(Variant):
    type: Literal["file_path"] = "file_path"
    text: str
    file_path: FilePath
    start_index: NonNegativeInt
    end_index: NonNegativeInt


Annotation = Annotated[Union[FileCitationAnnotation, FilePathAnnotation], Field(discriminator="type")]


class Text(WireModel):
    value: str
    annotations: Tuple[Annotation, ...] = ()


class TextMessageContent(Variant):
    type: Literal["text"] = "text"
    text: Text


MessageContent = Annotated[
    Union[TextMessageContent, ImageUrlContentPart, ImageFileContentPart],
    Field(discriminator="type"),
]


class IncompleteDetails(WireModel):
    reason: str


class ThreadMessage(WireModel):
    id: str
    object: str = "thread.message"
    created_at: NonNegativeInt
    thread_id: str
    status: Optional[MessageStatus] = None
    incomplete_details: Optional[IncompleteDetails] = None
    completed_at: Optional[NonNegativeInt] = None
    incomplete_at: Optional[NonNegativeInt] = None
    role: MessageRole
    content: Tuple[MessageContent, ...] = ()
    assistant_id: Optional[str] = None
    run_id: Optional[str] = None
    attachments: Optional[Tuple[Attachment, ...]] = None
    metadata: Optional[Metadata] = None

    def text(self) -> str:
        """Concatenated value of all text content parts."""
        return "".join(part.text.value for part in self.content if isinstance(part, TextMessageContent))


class MessageListQuery(ListQuery):
    run_id: Optional[str] = None


# Resources -------------------------------------------------------------------

class Threads(Resource):
    CREATE = Operation("POST", "/threads", Thread, headers=ASSISTANTS_V2)
    RETRIEVE = Operation("GET", "/threads/{thread_id}", Thread, ContentType.NONE, ASSISTANTS_V2)
    MODIFY = Operation("POST", "/threads/{thread_id}", Thread, headers=ASSISTANTS_V2)
    DELETE = Operation("DELETE", "/threads/{thread_id}", DeleteResponse, ContentType.NONE, ASSISTANTS_V2)

    def create(self, request: Optional[ThreadCreateRequest] = None) -> Thread:
        """Create a thread, optionally seeded with messages."""
        return self._call(self.CREATE, body=request or ThreadCreateRequest())

    def retrieve(self, thread_id: str) -> Thread:
        return self._call(self.RETRIEVE, thread_id=thread_id)

    def modify(self, thread_id: str, request: ThreadModifyRequest) -> Thread:
        return self._call(self.MODIFY, body=request, thread_id=thread_id)

    def delete(self, thread_id: str) -> DeleteResponse:
        return self._call(self.DELETE, thread_id=thread_id)


class Messages(Resource):
    CREATE = Operation("POST", "/threads/{thread_id}/messages", ThreadMessage, headers=ASSISTANTS_V2)
    RETRIEVE = Operation("GET", "/threads/{thread_id}/messages/{message_id}", ThreadMessage,
                         ContentType.NONE, ASSISTANTS_V2)
    MODIFY = Operation("POST", "/threads/{thread_id}/messages/{message_id}", ThreadMessage,
                       headers=ASSISTANTS_V2)
    LIST = Operation("GET", "/threads/{thread_id}/messages", ListResponse[ThreadMessage],
                     ContentType.NONE, ASSISTANTS_V2)

    def create(self, thread_id: str, request: ThreadMessageRequest) -> ThreadMessage:
        return self._call(self.CREATE, body=request, thread_id=thread_id)

    def retrieve(self, thread_id: str, message_id: str) -> ThreadMessage:
        return self._call(self.RETRIEVE, thread_id=thread_id, message_id=message_id)

    def modify(self, thread_id: str, message_id: str, request: ThreadMessageModifyRequest) -> ThreadMessage:
        return self._call(self.MODIFY, body=request, thread_id=thread_id, message_id=message_id)

    def list(self, thread_id: str, query: Optional[ListQuery] = None) -> ListResponse[ThreadMessage]:
        """Returns the messages of a thread; MessageListQuery can filter by run."""
        return self._call(self.LIST, query=query, thread_id=thread_id)
