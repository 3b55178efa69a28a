"""Mirror of the chat application's ConversationState type.

MAINTENANCE REQUIRED: these models are hand-kept copies of types owned by
the upstream chat application. They exist so a complete JSON Schema can be
derived without modifying upstream code. When the upstream types change,
update these models and bump MIRROR_UPSTREAM_COMMIT / MIRROR_LAST_UPDATED.

Differences from upstream:
- ToolOrigin map keys are plain strings (a newtype variant cannot be a JSON key)
- ContextManager is reduced to its serialized fields
- serde_json::Value fields are typed as JsonValue
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Literal, Union

from pydantic import BaseModel, ConfigDict, Field, JsonValue, NonNegativeInt

MIRROR_UPSTREAM_COMMIT = "71c00814247c3c2d6e134c3cbd0f23f6745b1466"
"""Upstream commit the mirror was last synced against."""

MIRROR_LAST_UPDATED = "2025-08-20"
"""Date the mirror was last synced."""

_MIRROR_CONFIG = ConfigDict(
    frozen=True,
    extra="forbid",
    populate_by_name=True,
    protected_namespaces=(),
)


class ToolResultStatus(str, Enum):
    """Outcome of a tool invocation."""

    SUCCESS = "Success"
    ERROR = "Error"


class ChatConversationType(str, Enum):
    """Whether a turn involved tool use."""

    NOT_TOOL_USE = "NotToolUse"
    TOOL_USE = "ToolUse"


class MessageMetaTag(str, Enum):
    """Tags attached to request metadata."""

    COMPACT = "Compact"


class McpServerOrigin(BaseModel):
    """Tool origin for tools provided by a named MCP server.

    Serialized externally tagged, e.g. ``{"McpServer": "github"}``.
    """

    model_config = _MIRROR_CONFIG

    server: str = Field(..., alias="McpServer", description="MCP server name")


ToolOrigin = Union[Literal["Native"], McpServerOrigin]


class EnvState(BaseModel):
    model_config = _MIRROR_CONFIG

    variables: dict[str, str] = Field(
        default_factory=dict, description="Environment variables captured for the turn"
    )


class ImageBlock(BaseModel):
    model_config = _MIRROR_CONFIG

    image_type: str = Field(..., description="Image format (png, jpeg, ...)")
    data: str = Field(..., description="Encoded image payload")


class UserEnvContext(BaseModel):
    """Environment the user message was sent from."""

    model_config = _MIRROR_CONFIG

    operating_system: str = Field(..., description="Host operating system")
    architecture: str = Field(..., description="Host CPU architecture")
    current_directory: str = Field(..., description="Working directory of the session")
    env_state: EnvState | None = Field(default=None, description="Captured environment state")


class UserMessage(BaseModel):
    """A message sent by the user."""

    model_config = _MIRROR_CONFIG

    additional_context: str = Field(..., description="Extra context prepended to the prompt")
    env_context: UserEnvContext = Field(..., description="Sender environment")
    timestamp: datetime | None = Field(default=None, description="When the message was sent (UTC)")
    images: list[ImageBlock] | None = Field(default=None, description="Attached images")


class ToolUse(BaseModel):
    model_config = _MIRROR_CONFIG

    tool_use_id: str = Field(..., description="Identifier of the tool call")
    name: str = Field(..., description="Tool name")
    input: JsonValue = Field(..., description="Arbitrary JSON tool input")


class ToolResult(BaseModel):
    model_config = _MIRROR_CONFIG

    tool_use_id: str = Field(..., description="Identifier of the originating tool call")
    content: str = Field(..., description="Tool output")
    status: ToolResultStatus = Field(..., description="Tool outcome")


class ContentBlock(BaseModel):
    """One block of assistant output."""

    model_config = _MIRROR_CONFIG

    content_type: str = Field(..., description="Block kind (text, tool_use, tool_result)")
    text: str | None = Field(default=None, description="Text content")
    tool_use: ToolUse | None = Field(default=None, description="Tool call content")
    tool_result: ToolResult | None = Field(default=None, description="Tool result content")


class AssistantMessage(BaseModel):
    model_config = _MIRROR_CONFIG

    message_id: str = Field(..., description="Assistant message identifier")
    content: list[ContentBlock] = Field(..., description="Ordered content blocks")


class RequestMetadata(BaseModel):
    """Metadata recorded for a model request."""

    model_config = _MIRROR_CONFIG

    request_id: str | None = Field(default=None, description="Service request identifier")
    message_id: str = Field(..., description="Message identifier")
    conversation_id: str = Field(..., description="Conversation identifier")
    response_size: NonNegativeInt = Field(..., description="Response size in bytes")
    chat_conversation_type: ChatConversationType | None = Field(
        default=None, description="Whether the turn used tools"
    )
    tool_use_ids_and_names: list[tuple[str, str]] = Field(
        default_factory=list, description="(tool_use_id, tool name) pairs"
    )
    model_id: str | None = Field(default=None, description="Model used for the request")
    message_meta_tags: list[MessageMetaTag] = Field(
        default_factory=list, description="Tags attached to the message"
    )


class HistoryEntry(BaseModel):
    """A user/assistant exchange in the conversation history."""

    model_config = _MIRROR_CONFIG

    user: UserMessage = Field(..., description="User side of the exchange")
    assistant: AssistantMessage = Field(..., description="Assistant side of the exchange")
    request_metadata: RequestMetadata | None = Field(
        default=None, description="Metadata of the request that produced the reply"
    )


class TranscriptEntry(BaseModel):
    model_config = _MIRROR_CONFIG

    role: str = Field(..., description="Speaker role")
    content: str = Field(..., description="Rendered text")
    timestamp: datetime = Field(..., description="When the entry was recorded (UTC)")


class Tool(BaseModel):
    """A tool available to the model."""

    model_config = _MIRROR_CONFIG

    name: str = Field(..., description="Tool name")
    description: str = Field(..., description="Tool description shown to the model")
    input_schema: JsonValue = Field(..., description="JSON Schema of the tool input")
    tool_origin: ToolOrigin = Field(..., description="Where the tool comes from")


class ContextManager(BaseModel):
    model_config = _MIRROR_CONFIG

    current_profile: str = Field(..., description="Active context profile")
    paths: list[str] = Field(default_factory=list, description="Context file paths")


class ModelInfo(BaseModel):
    model_config = _MIRROR_CONFIG

    model_id: str = Field(..., description="Model identifier")
    model_name: str = Field(..., description="Human-readable model name")


class FileLineTracker(BaseModel):
    """Line counts used to attribute file edits."""

    model_config = _MIRROR_CONFIG

    last_line_count: NonNegativeInt = Field(..., description="Line count at last observation")
    user_lines_added: NonNegativeInt = Field(..., description="Lines added by the user")
    agent_lines_added: NonNegativeInt = Field(..., description="Lines added by the agent")


class ConversationState(BaseModel):
    """Chat application conversation state.

    Attributes:
        conversation_id: Unique identifier for this conversation.
        next_message: Next message to be processed, if any.
        history: History of conversation turns.
        valid_history_range: Valid [start, end) range for history indexing.
        transcript: Full conversation transcript.
        tools: Available tools keyed by tool origin.
        context_manager: Context manager for file/resource context.
        context_message_length: Length of context messages.
        latest_summary: Latest conversation summary with its request metadata.
        model: Model configuration.
        model_info: Detailed model information.
        file_line_tracker: File line tracking keyed by path.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        populate_by_name=True,
        protected_namespaces=(),
        title="ConversationState",
    )

    conversation_id: str = Field(..., description="Unique identifier for this conversation")
    next_message: UserMessage | None = Field(
        default=None, description="Next message to be processed (if any)"
    )
    history: list[HistoryEntry] = Field(
        default_factory=list, description="History of conversation turns"
    )
    valid_history_range: tuple[NonNegativeInt, NonNegativeInt] = Field(
        default=(0, 0), description="Valid range for history indexing"
    )
    transcript: list[TranscriptEntry] = Field(
        default_factory=list, description="Full conversation transcript"
    )
    tools: dict[str, list[Tool]] = Field(
        default_factory=dict, description="Available tools organized by origin"
    )
    context_manager: ContextManager | None = Field(
        default=None, description="Context manager for file/resource context"
    )
    context_message_length: NonNegativeInt | None = Field(
        default=None, description="Length of context messages"
    )
    latest_summary: tuple[str, RequestMetadata] | None = Field(
        default=None, description="Latest conversation summary with metadata"
    )
    model: str | None = Field(default=None, description="Model configuration")
    model_info: ModelInfo | None = Field(default=None, description="Detailed model information")
    file_line_tracker: dict[str, FileLineTracker] = Field(
        default_factory=dict, description="File line tracking for modifications"
    )
