"""Mirror models of the external ConversationState contract."""

from __future__ import annotations

from schema_tracker.models.conversation_state import (
    MIRROR_LAST_UPDATED,
    MIRROR_UPSTREAM_COMMIT,
    AssistantMessage,
    ChatConversationType,
    ContentBlock,
    ContextManager,
    ConversationState,
    EnvState,
    FileLineTracker,
    HistoryEntry,
    ImageBlock,
    McpServerOrigin,
    MessageMetaTag,
    ModelInfo,
    RequestMetadata,
    Tool,
    ToolOrigin,
    ToolResult,
    ToolResultStatus,
    ToolUse,
    TranscriptEntry,
    UserEnvContext,
    UserMessage,
)

__all__ = [
    "MIRROR_LAST_UPDATED",
    "MIRROR_UPSTREAM_COMMIT",
    "AssistantMessage",
    "ChatConversationType",
    "ContentBlock",
    "ContextManager",
    "ConversationState",
    "EnvState",
    "FileLineTracker",
    "HistoryEntry",
    "ImageBlock",
    "McpServerOrigin",
    "MessageMetaTag",
    "ModelInfo",
    "RequestMetadata",
    "Tool",
    "ToolOrigin",
    "ToolResult",
    "ToolResultStatus",
    "ToolUse",
    "TranscriptEntry",
    "UserEnvContext",
    "UserMessage",
]
