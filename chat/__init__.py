from chat.session import (
    APOLOGY,
    GREETING,
    MAX_CONVERSATIONS,
    ChatSession,
    Conversation,
    SessionState,
    build_client,
    derive_title,
)

__all__ = [
    "APOLOGY",
    "GREETING",
    "MAX_CONVERSATIONS",
    "ChatSession",
    "Conversation",
    "SessionState",
    "build_client",
    "derive_title",
]
