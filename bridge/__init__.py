from bridge.bridge import build_prompt, generate_reply, parse_request
from bridge.core.errors import (
    BridgeError,
    ConfigurationError,
    MalformedRequestError,
    UpstreamError,
)
from bridge.core.schemas import ChatFailure, ChatReply, ChatRequest, Turn

__all__ = [
    "BridgeError",
    "ChatFailure",
    "ChatReply",
    "ChatRequest",
    "ConfigurationError",
    "MalformedRequestError",
    "Turn",
    "UpstreamError",
    "build_prompt",
    "generate_reply",
    "parse_request",
]
