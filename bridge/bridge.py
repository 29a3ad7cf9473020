from __future__ import annotations

import logging
from typing import Any, List, Optional, Sequence, Union

from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, SystemMessage
from langchain_core.prompts import ChatPromptTemplate, MessagesPlaceholder
from langchain_google_genai import ChatGoogleGenerativeAI
from pydantic import ValidationError

from bridge.core.errors import (
    ConfigurationError,
    MalformedRequestError,
    UpstreamError,
    redact,
)
from bridge.core.prompt import SYSTEM_PROMPT
from bridge.core.schemas import ChatReply, ChatRequest, Turn
from config.settings import Settings, get_settings


logger = logging.getLogger("vbcapital.bridge")

PromptInput = Union[str, List[BaseMessage]]


def build_llm(settings: Settings) -> ChatGoogleGenerativeAI:
    kwargs: dict = {
        "model": settings.gemini_model,
        "google_api_key": settings.google_api_key,
    }
    if settings.temperature is not None:
        kwargs["temperature"] = settings.temperature
    return ChatGoogleGenerativeAI(**kwargs)


def parse_request(payload: Any) -> List[Turn]:
    """Validate a decoded JSON body into the ordered list of turns."""
    if not isinstance(payload, dict):
        raise MalformedRequestError(
            "request body must be a JSON object",
            details="Expected an object with a 'messages' list",
        )
    try:
        request = ChatRequest.model_validate(payload)
    except ValidationError as exc:
        raise MalformedRequestError(
            "request body does not match schema", details=describe_errors(exc.errors())
        ) from exc
    return list(request.messages)


def describe_errors(errors: Sequence[dict]) -> str:
    return "; ".join(
        f"{'.'.join(str(part) for part in err.get('loc', ()))}: {err.get('msg', '')}"
        for err in errors
    )


def build_prompt(turns: Sequence[Turn]) -> str:
    # Only the latest turn reaches the model; earlier turns are ignored.
    return f"{SYSTEM_PROMPT}\n\nUser: {turns[-1].content}"


def to_lc_messages(history: Sequence[Turn], window: int) -> List[BaseMessage]:
    messages: List[BaseMessage] = []
    if window <= 0:
        return messages
    for turn in list(history)[-window:]:
        if not turn.content:
            continue
        if turn.role == "user":
            messages.append(HumanMessage(content=turn.content))
        else:
            messages.append(AIMessage(content=turn.content))
    return messages


def build_history_messages(turns: Sequence[Turn], window: int) -> List[BaseMessage]:
    prompt = ChatPromptTemplate.from_messages(
        [
            SystemMessage(content=SYSTEM_PROMPT),
            MessagesPlaceholder("chat_history", optional=True),
            ("human", "{input}"),
        ]
    )
    return prompt.format_messages(
        input=turns[-1].content,
        chat_history=to_lc_messages(turns[:-1], window),
    )


def _message_text(message: Any) -> str:
    content = getattr(message, "content", message)
    if isinstance(content, str):
        return content
    parts = []
    for part in content or []:
        if isinstance(part, str):
            parts.append(part)
        elif isinstance(part, dict) and part.get("type", "text") == "text":
            parts.append(part.get("text") or "")
    return "".join(parts)


def generate_reply(turns: Sequence[Turn], llm: Optional[Any] = None) -> ChatReply:
    """Send the conversation's latest turn to the model and wrap the answer.

    Raises ``ConfigurationError`` when no credential is configured,
    ``MalformedRequestError`` for an empty history or blank latest turn, and
    ``UpstreamError`` when the model call fails for any reason.
    """
    settings = get_settings()
    logger.info("API key exists: %s", bool(settings.google_api_key))
    logger.info("API key length: %s", len(settings.google_api_key or ""))

    if not settings.google_api_key:
        logger.error("GEMINI_API_KEY not found in environment variables")
        raise ConfigurationError("model service credential is not set")

    if not turns or not turns[-1].content.strip():
        raise MalformedRequestError(
            "latest turn is empty",
            details="The latest turn must have non-empty content",
        )

    prompt: PromptInput
    if settings.prompt_include_history:
        prompt = build_history_messages(turns, settings.history_turns)
    else:
        prompt = build_prompt(turns)

    try:
        model = llm if llm is not None else build_llm(settings)
        result = model.invoke(prompt)
    except Exception as exc:
        # Client errors may embed the request URL with ?key=...; no traceback either.
        message = redact(str(exc), settings.google_api_key)
        logger.error("Error calling Gemini (%s): %s", type(exc).__name__, message)
        raise UpstreamError("model call failed", details=message) from exc

    text = _message_text(result)
    logger.info("Model responded: %s chars", len(text))
    return ChatReply(content=text)
