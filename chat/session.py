from __future__ import annotations

import enum
import logging
import uuid
from datetime import datetime
from typing import Callable, List, Literal, Optional

import httpx
from pydantic import BaseModel, Field

from bridge.core.schemas import ChatReply, Turn
from config.settings import Settings, get_settings


logger = logging.getLogger("vbcapital.chat")

GREETING = (
    "Hello! I'm your VB Capital AI Assistant. I can help with investment analysis, "
    "portfolio insights, and market trends. How can I assist you today?"
)
APOLOGY = "Sorry, I encountered an error processing your request. Please try again."
STARTER_QUESTIONS = [
    "What are VB Capital's current investment focus areas?",
    "Can you analyze a startup's investment potential?",
    "What portfolio companies are in the AI sector?",
]
MAX_CONVERSATIONS = 10
JUST_NOW = "Just now"

Feedback = Literal["helpful", "not-helpful"]


class SessionState(str, enum.Enum):
    IDLE = "idle"
    SENDING = "sending"


class Conversation(BaseModel):
    id: str
    title: str
    last_activity: str = JUST_NOW
    turns: List[Turn] = Field(default_factory=list)


def derive_title(message: str) -> str:
    """First four words of ``message``, cut to 30 characters plus ``...``."""
    words = " ".join(message.split(" ")[:4])
    return words[:30] + "..." if len(words) > 30 else words


def build_client(settings: Optional[Settings] = None) -> httpx.Client:
    settings = settings or get_settings()
    # No timeout here: waiting is bounded only by the upstream model service.
    return httpx.Client(base_url=settings.chat_api_url, timeout=None)


class ChatSession:
    """Transient, in-memory chat state for one user session.

    Holds the visible turns, the input draft, the loading gate and the list
    of recent conversations. Nothing outlives the instance.
    """

    def __init__(
        self,
        http: httpx.Client,
        endpoint: str = "/api/chat",
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.http = http
        self.endpoint = endpoint
        self.clock = clock
        self.state = SessionState.IDLE
        self.input = ""
        self.conversations: List[Conversation] = []
        self.current_conversation_id: Optional[str] = None
        self.turns: List[Turn] = [self._greeting()]

    @property
    def is_loading(self) -> bool:
        return self.state is SessionState.SENDING

    def _timestamp(self) -> str:
        return self.clock().strftime("%H:%M")

    def _greeting(self) -> Turn:
        return Turn(role="assistant", content=GREETING, timestamp=self._timestamp())

    def _find(self, conversation_id: str) -> Optional[Conversation]:
        for conversation in self.conversations:
            if conversation.id == conversation_id:
                return conversation
        return None

    def start_new_conversation(self) -> None:
        self.current_conversation_id = None
        self.turns = [self._greeting()]

    def select_conversation(self, conversation_id: str) -> None:
        # Unknown ids are ignored on purpose: nothing changes, nothing raises.
        conversation = self._find(conversation_id)
        if conversation is None:
            return
        self.current_conversation_id = conversation.id
        self.turns = list(conversation.turns)

    def _request_reply(self, turns: List[Turn]) -> Turn:
        body = {"messages": [{"role": t.role, "content": t.content} for t in turns]}
        response = self.http.post(self.endpoint, json=body)
        response.raise_for_status()
        reply = ChatReply.model_validate(response.json())
        return Turn(role="assistant", content=reply.content, timestamp=self._timestamp())

    def submit(self, text: Optional[str] = None) -> Optional[Turn]:
        """Send ``text`` (or the input draft) and append the reply.

        Returns the assistant turn that was appended, or ``None`` when the
        submit was ignored (blank text or a request already in flight).
        """
        message = text or self.input
        if not message.strip() or self.is_loading:
            return None

        user_turn = Turn(role="user", content=message, timestamp=self._timestamp())
        sent = self.turns + [user_turn]
        self.turns = sent
        self.input = ""
        self.state = SessionState.SENDING

        try:
            try:
                assistant_turn = self._request_reply(sent)
            except Exception as exc:
                logger.error("Error: %s", exc)
                apology = Turn(role="assistant", content=APOLOGY, timestamp=self._timestamp())
                self.turns = sent + [apology]
                return apology

            final = sent + [assistant_turn]
            self.turns = final
            self._record_exchange(message, final)
            return assistant_turn
        finally:
            self.state = SessionState.IDLE

    def _record_exchange(self, message: str, turns: List[Turn]) -> None:
        if self.current_conversation_id is not None:
            conversation = self._find(self.current_conversation_id)
            if conversation is not None:
                conversation.turns = list(turns)
                conversation.last_activity = JUST_NOW
            return

        conversation = Conversation(
            id=str(uuid.uuid4()),
            title=derive_title(message),
            last_activity=JUST_NOW,
            turns=list(turns),
        )
        self.conversations = [conversation] + self.conversations[: MAX_CONVERSATIONS - 1]
        self.current_conversation_id = conversation.id
        logger.info("Created conversation %s (%s)", conversation.id, conversation.title)

    def suggested_questions(self) -> List[str]:
        user_messages = [
            turn.content
            for conversation in self.conversations
            for turn in conversation.turns
            if turn.role == "user"
        ]
        recent = [content for content in user_messages[-6:] if len(content) > 10]
        if len(recent) >= 3:
            return recent[:3]
        return list(STARTER_QUESTIONS)

    def send_feedback(self, turn: Turn, feedback: Feedback) -> None:
        if feedback not in ("helpful", "not-helpful"):
            raise ValueError(f"Unknown feedback value: {feedback!r}")
        logger.info("Feedback: %s for message: %s", feedback, turn.content[:80])
