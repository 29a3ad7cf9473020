from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Turn(BaseModel):
    model_config = ConfigDict(frozen=True)

    role: Literal["user", "assistant"] = Field(..., description="'user' or 'assistant'")
    content: str
    timestamp: Optional[str] = Field(default=None, description="Display time, e.g. '14:05'")


class ChatRequest(BaseModel):
    messages: List[Turn] = Field(..., description="Entire visible history, oldest first")

    @field_validator("messages")
    @classmethod
    def _latest_turn_has_content(cls, messages: List[Turn]) -> List[Turn]:
        if not messages:
            raise ValueError("messages must contain at least one turn")
        if not messages[-1].content.strip():
            raise ValueError("the latest turn must have non-empty content")
        return messages


class ChatReply(BaseModel):
    role: Literal["assistant"] = "assistant"
    content: str


class ChatFailure(BaseModel):
    error: str
    details: Optional[str] = None
