"""Chat model access for features that need text generation."""
from __future__ import annotations

from typing import Sequence

from langchain_core.messages import BaseMessage
from pydantic import BaseModel

from .base import ChatResult, LLMProvider
from .registry import get_provider

__all__ = [
    "ChatResult",
    "LLMProvider",
    "chat_completion",
    "get_provider",
]


def chat_completion(
    messages: Sequence[BaseMessage],
    *,
    response_model: type[BaseModel] | None = None,
) -> ChatResult:
    return get_provider().chat(messages, response_model=response_model)
