from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Sequence

from langchain_core.messages import BaseMessage
from pydantic import BaseModel


class ChatResult(BaseModel):
    """Assistant output plus the model that produced it and its token usage."""

    output: Any
    model: str
    usage: dict[str, int] = {}


class LLMProvider(ABC):
    """A chat model that can optionally parse its reply into a pydantic schema."""

    name: str = "abstract"

    def __init__(self, *, model: str) -> None:
        self.model = model

    @abstractmethod
    def chat(
        self,
        messages: Sequence[BaseMessage],
        *,
        response_model: type[BaseModel] | None = None,
    ) -> ChatResult:
        """Run one chat completion.

        ``ChatResult.output`` is the raw assistant text, or a validated
        *response_model* instance when one is given.
        """
