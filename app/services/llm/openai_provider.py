from __future__ import annotations

import logging
from typing import Sequence

from langchain_core.language_models import BaseChatModel
from langchain_core.messages import BaseMessage
from langchain_core.output_parsers import PydanticOutputParser, StrOutputParser
from langchain_openai import ChatOpenAI
from pydantic import BaseModel

from .base import ChatResult, LLMProvider

logger = logging.getLogger(__name__)

_USAGE_KEYS = ("input_tokens", "output_tokens", "total_tokens")


class OpenAIProvider(LLMProvider):
    name = "openai"

    def __init__(
        self,
        *,
        model: str,
        api_key: str | None = None,
        temperature: float = 0.3,
        top_p: float = 1.0,
        max_tokens: int = 1024,
        llm: BaseChatModel | None = None,
    ) -> None:
        super().__init__(model=model)
        self._llm = llm or ChatOpenAI(
            model=model,
            api_key=api_key,
            temperature=temperature,
            top_p=top_p,
            max_tokens=max_tokens,
        )

    def chat(
        self,
        messages: Sequence[BaseMessage],
        *,
        response_model: type[BaseModel] | None = None,
    ) -> ChatResult:
        if response_model is not None:
            parser = PydanticOutputParser(pydantic_object=response_model)
        else:
            parser = StrOutputParser()

        # Retry the model call only; parse failures surface immediately
        reply = self._llm.with_retry(stop_after_attempt=3).invoke(list(messages))
        output = parser.invoke(reply)

        usage_metadata = getattr(reply, "usage_metadata", None) or {}
        usage = {key: usage_metadata[key] for key in _USAGE_KEYS if key in usage_metadata}
        logger.debug("Chat completion with %s used %s tokens", self.model, usage.get("total_tokens", "?"))
        return ChatResult(output=output, model=self.model, usage=usage)
