import pytest
from langchain_core.exceptions import OutputParserException
from langchain_core.language_models.fake_chat_models import FakeListChatModel
from langchain_core.messages import HumanMessage

from app.models import TradingInsights
from app.services.llm.openai_provider import OpenAIProvider
from app.services.llm.registry import get_provider


def _provider(*responses):
    return OpenAIProvider(model="gpt-4o", llm=FakeListChatModel(responses=list(responses)))


def test_chat_returns_plain_text_without_schema():
    result = _provider("Markets are calm.").chat([HumanMessage(content="hi")])

    assert result.output == "Markets are calm."
    assert result.model == "gpt-4o"
    assert result.usage == {}


def test_chat_parses_response_model():
    reply = '{"summary": "Range-bound FX", "insights": ["Fade EUR/USD rallies"]}'

    result = _provider(reply).chat([HumanMessage(content="hi")], response_model=TradingInsights)

    assert isinstance(result.output, TradingInsights)
    assert result.output.insights == ["Fade EUR/USD rallies"]
    assert result.output.disclaimer is None


def test_unparseable_reply_raises():
    with pytest.raises(OutputParserException):
        _provider("not json").chat([HumanMessage(content="hi")], response_model=TradingInsights)


def test_unknown_provider_is_rejected():
    with pytest.raises(ValueError, match="Unsupported LLM provider 'anthropic'"):
        get_provider("anthropic")
