from types import SimpleNamespace

import pytest

from app.services.imagegen import ImageGenerationError, build_image_prompt, generate_image
from app.services.imagegen.base import ImageProvider
from app.services.imagegen.openai_provider import OpenAIImageProvider

from .conftest import make_png_base64


class FakeImagesAPI:
    def __init__(self, data):
        self.data = data
        self.calls = []

    def generate(self, **params):
        self.calls.append(params)
        return SimpleNamespace(data=self.data)


def _provider(data):
    images = FakeImagesAPI(data)
    return OpenAIImageProvider(client=SimpleNamespace(images=images)), images


def test_prompt_embeds_hint_and_forbids_text():
    prompt = build_image_prompt("  financial charts ")

    assert "suitable for a section about: financial charts." in prompt
    assert "photorealistic" in prompt
    assert "Do not include any text in the image." in prompt


def test_openai_provider_returns_png_data_uri():
    payload = make_png_base64()
    provider, images = _provider([SimpleNamespace(b64_json=payload)])

    result = provider.generate("a prompt", alt_text="ocean")

    assert result.image_url == f"data:image/png;base64,{payload}"
    assert result.alt_text == "ocean"
    (call,) = images.calls
    assert call["prompt"] == "a prompt"
    assert call["n"] == 1
    assert "response_format" not in call


def test_dalle_models_request_base64():
    images = FakeImagesAPI([SimpleNamespace(b64_json=make_png_base64())])
    provider = OpenAIImageProvider(model="dall-e-3", client=SimpleNamespace(images=images))

    provider.generate("a prompt", alt_text="x")

    assert images.calls[0]["response_format"] == "b64_json"


@pytest.mark.parametrize("data", [[], [SimpleNamespace(b64_json=None)], [SimpleNamespace(b64_json="")]])
def test_missing_payload_raises(data):
    provider, _ = _provider(data)

    with pytest.raises(ImageGenerationError):
        provider.generate("a prompt", alt_text="x")


def test_undecodable_payload_raises():
    provider, _ = _provider([SimpleNamespace(b64_json="aGVsbG8gd29ybGQ=")])  # "hello world"

    with pytest.raises(ImageGenerationError):
        provider.generate("a prompt", alt_text="x")


def test_generate_image_uses_hint_as_alt_text():
    class RecordingProvider(ImageProvider):
        name = "recording"

        def __init__(self):
            self.prompts = []

        def generate(self, prompt, *, alt_text):
            self.prompts.append(prompt)
            return SimpleNamespace(image_url="data:image/png;base64,AAAA", alt_text=alt_text)

    provider = RecordingProvider()
    result = generate_image("social trading network", provider=provider)

    assert result.alt_text == "social trading network"
    assert provider.prompts == [build_image_prompt("social trading network")]
