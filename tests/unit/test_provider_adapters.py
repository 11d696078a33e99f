"""Provider adapters against RESPX-mocked upstreams."""

import json

import httpx
import pytest
import respx

from rotation_proxy.core.exceptions import ProviderCallError
from rotation_proxy.core.provider.adapters import (
    CohereAdapter,
    GeminiAdapter,
    HuggingFaceAdapter,
    NvidiaAdapter,
)
from rotation_proxy.core.provider.adapters.openai_compatible import (
    chutes_adapter,
    mistral_adapter,
    openrouter_adapter,
    requesty_adapter,
)
from rotation_proxy.core.settings import ChatMessage, LlmSettings
from tests.fixtures.mock_http import error_response, openai_completion

NVIDIA_CHAT_URL = "https://integrate.api.nvidia.com/v1/chat/completions"

MESSAGES = [
    ChatMessage(role="system", content="Be brief."),
    ChatMessage(role="user", content="Hello"),
    ChatMessage(role="assistant", content="Hi"),
    ChatMessage(role="user", content="How are you?"),
]


def settings_for(provider: str, model: str, **overrides) -> LlmSettings:
    return LlmSettings(provider=provider, model=model, api_keys={provider: ["k"]}, **overrides)


GPT4 = settings_for("openrouter", "gpt-4")
FLASH = settings_for("gemini", "gemini-2.0-flash")


def sent_json(route: respx.Route) -> dict:
    return json.loads(route.calls.last.request.content)


@pytest.mark.unit
@pytest.mark.asyncio
class TestOpenAICompatibleAdapters:
    """Test adapters for OpenAI-style /chat/completions providers."""

    async def test_openrouter_sends_bearer_and_site_headers(self, mock_openrouter_api):
        """Should send bearer auth, attribution headers and sampling parameters."""
        route = mock_openrouter_api.post("/chat/completions").mock(
            return_value=httpx.Response(200, json=openai_completion("pong"))
        )
        settings = settings_for(
            "openrouter",
            "claude-3-opus",
            temperature=0.2,
            top_p=0.5,
            max_tokens=64,
            site_url="https://example.test",
            site_name="Example",
        )

        async with httpx.AsyncClient() as client:
            text = await openrouter_adapter(client)("sk-or-1", settings, MESSAGES)

        assert text == "pong"
        request = route.calls.last.request
        assert request.headers["Authorization"] == "Bearer sk-or-1"
        assert request.headers["HTTP-Referer"] == "https://example.test"
        assert request.headers["X-Title"] == "Example"
        body = sent_json(route)
        assert body["model"] == "claude-3-opus"
        assert body["messages"][0] == {"role": "system", "content": "Be brief."}
        assert body["temperature"] == 0.2
        assert body["top_p"] == 0.5
        assert body["max_tokens"] == 64
        assert body["stream"] is False

    async def test_defaults_fill_missing_sampling_parameters(self, mock_all_providers):
        """Should fill unset sampling parameters with defaults."""
        route = mock_all_providers.post("https://api.mistral.ai/v1/chat/completions").mock(
            return_value=httpx.Response(200, json=openai_completion("ok"))
        )

        async with httpx.AsyncClient() as client:
            settings = settings_for("mistral", "mistral-large-latest")
            await mistral_adapter(client)("k", settings, MESSAGES)

        body = sent_json(route)
        assert body["temperature"] == 0.7
        assert body["top_p"] == 0.9
        assert body["max_tokens"] == 2048
        assert "HTTP-Referer" not in route.calls.last.request.headers

    async def test_requesty_sends_site_headers(self, mock_all_providers):
        """Should send attribution headers to Requesty."""
        route = mock_all_providers.post("https://router.requesty.ai/v1/chat/completions").mock(
            return_value=httpx.Response(200, json=openai_completion("ok"))
        )

        async with httpx.AsyncClient() as client:
            await requesty_adapter(client)("k", settings_for("requesty", "requesty/x"), MESSAGES)

        assert route.calls.last.request.headers["X-Title"] == "LLM Rotation Server"

    async def test_chutes_omits_top_p_and_caps_tokens(self, mock_all_providers):
        """Should omit top_p and default to 1024 tokens for Chutes."""
        route = mock_all_providers.post("https://llm.chutes.ai/v1/chat/completions").mock(
            return_value=httpx.Response(200, json=openai_completion("ok"))
        )

        async with httpx.AsyncClient() as client:
            settings = settings_for("chutes", "deepseek-ai/DeepSeek-R1")
            await chutes_adapter(client)("k", settings, MESSAGES)

        body = sent_json(route)
        assert "top_p" not in body
        assert body["max_tokens"] == 1024

    async def test_null_content_becomes_empty_string(self, mock_openrouter_api):
        """Should turn null message content into an empty string."""
        mock_openrouter_api.post("/chat/completions").mock(
            return_value=httpx.Response(200, json=openai_completion(None))
        )

        async with httpx.AsyncClient() as client:
            text = await openrouter_adapter(client)("k", GPT4, MESSAGES)

        assert text == ""

    async def test_http_error_embeds_status_and_body(self, mock_openrouter_api):
        """Should raise with the status code and upstream body in the message."""
        mock_openrouter_api.post("/chat/completions").mock(
            return_value=error_response(429, "rate_limit_error", "Too many requests")
        )

        async with httpx.AsyncClient() as client:
            with pytest.raises(ProviderCallError) as exc_info:
                await openrouter_adapter(client)("k", GPT4, MESSAGES)

        assert exc_info.value.status_code == 429
        assert str(exc_info.value).startswith("API request failed: 429")
        assert "Too many requests" in str(exc_info.value)

    async def test_unexpected_shape_raises(self, mock_openrouter_api):
        """Should raise on a response without choices."""
        mock_openrouter_api.post("/chat/completions").mock(
            return_value=httpx.Response(200, json={"choices": []})
        )

        async with httpx.AsyncClient() as client:
            with pytest.raises(ProviderCallError, match="Unexpected response format"):
                await openrouter_adapter(client)("k", GPT4, MESSAGES)

    async def test_non_json_body_raises(self, mock_openrouter_api):
        """Should raise on a body that is not JSON."""
        mock_openrouter_api.post("/chat/completions").mock(
            return_value=httpx.Response(200, text="<html>oops</html>")
        )

        async with httpx.AsyncClient() as client:
            with pytest.raises(ProviderCallError, match="non-JSON"):
                await openrouter_adapter(client)("k", GPT4, MESSAGES)


@pytest.mark.unit
@pytest.mark.asyncio
class TestNvidiaAdapter:
    """Test NVIDIA reasoning-model switches."""

    async def test_nemotron_gets_thinking_system_prompt(self, mock_all_providers):
        """Should prepend the thinking system prompt for Nemotron models."""
        route = mock_all_providers.post(NVIDIA_CHAT_URL).mock(
            return_value=httpx.Response(200, json=openai_completion("ok"))
        )
        model = "nvidia/llama-3.3-nemotron-super-49b-v1"

        async with httpx.AsyncClient() as client:
            await NvidiaAdapter(client)("k", settings_for("nvidia", model), MESSAGES)

        messages = sent_json(route)["messages"]
        assert messages[0] == {"role": "system", "content": "detailed thinking on"}
        assert len(messages) == len(MESSAGES) + 1

    async def test_qwen3_enables_template_thinking(self, mock_all_providers):
        """Should enable thinking through chat_template_kwargs for Qwen3."""
        route = mock_all_providers.post(NVIDIA_CHAT_URL).mock(
            return_value=httpx.Response(200, json=openai_completion("ok"))
        )

        async with httpx.AsyncClient() as client:
            settings = settings_for("nvidia", "qwen/qwen3-235b-a22b")
            await NvidiaAdapter(client)("k", settings, MESSAGES)

        body = sent_json(route)
        assert body["chat_template_kwargs"] == {"thinking": True}
        assert body["messages"][0]["content"] == "Be brief."


@pytest.mark.unit
@pytest.mark.asyncio
class TestHuggingFaceAdapter:
    """Test Hugging Face backend selection."""

    async def test_model_carries_catalog_backend(self, mock_all_providers):
        """Should suffix the model with its catalog backend."""
        route = mock_all_providers.post("https://router.huggingface.co/v1/chat/completions").mock(
            return_value=httpx.Response(200, json=openai_completion("ok"))
        )

        async with httpx.AsyncClient() as client:
            await HuggingFaceAdapter(client)(
                "hf_k", settings_for("huggingface", "Sao10K/L3-8B-Stheno-v3.2"), MESSAGES
            )

        assert sent_json(route)["model"] == "Sao10K/L3-8B-Stheno-v3.2:novita"

    async def test_override_and_default_backend(self, mock_all_providers):
        """Should use the override, else the default backend."""
        route = mock_all_providers.post("https://router.huggingface.co/v1/chat/completions").mock(
            return_value=httpx.Response(200, json=openai_completion("ok"))
        )

        async with httpx.AsyncClient() as client:
            adapter = HuggingFaceAdapter(client)
            await adapter("k", settings_for("huggingface", "org/model"), MESSAGES)
            assert sent_json(route)["model"] == "org/model:nebius"
            settings = settings_for("huggingface", "org/model", provider_override="together")
            await adapter("k", settings, MESSAGES)
            assert sent_json(route)["model"] == "org/model:together"


@pytest.mark.unit
@pytest.mark.asyncio
class TestGeminiAdapter:
    """Test the Gemini generateContent adapter."""

    async def test_generate_content_request(self, mock_gemini_api, gemini_generate_content):
        """Should map roles, auth header and generation config."""
        route = mock_gemini_api.post("/models/gemini-2.5-pro:generateContent").mock(
            return_value=httpx.Response(200, json=gemini_generate_content)
        )

        async with httpx.AsyncClient() as client:
            text = await GeminiAdapter(client)(
                "g-key", settings_for("gemini", "gemini-2.5-pro", max_tokens=100), MESSAGES
            )

        assert text == "Hello from Gemini"
        assert route.calls.last.request.headers["x-goog-api-key"] == "g-key"
        body = sent_json(route)
        assert [c["role"] for c in body["contents"]] == ["user", "user", "model", "user"]
        assert body["contents"][1]["parts"] == [{"text": "Hello"}]
        config = body["generationConfig"]
        assert config["maxOutputTokens"] == 100
        assert config["temperature"] == 0.7
        assert config["thinkingConfig"] == {"thinkingBudget": 24576}

    async def test_no_thinking_budget_for_other_models(
        self, mock_gemini_api, gemini_generate_content
    ):
        """Should only send a thinking budget for listed models."""
        route = mock_gemini_api.post("/models/gemini-2.0-flash:generateContent").mock(
            return_value=httpx.Response(200, json=gemini_generate_content)
        )

        async with httpx.AsyncClient() as client:
            await GeminiAdapter(client)("k", FLASH, MESSAGES)

        assert "thinkingConfig" not in sent_json(route)["generationConfig"]

    async def test_blocked_prompt_is_a_failed_attempt(self, mock_gemini_api):
        """A blocked prompt has no candidates and must not count as success."""
        mock_gemini_api.post("/models/gemini-2.0-flash:generateContent").mock(
            return_value=httpx.Response(200, json={"promptFeedback": {"blockReason": "SAFETY"}})
        )

        async with httpx.AsyncClient() as client:
            with pytest.raises(ProviderCallError, match="SAFETY"):
                await GeminiAdapter(client)("k", FLASH, MESSAGES)

    async def test_truncated_thinking_output_is_a_failed_attempt(self, mock_gemini_api):
        """Output cut off by maxOutputTokens before any text raises."""
        mock_gemini_api.post("/models/gemini-2.0-flash:generateContent").mock(
            return_value=httpx.Response(
                200,
                json={
                    "candidates": [{"content": {"role": "model"}, "finishReason": "MAX_TOKENS"}]
                },
            )
        )

        async with httpx.AsyncClient() as client:
            with pytest.raises(ProviderCallError, match="MAX_TOKENS"):
                await GeminiAdapter(client)("k", FLASH, MESSAGES)

    async def test_empty_text_with_stop_is_returned(self, mock_gemini_api):
        """A normal stop with no text part is a legitimate empty answer."""
        mock_gemini_api.post("/models/gemini-2.0-flash:generateContent").mock(
            return_value=httpx.Response(
                200, json={"candidates": [{"content": {"parts": []}, "finishReason": "STOP"}]}
            )
        )

        async with httpx.AsyncClient() as client:
            text = await GeminiAdapter(client)("k", FLASH, MESSAGES)

        assert text == ""

    async def test_quota_error_is_rate_limit_text(self, mock_gemini_api):
        """Should surface 429 in the error text for rate-limit classification."""
        mock_gemini_api.post("/models/gemini-2.0-flash:generateContent").mock(
            return_value=httpx.Response(
                429, json={"error": {"code": 429, "status": "RESOURCE_EXHAUSTED"}}
            )
        )

        async with httpx.AsyncClient() as client:
            with pytest.raises(ProviderCallError, match="429"):
                await GeminiAdapter(client)("k", FLASH, MESSAGES)


@pytest.mark.unit
@pytest.mark.asyncio
class TestCohereAdapter:
    """Test the Cohere v2 chat adapter."""

    async def test_joins_text_parts(self, mock_all_providers, cohere_chat_response):
        """Should join text parts with newlines."""
        route = mock_all_providers.post("https://api.cohere.com/v2/chat").mock(
            return_value=httpx.Response(200, json=cohere_chat_response)
        )

        async with httpx.AsyncClient() as client:
            settings = settings_for("cohere", "command-a-03-2025")
            text = await CohereAdapter(client)("co-k", settings, MESSAGES)

        assert text == "Hello\nthere"
        assert route.calls.last.request.headers["Authorization"] == "Bearer co-k"
        assert sent_json(route)["messages"][-1] == {"role": "user", "content": "How are you?"}
