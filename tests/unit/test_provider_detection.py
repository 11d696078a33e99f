import pytest

from rotation_proxy.core.model_catalog import MODEL_CATALOG, iter_catalog
from rotation_proxy.core.provider_detection import (
    PATTERN_RULES,
    DetectionReason,
    determine_provider,
    detect_provider,
    get_all_providers,
    get_alternative_providers,
    get_models_for_provider,
    provider_supports_model,
    validate_model,
)
from rotation_proxy.core.providers import Provider


@pytest.mark.unit
class TestExactMatch:
    """Test exact catalog matching."""

    def test_catalog_model_is_exact_match(self):
        """Should detect catalog models with full confidence."""
        result = detect_provider("gemini-2.5-pro")
        assert result.provider is Provider.GEMINI
        assert result.confidence == 1.0
        assert result.reason is DetectionReason.EXACT_MATCH
        assert result.alternatives == ()

    def test_exact_match_beats_patterns(self):
        """Should prefer a catalog entry over any pattern rule."""
        # Contains "deepseek" (chutes pattern) but is listed under openrouter
        result = detect_provider("deepseek/deepseek-r1:free")
        assert result.provider is Provider.OPENROUTER
        assert result.reason is DetectionReason.EXACT_MATCH

    def test_model_listed_twice_resolves_to_first_catalog_provider(self):
        """Should resolve duplicated catalog models in catalog order."""
        # Listed under both huggingface and chutes; huggingface comes first
        result = detect_provider("deepseek-ai/DeepSeek-V3-0324")
        assert result.provider is Provider.HUGGINGFACE
        assert result.reason is DetectionReason.EXACT_MATCH

    def test_surrounding_whitespace_is_ignored(self):
        """Should strip whitespace before matching."""
        assert detect_provider("  gemini-2.5-pro \n").reason is DetectionReason.EXACT_MATCH

    def test_every_catalog_model_detects_exactly(self):
        """Every catalog model should be an exact match."""
        for provider, model in iter_catalog():
            result = detect_provider(model.id)
            assert result.reason is DetectionReason.EXACT_MATCH, model.id
            assert result.confidence == 1.0
            assert provider_supports_model(result.provider, model.id)


@pytest.mark.unit
class TestPatternMatch:
    """Test substring pattern rules."""

    def test_claude_routes_to_openrouter(self):
        """Should route claude models to OpenRouter with alternatives."""
        result = detect_provider("claude-3-opus")
        assert result.provider is Provider.OPENROUTER
        assert result.confidence == 0.8
        assert result.reason is DetectionReason.PATTERN_MATCH
        assert [p.value for p in result.alternatives] == ["chutes", "nvidia"]

    def test_pattern_matching_is_case_insensitive(self):
        """Should match patterns regardless of case."""
        assert detect_provider("GPT-4o").provider is Provider.OPENROUTER

    def test_highest_confidence_wins(self):
        """Should pick the most confident matching rule."""
        # "meta/llama-3.3" (nvidia, 0.85) and "llama" (huggingface, 0.7)
        result = detect_provider("meta/llama-3.3-8b-custom")
        assert result.provider is Provider.NVIDIA
        assert result.confidence == 0.85

    def test_tie_keeps_first_rule(self):
        """Should keep the earlier rule on equal confidence."""
        # "deepseek" (chutes, 0.85) and "deepseek-ai/deepseek-r1" (nvidia, 0.85)
        result = detect_provider("deepseek-ai/deepseek-r1-distill")
        assert result.provider is Provider.CHUTES

    def test_gemini_beats_lower_confidence_rules(self):
        """Should let higher-confidence Gemini patterns win."""
        assert detect_provider("google/gemma-gpt-hybrid").provider is Provider.GEMINI

    @pytest.mark.parametrize(
        ("model", "provider"),
        [
            ("learnlm-3.0", Provider.GEMINI),
            ("mistral-small-2501", Provider.MISTRAL),
            ("command-r-plus", Provider.COHERE),
            ("requesty/some-model", Provider.REQUESTY),
            ("sao10k/l3-70b", Provider.HUGGINGFACE),
            ("nvidia/new-model", Provider.NVIDIA),
            ("moonshotai/kimi-k3", Provider.CHUTES),
        ],
    )
    def test_pattern_groups(self, model, provider):
        """Should map each sample model to its rule's provider."""
        assert detect_provider(model).provider is provider

    def test_rules_without_alternatives(self):
        """Should report no alternatives for rules without any."""
        assert detect_provider("magistral-large").alternatives == ()


@pytest.mark.unit
class TestUnknown:
    """Test models that match nothing."""

    @pytest.mark.parametrize("model", ["totally-unknown-xyz", "", None, 42, "   "])
    def test_unknown_models(self, model):
        """Should return the unknown result."""
        result = detect_provider(model)
        assert result.provider is None
        assert result.confidence == 0
        assert result.reason is DetectionReason.UNKNOWN
        assert result.alternatives == ()
        assert not result.detected

    def test_to_dict(self):
        """Should serialize to plain values."""
        assert detect_provider("claude-3-opus").to_dict() == {
            "provider": "openrouter",
            "confidence": 0.8,
            "reason": "pattern_match",
            "alternatives": ["chutes", "nvidia"],
        }


@pytest.mark.unit
class TestHelpers:
    """Test the catalog helper functions."""

    def test_determine_provider(self):
        assert determine_provider("gemini-2.0-flash") is Provider.GEMINI
        assert determine_provider("nothing-here") is None

    def test_validate_model(self):
        assert validate_model("gemini-2.5-flash")
        assert validate_model("claude-3-opus")
        assert not validate_model("totally-unknown-xyz")
        assert not validate_model("")

    def test_every_pattern_rule_is_confident_enough_to_validate(self):
        assert all(rule.confidence > 0.5 for rule in PATTERN_RULES)

    def test_get_models_for_provider(self):
        assert get_models_for_provider("cohere") == MODEL_CATALOG[Provider.COHERE]
        assert get_models_for_provider(Provider.REQUESTY) == ()
        assert get_models_for_provider("unknown") == ()

    def test_get_all_providers_lists_catalog_providers(self):
        providers = get_all_providers()
        assert providers[0] is Provider.OPENROUTER
        assert Provider.REQUESTY not in providers

    def test_get_alternative_providers(self):
        assert get_alternative_providers("claude-3-opus") == [Provider.CHUTES, Provider.NVIDIA]
        assert get_alternative_providers("gemini-2.5-pro") == []

    def test_provider_supports_model(self):
        assert provider_supports_model("mistral", "mistral-large-latest")
        assert not provider_supports_model("mistral", "gemini-2.5-pro")
