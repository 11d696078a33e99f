"""Provider detection from model names.

Detection runs in two stages:

1. Exact lookup of the model id in the static catalog (confidence 1.0).
2. Substring rules evaluated in a fixed order over the lowercased model
   name. The rule with the highest confidence wins; on equal confidence the
   earlier rule is kept. A pattern match also reports the providers that
   commonly serve the same family of models as alternatives.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from rotation_proxy.core.model_catalog import MODEL_CATALOG, ModelConfiguration
from rotation_proxy.core.providers import Provider


class DetectionReason(str, Enum):
    EXACT_MATCH = "exact_match"
    PATTERN_MATCH = "pattern_match"
    UNKNOWN = "unknown"


@dataclass(frozen=True, slots=True)
class DetectionResult:
    """Outcome of provider detection for one model name."""

    provider: Provider | None
    confidence: float
    reason: DetectionReason
    alternatives: tuple[Provider, ...] = field(default_factory=tuple)

    @property
    def detected(self) -> bool:
        return self.provider is not None

    def to_dict(self) -> dict[str, object]:
        return {
            "provider": self.provider.value if self.provider else None,
            "confidence": self.confidence,
            "reason": self.reason.value,
            "alternatives": [p.value for p in self.alternatives],
        }


@dataclass(frozen=True, slots=True)
class PatternRule:
    provider: Provider
    confidence: float
    patterns: tuple[str, ...]
    alternatives: tuple[Provider, ...] = ()

    def matches(self, normalized_model: str) -> bool:
        return any(pattern in normalized_model for pattern in self.patterns)


UNKNOWN = DetectionResult(provider=None, confidence=0.0, reason=DetectionReason.UNKNOWN)

# Evaluation order matters for ties
PATTERN_RULES: tuple[PatternRule, ...] = (
    PatternRule(
        Provider.GEMINI,
        0.9,
        ("gemini", "google", "bard", "learnlm"),
    ),
    PatternRule(
        Provider.CHUTES,
        0.85,
        (
            "deepseek-r1",
            "deepseek-v3",
            "deepseek",
            "arli",
            "microsoft/mai",
            "tngtech",
            "tencent/hunyuan",
            "qwen3",
            "chutesai",
            "minimax",
            "mrfakename",
            "moonshotai/kimi",
        ),
        (Provider.OPENROUTER, Provider.NVIDIA),
    ),
    PatternRule(
        Provider.OPENROUTER,
        0.8,
        (
            "gpt",
            "openai",
            "claude",
            "anthropic",
            "mai-ds",
            "qwq",
            "deepseek-chat",
            "hunyuan",
            "reka",
            "moonlight",
            "dolphin",
        ),
        (Provider.CHUTES, Provider.NVIDIA),
    ),
    PatternRule(
        Provider.NVIDIA,
        0.85,
        (
            "nvidia",
            "nemotron",
            "meta/llama-4",
            "writer/palmyra",
            "qwen/qwq",
            "meta/llama-3.3",
            "01-ai/yi",
            "mistralai/mixtral",
            "deepseek-ai/deepseek-r1",
            "qwen/qwen3",
        ),
        (Provider.CHUTES, Provider.OPENROUTER),
    ),
    PatternRule(
        Provider.HUGGINGFACE,
        0.7,
        (
            "meta-llama",
            "llama",
            "alpindale",
            "cognitivecomputations",
            "huggingfaceh4",
            "zephyr",
            "sao10k",
        ),
        (Provider.OPENROUTER, Provider.NVIDIA),
    ),
    PatternRule(
        Provider.MISTRAL,
        0.9,
        ("mistral-large", "mistral-medium", "mistral-small", "magistral", "open-mistral"),
    ),
    PatternRule(
        Provider.COHERE,
        0.9,
        ("command-a", "command-r", "command-nightly"),
    ),
    PatternRule(
        Provider.REQUESTY,
        0.8,
        ("requesty",),
        (Provider.OPENROUTER,),
    ),
)

MIN_VALID_CONFIDENCE = 0.5


def find_exact_match(model: str) -> Provider | None:
    """Return the first catalog provider listing ``model`` verbatim."""
    for provider, models in MODEL_CATALOG.items():
        if any(m.id == model for m in models):
            return provider
    return None


def find_pattern_match(normalized_model: str) -> DetectionResult:
    best: PatternRule | None = None
    for rule in PATTERN_RULES:
        if rule.matches(normalized_model) and (best is None or rule.confidence > best.confidence):
            best = rule
    if best is None:
        return UNKNOWN
    return DetectionResult(
        provider=best.provider,
        confidence=best.confidence,
        reason=DetectionReason.PATTERN_MATCH,
        alternatives=best.alternatives,
    )


def detect_provider(model: object) -> DetectionResult:
    """Determine the provider for a model name with confidence details.

    Surrounding whitespace is ignored. Exact catalog matches are
    case-sensitive; pattern rules are not.

    Args:
        model: The model identifier from the request.

    Returns:
        A DetectionResult; ``provider`` is None when nothing matched.
    """
    if not model or not isinstance(model, str):
        return UNKNOWN

    model = model.strip()
    exact = find_exact_match(model)
    if exact is not None:
        return DetectionResult(
            provider=exact, confidence=1.0, reason=DetectionReason.EXACT_MATCH
        )
    return find_pattern_match(model.lower())


def determine_provider(model: object) -> Provider | None:
    return detect_provider(model).provider


def validate_model(model: object) -> bool:
    """Check whether a model is routable: listed in the catalog or a confident pattern match."""
    result = detect_provider(model)
    if result.reason is DetectionReason.EXACT_MATCH:
        return True
    return result.provider is not None and result.confidence > MIN_VALID_CONFIDENCE


def get_models_for_provider(provider: Provider | str) -> tuple[ModelConfiguration, ...]:
    try:
        return MODEL_CATALOG.get(Provider.parse(provider), ())
    except ValueError:
        return ()


def get_all_providers() -> list[Provider]:
    """Return the providers that have catalog entries, in catalog order."""
    return list(MODEL_CATALOG.keys())


def get_alternative_providers(model: object) -> list[Provider]:
    return list(detect_provider(model).alternatives)


def provider_supports_model(provider: Provider | str, model: str) -> bool:
    return any(m.id == model for m in get_models_for_provider(provider))
