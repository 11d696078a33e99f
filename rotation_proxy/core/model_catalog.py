"""Static catalog of known models per provider.

Used for exact-match provider detection and for the /v1/models listing.
Provider order matters: when a model id is listed under more than one
provider, the first provider in this mapping wins exact-match detection.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType

from rotation_proxy.core.providers import Provider


@dataclass(frozen=True, slots=True)
class ModelConfiguration:
    """One catalog entry.

    Attributes:
        id: Model identifier as sent upstream
        name: Human-readable display name
        free: Whether the upstream offers the model at no cost
        provider: Inference backend override (Hugging Face routing only)
    """

    id: str  # noqa: A003
    name: str
    free: bool = False
    provider: str | None = None

    def to_dict(self) -> dict[str, object]:
        data: dict[str, object] = {"id": self.id, "name": self.name}
        if self.free:
            data["free"] = True
        if self.provider:
            data["provider"] = self.provider
        return data


_M = ModelConfiguration

MODEL_CATALOG: Mapping[Provider, tuple[ModelConfiguration, ...]] = MappingProxyType(
    {
        Provider.OPENROUTER: (
            _M("microsoft/mai-ds-r1:free", "MAI-DS R1 (Free)", free=True),
            _M("arliai/qwq-32b-arliai-rpr-v1:free", "QWQ 32B RPR", free=True),
            _M("deepseek/deepseek-chat-v3-0324:free", "DeepSeek Chat v3", free=True),
            _M("deepseek/deepseek-r1:free", "DeepSeek R1 (Free)", free=True),
            _M("deepseek/deepseek-r1-zero:free", "DeepSeek R1 Zero (Free)", free=True),
            _M("deepseek/deepseek-r1-0528:free", "DeepSeek R1 0528 (Free)", free=True),
            _M("tngtech/deepseek-r1t2-chimera:free", "DeepSeek R1T2 Chimera (Free)", free=True),
            _M("tencent/hunyuan-a13b-instruct:free", "Hunyuan A13B Instruct (Free)", free=True),
            _M("rekaai/reka-flash-3:free", "Reka Flash 3 (Free)", free=True),
            _M(
                "moonshotai/moonlight-16b-a3b-instruct:free",
                "Moonlight 16B A3B Instruct (Free)",
                free=True,
            ),
            _M(
                "cognitivecomputations/dolphin3.0-mistral-24b:free",
                "Dolphin 3.0 Mistral 24B (Free)",
                free=True,
            ),
            _M("tngtech/deepseek-r1t-chimera:free", "DeepSeek R1T Chimera (Free)", free=True),
            _M("minimax/minimax-m1:extended", "MiniMax M1 Extended (Free)", free=True),
        ),
        Provider.HUGGINGFACE: (
            _M("meta-llama/Llama-3.3-70B-Instruct", "Llama 3.3 70B Instruct", provider="nebius"),
            _M("deepseek-ai/DeepSeek-V3-0324", "DeepSeek V3", provider="sambanova"),
            _M("alpindale/WizardLM-2-8x22B", "WizardLM 2 8x22B", provider="novita"),
            _M(
                "cognitivecomputations/dolphin-2.9.2-mixtral-8x22b",
                "Dolphin 2.9.2 Mixtral 8x22B",
                provider="nebius",
            ),
            _M("HuggingFaceH4/zephyr-7b-beta", "Zephyr 7B Beta", provider="hf-inference"),
            _M("Sao10K/L3-8B-Stheno-v3.2", "L3 8B Stheno v3.2", provider="novita"),
            _M("Sao10K/L3-8B-Lunaris-v1", "L3 8B Lunaris v1", provider="novita"),
        ),
        Provider.GEMINI: (
            _M("gemini-2.5-pro", "Gemini 2.5 Pro"),
            _M("gemini-2.5-pro-preview-05-06", "Gemini 2.5 Pro Preview"),
            _M("gemini-2.5-flash-preview-05-20", "Gemini 2.5 Flash Preview 05-20"),
            _M("gemini-2.5-flash", "Gemini 2.5 Flash"),
            _M("gemini-2.5-flash-lite-preview-06-17", "Gemini 2.5 Flash Lite Preview 06-17"),
            _M("gemini-2.0-flash", "Gemini 2.0 Flash"),
            _M("gemini-2.0-flash-lite", "Gemini 2.0 Flash Lite"),
            _M("gemini-2.0-flash-thinking-exp-01-21", "Gemini 2.0 Flash Thinking Exp 01-21"),
            _M("gemini-exp-1206", "Gemini Exp 1206"),
            _M("gemini-1.5-pro", "Gemini 1.5 Pro"),
            _M("learnlm-2.0-flash-experimental", "LearnLM 2.0 Flash Experimental"),
            _M("gemini-1.5-flash", "Gemini 1.5 Flash"),
        ),
        Provider.MISTRAL: (
            _M("mistral-large-latest", "Mistral Large"),
            _M("mistral-medium-latest", "Mistral Medium"),
            _M("mistral-small-latest", "Mistral Small"),
            _M("magistral-medium-latest", "Magistral Medium"),
            _M("magistral-small-latest", "Magistral Small"),
            _M("open-mistral-nemo", "Open Mistral Nemo"),
        ),
        Provider.COHERE: (
            _M("command-a-03-2025", "Command A 03-2025"),
            _M("command-r7b-12-2024", "Command R7B 12-2024"),
            _M("command-r-plus-08-2024", "Command R Plus 08-2024"),
            _M("command-r-08-2024", "Command R 08-2024"),
            _M("command-nightly", "Command Nightly"),
        ),
        Provider.CHUTES: (
            _M("deepseek-ai/DeepSeek-R1", "DeepSeek R1"),
            _M("deepseek-ai/DeepSeek-R1-0528", "DeepSeek R1 0528"),
            _M("deepseek-ai/DeepSeek-R1-0528-Qwen3-8B", "DeepSeek R1 0528 Qwen3 8B"),
            _M("deepseek-ai/DeepSeek-V3-0324", "DeepSeek V3 (0324)"),
            _M("ArliAI/QwQ-32B-ArliAI-RpR-v1", "ArliAI QwQ 32B RPR v1"),
            _M("microsoft/MAI-DS-R1-FP8", "Microsoft MAI-DS R1 FP8"),
            _M("tngtech/DeepSeek-R1T-Chimera", "DeepSeek R1T Chimera"),
            _M("tngtech/DeepSeek-TNG-R1T2-Chimera", "DeepSeek TNG R1T2 Chimera"),
            _M("tencent/Hunyuan-A13B-Instruct", "Hunyuan A13B Instruct"),
            _M("Qwen/Qwen3-235B-A22B", "Qwen3-235B-A22B"),
            _M(
                "chutesai/Llama-4-Maverick-17B-128E-Instruct-FP8",
                "Llama 4 Maverick 17B 128E Instruct FP8",
            ),
            _M("MiniMaxAI/MiniMax-M1-80k", "MiniMax M1 80k"),
            _M(
                "mrfakename/mistral-Small-3.1-24B-Instruct-2503-hf",
                "Mistral Small 3.1 24B Instruct 2503 HF",
            ),
            _M("moonshotai/Kimi-K2-Instruct", "Kimi K2 Instruct"),
        ),
        Provider.NVIDIA: (
            _M("nvidia/llama-3.3-nemotron-super-49b-v1", "Llama 3.3 Nemotron Super 49B"),
            _M("nvidia/llama-3.1-nemotron-ultra-253b-v1", "Llama 3.1 Nemotron Ultra 253B"),
            _M("meta/llama-4-scout-17b-16e-instruct", "Llama 4 Scout 17B 16E Instruct"),
            _M("meta/llama-4-maverick-17b-128e-instruct", "Llama 4 Maverick 17B 128E Instruct"),
            _M("writer/palmyra-creative-122b", "Palmyra Creative 122B"),
            _M("qwen/qwq-32b", "Qwen QWQ 32B"),
            _M("meta/llama-3.3-70b-instruct", "Llama 3.3 70B Instruct"),
            _M("01-ai/yi-large", "Yi Large"),
            _M("mistralai/mixtral-8x22b-instruct-v0.1", "Mixtral 8x22B Instruct v0.1"),
            _M("deepseek-ai/deepseek-r1", "DeepSeek R1"),
            _M("deepseek-ai/deepseek-r1-0528", "DeepSeek R1 0528"),
            _M("qwen/qwen3-235b-a22b", "Qwen3-235B-A22B"),
        ),
    }
)

# Hugging Face inference backend per model; falls back to DEFAULT_HF_BACKEND
HF_MODEL_BACKENDS: Mapping[str, str] = MappingProxyType(
    {m.id: m.provider for m in MODEL_CATALOG[Provider.HUGGINGFACE] if m.provider}
)
DEFAULT_HF_BACKEND = "nebius"


def iter_catalog() -> list[tuple[Provider, ModelConfiguration]]:
    """Flatten the catalog into (provider, model) pairs in catalog order."""
    return [(provider, model) for provider, models in MODEL_CATALOG.items() for model in models]
