"""Map free-form model identifiers onto pricing tiers."""

from token_watcher.types.usage import ModelTier

UNKNOWN_MODEL = "unknown"

MODEL_TIERS: dict[str, ModelTier] = {
    "claude-opus-4-6": ModelTier.OPUS,
    "claude-opus-4-20250514": ModelTier.OPUS,
    "claude-sonnet-4-6": ModelTier.SONNET,
    "claude-sonnet-4-20250514": ModelTier.SONNET,
    # Haiku is billed at sonnet rates, an over-estimate
    "claude-haiku-4-5-20251001": ModelTier.SONNET,
}


def get_model_tier(model: str) -> ModelTier:
    """Classify a model identifier into a pricing tier.

    Exact table matches win, then substring checks. Anything unrecognised
    falls back to the opus tier so that cost is never under-reported.
    """
    tier = MODEL_TIERS.get(model)
    if tier is not None:
        return tier
    if "opus" in model:
        return ModelTier.OPUS
    if "sonnet" in model or "haiku" in model:
        return ModelTier.SONNET
    return ModelTier.OPUS
