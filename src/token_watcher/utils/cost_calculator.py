"""Token cost estimation.

Prices are an approximation of the published per-token rates and are not
meant to match an invoice.
"""

from token_watcher.types.usage import CostBreakdown, ModelTier, TokenUsage

# Per 1M tokens
PRICING: dict[ModelTier, dict[str, float]] = {
    ModelTier.OPUS:   {"input": 15.00, "output": 75.00, "cache_create": 18.75, "cache_read": 1.50},
    ModelTier.SONNET: {"input": 3.00,  "output": 15.00, "cache_create": 3.75,  "cache_read": 0.30},
}

TOKENS_PER_UNIT = 1_000_000


def calculate_cost(tokens: TokenUsage, tier: ModelTier) -> CostBreakdown:
    """Price each token counter at the tier's rate. No rounding is applied."""
    rates = PRICING[tier]
    return CostBreakdown(
        input_cost=tokens.input_tokens / TOKENS_PER_UNIT * rates["input"],
        output_cost=tokens.output_tokens / TOKENS_PER_UNIT * rates["output"],
        cache_creation_cost=(
            tokens.cache_creation_input_tokens / TOKENS_PER_UNIT * rates["cache_create"]
        ),
        cache_read_cost=tokens.cache_read_input_tokens / TOKENS_PER_UNIT * rates["cache_read"],
    )
