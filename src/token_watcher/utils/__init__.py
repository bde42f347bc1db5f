"""Pure helpers for pricing, time ranges, paths and formatting."""
