"""Local token usage and cost accounting for AI coding-assistant sessions."""
