"""LLM integrations (embeddings only)."""
