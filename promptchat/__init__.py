"""Prompt template chat service backed by the Anthropic Messages API."""

__version__ = "1.0.0"
