"""Prompt construction for the LLM relay."""

from .builder import PromptBuilder

__all__ = ["PromptBuilder"]
