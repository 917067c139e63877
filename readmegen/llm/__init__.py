"""LLM completion client and reply parsing."""

from .runner import CompletionClient, LLMRequest
from .sections import Structured, Unstructured, extract_sections, parse_completion, split_markdown_sections

__all__ = [
    "CompletionClient",
    "LLMRequest",
    "Structured",
    "Unstructured",
    "extract_sections",
    "parse_completion",
    "split_markdown_sections",
]
