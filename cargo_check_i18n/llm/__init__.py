"""LLM-facing abstractions for diagnostic translation.

This package defines the endpoint client, prompt library, JSON path
extraction, the shared rate limiter and the file-backed translation cache.
"""

from .cache import FAILURE_SENTINEL, TranslationCache
from .client import TranslationClient, TranslationProviderError
from .json_path import JsonPathResult, PathOutcome, extract_string
from .prompts import PromptLibrary
from .rate_limiter import RateLimiter

__all__ = [
    "FAILURE_SENTINEL",
    "JsonPathResult",
    "PathOutcome",
    "PromptLibrary",
    "RateLimiter",
    "TranslationCache",
    "TranslationClient",
    "TranslationProviderError",
    "extract_string",
]
