"""Random test data helpers."""

from .text_generator import generate_random_text

__all__ = [
    "generate_random_text",
]
