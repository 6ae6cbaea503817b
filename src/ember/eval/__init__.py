"""Evaluator helper modules for the Ember runtime."""

__all__ = [
    "bind",
    "chains",
    "expr",
    "objects",
]
