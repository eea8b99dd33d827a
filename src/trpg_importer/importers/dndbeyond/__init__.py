"""D&D Beyond character import."""

from .mapper import parse

__all__ = ["parse"]
