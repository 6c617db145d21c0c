"""Shared helpers."""

from .random import derive_rng, make_rng

__all__ = ['derive_rng', 'make_rng']
