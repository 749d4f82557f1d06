"""
Code generation backends.

Contains the TypeBox code renderer.
"""

from __future__ import annotations

from .typebox_backend import TypeBoxBackend

__all__ = [
    "TypeBoxBackend",
]
