"""Shared utility helpers."""

from __future__ import annotations

from .versions import version_key

__all__ = ["version_key"]
