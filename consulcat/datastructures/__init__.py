"""Shared datastructures for consulcat."""

from __future__ import annotations

from .service import ServiceInfo

__all__ = ["ServiceInfo"]
