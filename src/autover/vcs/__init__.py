"""Version control integration."""

from __future__ import annotations

from autover.vcs.git import GitRepository

__all__ = ["GitRepository"]
