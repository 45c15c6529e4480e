"""Configuration management for autover."""

from __future__ import annotations

from autover.config.loader import (
    load_user_configuration,
    reset_user_configuration,
    retrieve_user_configuration,
    save_user_configuration,
)
from autover.config.models import (
    Project,
    UserConfiguration,
    UserConfigurationResetRequest,
)

__all__ = [
    "Project",
    "UserConfiguration",
    "UserConfigurationResetRequest",
    "load_user_configuration",
    "reset_user_configuration",
    "retrieve_user_configuration",
    "save_user_configuration",
]
