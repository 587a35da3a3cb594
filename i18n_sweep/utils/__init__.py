"""Utility modules."""

from .colors import Colors
from .config import Config, ConfigValidationError, create_default_config
from .validators import (
    is_valid_key_name,
    suggest_key,
    escape_double_quoted,
    escape_single_quoted,
)
from .backup import create_backup, restore_backup, list_backups
from .logging import get_logger, configure_logging

__all__ = [
    'Colors',
    'Config',
    'ConfigValidationError',
    'create_default_config',
    'is_valid_key_name',
    'suggest_key',
    'escape_double_quoted',
    'escape_single_quoted',
    'create_backup',
    'restore_backup',
    'list_backups',
    'get_logger',
    'configure_logging',
]
