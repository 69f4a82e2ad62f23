"""Household configuration file management for cofi.

The configuration is a TOML file listing the household users and the
predefined (advisory) category names::

    predefined_categories = ["Groceries", "Rent"]

    [[users]]
    name = "Alice"

It is loaded once at startup into an immutable HouseholdConfig and passed to
the services that need it.
"""

import os
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from cofi.domain.errors import ValidationError
from cofi.logger import get_logger

logger = get_logger(__name__)

DEFAULT_USERS = ("User1", "User2")
DEFAULT_CATEGORIES = ("Default Category 1", "Default Category 2")


@dataclass(frozen=True)
class HouseholdConfig:
    """Registered users and predefined categories."""

    users: tuple[str, ...] = DEFAULT_USERS
    predefined_categories: tuple[str, ...] = DEFAULT_CATEGORIES


def get_config_path() -> Path:
    """Get the config file path.

    Checks the COFI_CONFIG_PATH environment variable, then defaults to
    ~/.cofi/config.toml.
    """
    env_path = os.environ.get("COFI_CONFIG_PATH")
    if env_path:
        return Path(env_path)
    return Path.home() / ".cofi" / "config.toml"


def parse_config(data: dict[str, Any]) -> HouseholdConfig:
    """Build a HouseholdConfig from a decoded TOML document.

    Raises:
        ValidationError: If users or predefined_categories are missing or malformed
    """
    users = data.get("users")
    categories = data.get("predefined_categories")
    if users is None or categories is None:
        raise ValidationError(
            "Invalid configuration file structure. "
            "Ensure users and predefined_categories are defined."
        )

    if not isinstance(users, list) or not all(
        isinstance(user, dict) and isinstance(user.get("name"), str) and user["name"].strip()
        for user in users
    ):
        raise ValidationError("Invalid user configuration. Each user must have a name.")

    if not isinstance(categories, list) or not all(isinstance(c, str) for c in categories):
        raise ValidationError("predefined_categories must be a list of strings")

    names = tuple(user["name"].strip() for user in users)
    if len(set(names)) != len(names):
        raise ValidationError("User names in configuration must be unique")

    return HouseholdConfig(users=names, predefined_categories=tuple(categories))


def load_config(config_path: Optional[Path] = None) -> HouseholdConfig:
    """Load household configuration from a TOML file.

    Args:
        config_path: Path to config file. If None, uses get_config_path().

    Returns:
        HouseholdConfig. Defaults are returned when the file does not exist.

    Raises:
        ValidationError: If the file is not valid TOML or has a bad structure
    """
    if config_path is None:
        config_path = get_config_path()

    if not config_path.exists():
        logger.warning("config_defaults_used", path=str(config_path))
        return HouseholdConfig()

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ValidationError(f"Could not parse configuration '{config_path}': {e}")

    return parse_config(data)
