"""
Repair configuration management utilities.

This module loads repair settings from a YAML configuration file at the
project root. Each top-level key is a named profile:

    default:
      placeholder_text: "Tool result unavailable."
      max_repair_attempts: 2
      log_reports: true
"""

import logging
import os
import yaml
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from pairguard.transcript.repair import MISSING_TOOL_RESULT_TEXT

logger = logging.getLogger(__name__)


class RepairConfig(BaseModel):
    """Settings for transcript repair and recovery."""

    # YAML scalars are taken as written: "true" is not an attempt count
    model_config = ConfigDict(extra="forbid", strict=True)

    placeholder_text: str = MISSING_TOOL_RESULT_TEXT
    # Repairs per transcript before giving up
    max_repair_attempts: int = Field(default=1, ge=0)
    # Log a summary of every repair that changed something
    log_reports: bool = True


def get_config_path() -> Path:
    """
    Get the path to the repair configuration file.

    Looks for pairguard.yaml in the current working directory (project root).
    """
    return Path(os.getcwd()) / "pairguard.yaml"


def load_repair_config(profile: str = "default") -> RepairConfig:
    """
    Load repair settings for a profile from YAML file at project root.

    Omitted fields keep their RepairConfig defaults.

    Args:
        profile: The key identifying the profile in the config file

    Returns:
        RepairConfig for the profile

    Raises:
        FileNotFoundError: If pairguard.yaml doesn't exist
        ValueError: If the profile is missing, or has unknown or mistyped fields
        RuntimeError: If the file cannot be read or parsed
    """
    config_path = get_config_path()
    logger.debug(f"Loading config from: {config_path}")

    if not config_path.exists():
        raise FileNotFoundError(
            f"pairguard.yaml not found at {config_path}. "
            "Copy pairguard.yaml.example to pairguard.yaml and adjust your profiles."
        )

    try:
        with open(config_path, "r") as f:
            config = yaml.safe_load(f) or {}

        profile_config = config.get(profile)

        if profile_config is None:
            raise ValueError(
                f"Profile '{profile}' not found in {config_path}. "
                f"Please add the profile configuration."
            )
        if not isinstance(profile_config, dict):
            raise ValueError(f"Profile '{profile}' in {config_path} must be a mapping")

        try:
            return RepairConfig.model_validate(profile_config)
        except ValidationError as e:
            raise ValueError(f"Invalid values for profile '{profile}': {e}") from e
    except ValueError:
        raise
    except Exception as e:
        raise RuntimeError(f"Error loading repair config: {e}")

