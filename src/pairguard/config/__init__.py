"""
Repair configuration utilities.

Usage:
    from pairguard.config import load_repair_config

    config = load_repair_config("default")
"""

from pairguard.config.loader import RepairConfig, get_config_path, load_repair_config

__all__ = ["RepairConfig", "load_repair_config", "get_config_path"]
