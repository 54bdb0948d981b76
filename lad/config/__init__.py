"""
Runtime configuration.

``build_config`` composes the single read-only configuration object the
application runs on. Typical startup:

    from lad.config import build_config, load_environment

    config = build_config(load_environment())
    transport = config["email"]["transport"]
"""

from lad.config.env import EnvironmentMap, load_environment
from lad.config.merge import apply_overlay, deep_merge
from lad.config.node import ConfigNode, freeze, get_path
from lad.config.pipeline import build_config

__all__ = [
    "ConfigNode",
    "EnvironmentMap",
    "apply_overlay",
    "build_config",
    "deep_merge",
    "freeze",
    "get_path",
    "load_environment",
]
