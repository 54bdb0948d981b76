"""
Configuration composition pipeline.

Runs once at process start, in order:

1. base definition from the environment map
2. overlay for the current environment, deep-merged onto the base
3. derived fields computed from the merged tree
4. augmentation with the localization engine and the mail transport

The result is frozen into a ``ConfigNode`` and passed explicitly to
whatever needs it. Any failure aborts startup.
"""

from typing import Any, Callable, Dict, Iterable, Mapping, Optional

from lad.config.augment import augment_email, augment_i18n, augment_view_config
from lad.config.base import base_definition
from lad.config.derive import DERIVED_FIELDS, DerivedField, run_derivations
from lad.config.env import EnvironmentMap
from lad.config.environments import OVERLAYS
from lad.config.merge import apply_overlay
from lad.config.node import ConfigNode, freeze
from lad.core.logging import logger as default_logger
from lad.core.storage import ObjectStorage


def build_config(
    env: EnvironmentMap,
    *,
    base: Callable[[EnvironmentMap], Dict[str, Any]] = base_definition,
    overlays: Optional[Mapping[str, Any]] = OVERLAYS,
    derivations: Iterable[DerivedField] = DERIVED_FIELDS,
    logger: Optional[Any] = None,
    storage: Optional[ObjectStorage] = None,
) -> ConfigNode:
    """
    Compose the runtime configuration.

    Args:
        env: Resolved environment variables.
        base: Builds the base tree from ``env``.
        overlays: Partial trees keyed by environment name.
        derivations: Derived fields computed after the merge.
        logger: Optional logging collaborator for the constructed handles.
        storage: Object storage used by the mail transport; built from
            the ``storage`` section when omitted.

    Returns:
        The frozen configuration.

    Raises:
        ConfigurationError: On any configuration defect.
    """
    log = logger or default_logger
    environment = env.environment
    log.info("Building configuration", extra={"environment": environment})

    tree = base(env)
    merged = apply_overlay(tree, overlays, environment)
    derived = run_derivations(merged, derivations)

    augment_i18n(derived, logger=logger)
    augment_view_config(derived)
    augment_email(derived, storage=storage, logger=logger)

    config = freeze(derived)
    log.info(
        "Configuration ready",
        extra={
            "environment": environment,
            "keys": len(config)
        }
    )
    return config
