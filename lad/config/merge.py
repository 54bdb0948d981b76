"""
Deep merge of configuration trees.

Rules, applied per key of the overlay:
- mapping + mapping -> merged recursively
- anything else     -> the overlay value replaces the base value

Lists are replaced, never concatenated, and constructed objects
(callables, collaborator handles) are replaced by reference. Neither
input is mutated: every mapping in the result is a fresh ``dict``.
"""

from collections.abc import Mapping
from typing import Any, Dict, Optional

from lad.config.node import ConfigNode
from lad.core.exceptions import ConfigurationError
from lad.core.logging import logger


def copy_tree(value: Any) -> Any:
    """Copy mappings and lists, keep every other value by reference."""
    if isinstance(value, ConfigNode):
        return value
    if isinstance(value, Mapping):
        return {key: copy_tree(item) for key, item in value.items()}
    if isinstance(value, list):
        return [copy_tree(item) for item in value]
    return value


def copy_mapping(tree: Mapping[str, Any]) -> Dict[str, Any]:
    """Copy a tree into a fresh mutable top-level dict."""
    return {key: copy_tree(item) for key, item in tree.items()}


def deep_merge(base: Mapping[str, Any], overlay: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Merge ``overlay`` onto ``base`` with overlay values winning.

    Args:
        base: Configuration tree to start from.
        overlay: Partial tree whose values take precedence.

    Returns:
        A new tree; ``base`` and ``overlay`` are left untouched.
    """
    result: Dict[str, Any] = copy_mapping(base)
    for key, value in overlay.items():
        current = result.get(key)
        if isinstance(current, Mapping) and isinstance(value, Mapping):
            result[key] = deep_merge(current, value)
        else:
            result[key] = copy_tree(value)
    return result


def apply_overlay(
    base: Mapping[str, Any],
    overlays: Optional[Mapping[str, Any]],
    environment: str,
) -> Dict[str, Any]:
    """
    Select the overlay for ``environment`` and merge it onto ``base``.

    A missing overlay, or one set to ``None``, is not an error: the base is
    returned unchanged (as a copy). An overlay that exists but is not a
    mapping is a broken deployment and aborts startup.

    Raises:
        ConfigurationError: If the selected overlay is not a mapping.
    """
    overlay = (overlays or {}).get(environment)
    if overlay is None:
        logger.debug("No configuration overlay", extra={"environment": environment})
        return copy_mapping(base)

    if not isinstance(overlay, Mapping):
        raise ConfigurationError(
            detail=f"Overlay for environment '{environment}' must be a mapping",
            context={
                "environment": environment,
                "overlay_type": type(overlay).__name__
            }
        )

    logger.debug(
        "Applying configuration overlay",
        extra={"environment": environment, "keys": sorted(overlay)}
    )
    return deep_merge(base, overlay)
