"""
Derived configuration fields.

A derived field is a target path plus a pure function of the merged tree.
All derivations of a pass read the same frozen snapshot of the merged
tree, so one derived field can never observe another; results are
written into a copy only after every function has run.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, Tuple

from lad.config.merge import copy_mapping
from lad.config.meta import derive_meta
from lad.config.node import freeze, get_path, set_path, split_path
from lad.core.exceptions import ConfigurationError, DerivationError
from lad.core.logging import logger


@dataclass(frozen=True)
class DerivedField:
    """A value computed from the merged tree and stored at ``path``."""

    path: Tuple[str, ...]
    compute: Callable[[Mapping], Any]

    @classmethod
    def at(cls, path: str, compute: Callable[[Mapping], Any]) -> "DerivedField":
        return cls(split_path(path), compute)


def has_third_party_providers(tree: Mapping) -> bool:
    """True when at least one ``auth.providers`` flag is enabled."""
    providers = get_path(tree, "auth.providers")
    if not isinstance(providers, Mapping):
        raise KeyError("auth.providers")
    return any(bool(enabled) for enabled in providers.values())


DERIVED_FIELDS = (
    DerivedField.at("auth.has_third_party_providers", has_third_party_providers),
    DerivedField.at("meta", derive_meta),
)


def run_derivations(tree: Mapping[str, Any], fields: Iterable[DerivedField] = DERIVED_FIELDS) -> Dict[str, Any]:
    """
    Compute every derived field against one snapshot of ``tree``.

    Args:
        tree: The merged configuration tree.
        fields: Derivations to run.

    Returns:
        A copy of ``tree`` with every derived value written at its path.

    Raises:
        DerivationError: If a derivation reads a path that is missing.
        ConfigurationError: If two derivations target the same path.
    """
    fields = tuple(fields)
    targets = [field.path for field in fields]
    duplicates = sorted({".".join(p) for p in targets if targets.count(p) > 1})
    if duplicates:
        raise ConfigurationError(
            detail="Derived fields target the same path",
            context={"paths": duplicates}
        )

    snapshot = freeze(tree)
    results = []
    for field in fields:
        try:
            results.append((field.path, field.compute(snapshot)))
        except KeyError as e:
            missing = e.args[0] if e.args else None
            raise DerivationError(
                detail=f"Derived field '{'.'.join(field.path)}' requires missing configuration '{missing}'",
                path=field.path,
                context={"missing": missing}
            ) from e

    derived = copy_mapping(tree)
    for path, value in results:
        set_path(derived, path, value)

    logger.debug("Derived configuration fields", extra={"paths": [".".join(p) for p in targets]})
    return derived
