"""
Read-only view of the resolved environment.

The pipeline never reads ``os.environ`` itself. Variables are parsed and
validated by ``lad.core.settings.Settings`` and handed over as an
``EnvironmentMap``, which the base definition reads through ``require``
(mandatory values) or ``get`` (optional values).
"""

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, Iterator, Optional

from pydantic import ValidationError

from lad.core.exceptions import ConfigurationError
from lad.core.settings import Settings


class EnvironmentMap(Mapping):
    """Immutable mapping of environment variable names to typed values."""

    def __init__(self, values: Mapping[str, Any]) -> None:
        self._values = MappingProxyType(dict(values))

    def __getitem__(self, name: str) -> Any:
        return self._values[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"EnvironmentMap({sorted(self._values)!r})"

    def require(self, name: str) -> Any:
        """
        Return a variable that must be set.

        Raises:
            ConfigurationError: If the variable is absent or ``None``.
        """
        value = self._values.get(name)
        if value is None:
            raise ConfigurationError(
                detail=f"Missing required environment variable: {name}",
                context={"variable": name}
            )
        return value

    @property
    def environment(self) -> str:
        return self.require("ENVIRONMENT")


def load_environment(settings: Optional[Settings] = None, **overrides: Any) -> EnvironmentMap:
    """
    Validate the process environment and freeze it.

    Args:
        settings: Already-built settings; read from the environment when omitted.
        **overrides: Values taking precedence over the environment, used by
            tests and scripts.

    Raises:
        ConfigurationError: If a variable is malformed.
    """
    if settings is None:
        try:
            settings = Settings(**overrides)
        except ValidationError as e:
            raise ConfigurationError(
                detail="Invalid environment",
                context={"errors": e.errors(include_url=False)}
            ) from e
    elif overrides:
        settings = settings.model_copy(update=overrides)
    return EnvironmentMap(settings.model_dump())
