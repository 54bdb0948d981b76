"""
Localization engine.

Phrase catalogs live in one JSON file per locale (``<directory>/<locale>.json``)
mapping default-locale text to its translation. Lookups accept either a
phrase key from the configured phrase table (``"HELLO_WORLD"``) or the
default-locale text itself, and fall back to the default locale, then to
the text, so rendering never fails on a missing translation.

Catalogs are read once at construction and never written afterwards,
which makes a single instance safe to share between requests.
"""

import json
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Iterable, Mapping, Optional

from lad.core.exceptions import ConfigurationError
from lad.core.logging import logger as default_logger


class I18N:
    """Translation lookups over a fixed set of locale catalogs."""

    def __init__(
        self,
        phrases: Mapping[str, str],
        directory: str,
        locales: Iterable[str] = ("en",),
        default_locale: str = "en",
        logger: Optional[Any] = None,
    ) -> None:
        """
        Load every locale catalog from ``directory``.

        Args:
            phrases: Phrase keys mapped to default-locale text.
            directory: Directory holding ``<locale>.json`` catalogs.
            locales: Supported locales; each must have a catalog.
            default_locale: Locale used when a lookup misses.
            logger: Optional logging collaborator.

        Raises:
            ConfigurationError: If a catalog is missing, unreadable or
                not a JSON object, or the default locale is unsupported.
        """
        self.logger = logger or default_logger.bind(component="i18n")
        self.phrases = MappingProxyType(dict(phrases))
        self.directory = Path(directory)
        self.locales = tuple(locales)
        self.default_locale = default_locale

        if default_locale not in self.locales:
            raise ConfigurationError(
                detail=f"Default locale '{default_locale}' is not a supported locale",
                context={"locales": list(self.locales)}
            )

        self.catalogs = MappingProxyType(
            {locale: self._load_catalog(locale) for locale in self.locales}
        )
        self.logger.info(
            "Loaded phrase catalogs",
            extra={"directory": str(self.directory), "locales": list(self.locales)}
        )

    def _load_catalog(self, locale: str) -> Mapping[str, str]:
        path = self.directory / f"{locale}.json"
        try:
            with path.open("r", encoding="utf-8") as f:
                catalog = json.load(f)
        except (OSError, ValueError) as e:
            raise ConfigurationError(
                detail=f"Could not read phrase catalog for locale '{locale}'",
                context={"path": str(path), "error": str(e)}
            ) from e

        if not isinstance(catalog, dict):
            raise ConfigurationError(
                detail=f"Phrase catalog for locale '{locale}' must be a JSON object",
                context={"path": str(path)}
            )
        return MappingProxyType(catalog)

    def translate(self, key: str, locale: Optional[str] = None, *args: Any) -> str:
        """
        Translate ``key`` into ``locale``.

        ``args`` are interpolated printf-style into the result, e.g.
        ``translate("ALREADY_SIGNED_UP", "es", "Google")``.
        """
        text = self.phrases.get(key, key)
        catalog = self.catalogs.get(locale or self.default_locale)
        if catalog is None:
            self.logger.debug("Unsupported locale", extra={"locale": locale})
            catalog = self.catalogs[self.default_locale]

        translated = catalog.get(text)
        if translated is None:
            translated = self.catalogs[self.default_locale].get(text, text)

        if args:
            try:
                return translated % args
            except (TypeError, ValueError):
                self.logger.warning(
                    "Phrase arguments do not match placeholders",
                    extra={"key": key, "locale": locale}
                )
        return translated

    t = translate

    def filters(self) -> Dict[str, Any]:
        """Template filters exposed by this engine."""
        return {"translate": self.translate}
