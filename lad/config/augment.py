"""
Collaborator augmentation.

The last pipeline stage constructs the long-lived collaborators and
attaches them to the derived tree: the localization engine's translate
filter for templates, and the mail transport with its compile chain.
Handles can only be attached into slots the base definition reserved.
"""

from collections.abc import MutableMapping
from typing import Any, Dict, Optional

from lad.config.base import EMAILS_DIR
from lad.config.merge import copy_tree
from lad.config.node import freeze, get_path, split_path
from lad.core.email import MailTransport
from lad.core.exceptions import ConfigurationError
from lad.core.i18n import I18N
from lad.core.mail_transforms import CssInliner, InlineImageOffloader
from lad.core.storage import ObjectStorage

# exposed to templates as ``config``
VIEW_CONFIG_KEYS = ("app_name", "env", "urls", "ga", "meta")


def attach(tree: Dict[str, Any], path: str, value: Any) -> None:
    """
    Store ``value`` at ``path`` inside a reserved slot.

    The slot must already exist, usually holding ``None``, inside a
    mutable mapping.

    Raises:
        ConfigurationError: If the slot was not reserved.
    """
    keys = split_path(path)
    try:
        parent = get_path(tree, keys[:-1])
    except KeyError:
        parent = None
    if not isinstance(parent, MutableMapping) or keys[-1] not in parent:
        raise ConfigurationError(
            detail=f"Configuration slot '{path}' is not reserved",
            context={"path": path}
        )
    parent[keys[-1]] = value


def augment_i18n(tree: Dict[str, Any], logger: Optional[Any] = None) -> I18N:
    """Build the localization engine and register its template filters."""
    settings = tree["i18n"]
    i18n = I18N(
        phrases=settings["phrases"],
        directory=settings["directory"],
        locales=settings["locales"],
        default_locale=settings["default_locale"],
        logger=logger,
    )
    attach(tree, "i18n.engine", i18n)
    for name, fn in i18n.filters().items():
        attach(tree, f"views.locals.filters.{name}", fn)
    return i18n


def augment_view_config(tree: Dict[str, Any]) -> None:
    """Expose a whitelisted, read-only part of the configuration to views."""
    attach(
        tree,
        "views.locals.config",
        freeze({key: tree[key] for key in VIEW_CONFIG_KEYS if key in tree}),
    )


def augment_email(
    tree: Dict[str, Any],
    storage: Optional[ObjectStorage] = None,
    logger: Optional[Any] = None,
) -> MailTransport:
    """Build the mail transport and the email rendering settings."""
    email = tree["email"]
    build_dir = tree["build_dir"]

    transport = MailTransport(
        service=email["service"],
        auth=email["auth"],
        sender=email["message"]["from"],
        send=email["send"],
        css_inliner=CssInliner(
            relative_to=build_dir,
            preserve_important=email["juice_resources"]["preserve_important"],
        ),
        transforms=[InlineImageOffloader(storage or ObjectStorage.from_config(tree["storage"]))],
        logger=logger,
    )
    attach(tree, "email.transport", transport)

    views = copy_tree(tree["views"])
    views["root"] = str(EMAILS_DIR)
    attach(tree, "email.views", views)
    attach(tree, "email.i18n", copy_tree(tree["i18n"]))
    attach(tree, "email.juice_resources.web_resources", {"relative_to": build_dir})
    return transport
