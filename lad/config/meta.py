"""
SEO metadata for pages.

Titles and descriptions are templates with an ``{app}`` placeholder,
keyed by page identifier. ``derive_meta`` fills them in with the
configured application name; looking up a page that has no entry
returns the default page's record instead of raising, so templates can
always render a title.
"""

from collections.abc import Mapping
from typing import Any, Dict, NamedTuple

from lad.config.node import ConfigNode, get_path

DEFAULT_PAGE = "home"

PAGES = {
    "home": ("{app} — Home", "{app} is the best Python web application boilerplate."),
    "about": ("About — {app}", "Learn more about {app} and the team behind it."),
    "contact": ("Contact — {app}", "Contact us with any questions about {app}."),
    "privacy": ("Privacy Policy — {app}", "Read the {app} privacy policy."),
    "terms": ("Terms of Service — {app}", "Read the {app} terms of service."),
    "login": ("Log in — {app}", "Log in to your {app} account."),
    "register": ("Sign up — {app}", "Create a free {app} account."),
    "forgot-password": ("Forgot Password — {app}", "Reset your {app} password."),
    "reset-password": ("Reset Password — {app}", "Choose a new password for {app}."),
    "my-account": ("My Account — {app}", "Manage your {app} account."),
    "404": ("Page not found — {app}", "The page you requested could not be found."),
    "500": ("Server error — {app}", "An unexpected error occurred."),
}


class PageMeta(NamedTuple):
    title: str
    description: str


class MetaTable(ConfigNode):
    """Read-only page metadata that falls back to a default record."""

    __slots__ = ("_default",)

    def __init__(self, records: Mapping[str, PageMeta], default: PageMeta) -> None:
        super().__init__(records)
        object.__setattr__(self, "_default", default)

    @property
    def default(self) -> PageMeta:
        return self._default

    def __getitem__(self, page: str) -> PageMeta:
        return self._data.get(page, self._default)

    def __contains__(self, page: object) -> bool:
        return page in self._data

    def __repr__(self) -> str:
        return f"MetaTable({sorted(self._data)!r})"


def render_pages(pages: Mapping[str, Any], app_name: str) -> Dict[str, PageMeta]:
    """Substitute ``{app}`` into every (title, description) template."""
    values = {"app": app_name}
    return {
        page: PageMeta(title.format_map(values), description.format_map(values))
        for page, (title, description) in pages.items()
    }


def derive_meta(tree: Mapping) -> MetaTable:
    """Build the page metadata table from the merged configuration."""
    records = render_pages(PAGES, get_path(tree, "app_name"))
    return MetaTable(records, records[DEFAULT_PAGE])
