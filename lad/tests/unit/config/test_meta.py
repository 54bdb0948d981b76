"""
Unit tests for SEO page metadata.
"""

from lad.config.meta import DEFAULT_PAGE, PAGES, MetaTable, PageMeta, derive_meta, render_pages
from lad.config.node import freeze


def test_home_title_uses_app_name():
    pages = render_pages({"home": ("{app} — Home", "Welcome to {app}")}, "Lad")
    assert pages["home"] == PageMeta("Lad — Home", "Welcome to Lad")


def test_derive_meta_renders_every_page():
    meta = derive_meta({"app_name": "Acme"})

    assert set(meta) == set(PAGES)
    assert meta["home"].title == "Acme — Home"
    assert meta["about"].title == "About — Acme"
    assert all("{app}" not in record.title for record in meta.values())


def test_missing_page_returns_default_record():
    meta = derive_meta({"app_name": "Lad"})

    assert "does-not-exist" not in meta
    assert meta["does-not-exist"] == meta[DEFAULT_PAGE]
    assert meta.default.title == "Lad — Home"


def test_meta_table_survives_freeze():
    meta = MetaTable({"home": PageMeta("t", "d")}, PageMeta("t", "d"))
    frozen = freeze({"meta": meta})

    assert frozen["meta"] is meta
    assert frozen["meta"]["missing"].title == "t"
