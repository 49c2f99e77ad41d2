# -*- coding: utf-8 -*-
import pytest

from services.parent_registry import ParentRegistry


class _StaticResolver:
    def __init__(self, titles):
        self.titles = titles

    def exists(self, parent_id):
        return parent_id in self.titles

    def fetch_title(self, parent_id):
        return self.titles.get(parent_id)


def test_resolve_registered_type():
    registry = ParentRegistry()
    registry.register("article", _StaticResolver({1: "Hello"}))

    assert registry.is_registered("article")
    assert registry.resolve_title("article", 1) == "Hello"


def test_unknown_type_or_missing_object_resolves_to_none():
    registry = ParentRegistry()
    registry.register("article", _StaticResolver({1: "Hello"}))

    assert registry.resolve_title("video", 1) is None
    assert registry.resolve_title("article", 2) is None


def test_existing_object_without_title_resolves_to_empty_string():
    registry = ParentRegistry()
    registry.register("article", _StaticResolver({1: None}))

    assert registry.resolve_title("article", 1) == ""


def test_register_requires_type_tag():
    with pytest.raises(ValueError):
        ParentRegistry().register("", _StaticResolver({}))


def test_page_type_registered_at_startup(app, make_page):
    from services.parent_registry import parent_registry

    page = make_page("关于我们")

    assert parent_registry.resolve_title("page", page.id) == "关于我们"


def test_model_resolver_treats_out_of_range_id_as_missing(app):
    from services.parent_registry import parent_registry

    assert parent_registry.resolve_title("page", 2 ** 63) is None
