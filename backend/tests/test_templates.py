"""Tests for template resolution and the Jinja-backed registry."""

from __future__ import annotations

import pytest
from jinja2 import DictLoader, Environment

from content_blocks.application.blocks.rendering import FlaskTemplateRegistry
from content_blocks.domain.exceptions import MissingTemplateError
from content_blocks.domain.templates import resolve_template


class FakeRegistry:
    def __init__(self, *names):
        self.names = set(names)
        self.lookups = []

    def has_template(self, name):
        self.lookups.append(name)
        return name in self.names

    def render(self, name, **context):
        return name


class TestResolveTemplate:
    def test_area_variant_preferred(self) -> None:
        registry = FakeRegistry("Banner", "Banner_Header")
        assert resolve_template("Banner", "Header", registry) == "Banner_Header"

    def test_falls_back_to_type(self) -> None:
        registry = FakeRegistry("Banner")
        assert resolve_template("Banner", "Header", registry) == "Banner"

    def test_no_area_skips_variant_lookup(self) -> None:
        registry = FakeRegistry("Banner", "Banner_")
        assert resolve_template("Banner", "", registry) == "Banner"
        assert registry.lookups == ["Banner"]

    def test_variant_alone_is_not_used_without_area(self) -> None:
        registry = FakeRegistry("Banner_Header")
        with pytest.raises(MissingTemplateError):
            resolve_template("Banner", None, registry)

    def test_missing_everything_raises(self) -> None:
        with pytest.raises(MissingTemplateError, match="Banner") as excinfo:
            resolve_template("Banner", "Header", FakeRegistry())
        assert excinfo.value.candidates == ["Banner_Header", "Banner"]


class TestFlaskTemplateRegistry:
    @pytest.fixture
    def registry(self):
        env = Environment(loader=DictLoader({
            "blocks/Banner.html": "<b>{{ title }}</b>",
        }))
        return FlaskTemplateRegistry(env)

    def test_has_template(self, registry) -> None:
        assert registry.has_template("Banner")
        assert not registry.has_template("Banner_Header")

    def test_render(self, registry) -> None:
        assert registry.render("Banner", title="Hi") == "<b>Hi</b>"

    def test_resolves_through_jinja(self, registry) -> None:
        assert resolve_template("Banner", "Header", registry) == "Banner"
