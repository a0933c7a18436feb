"""Tests for the generator registry."""

import pytest

from nats_scaffold.codegen.core.config import GeneratorConfig
from nats_scaffold.codegen.core.errors import UsageError
from nats_scaffold.codegen.languages.typescript import TypeScriptGenerator
from nats_scaffold.codegen.registry import (
    GeneratorRegistry,
    RegistryError,
    get_generator,
    get_registry,
    is_target_supported,
    list_supported_targets,
)


class TestGlobalRegistry:
    def test_typescript_registered(self):
        assert list_supported_targets() == ["typescript"]
        assert get_registry().get_aliases_for_target("typescript") == ["node", "ts"]

    @pytest.mark.parametrize("target", ["typescript", "TypeScript", "ts", "node"])
    def test_resolves_aliases(self, target):
        assert is_target_supported(target)
        assert isinstance(get_generator(target), TypeScriptGenerator)

    def test_config_is_passed_through(self):
        generator = get_generator("ts", GeneratorConfig(error_code=418))
        assert generator.config.error_code == 418

    def test_unknown_target(self):
        assert not is_target_supported("cobol")
        with pytest.raises(UsageError, match="Available: typescript"):
            get_generator("cobol")

    def test_target_info(self):
        info = get_registry().get_target_info("ts")
        assert info == {
            "name": "typescript",
            "class": "TypeScriptGenerator",
            "file_extension": ".ts",
            "aliases": ["node", "ts"],
        }


class TestRegister:
    def test_rejects_non_generators(self):
        with pytest.raises(RegistryError):
            GeneratorRegistry().register("bad", object)

    def test_alias_conflict(self):
        registry = GeneratorRegistry()
        registry.register("typescript", TypeScriptGenerator, aliases=["ts"])
        with pytest.raises(RegistryError):
            registry.register("tsx", TypeScriptGenerator, aliases=["ts"])
