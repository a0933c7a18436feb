"""
Generator registry system for managing available target generators.

Provides registration and instantiation of target generators by name
or alias.
"""

from typing import Dict, List, Optional, Type

from .core.config import GeneratorConfig, load_config
from .core.generator import CodeGenerator
from .core.errors import UsageError


class RegistryError(UsageError):
    """Exception raised for registry-related errors."""

    pass


class GeneratorRegistry:
    """Registry for managing available code generators."""

    def __init__(self):
        """Initialize empty registry."""
        self._generators: Dict[str, Type[CodeGenerator]] = {}
        self._aliases: Dict[str, str] = {}

    def register(
        self,
        target: str,
        generator_class: Type[CodeGenerator],
        aliases: Optional[List[str]] = None,
        replace: bool = False,
    ):
        """
        Register a generator for a target.

        Args:
            target: Primary target name (e.g., 'typescript')
            generator_class: Generator class implementing CodeGenerator
            aliases: Alternative names for this target
            replace: If True, replace existing registration. If False, skip if exists.

        Raises:
            RegistryError: If generator class is invalid or an alias conflicts
        """
        if not issubclass(generator_class, CodeGenerator):
            raise RegistryError("Generator class must inherit from CodeGenerator")

        target_key = target.lower()

        if target_key in self._generators and not replace:
            return

        self._generators[target_key] = generator_class

        for alias in aliases or []:
            alias_key = alias.lower()
            if alias_key == target_key:
                continue

            if not replace:
                if alias_key in self._generators:
                    raise RegistryError(
                        f"Alias '{alias}' conflicts with existing primary target"
                    )
                if alias_key in self._aliases and self._aliases[alias_key] != target_key:
                    raise RegistryError(
                        f"Alias '{alias}' already points to '{self._aliases[alias_key]}'"
                    )

            self._aliases[alias_key] = target_key

    def resolve(self, target: str) -> str:
        """
        Resolve a target name or alias to its primary name.

        Raises:
            RegistryError: If the target is unknown
        """
        target_key = target.lower()
        if target_key in self._generators:
            return target_key
        if target_key in self._aliases:
            return self._aliases[target_key]

        raise RegistryError(
            f"No generator registered for target: {target}. "
            f"Available: {', '.join(self.list_targets())}"
        )

    def get_generator_class(self, target: str) -> Type[CodeGenerator]:
        return self._generators[self.resolve(target)]

    def create_generator(
        self, target: str, config: Optional[GeneratorConfig] = None
    ) -> CodeGenerator:
        """
        Create generator instance for a target.

        Args:
            target: Target name or alias
            config: Configuration, target defaults when omitted

        Returns:
            Configured generator instance
        """
        generator_class = self.get_generator_class(target)
        if config is None:
            config = load_config(self.resolve(target))
        return generator_class(config)

    def list_targets(self) -> List[str]:
        """Get list of registered primary target names."""
        return sorted(self._generators.keys())

    def get_aliases_for_target(self, target: str) -> List[str]:
        target_key = target.lower()
        return sorted(
            alias for alias, primary in self._aliases.items() if primary == target_key
        )

    def is_supported(self, target: str) -> bool:
        target_key = target.lower()
        return target_key in self._generators or target_key in self._aliases

    def get_target_info(self, target: str) -> Dict[str, object]:
        """Get information about a registered target."""
        primary = self.resolve(target)
        generator = self.create_generator(primary)
        return {
            "name": generator.language_name,
            "class": type(generator).__name__,
            "file_extension": generator.file_extension,
            "aliases": self.get_aliases_for_target(primary),
        }


# Global registry instance - created once
_global_registry: Optional[GeneratorRegistry] = None


def get_registry() -> GeneratorRegistry:
    """Get the global generator registry, initializing if needed."""
    global _global_registry
    if _global_registry is None:
        _global_registry = GeneratorRegistry()
        _auto_register_generators(_global_registry)
    return _global_registry


def _auto_register_generators(registry: GeneratorRegistry):
    """Register the built-in targets with their aliases."""
    from .languages.typescript import TypeScriptGenerator

    registry.register("typescript", TypeScriptGenerator, aliases=["ts", "node"])


def get_generator(
    target: str, config: Optional[GeneratorConfig] = None
) -> CodeGenerator:
    """Get generator instance from global registry."""
    return get_registry().create_generator(target, config)


def list_supported_targets() -> List[str]:
    """List all supported targets from global registry."""
    return get_registry().list_targets()


def is_target_supported(target: str) -> bool:
    return get_registry().is_supported(target)
