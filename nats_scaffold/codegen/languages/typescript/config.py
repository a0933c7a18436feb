"""
TypeScript-specific configuration.

Defaults for the generated Node project: package manifest fields, npm
dependency versions, the protoc invocation used by the build script, and
the tsc compiler options.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Union

from ...core.config import GeneratorConfig
from ...core.errors import ConfigError

DEFAULT_DEPENDENCIES: Dict[str, str] = {
    "ts-proto": "^1.137.0",
    "typescript": "^4.9.4",
    "nats": "^2.13.1",
}

DEFAULT_PROTOC_OPTIONS: List[str] = [
    "importSuffix=.js",
    "esModuleInterop=true",
]

DEFAULT_COMPILER_OPTIONS: Dict[str, Any] = {
    "target": "esnext",
    "lib": [],
    "module": "esnext",
    "esModuleInterop": True,
    "forceConsistentCasingInFileNames": True,
    "strict": True,
    "moduleResolution": "node",
    "skipLibCheck": True,
}

PROTOC_PLUGIN = "./node_modules/.bin/protoc-gen-ts_proto"


@dataclass
class TypeScriptConfig:
    """Settings for the generated Node/TypeScript project."""

    package_name: str = "service"
    package_version: str = "1.0.0"
    description: str = ""
    license: str = "ISC"
    dependencies: Dict[str, str] = field(
        default_factory=lambda: dict(DEFAULT_DEPENDENCIES)
    )
    protoc_options: List[str] = field(
        default_factory=lambda: list(DEFAULT_PROTOC_OPTIONS)
    )
    compiler_options: Dict[str, Any] = field(
        default_factory=lambda: dict(DEFAULT_COMPILER_OPTIONS)
    )

    @classmethod
    def from_generator_config(cls, config: GeneratorConfig) -> "TypeScriptConfig":
        """Build from the ``custom`` section of a GeneratorConfig."""
        custom = config.custom or {}
        known = set(cls.__dataclass_fields__)
        values = {k: v for k, v in custom.items() if k in known}

        ts_config = cls(**values)
        # Partial overrides extend the defaults rather than replace them
        if "dependencies" in values:
            ts_config.dependencies = {**DEFAULT_DEPENDENCIES, **values["dependencies"]}
        if "compiler_options" in values:
            ts_config.compiler_options = {
                **DEFAULT_COMPILER_OPTIONS,
                **values["compiler_options"],
            }
        ts_config.validate()
        return ts_config

    def validate(self):
        for name in ("ts-proto", "typescript", "nats"):
            if not self.dependencies.get(name):
                raise ConfigError(f"dependency '{name}' must have a version")
        if not isinstance(self.protoc_options, list):
            raise ConfigError("protoc_options must be a list")

    def build_script(self, schema_path: Union[str, Path]) -> str:
        """Regenerate message code from the schema, then compile."""
        options = " ".join(f"--ts_proto_opt={opt}" for opt in self.protoc_options)
        parts = [f"protoc --plugin={PROTOC_PLUGIN}"]
        if options:
            parts.append(options)
        parts.append(f"--ts_proto_out=. ./{Path(schema_path).name}")
        return " ".join(parts) + " && tsc"

    def package_manifest(self, schema_path: Union[str, Path]) -> Dict[str, Any]:
        return {
            "name": self.package_name,
            "version": self.package_version,
            "description": self.description,
            "main": "index.js",
            "type": "module",
            "scripts": {
                "build": self.build_script(schema_path),
                "test": 'echo "Error: no test specified" && exit 1',
            },
            "dependencies": dict(self.dependencies),
            "keywords": [],
            "author": "",
            "license": self.license,
        }

    def tsconfig(self) -> Dict[str, Any]:
        return {"compilerOptions": dict(self.compiler_options)}
