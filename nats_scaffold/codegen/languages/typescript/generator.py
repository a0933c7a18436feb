"""
TypeScript code generator implementation.

Generates a Node project that serves each protobuf service over NATS
micro-services, plus typed request/response clients, using templates.
"""

import json
from collections import Counter
from pathlib import Path
from typing import Any, Dict, List, Union

from ...core.config import GeneratorConfig
from ...core.generator import CodeGenerator, GeneratorError
from ...core.naming import ArtifactNames, collect_message_types
from ...core.schema import ArtifactKind, GeneratedArtifact, SchemaModel, ServiceDecl
from .config import TypeScriptConfig

# Top-level bindings the wiring and client templates declare themselves
WIRING_BINDINGS = ("connect", "nc", "srv")
CLIENT_BINDINGS = ("NatsConnection",)


class TypeScriptGenerator(CodeGenerator):
    """Code generator for NATS services written in TypeScript."""

    def __init__(self, config: GeneratorConfig = None):
        """Initialize TypeScript generator with configuration."""
        super().__init__(config)
        self.ts_config = TypeScriptConfig.from_generator_config(self.config)

    @property
    def language_name(self) -> str:
        """Return the language name."""
        return "typescript"

    @property
    def file_extension(self) -> str:
        """Return TypeScript file extension."""
        return ".ts"

    def get_template_directory(self) -> Path:
        """Return the TypeScript templates directory."""
        return Path(__file__).parent / "templates"

    def _rpc_context(
        self, service: ServiceDecl, names: ArtifactNames
    ) -> List[Dict[str, Any]]:
        """Per-RPC names shared by every template."""
        return [
            {
                "name": rpc.name,
                "in_type": rpc.in_type,
                "out_type": rpc.out_type,
                "handler": names.handler_name(rpc),
                "method": names.method_name(rpc),
                "endpoint": names.endpoint_name(rpc),
                "subject": names.subject(rpc),
            }
            for rpc in service.rpcs
        ]

    def _base_context(self, service: ServiceDecl, names: ArtifactNames) -> Dict[str, Any]:
        return {
            "service": service.name,
            "namespace": names.namespace,
            "rpcs": self._rpc_context(service, names),
            "message_import": names.message_import(service),
            "add_comments": self.config.add_comments,
        }

    def generate_handlers(
        self, service: ServiceDecl, names: ArtifactNames
    ) -> GeneratedArtifact:
        code = self.render_template(
            "handlers.ts.j2", self._base_context(service, names)
        )
        return GeneratedArtifact(
            names.handlers_file, self.format_code(code), ArtifactKind.HANDLERS
        )

    def generate_service(
        self, service: ServiceDecl, names: ArtifactNames
    ) -> GeneratedArtifact:
        _check_bindings(
            service, names.service_file, [*WIRING_BINDINGS, names.namespace, names.group_var]
        )
        context = self._base_context(service, names)
        context.update(
            {
                "handlers_file": names.handlers_file,
                "handlers_module": names.handlers_module,
                "service_module": Path(names.service_file).stem,
                "group_var": names.group_var,
                "version": self.config.service_version,
                "error_code": self.config.error_code,
            }
        )
        code = self.render_template("service.ts.j2", context)
        return GeneratedArtifact(
            names.service_file, self.format_code(code), ArtifactKind.SERVICE
        )

    def generate_client(
        self, service: ServiceDecl, names: ArtifactNames
    ) -> GeneratedArtifact:
        _check_bindings(
            service, names.client_file, [*CLIENT_BINDINGS, names.client_class]
        )
        context = self._base_context(service, names)
        context.update(
            {
                "client_class": names.client_class,
                "timeout": self.config.request_timeout_ms,
            }
        )
        code = self.render_template("client.ts.j2", context)
        return GeneratedArtifact(
            names.client_file, self.format_code(code), ArtifactKind.CLIENT
        )

    def generate_project(
        self, model: SchemaModel, schema_path: Union[str, Path]
    ) -> List[GeneratedArtifact]:
        """package.json and tsconfig.json, independent of the service count."""
        return [
            GeneratedArtifact(
                "package.json",
                _to_json(self.ts_config.package_manifest(schema_path)),
                ArtifactKind.PROJECT,
            ),
            GeneratedArtifact(
                "tsconfig.json",
                _to_json(self.ts_config.tsconfig()),
                ArtifactKind.PROJECT,
            ),
        ]


def _check_bindings(service: ServiceDecl, module: str, bindings: List[str]):
    """Reject a module whose top-level names, imports included, would clash."""
    counts = Counter(bindings + collect_message_types(service.rpcs))
    clashes = sorted(name for name, count in counts.items() if count > 1)
    if clashes:
        raise GeneratorError(
            f"service '{service.name}' declares conflicting names in {module}: "
            + ", ".join(clashes)
        )


def _to_json(data: Dict[str, Any]) -> str:
    return json.dumps(data, indent=1) + "\n"


def create_typescript_generator(config: GeneratorConfig = None) -> TypeScriptGenerator:
    """Create a TypeScript generator with default or given configuration."""
    return TypeScriptGenerator(config or GeneratorConfig())
