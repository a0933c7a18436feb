"""
Naming and import resolution for generated artifacts.

All file names, identifiers, and endpoint subjects used by the emitters
come from here, so a handler stub, the service wiring that calls it, and
the client that addresses it always agree on spelling.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Union

from .schema import RpcDecl, ServiceDecl


def collect_message_types(rpcs: Iterable[RpcDecl]) -> List[str]:
    """
    Collect the message types referenced by a set of RPCs.

    Types are gathered in encounter order (output type, then input type),
    deduplicated, then sorted so the rendered import is byte-stable no
    matter how the RPCs were ordered.

    Args:
        rpcs: RPCs of one service or of the whole model

    Returns:
        Sorted list of unique message type identifiers
    """
    seen: List[str] = []
    for rpc in rpcs:
        for type_name in (rpc.out_type, rpc.in_type):
            if type_name not in seen:
                seen.append(type_name)
    return sorted(seen)


def render_import(types: Iterable[str], module: str) -> str:
    """Render a single ES module import for the given names."""
    names = ", ".join(sorted(set(types)))
    return f'import {{ {names} }} from "./{module}.js";'


def proto_module_name(schema_path: Union[str, Path]) -> str:
    """Name of the message library protoc generates for a schema file."""
    return Path(schema_path).stem


@dataclass(frozen=True)
class ArtifactNames:
    """Names derived from one service for every artifact that mentions it."""

    service: str
    proto_module: str
    extension: str = ".ts"

    @property
    def stem(self) -> str:
        return self.service.lower()

    @property
    def handlers_module(self) -> str:
        return f"{self.stem}_handlers"

    @property
    def handlers_file(self) -> str:
        return f"{self.handlers_module}{self.extension}"

    @property
    def backup_file(self) -> str:
        return f"{self.handlers_module}.bak"

    @property
    def service_file(self) -> str:
        return f"{self.stem}_service{self.extension}"

    @property
    def client_file(self) -> str:
        return f"{self.stem}_client{self.extension}"

    @property
    def client_class(self) -> str:
        return f"{self.service}Client"

    @property
    def namespace(self) -> str:
        return self.service

    @property
    def group_var(self) -> str:
        return f"{self.stem}Group"

    @staticmethod
    def handler_name(rpc: RpcDecl) -> str:
        return f"{rpc.name}Handler"

    @staticmethod
    def method_name(rpc: RpcDecl) -> str:
        return rpc.name

    @staticmethod
    def endpoint_name(rpc: RpcDecl) -> str:
        return rpc.name

    def subject(self, rpc: RpcDecl) -> str:
        """Bus subject an endpoint listens on: ``<Service>.<rpc>``."""
        return f"{self.service}.{rpc.name}"

    def message_import(self, service: ServiceDecl) -> str:
        return render_import(collect_message_types(service.rpcs), self.proto_module)


def names_for(
    service: ServiceDecl, schema_path: Union[str, Path], extension: str = ".ts"
) -> ArtifactNames:
    """Build the naming set for a service generated from ``schema_path``."""
    return ArtifactNames(
        service=service.name,
        proto_module=proto_module_name(schema_path),
        extension=extension,
    )
