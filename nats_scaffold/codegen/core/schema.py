"""
Core schema representation for code generation.

Holds the structural model the extractor builds from a protobuf file:
services, their RPCs, and the diagnostics collected while scanning.
Everything here is immutable once built.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, Optional, Tuple


@dataclass(frozen=True)
class RpcDecl:
    """A single remote procedure: name plus input and output message types."""

    name: str
    in_type: str
    out_type: str


@dataclass(frozen=True)
class ServiceDecl:
    """A named group of RPCs."""

    name: str
    rpcs: Tuple[RpcDecl, ...]

    def rpc(self, name: str) -> Optional[RpcDecl]:
        for rpc in self.rpcs:
            if rpc.name == name:
                return rpc
        return None


@dataclass(frozen=True)
class Diagnostic:
    """A line that looked like an RPC declaration but was not recognized."""

    line: int
    message: str
    text: str

    def __str__(self) -> str:
        return f"line {self.line}: {self.message}: {self.text}"


@dataclass(frozen=True)
class SchemaModel:
    """Parsed structural representation of one schema file."""

    package_name: str
    services: Tuple[ServiceDecl, ...]
    diagnostics: Tuple[Diagnostic, ...] = field(default=())

    def all_rpcs(self) -> Iterator[RpcDecl]:
        """Iterate over every RPC of every service, in source order."""
        for service in self.services:
            yield from service.rpcs

    def service(self, name: str) -> Optional[ServiceDecl]:
        for service in self.services:
            if service.name == name:
                return service
        return None

    @property
    def rpc_count(self) -> int:
        return sum(len(service.rpcs) for service in self.services)


class ArtifactKind(Enum):
    """Ownership class of a generated file."""

    HANDLERS = "handlers"
    SERVICE = "service"
    CLIENT = "client"
    PROJECT = "project"
    SCHEMA_COPY = "schema"

    @property
    def human_edited(self) -> bool:
        """Handler stubs are seeds for hand-written code; the rest is owned by the tool."""
        return self is ArtifactKind.HANDLERS


@dataclass(frozen=True)
class GeneratedArtifact:
    """Generated text and the relative path it belongs at."""

    path: str
    content: str
    kind: ArtifactKind
