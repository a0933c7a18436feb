"""
Schema extraction from protobuf service definitions.

This is a best-effort scanner over a small subset of the proto language,
not a proto compiler. The recognized grammar is:

    package <identifier>
    service <identifier> { ... }\\n}
    rpc <name>(<InType>) returns (<OutType>) {}

A service block starts at the ``service`` keyword and runs to the first
closing brace that is followed by a newline and another closing brace,
which is the last RPC's ``{}`` and the service's own closing brace. Blocks
that nest braces differently (options bodies, nested messages) are not
delimited reliably. RPC declarations with a body or with ``stream``
qualifiers are skipped and reported as diagnostics.
"""

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, List, Optional, Tuple, Union

from ...logging_config import get_logger
from .errors import ParseError
from .schema import Diagnostic, RpcDecl, SchemaModel, ServiceDecl

logger = get_logger(__name__)

PACKAGE_RE = re.compile(r"\bpackage\s+(\w+)")
SERVICE_RE = re.compile(r"\bservice\s+(\w+)")
RPC_RE = re.compile(r"rpc\s+(\w+)\((\S+)\)\s+returns\s+\((\S+)\)\s+\{}")
RPC_LINE_RE = re.compile(r"^\s*rpc\b")

# Closing brace of the last rpc, newline, closing brace of the service
SERVICE_BLOCK_END = "}\n}"

RPC_SHAPE = "rpc Name(Request) returns (Response) {}"


@dataclass(frozen=True)
class ServiceBlock:
    """Raw text of one service declaration."""

    name: str
    line: int
    offset: int
    text: str


class SchemaScanner:
    """Locates package and service declarations in normalized schema text."""

    def __init__(self, text: str):
        self.text = normalize_schema_text(text)

    def line_of(self, offset: int) -> int:
        """Return the 1-based line number of a character offset."""
        return self.text.count("\n", 0, offset) + 1

    def package_name(self) -> str:
        match = PACKAGE_RE.search(self.text)
        return match.group(1) if match else ""

    def service_blocks(self) -> Iterator[ServiceBlock]:
        """Yield service blocks in order of appearance."""
        position = 0
        while True:
            header = SERVICE_RE.search(self.text, position)
            if header is None:
                return

            end = self.text.find(SERVICE_BLOCK_END, header.end())
            if end == -1:
                raise ParseError(
                    f"service '{header.group(1)}' is not terminated; expected the "
                    f"last rpc's '{{}}' followed by the closing '}}' on the next line",
                    line=self.line_of(header.start()),
                )

            end += len(SERVICE_BLOCK_END)
            absorbed = SERVICE_RE.search(self.text, header.end(), end)
            if absorbed is not None:
                raise ParseError(
                    f"service '{header.group(1)}' (line {self.line_of(header.start())}) "
                    f"runs into service '{absorbed.group(1)}' "
                    f"(line {self.line_of(absorbed.start())}); close each service "
                    f"with its last rpc's '{{}}' followed by '}}' on the next line",
                    line=self.line_of(header.start()),
                )

            yield ServiceBlock(
                name=header.group(1),
                line=self.line_of(header.start()),
                offset=header.start(),
                text=self.text[header.start() : end],
            )
            position = end

    def scan_rpcs(self, block: ServiceBlock) -> Tuple[List[RpcDecl], List[Diagnostic]]:
        """Collect recognized RPCs of a block and report RPC-like lines that were skipped."""
        rpcs: List[RpcDecl] = []
        matched_lines = set()

        for match in RPC_RE.finditer(block.text):
            rpcs.append(RpcDecl(match.group(1), match.group(2), match.group(3)))
            matched_lines.add(self.line_of(block.offset + match.start()))

        diagnostics: List[Diagnostic] = []
        for index, line in enumerate(block.text.split("\n")):
            line_no = block.line + index
            if line_no in matched_lines or not RPC_LINE_RE.match(line):
                continue
            diagnostics.append(
                Diagnostic(line=line_no, message=_skip_reason(line), text=line.strip())
            )

        return rpcs, diagnostics


def normalize_schema_text(text: str) -> str:
    """Normalize line endings and drop // comments, keeping line numbers intact."""
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    lines = [line.split("//", 1)[0].rstrip() for line in text.split("\n")]
    return "\n".join(lines)


def _skip_reason(line: str) -> str:
    if re.search(r"\bstream\b", line):
        return "streaming rpc is not supported"
    if "{" in line and "{}" not in line:
        return "rpc with a non-empty body is not supported"
    return f"unrecognized rpc declaration, expected `{RPC_SHAPE}`"


def extract(schema_text: str) -> SchemaModel:
    """
    Build a SchemaModel from protobuf text.

    Args:
        schema_text: Raw contents of a .proto file

    Returns:
        SchemaModel with services in order of appearance

    Raises:
        ParseError: If no service is declared, a service block is not
            terminated or runs into the next service, or a service has no
            recognized RPC declarations
    """
    scanner = SchemaScanner(schema_text)
    package_name = scanner.package_name()

    services: List[ServiceDecl] = []
    diagnostics: List[Diagnostic] = []

    for block in scanner.service_blocks():
        rpcs, skipped = scanner.scan_rpcs(block)
        for diagnostic in skipped:
            logger.warning("service %s skipped %s", block.name, diagnostic)
        diagnostics.extend(skipped)

        if not rpcs:
            raise ParseError(
                f"service '{block.name}' has no rpc entries like `{RPC_SHAPE}`",
                line=block.line,
            )

        logger.debug("Found service %s with %d rpc(s)", block.name, len(rpcs))
        services.append(ServiceDecl(name=block.name, rpcs=tuple(rpcs)))

    if not services:
        raise ParseError("no service declarations found")

    if not package_name:
        package_name = services[0].name
        logger.debug("No package declaration, using service name %s", package_name)

    return SchemaModel(
        package_name=package_name,
        services=tuple(services),
        diagnostics=tuple(diagnostics),
    )


def extract_file(path: Union[str, Path], text: Optional[str] = None) -> SchemaModel:
    """Extract a model from a schema file, naming the file in parse errors."""
    path = Path(path)
    if text is None:
        text = path.read_text(encoding="utf-8")
    try:
        return extract(text)
    except ParseError as e:
        raise e.with_source(str(path)) from None
