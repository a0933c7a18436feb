"""
Base generator interface for all code generation targets.

Defines the contract that all target generators must implement. Every
emitter is a pure function of the model and the derived names: it returns
GeneratedArtifact objects and never touches the filesystem.
"""

from abc import ABC, abstractmethod
from collections import Counter
from pathlib import Path
from typing import List, Optional, Union

from .config import GeneratorConfig
from .errors import ScaffoldError
from .naming import ArtifactNames, names_for
from .schema import GeneratedArtifact, SchemaModel, ServiceDecl
from .templates import TemplateEngine, create_template_engine


class GeneratorError(ScaffoldError):
    """Base exception for code generation errors."""

    pass


class CodeGenerator(ABC):
    """Abstract base class for all service scaffold generators."""

    def __init__(self, config: Optional[GeneratorConfig] = None):
        """Initialize generator with optional configuration."""
        self.config = config or GeneratorConfig()
        self._template_engine = None
        self._setup_templates()

    def _setup_templates(self):
        """Setup template engine for this generator."""
        self._template_engine = create_template_engine(self.get_template_directory())

    @property
    @abstractmethod
    def language_name(self) -> str:
        """Return the name of the target language (e.g., 'typescript')."""
        pass

    @property
    @abstractmethod
    def file_extension(self) -> str:
        """Return the file extension for generated sources (e.g., '.ts')."""
        pass

    def get_template_directory(self) -> Optional[Path]:
        """
        Return the directory containing templates for this generator.

        Return None to use in-memory templates only.
        """
        return None

    @property
    def template_engine(self) -> TemplateEngine:
        """Get the template engine for this generator."""
        if self._template_engine is None:
            self._setup_templates()
        return self._template_engine

    def names_for(
        self, service: ServiceDecl, schema_path: Union[str, Path]
    ) -> ArtifactNames:
        return names_for(service, schema_path, self.file_extension)

    @abstractmethod
    def generate_handlers(
        self, service: ServiceDecl, names: ArtifactNames
    ) -> GeneratedArtifact:
        """Generate the human-edited handler stub file for one service."""
        pass

    @abstractmethod
    def generate_service(
        self, service: ServiceDecl, names: ArtifactNames
    ) -> GeneratedArtifact:
        """Generate the module that binds handlers to bus endpoints."""
        pass

    @abstractmethod
    def generate_client(
        self, service: ServiceDecl, names: ArtifactNames
    ) -> GeneratedArtifact:
        """Generate the typed client for one service."""
        pass

    @abstractmethod
    def generate_project(
        self, model: SchemaModel, schema_path: Union[str, Path]
    ) -> List[GeneratedArtifact]:
        """Generate the once-per-tree project files."""
        pass

    def generate_service_artifacts(
        self, service: ServiceDecl, schema_path: Union[str, Path]
    ) -> List[GeneratedArtifact]:
        """Handler stub, wiring, and client for one service, in write order."""
        names = self.names_for(service, schema_path)
        return [
            self.generate_handlers(service, names),
            self.generate_service(service, names),
            self.generate_client(service, names),
        ]

    def generate(
        self, model: SchemaModel, schema_path: Union[str, Path]
    ) -> List[GeneratedArtifact]:
        """
        Generate every artifact for a model.

        Args:
            model: Extracted schema model
            schema_path: Path of the schema the model came from

        Returns:
            Artifacts in write order: per service, then project files

        Raises:
            GeneratorError: If two artifacts would land on the same path
        """
        artifacts: List[GeneratedArtifact] = []
        for service in model.services:
            artifacts.extend(self.generate_service_artifacts(service, schema_path))
        artifacts.extend(self.generate_project(model, schema_path))

        duplicates = [
            path for path, count in Counter(a.path for a in artifacts).items() if count > 1
        ]
        if duplicates:
            raise GeneratorError(
                "services map to the same output files: " + ", ".join(sorted(duplicates))
            )
        return artifacts

    def validate_model(self, model: SchemaModel) -> List[str]:
        """
        Validate a model for structural hazards.

        Returns:
            List of warning messages (empty if no issues)
        """
        warnings = []

        seen_services = Counter(service.name for service in model.services)
        for name, count in seen_services.items():
            if count > 1:
                warnings.append(f"Service '{name}' is declared {count} times")

        for service in model.services:
            seen_rpcs = Counter(rpc.name for rpc in service.rpcs)
            for name, count in seen_rpcs.items():
                if count > 1:
                    warnings.append(
                        f"RPC '{service.name}.{name}' is declared {count} times"
                    )

        return warnings

    def format_code(self, code: str) -> str:
        """
        Apply basic formatting to generated code.

        Strips trailing whitespace, collapses runs of blank lines, and
        ends the file with exactly one newline.
        """
        lines = code.split("\n")
        formatted_lines = []
        blank_count = 0

        for line in lines:
            stripped = line.rstrip()
            if not stripped:
                blank_count += 1
                if blank_count <= 1:
                    formatted_lines.append("")
            else:
                blank_count = 0
                formatted_lines.append(stripped)

        return "\n".join(formatted_lines).strip("\n") + "\n"

    def render_template(self, template_name: str, context: dict) -> str:
        """Render a template with context."""
        return self.template_engine.render_template(template_name, context)

    def template_exists(self, template_name: str) -> bool:
        """Check if a template exists."""
        return self.template_engine.template_exists(template_name)
