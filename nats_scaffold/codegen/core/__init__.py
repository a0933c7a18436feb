"""
Core code generation components.

Provides the schema model, extractor, naming, templates, configuration,
and regeneration rules shared by all target generators.
"""

from .schema import (
    ArtifactKind,
    Diagnostic,
    GeneratedArtifact,
    RpcDecl,
    SchemaModel,
    ServiceDecl,
)
from .extractor import extract, extract_file
from .naming import ArtifactNames, collect_message_types, render_import
from .generator import CodeGenerator, GeneratorError
from .config import GeneratorConfig, ConfigManager, load_config
from .templates import TemplateEngine, create_template_engine
from .regeneration import Action, PlannedWrite, RegenerationManager, decide
from .output import OutputTree
from .errors import (
    AlreadyExistsError,
    ConfigError,
    ConflictError,
    ParseError,
    ScaffoldError,
    TemplateError,
    UsageError,
)

__all__ = [
    # Schema model
    "ArtifactKind",
    "Diagnostic",
    "GeneratedArtifact",
    "RpcDecl",
    "SchemaModel",
    "ServiceDecl",
    # Extraction
    "extract",
    "extract_file",
    # Naming
    "ArtifactNames",
    "collect_message_types",
    "render_import",
    # Generator interface
    "CodeGenerator",
    "GeneratorError",
    # Configuration
    "GeneratorConfig",
    "ConfigManager",
    "load_config",
    # Templates
    "TemplateEngine",
    "create_template_engine",
    # Regeneration
    "Action",
    "PlannedWrite",
    "RegenerationManager",
    "decide",
    "OutputTree",
    # Errors
    "AlreadyExistsError",
    "ConfigError",
    "ConflictError",
    "ParseError",
    "ScaffoldError",
    "TemplateError",
    "UsageError",
]
