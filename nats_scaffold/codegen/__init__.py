"""
nats-scaffold code generation module.

Turns protobuf service definitions into NATS service projects.
"""

from .registry import (
    GeneratorRegistry,
    RegistryError,
    get_generator,
    get_registry,
    list_supported_targets,
)
from .pipeline import GenerationPipeline, GenerationReport, generate_project
from .core.config import GeneratorConfig, ConfigManager, load_config
from .core.extractor import extract, extract_file
from .core.generator import CodeGenerator, GeneratorError

__all__ = [
    "GeneratorRegistry",
    "RegistryError",
    "get_generator",
    "get_registry",
    "list_supported_targets",
    "GenerationPipeline",
    "GenerationReport",
    "generate_project",
    "GeneratorConfig",
    "ConfigManager",
    "load_config",
    "extract",
    "extract_file",
    "CodeGenerator",
    "GeneratorError",
]
