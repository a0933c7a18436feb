"""
TypeScript code generator module.

Generates NATS service wiring, handler stubs, typed clients, and the Node
project files from protobuf service definitions.
"""

from .generator import TypeScriptGenerator, create_typescript_generator
from .config import TypeScriptConfig

__all__ = [
    "TypeScriptGenerator",
    "TypeScriptConfig",
    "create_typescript_generator",
]
