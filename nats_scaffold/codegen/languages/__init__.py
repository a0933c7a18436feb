"""
Target-specific code generators.

Each subpackage renders the same schema model for one target language.
"""

from .typescript import TypeScriptGenerator, create_typescript_generator

__all__ = ["TypeScriptGenerator", "create_typescript_generator"]
