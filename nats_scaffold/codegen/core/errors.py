"""
Error taxonomy for service scaffolding.

Every failure the generator reports on purpose derives from ScaffoldError.
Filesystem failures are left as OSError and propagate unchanged.
"""

from typing import Iterable, List, Optional


class ScaffoldError(Exception):
    """Base exception for all scaffolding errors."""

    pass


class UsageError(ScaffoldError):
    """Raised when a required input is missing or invalid."""

    pass


class ConfigError(ScaffoldError):
    """Exception raised for configuration-related errors."""

    pass


class TemplateError(ScaffoldError):
    """Exception raised for template-related errors."""

    pass


class ParseError(ScaffoldError):
    """Raised when the schema text does not yield a usable model."""

    def __init__(
        self, message: str, line: Optional[int] = None, source: Optional[str] = None
    ):
        self.message = message
        self.line = line
        self.source = source
        super().__init__(self._format())

    def _format(self) -> str:
        location = self.source or "<schema>"
        if self.line is not None:
            location = f"{location}:{self.line}"
        return f"{location}: {self.message}"

    def with_source(self, source: str) -> "ParseError":
        """Return a copy of this error that names the schema file."""
        return ParseError(self.message, line=self.line, source=source)


class ConflictError(ScaffoldError):
    """Raised when generation would clobber existing output without force."""

    pass


class AlreadyExistsError(ConflictError):
    """Raised when one or more target paths already exist."""

    def __init__(self, paths: Iterable[str], hint: str = "--force to overwrite"):
        self.paths: List[str] = list(paths)
        joined = ", ".join(self.paths)
        super().__init__(f"{joined} exists {hint}")
