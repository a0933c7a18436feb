"""
Generation pipeline.

Runs one generation: read and extract the schema, prepare the output
directory, plan every artifact against the regeneration rules, then back
up and write in a fixed order. Any failure aborts the run; files written
before the failure are left in place.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from ..logging_config import get_logger
from .core.config import GeneratorConfig
from .core.errors import AlreadyExistsError, UsageError
from .core.extractor import extract_file
from .core.generator import CodeGenerator
from .core.output import OutputTree
from .core.regeneration import Action, PlannedWrite, RegenerationManager
from .core.schema import ArtifactKind, GeneratedArtifact, SchemaModel
from .registry import get_generator

logger = get_logger(__name__)


@dataclass
class GenerationReport:
    """What a run did (or, for a dry run, would do)."""

    output_dir: Path
    model: SchemaModel
    planned: List[PlannedWrite] = field(default_factory=list)
    backups: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    dry_run: bool = False

    @property
    def paths(self) -> List[str]:
        return [p.artifact.path for p in self.planned]

    def action_for(self, path: str) -> Optional[Action]:
        for planned in self.planned:
            if planned.artifact.path == path:
                return planned.action
        return None


class GenerationPipeline:
    """Drives one generation run from a GeneratorConfig."""

    def __init__(
        self, config: GeneratorConfig, generator: Optional[CodeGenerator] = None
    ):
        self.config = config
        self._generator = generator
        self.step = "validating options"

    def _set_step(self, step: str):
        self.step = step
        logger.debug("Step: %s", step)

    @property
    def generator(self) -> CodeGenerator:
        if self._generator is None:
            self._generator = get_generator(self.config.target, self.config)
        return self._generator

    def run(self) -> GenerationReport:
        """
        Execute the run.

        Returns:
            GenerationReport describing every artifact and its action

        Raises:
            UsageError: If the schema path is missing, the schema is not UTF-8,
                or the target is unknown
            ParseError: If the schema yields no usable model
            AlreadyExistsError: If output exists and force is not set
            OSError: On any read, write, or copy failure
        """
        config = self.config

        self._set_step("validating options")
        if not config.schema_path:
            raise UsageError("--proto is required")
        generator = self.generator

        self._set_step("reading schema")
        schema_path = Path(config.schema_path)
        # Bytes decoded as-is so the provenance copy keeps its line endings
        try:
            schema_text = schema_path.read_bytes().decode("utf-8")
        except UnicodeDecodeError as e:
            raise UsageError(f"{schema_path} is not UTF-8 text: {e}") from e

        self._set_step("parsing schema")
        model = extract_file(schema_path, schema_text)
        logger.info(
            "Parsed %s: package %s, %d service(s), %d rpc(s)",
            schema_path.name,
            model.package_name,
            len(model.services),
            model.rpc_count,
        )

        report = GenerationReport(
            output_dir=Path(config.output_dir), model=model, dry_run=config.dry_run
        )
        report.warnings.extend(generator.validate_model(model))

        self._set_step("preparing output directory")
        tree = OutputTree(config.output_dir)
        self._prepare_root(tree)

        self._set_step("generating artifacts")
        artifacts = generator.generate(model, schema_path)
        artifacts.append(
            GeneratedArtifact(schema_path.name, schema_text, ArtifactKind.SCHEMA_COPY)
        )

        self._set_step("checking existing files")
        manager = RegenerationManager(tree, force=config.force)
        report.planned = manager.plan(artifacts)

        if config.dry_run:
            logger.info("Dry run: %d file(s) planned, nothing written", len(report.planned))
            return report

        for planned in report.planned:
            self._set_step(f"writing {planned.artifact.path}")
            backup = manager.backup(planned)
            if backup:
                report.backups.append(backup)
            tree.write_text(planned.artifact.path, planned.artifact.content)
            logger.info("%s %s", planned.action.value, tree.path(planned.artifact.path))

        self._set_step("done")
        return report

    def _prepare_root(self, tree: OutputTree):
        if tree.root_exists():
            if not self.config.force:
                raise AlreadyExistsError([str(tree.root)])
            logger.info("Regenerating into existing directory %s", tree.root)
        elif not self.config.dry_run:
            tree.create_root()


def generate_project(
    config: GeneratorConfig, generator: Optional[CodeGenerator] = None
) -> GenerationReport:
    """Convenience wrapper: run a GenerationPipeline for ``config``."""
    return GenerationPipeline(config, generator).run()
