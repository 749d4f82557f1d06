"""
Pipeline generator - orchestrates all phases of code generation.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from ..cli_utils import reconstruct_command_line
from ..errors import GenerationError
from ..logging import get_logger
from .analyzer import Diagnostic, GenerationContext, TypeBoxVisitor
from .backends import TypeBoxBackend
from .config import CodeGeneratorConfig, OutputMode
from .formatters import PrettierFormatter
from .output import AtomicWriter
from .postprocess import postprocess
from .source_ast import TypeScriptParser

logger = get_logger("generator")


@dataclass
class GenerationResult:
    """Generated code together with the node-local problems met on the way."""

    code: str = ""
    diagnostics: list[Diagnostic] = field(default_factory=list)


def generate_result(source: str, config: CodeGeneratorConfig | None = None) -> GenerationResult:
    """
    Convert TypeScript declarations to TypeBox code.

    Every call gets its own traversal context, so calls are independent
    and safe to run concurrently.

    Args:
        source: Complete text of one TypeScript file
        config: Optional configuration (only the TypeBox module name is used)

    Returns:
        GenerationResult with the import header and one block per declaration

    Raises:
        SourceParseError: If the source cannot be parsed
    """
    config = config or CodeGeneratorConfig()

    # Phase 1: Parse
    source_file = TypeScriptParser().parse(source)
    logger.debug("Parsed %d top-level statements", source_file.root.named_child_count)

    # Phase 2: Build IR
    context = GenerationContext()
    module = TypeBoxVisitor(context).visit_program(source_file.root)
    logger.debug("Built %d declarations, %d diagnostics", len(module.declarations), len(context.diagnostics))

    # Phase 3: Render
    code = TypeBoxBackend(config).generate(module)
    return GenerationResult(code=code, diagnostics=list(context.diagnostics))


def generate(source: str) -> str:
    """Convert TypeScript declarations to TypeBox code, returning only the code."""
    return generate_result(source).code


class PipelineGenerator:
    """
    Full ts2typebox pipeline.

    Phases:
    1. Parse TypeScript into a tree-sitter tree
    2. Build the TypeBox IR
    3. Render TypeBox code
    4. Lexical post-processing (type skipping, name templates)
    5. Generation comment
    6. Optional prettier formatting
    """

    def __init__(self, config: CodeGeneratorConfig | None = None):
        """
        Initialize the pipeline generator.

        Args:
            config: Code generation configuration
        """
        self.config = config or CodeGeneratorConfig()
        self.backend = TypeBoxBackend(self.config)
        self.formatter = PrettierFormatter(self.config.formatter.command)

    def generate_result(self, source: str) -> GenerationResult:
        """
        Run the full pipeline.

        Args:
            source: Complete text of one TypeScript file

        Returns:
            GenerationResult with the final code

        Raises:
            SourceParseError: If the source cannot be parsed
            GenerationError: In strict mode, if any diagnostic was recorded
            FormatterError: If prettier rejects the generated code
        """
        result = generate_result(source, self.config)
        if self.config.strict and result.diagnostics:
            raise GenerationError(result.diagnostics)

        code = postprocess(result.code, self.config)
        code = self.backend.render_prefix(self._generate_command_comment()) + code

        if self.config.formatter.enabled:
            code = self.formatter.format(code, self.config.formatter)

        return GenerationResult(code=code, diagnostics=result.diagnostics)

    def generate(self, source: str) -> str:
        """Run the full pipeline and return the code."""
        return self.generate_result(source).code

    def write(self, code: str, path: Path) -> None:
        """
        Write generated code according to the output configuration.

        Args:
            code: Generated code
            path: Target file path

        Raises:
            FileExistsError: If the file exists and mode is "error"
            CodeWriteError: If validation fails
        """
        output = self.config.output
        if not output.atomic_write:
            if output.mode == OutputMode.ERROR_IF_EXISTS and path.exists():
                raise FileExistsError(f"Output file already exists: {path}. Use force mode to overwrite.")
            path.write_text(code, encoding="utf-8")
            return

        writer = AtomicWriter()
        if output.mode == OutputMode.FORCE:
            writer.write(path, code, validate=output.validate_before_write)
        else:
            writer.write_if_not_exists(path, code, validate=output.validate_before_write)
        logger.info("Wrote %s", path)

    def _generate_command_comment(self) -> str:
        """Generate a simplified command line comment for the generated file"""
        if not self.config.add_generation_comment:
            return ""

        from .. import __version__

        try:
            from ..ts_to_typebox import ts_to_typebox as click_command  # noqa

            command_line = reconstruct_command_line(click_command)
        except (ImportError, AttributeError):
            command_line = "ts2typebox"

        return f"// Generated by ts2typebox v{__version__} : {command_line}"
