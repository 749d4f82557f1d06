"""
Configuration for the TypeScript to TypeBox pipeline.

Covers the generation options, the formatter collaborator and the
output file handling.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class OutputMode(str, Enum):
    """Output mode for file generation.

    Controls behavior when the output file already exists.
    """

    ERROR_IF_EXISTS = "error"  # Default: raise error if file exists
    FORCE = "force"  # Overwrite the existing file


@dataclass
class OutputConfig:
    """Configuration for output file handling.

    Attributes:
        mode: How to handle existing output files
        validate_before_write: Whether to re-parse generated code before writing
        atomic_write: Whether to use atomic file writes
    """

    mode: OutputMode = OutputMode.ERROR_IF_EXISTS
    validate_before_write: bool = True
    atomic_write: bool = True


@dataclass
class FormatterConfig:
    """Configuration for the prettier formatter."""

    # Whether formatting is enabled
    enabled: bool = False

    # Executable used to run prettier (e.g. "prettier" or "npx prettier")
    command: str = "prettier"

    # Line width passed as --print-width
    print_width: int = 80

    # Use single quotes instead of double quotes
    single_quote: bool = False

    # Print semicolons at the ends of statements
    semi: bool = True


@dataclass
class CodeGeneratorConfig:
    """Configuration options for code generation."""

    # Add generation comment at top of file
    add_generation_comment: bool = True

    # Drop the `type X = Static<typeof X>` lines and only emit values
    skip_type_creation: bool = False

    # Templates applied to declared names, e.g. "{name}Type" / "{name}Schema"
    type_name_template: str = "{name}"
    value_name_template: str = "{name}"

    # Module the TypeBox vocabulary is imported from
    typebox_module: str = "@sinclair/typebox"

    # Raise GenerationError instead of degrading when diagnostics are recorded
    strict: bool = False

    # Formatter configuration
    formatter: FormatterConfig = field(default_factory=FormatterConfig)

    # Output configuration
    output: OutputConfig = field(default_factory=OutputConfig)

    @staticmethod
    def from_dict(d: dict) -> CodeGeneratorConfig:
        """Create a config from a dictionary."""
        config = CodeGeneratorConfig()
        for k, v in d.items():
            if k == "formatter" and isinstance(v, dict):
                config.formatter = FormatterConfig(**v)
            elif k == "output" and isinstance(v, dict):
                mode = v.get("mode", OutputMode.ERROR_IF_EXISTS)
                if isinstance(mode, str):
                    mode = OutputMode(mode)
                config.output = OutputConfig(
                    mode=mode,
                    validate_before_write=v.get("validate_before_write", True),
                    atomic_write=v.get("atomic_write", True),
                )
            elif hasattr(config, k):
                setattr(config, k, v)
        return config

    def to_dict(self) -> dict:
        """Convert config to a dictionary."""
        return {
            "add_generation_comment": self.add_generation_comment,
            "skip_type_creation": self.skip_type_creation,
            "type_name_template": self.type_name_template,
            "value_name_template": self.value_name_template,
            "typebox_module": self.typebox_module,
            "strict": self.strict,
            "formatter": {
                "enabled": self.formatter.enabled,
                "command": self.formatter.command,
                "print_width": self.formatter.print_width,
                "single_quote": self.formatter.single_quote,
                "semi": self.formatter.semi,
            },
            "output": {
                "mode": self.output.mode.value,
                "validate_before_write": self.output.validate_before_write,
                "atomic_write": self.output.atomic_write,
            },
        }
