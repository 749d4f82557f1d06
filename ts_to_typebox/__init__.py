"""TypeScript to TypeBox Generator

A Python package for generating TypeBox schemas from TypeScript type
aliases, interfaces, enums and namespaces, with documentation-tag
options, recursive types and indexed access types.
"""

__version__ = "1.0.0"

from .errors import (
    CodeWriteError,
    FormatterError,
    GenerationError,
    SourceParseError,
    Ts2TypeboxError,
)
from .pipeline import (
    AtomicWriter,
    CodeGeneratorConfig,
    FormatterConfig,
    GenerationResult,
    OutputConfig,
    OutputMode,
    PipelineGenerator,
    generate,
    generate_result,
)

__all__ = [
    "generate",
    "generate_result",
    "GenerationResult",
    "PipelineGenerator",
    "CodeGeneratorConfig",
    "FormatterConfig",
    "OutputConfig",
    "OutputMode",
    "AtomicWriter",
    "Ts2TypeboxError",
    "SourceParseError",
    "GenerationError",
    "FormatterError",
    "CodeWriteError",
]
