"""
Pipeline - tree-sitter based TypeScript to TypeBox generator.

This module provides a multi-phase architecture for generating TypeBox
schemas from TypeScript declarations:

1. Phase 1 (Parser): Parse TypeScript into a tree-sitter tree
2. Phase 2 (Analyzer): Visit declarations and build the TypeBox IR
3. Phase 3 (Backend): Render the IR to TypeBox code
4. Phase 4 (Postprocess): Optional type skipping and name templates
5. Phase 5 (Formatter): Optional post-processing with prettier
6. Phase 6 (Output): Atomic, validated write to disk
"""

from __future__ import annotations

from .config import CodeGeneratorConfig, FormatterConfig, OutputConfig, OutputMode
from .generator import GenerationResult, PipelineGenerator, generate, generate_result
from .output import AtomicWriter

__all__ = [
    "PipelineGenerator",
    "GenerationResult",
    "generate",
    "generate_result",
    "CodeGeneratorConfig",
    "FormatterConfig",
    "OutputConfig",
    "OutputMode",
    "AtomicWriter",
]
