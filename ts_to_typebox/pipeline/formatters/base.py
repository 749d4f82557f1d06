"""
Formatters run on the generated TypeScript as external programs.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from ...logging import get_logger
from ..config import FormatterConfig

logger = get_logger("formatter")


class Formatter(ABC):
    """An external code formatter, skipped when it is not installed."""

    # Program name used in log messages
    name: str = ""

    def format(self, code: str, config: FormatterConfig) -> str:
        """
        Format generated code.

        Args:
            code: TypeScript code produced by the pipeline
            config: Formatter configuration

        Returns:
            Formatted code, or the input unchanged when the formatter is missing

        Raises:
            FormatterError: If the formatter rejects the code
        """
        if not self.is_available():
            logger.warning("%s not found, leaving output unformatted", self.name)
            return code
        return self.run(code, config)

    @abstractmethod
    def run(self, code: str, config: FormatterConfig) -> str:
        """Invoke the formatter on code it is known to be able to process."""

    @abstractmethod
    def is_available(self) -> bool:
        """Check whether the formatter executable can be started."""
