"""
Prettier formatter for generated TypeScript code.
"""

from __future__ import annotations

import shlex
import subprocess

from ...errors import FormatterError
from ...logging import get_logger
from ..config import FormatterConfig
from .base import Formatter

logger = get_logger("formatter")


class PrettierFormatter(Formatter):
    """Formatter running prettier as a subprocess."""

    def __init__(self, command: str = "prettier"):
        self.command = shlex.split(command)
        self.name = command
        self._available = None

    def is_available(self) -> bool:
        """Check if prettier is installed."""
        if self._available is None:
            try:
                result = subprocess.run(
                    [*self.command, "--version"],
                    capture_output=True,
                    text=True,
                    timeout=30,
                )
                self._available = result.returncode == 0
            except (subprocess.SubprocessError, FileNotFoundError):
                self._available = False
        return self._available

    def build_command(self, config: FormatterConfig) -> list[str]:
        """Build the prettier command line for the given options."""
        cmd = [*self.command, "--stdin-filepath", "generated.ts"]
        if config.print_width:
            cmd.extend(["--print-width", str(config.print_width)])
        if config.single_quote:
            cmd.append("--single-quote")
        if not config.semi:
            cmd.append("--no-semi")
        return cmd

    def run(self, code: str, config: FormatterConfig) -> str:
        """
        Pipe TypeScript code through prettier.

        Raises:
            FormatterError: If prettier rejects the code or times out
        """
        cmd = self.build_command(config)
        logger.debug("Running %s", " ".join(cmd))
        try:
            result = subprocess.run(
                cmd,
                input=code,
                capture_output=True,
                text=True,
                timeout=60,
            )
        except subprocess.SubprocessError as e:
            raise FormatterError(f"prettier failed: {e}") from e

        if result.returncode != 0:
            raise FormatterError(f"prettier exited with code {result.returncode}: {result.stderr.strip()}")
        return result.stdout


def format_with_prettier(
    code: str,
    print_width: int = 80,
    single_quote: bool = False,
    semi: bool = True,
) -> str:
    """
    Convenience function to format TypeScript code with prettier.

    Args:
        code: TypeScript source code
        print_width: Maximum line width
        single_quote: Use single quotes
        semi: Print semicolons

    Returns:
        Formatted code
    """
    formatter = PrettierFormatter()
    config = FormatterConfig(
        enabled=True,
        print_width=print_width,
        single_quote=single_quote,
        semi=semi,
    )
    return formatter.format(code, config)
