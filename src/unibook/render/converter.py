"""
External converter invocation.

The converter turns one Markdown file into one standalone HTML file. It is
called with pandoc-style flags:

    <converter> -s [-H header]... [-B before]... [-A after]... -o OUTPUT INPUT
"""

import shutil
import subprocess
from pathlib import Path
from typing import Protocol

from ..logger import get_logger
from ..utils.exceptions import ConverterNotFoundError, RenderError


DEFAULT_CONVERTER = "unidoc"

logger = get_logger(__name__)


class ConverterCommand:
    """Builder for a single converter invocation."""

    def __init__(self, executable: str = DEFAULT_CONVERTER, timeout: float | None = None):
        self.executable = executable
        self.timeout = timeout
        self.is_standalone = False
        self.includes_header: list[Path] = []
        self.includes_before: list[Path] = []
        self.includes_after: list[Path] = []
        self.output_path: Path | None = None

    def standalone(self) -> "ConverterCommand":
        self.is_standalone = True
        return self

    def include_in_header(self, *paths: Path) -> "ConverterCommand":
        self.includes_header.extend(paths)
        return self

    def include_before_body(self, *paths: Path) -> "ConverterCommand":
        self.includes_before.extend(paths)
        return self

    def include_after_body(self, *paths: Path) -> "ConverterCommand":
        self.includes_after.extend(paths)
        return self

    def output(self, path: Path) -> "ConverterCommand":
        self.output_path = path
        return self

    def args(self, input_path: Path) -> list[str]:
        """Command line for converting ``input_path``."""
        args = [self.executable]
        if self.is_standalone:
            args.append("-s")
        for header in self.includes_header:
            args += ["-H", str(header)]
        for before in self.includes_before:
            args += ["-B", str(before)]
        for after in self.includes_after:
            args += ["-A", str(after)]
        if self.output_path is not None:
            args += ["-o", str(self.output_path)]
        args.append(str(input_path))
        return args

    def execute(self, input_path: Path) -> None:
        """
        Run the converter on ``input_path``.

        Raises:
            ConverterNotFoundError: If the executable cannot be started
            RenderError: If the converter exits non-zero or times out
        """
        args = self.args(input_path)
        logger.debug(f"Running: {' '.join(args)}")

        try:
            result = subprocess.run(
                args,
                capture_output=True,
                text=True,
                timeout=self.timeout,
                check=False,
            )
        except FileNotFoundError as e:
            raise ConverterNotFoundError(
                f"Failed to execute {self.executable}. Is it installed and in PATH?"
            ) from e
        except subprocess.TimeoutExpired as e:
            raise RenderError(
                f"{self.executable} did not finish within {self.timeout} seconds"
            ) from e

        if result.returncode != 0:
            logger.error(f"--- {self.executable} failed ---")
            logger.error(f"Exit code: {result.returncode}")
            if result.stderr:
                logger.error(f"stderr:\n{result.stderr}")
            if result.stdout:
                logger.error(f"stdout:\n{result.stdout}")
            raise RenderError(
                f"{self.executable} failed with exit code {result.returncode}",
                returncode=result.returncode,
                stdout=result.stdout,
                stderr=result.stderr,
            )


class Converter(Protocol):
    """The render capability used by the build orchestrator."""

    def __call__(
        self,
        source: Path,
        output: Path,
        *,
        header: list[Path],
        before_body: list[Path],
        after_body: list[Path],
    ) -> None: ...


class SubprocessConverter:
    """Renders pages by running the external converter executable."""

    def __init__(self, executable: str = DEFAULT_CONVERTER, timeout: float | None = None):
        self.executable = executable
        self.timeout = timeout

    def __call__(
        self,
        source: Path,
        output: Path,
        *,
        header: list[Path],
        before_body: list[Path],
        after_body: list[Path],
    ) -> None:
        (
            ConverterCommand(self.executable, timeout=self.timeout)
            .standalone()
            .include_in_header(*header)
            .include_before_body(*before_body)
            .include_after_body(*after_body)
            .output(output)
            .execute(source)
        )


def check_converter_available(executable: str = DEFAULT_CONVERTER) -> None:
    """
    Make sure the converter can be found in PATH.

    Raises:
        ConverterNotFoundError: If the executable is missing
    """
    if shutil.which(executable) is None:
        raise ConverterNotFoundError(f"{executable} not found. Please install {executable} first.")
