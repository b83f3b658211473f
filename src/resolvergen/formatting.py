import subprocess

from resolvergen import log


class FormattingError(Exception):
    """Raised when the external formatter cannot format a piece of code."""


class FormatterUnavailableError(FormattingError):
    """Raised when the formatter executable cannot be started at all."""


class PrettierFormatter:
    """Format TypeScript code by piping it through the `prettier` executable."""

    def __init__(self, executable: str = "prettier", parser: str = "typescript", timeout: float = 60) -> None:
        self.executable = executable
        self.parser = parser
        self.timeout = timeout

    def __call__(self, code: str) -> str:
        cmd = [self.executable, "--parser", self.parser]
        log.debug(f"Running command: {' '.join(cmd)}")

        try:
            result = subprocess.run(
                cmd,
                input=code,
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except FileNotFoundError as e:
            raise FormatterUnavailableError(f"'{self.executable}' is not installed or not on PATH") from e
        except (OSError, ValueError, subprocess.SubprocessError) as e:
            raise FormattingError(str(e)) from e

        if result.returncode != 0:
            stderr = result.stderr.strip() if result.stderr else ""
            raise FormattingError(stderr or f"{self.executable} failed with return code {result.returncode}")

        return result.stdout
