from __future__ import annotations

import logging
import subprocess
from collections.abc import Sequence
from typing import Literal, Protocol, TypeAlias

from meld.env import env
from meld.errors import FormatError

logger = logging.getLogger(__name__)

Dialect: TypeAlias = Literal["html", "css", "babel", "typescript"]


class Formatter(Protocol):
	def format(self, text: str, dialect: Dialect) -> str: ...


class PrettierFormatter:
	"""Pretty-print text with the Prettier CLI.

	The text goes in on stdin and the formatted result comes back on stdout.
	Any failure, including a missing executable, raises `FormatError`.
	"""

	command: list[str] | None
	timeout: float | None

	def __init__(
		self, command: Sequence[str] | None = None, *, timeout: float | None = 30.0
	) -> None:
		self.command = list(command) if command is not None else None
		self.timeout = timeout

	def format(self, text: str, dialect: Dialect) -> str:
		command = self.command if self.command is not None else env.prettier
		args = [*command, "--parser", dialect]
		try:
			proc = subprocess.run(
				args,
				input=text,
				capture_output=True,
				text=True,
				timeout=self.timeout,
				check=False,
			)
		except FileNotFoundError as exc:
			raise FormatError(text, f"formatter not found: {args[0]}", dialect) from exc
		except subprocess.TimeoutExpired as exc:
			raise FormatError(
				text, f"formatter timed out after {self.timeout}s", dialect
			) from exc
		if proc.returncode != 0:
			diagnostic = proc.stderr.strip() or f"exit status {proc.returncode}"
			raise FormatError(text, diagnostic, dialect)
		return proc.stdout


def format_text(text: str, dialect: Dialect, formatter: Formatter | None = None) -> str:
	formatter = formatter or PrettierFormatter()
	try:
		return formatter.format(text, dialect)
	except FormatError as exc:
		logger.error("Formatting %s output failed: %s", dialect, exc.diagnostic)
		raise
	except Exception as exc:
		logger.error("Formatting %s output failed: %s", dialect, exc)
		raise FormatError(text, str(exc) or type(exc).__name__, dialect) from exc


__all__ = ["Dialect", "Formatter", "PrettierFormatter", "format_text"]
