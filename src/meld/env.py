"""Process-wide configuration backed by environment variables.

Attributes read and write ``os.environ`` directly, so subprocesses and
tests (via ``monkeypatch.setenv``) observe the same values.
"""

from __future__ import annotations

import os
import shlex
from typing import Literal, TypeAlias, cast

MeldEnv: TypeAlias = Literal["dev", "ci", "prod"]

ENV_MELD_ENV = "MELD_ENV"
ENV_MELD_PRETTIER = "MELD_PRETTIER"
ENV_MELD_FORMAT = "MELD_FORMAT"

DEFAULT_PRETTIER_COMMAND = "npx --yes prettier"
_VALID_ENVS: tuple[MeldEnv, ...] = ("dev", "ci", "prod")
_FALSY = {"0", "false", "False", "no", "off"}


class Env:
	__slots__: tuple[str, ...] = ()

	@property
	def meld_env(self) -> MeldEnv:
		value = os.environ.get(ENV_MELD_ENV, "prod")
		if value not in _VALID_ENVS:
			raise ValueError(
				f"Invalid {ENV_MELD_ENV}={value!r}, expected one of {', '.join(_VALID_ENVS)}"
			)
		return cast(MeldEnv, value)

	@meld_env.setter
	def meld_env(self, value: MeldEnv) -> None:
		if value not in _VALID_ENVS:
			raise ValueError(f"Invalid environment {value!r}")
		os.environ[ENV_MELD_ENV] = value

	@property
	def prettier(self) -> list[str]:
		"""Command line used to invoke Prettier."""
		raw = os.environ.get(ENV_MELD_PRETTIER) or DEFAULT_PRETTIER_COMMAND
		return shlex.split(raw)

	@prettier.setter
	def prettier(self, value: str | None) -> None:
		if value is None:
			os.environ.pop(ENV_MELD_PRETTIER, None)
		else:
			os.environ[ENV_MELD_PRETTIER] = value

	@property
	def format_by_default(self) -> bool:
		value = os.environ.get(ENV_MELD_FORMAT)
		if value is None:
			return True
		return value not in _FALSY

	@format_by_default.setter
	def format_by_default(self, value: bool) -> None:
		os.environ[ENV_MELD_FORMAT] = "1" if value else "0"

	@property
	def is_dev(self) -> bool:
		"""True only for `MELD_ENV=dev`. Unrecognized values read as not dev."""
		return os.environ.get(ENV_MELD_ENV) == "dev"


env = Env()

__all__ = [
	"Env",
	"MeldEnv",
	"env",
	"ENV_MELD_ENV",
	"ENV_MELD_PRETTIER",
	"ENV_MELD_FORMAT",
	"DEFAULT_PRETTIER_COMMAND",
]
