import pytest
from meld.env import ENV_MELD_ENV, ENV_MELD_FORMAT, ENV_MELD_PRETTIER
from meld.formatting import Dialect


class RecordingFormatter:
	"""Formatter stand-in that records calls and tags its output."""

	def __init__(self) -> None:
		self.calls: list[tuple[str, Dialect]] = []

	def format(self, text: str, dialect: Dialect) -> str:
		self.calls.append((text, dialect))
		return f"<!-- formatted -->{text}"


@pytest.fixture(autouse=True)
def _meld_env(monkeypatch: pytest.MonkeyPatch):  # pyright: ignore[reportUnusedFunction]
	monkeypatch.delenv(ENV_MELD_ENV, raising=False)
	monkeypatch.delenv(ENV_MELD_PRETTIER, raising=False)
	# Tests never shell out to Prettier unless they opt in
	monkeypatch.setenv(ENV_MELD_FORMAT, "0")
	yield


@pytest.fixture
def formatter() -> RecordingFormatter:
	return RecordingFormatter()
