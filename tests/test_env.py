import os

import pytest
from meld.env import DEFAULT_PRETTIER_COMMAND, env


def test_defaults():
	assert env.meld_env == "prod"
	assert env.is_dev is False
	assert env.prettier == DEFAULT_PRETTIER_COMMAND.split()


def test_env_reads_environment(monkeypatch: pytest.MonkeyPatch):
	monkeypatch.setenv("MELD_ENV", "dev")
	assert env.meld_env == "dev"
	assert env.is_dev


def test_invalid_env_rejected(monkeypatch: pytest.MonkeyPatch):
	monkeypatch.setenv("MELD_ENV", "staging")
	with pytest.raises(ValueError, match="MELD_ENV='staging'"):
		_ = env.meld_env
	with pytest.raises(ValueError):
		env.meld_env = "staging"  # type: ignore[assignment]


def test_setters_write_environment(monkeypatch: pytest.MonkeyPatch):
	monkeypatch.setenv("MELD_ENV", "prod")
	env.meld_env = "ci"
	assert os.environ["MELD_ENV"] == "ci"

	monkeypatch.setenv("MELD_PRETTIER", "prettier")
	env.prettier = None
	assert "MELD_PRETTIER" not in os.environ


@pytest.mark.parametrize(
	("value", "expected"),
	[("0", False), ("false", False), ("off", False), ("1", True), ("yes", True)],
)
def test_format_by_default(monkeypatch: pytest.MonkeyPatch, value: str, expected: bool):
	monkeypatch.setenv("MELD_FORMAT", value)
	assert env.format_by_default is expected


def test_format_enabled_when_unset(monkeypatch: pytest.MonkeyPatch):
	monkeypatch.delenv("MELD_FORMAT")
	assert env.format_by_default is True


def test_is_dev_tolerates_unknown_env(monkeypatch: pytest.MonkeyPatch):
	monkeypatch.setenv("MELD_ENV", "development")
	assert env.is_dev is False
