from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
	from meld.nodes import Node


class MeldError(Exception):
	"""Base class for all compiler errors."""


class MalformedNodeError(MeldError):
	"""A node carries reserved keys that cannot be resolved to a single shape."""

	node: Node
	reason: str

	def __init__(self, node: Node, reason: str) -> None:
		self.node = node
		self.reason = reason
		super().__init__(f"Malformed node <{node.name}>: {reason}")


class FormatError(MeldError):
	"""The external formatter rejected the rendered text.

	Carries the unformatted text so callers can fall back to it.
	"""

	text: str
	diagnostic: str
	dialect: str

	def __init__(self, text: str, diagnostic: str, dialect: str = "html") -> None:
		self.text = text
		self.diagnostic = diagnostic
		self.dialect = dialect
		super().__init__(f"Failed to format {dialect} output: {diagnostic}")


class IRFormatError(MeldError):
	"""A JSON document does not describe a component."""

	path: str

	def __init__(self, message: str, *, path: str = "$") -> None:
		self.path = path
		super().__init__(f"{message} (at {path})")


class UnknownTargetError(MeldError):
	"""No renderer is registered under the requested target name."""

	name: str
	available: list[str]

	def __init__(self, name: str, available: Any = ()) -> None:
		self.name = name
		self.available = sorted(available)
		known = ", ".join(self.available) or "none"
		super().__init__(f"Unknown target '{name}'. Available targets: {known}")


__all__ = [
	"MeldError",
	"MalformedNodeError",
	"FormatError",
	"IRFormatError",
	"UnknownTargetError",
]
