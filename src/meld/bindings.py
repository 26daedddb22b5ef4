from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass

NAMESPACE_PREFIXES: tuple[str, ...] = ("state.", "props.")


@dataclass(slots=True, frozen=True)
class BindingGrammar:
	"""Expression subset a target can safely embed.

	A fragment is accepted if it mentions the target's escape hatch anywhere
	(code already written in the target's native syntax) or if the whole
	fragment matches `simple_path`.
	"""

	escape_hatch: re.Pattern[str]
	simple_path: re.Pattern[str]

	def is_valid(self, code: str | None) -> bool:
		if not code:
			return False
		if self.escape_hatch.search(code):
			return True
		return self.simple_path.fullmatch(code) is not None


def strip_prefixes(code: str, prefixes: Sequence[str] = NAMESPACE_PREFIXES) -> str:
	"""Remove every occurrence of `prefixes` from `code`.

	Plain substring removal, repeated until nothing changes.
	"""
	previous = None
	while previous != code:
		previous = code
		for prefix in prefixes:
			code = code.replace(prefix, "")
	return code


__all__ = ["BindingGrammar", "NAMESPACE_PREFIXES", "strip_prefixes"]
