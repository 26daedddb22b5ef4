from __future__ import annotations

import hashlib
import json
import logging
import re
from collections.abc import Callable
from typing import Any, TypeAlias

from meld.nodes import Component, Node
from meld.traverse import traverse_nodes

logger = logging.getLogger(__name__)

StyleCollector: TypeAlias = Callable[[Component], str]

_UPPER = re.compile(r"([A-Z])")


def _kebab(name: str) -> str:
	if name.startswith("--"):
		return name
	return _UPPER.sub(lambda m: "-" + m.group(1).lower(), name)


def _class_id(node: Node, code: str) -> str:
	digest = hashlib.sha1(code.encode("utf-8")).hexdigest()
	tag = re.sub(r"[^a-z0-9-]", "", node.name.lower()) or "node"
	return f"{tag}-{digest[:7]}"


def _parse_style(node: Node) -> dict[str, Any] | None:
	binding = node.bindings.get("css")
	if binding is None or not binding.code.strip():
		return None
	try:
		value = json.loads(binding.code)
	except json.JSONDecodeError:
		logger.debug("Skipping non-JSON css binding on <%s>: %r", node.name, binding.code)
		return None
	if not isinstance(value, dict):
		logger.debug("Skipping css binding on <%s>: not an object", node.name)
		return None
	return value  # pyright: ignore[reportUnknownVariableType]


def _render_rule(selector: str, style: dict[str, Any]) -> str:
	declarations: list[str] = []
	nested: list[str] = []
	for key, value in style.items():
		if isinstance(value, dict):
			# Nested selectors and media queries, e.g. {"@media (...)": {...}}
			if key.startswith("@"):
				inner = _render_rule(selector, value)  # pyright: ignore[reportUnknownArgumentType]
				nested.append(f"{key} {{ {inner} }}")
			else:
				child = key.replace("&", selector) if "&" in key else f"{selector} {key}"
				nested.append(_render_rule(child, value))  # pyright: ignore[reportUnknownArgumentType]
			continue
		if value is None:
			continue
		declarations.append(f"{_kebab(str(key))}: {value};")
	rules: list[str] = []
	if declarations:
		rules.append(f"{selector} {{ {' '.join(declarations)} }}")
	rules.extend(nested)
	return "\n".join(rules)


def collect_css(component: Component) -> str:
	"""Gather the `css` bindings of a component into a stylesheet.

	Does not modify the component. Returns "" when there are no styles.
	"""
	seen: set[str] = set()
	rules: list[str] = []

	def visit(node: Node) -> None:
		style = _parse_style(node)
		if not style:
			return
		rule = _render_rule("." + _class_id(node, node.bindings["css"].code), style)
		if rule and rule not in seen:
			seen.add(rule)
			rules.append(rule)

	traverse_nodes(component, visit)
	return "\n".join(rules)


__all__ = ["StyleCollector", "collect_css"]
