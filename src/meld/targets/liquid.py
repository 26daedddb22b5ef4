"""Shopify Liquid renderer.

Liquid has no expression evaluator: only property access and a handful of
tags. Anything richer than a dotted path would either render wrong or get
the template rejected when it is uploaded, so bindings that fail
`is_valid_liquid_binding` are dropped:

- attribute bindings lose just that attribute
- `For` and `Show` nodes with an invalid bound are omitted entirely

Event handler bindings never reach the output; they mean nothing in a
server-rendered template.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from typing import Any, ClassVar, cast, override

from meld.bindings import BindingGrammar, strip_prefixes
from meld.env import env
from meld.formatting import Dialect
from meld.nodes import Component, Node, NodeKind
from meld.plugins import CodeRewriter, CodeType
from meld.targets.base import Renderer, RenderOptions, resolve_options
from meld.targets.templates.liquid import (
	FOR_TEMPLATE,
	IF_TEMPLATE,
	SPREAD_TEMPLATE,
	STYLE_TEMPLATE,
)

logger = logging.getLogger(__name__)

LIQUID_GRAMMAR = BindingGrammar(
	# `context.shopify.liquid.*(...)` marks code already written as Liquid
	escape_hatch=re.compile(r"(context|ctx)\s*(\.shopify\s*)?\.liquid\s*\."),
	simple_path=re.compile(r"[a-z0-9_.\s]+", re.IGNORECASE),
)

SELF_CLOSING_TAGS: frozenset[str] = frozenset(
	{
		"area",
		"base",
		"br",
		"col",
		"embed",
		"hr",
		"img",
		"input",
		"link",
		"meta",
		"param",
		"source",
		"track",
		"wbr",
	}
)

EVENT_PREFIX = "on"

# Bindings consumed elsewhere, never written as attributes
SKIPPED_BINDINGS: frozenset[str] = frozenset({"_spread", "ref", "css"})


def is_valid_liquid_binding(code: str | None = "") -> bool:
	"""Whether `code` would produce valid Liquid."""
	return LIQUID_GRAMMAR.is_valid(code)


def is_event_binding(name: str) -> bool:
	return name.startswith(EVENT_PREFIX)


def _interpolate(code: str) -> str:
	return "{{" + code + "}}"


def _strip(code: str, key: str) -> str:
	return strip_prefixes(code)


def _keep(code: str, key: str) -> str:
	return code


def liquid_code_processor(code_type: CodeType, component: Component) -> CodeRewriter:
	"""Drop the `state.`/`props.` namespaces Liquid has no notion of."""
	if code_type in ("bindings", "hooks-deps", "state"):
		return _strip
	return _keep


class LiquidRenderer(Renderer):
	name: ClassVar[str] = "liquid"
	dialect: ClassVar[Dialect] = "html"
	grammar: ClassVar[BindingGrammar] = LIQUID_GRAMMAR

	@override
	def process_code(self, code_type: CodeType, component: Component) -> CodeRewriter:
		return liquid_code_processor(code_type, component)

	@override
	def lower_text(self, node: Node) -> str:
		return node.properties["_text"]

	@override
	def lower_dynamic_text(self, node: Node) -> str:
		return _interpolate(strip_prefixes(node.bindings["_text"].code))

	def _loop_bounds(self, node: Node) -> tuple[str, str] | None:
		each = node.bindings.get("_forEach")
		name = node.bindings.get("_forName")
		collection = strip_prefixes(each.code) if each is not None else None
		variable = name.code if name is not None else None
		if not (self.is_valid_binding(collection) and self.is_valid_binding(variable)):
			return None
		return cast(str, variable), cast(str, collection)

	def _condition(self, node: Node) -> str | None:
		when = node.bindings.get("_when")
		condition = strip_prefixes(when.code) if when is not None else None
		if not self.is_valid_binding(condition):
			return None
		return condition

	@override
	def lowers_children(self, node: Node, kind: NodeKind) -> bool:
		if kind == "for":
			return self._loop_bounds(node) is not None
		if kind == "show":
			return self._condition(node) is not None
		if node.name in SELF_CLOSING_TAGS:
			if node.children and env.is_dev:
				logger.warning(
					"<%s> is self-closing; ignoring %d child node(s)",
					node.name,
					len(node.children),
				)
			return False
		return True

	@override
	def lower_for(self, node: Node, body: str) -> str:
		bounds = self._loop_bounds(node)
		if bounds is None:
			logger.debug("Dropping <For>: invalid loop binding %r", dict(node.bindings))
			return ""
		name, collection = bounds
		return FOR_TEMPLATE.render(name=name, collection=collection, body=body)

	@override
	def lower_show(self, node: Node, body: str) -> str:
		condition = self._condition(node)
		if condition is None:
			logger.debug("Dropping <Show>: invalid condition %r", node.bindings.get("_when"))
			return ""
		return IF_TEMPLATE.render(condition=condition, body=body)

	@override
	def lower_element(self, node: Node, body: str) -> str:
		parts = [f"<{node.name}"]

		spread = node.bindings.get("_spread")
		if spread is not None:
			code = strip_prefixes(spread.code)
			if self.is_valid_binding(code):
				parts.append(SPREAD_TEMPLATE.render(expression=code))
			else:
				logger.debug("Dropping spread on <%s>: %r", node.name, code)

		for key, value in node.properties.items():
			parts.append(f'{key}="{value}"')

		for key, binding in node.bindings.items():
			if key in SKIPPED_BINDINGS or is_event_binding(key):
				continue
			code = strip_prefixes(binding.code)
			if self.is_valid_binding(code):
				parts.append(f'{key}="{_interpolate(code)}"')
			else:
				logger.debug("Dropping binding %s on <%s>: %r", key, node.name, code)

		opening = " ".join(parts)
		if node.name in SELF_CLOSING_TAGS:
			return opening + " />"
		return f"{opening}>{body}</{node.name}>"

	@override
	def wrap_styles(self, css: str) -> str:
		return STYLE_TEMPLATE.render(css=css)


def component_to_liquid(
	component: Component,
	options: RenderOptions | Mapping[str, Any] | None = None,
	**kwargs: Any,
) -> str:
	"""Render `component` as a Liquid template.

	Keyword arguments override `options`; unknown ones are ignored.
	"""
	return LiquidRenderer().render(component, resolve_options(options, kwargs))


__all__ = [
	"LIQUID_GRAMMAR",
	"SELF_CLOSING_TAGS",
	"SKIPPED_BINDINGS",
	"LiquidRenderer",
	"component_to_liquid",
	"is_event_binding",
	"is_valid_liquid_binding",
	"liquid_code_processor",
]
