"""Renderer contract shared by every target.

A renderer turns a component into target source text:

1. deep-copy the component (the caller's tree is never touched)
2. run the configured plugins on the copy
3. lower each root node (children before parents), joined by newlines
4. append collected styles, if any
5. optionally pass the text through the external formatter

Lowering dispatches on `node_kind`, so every node lowers through exactly
one of `lower_text`, `lower_dynamic_text`, `lower_for`, `lower_show` or
`lower_element`. Container kinds receive their already-lowered children as
`body`. Targets implement those five plus their binding grammar.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field, fields
from typing import Any, ClassVar

from meld.bindings import BindingGrammar
from meld.css import StyleCollector, collect_css
from meld.env import env
from meld.formatting import Dialect, Formatter, format_text
from meld.nodes import Component, Node, NodeKind, clone_component, node_kind
from meld.plugins import (
	CodeRewriter,
	CodeType,
	Plugin,
	run_post_json_plugins,
	run_pre_json_plugins,
)

logger = logging.getLogger(__name__)

# Option names accepted for compatibility with other generators.
_OPTION_ALIASES = {"prettier": "format"}


@dataclass(slots=True)
class RenderOptions:
	format: bool = field(default_factory=lambda: env.format_by_default)
	"""Run the output through the external formatter."""

	formatter: Formatter | None = None
	"""Formatter to use. Defaults to Prettier."""

	collect_styles: StyleCollector = collect_css
	"""Style collector called once per render on the copied component."""

	plugins: Sequence[Plugin] = ()
	"""Passes run on the copied component before lowering."""

	@classmethod
	def from_mapping(cls, options: Mapping[str, Any] | None = None) -> RenderOptions:
		"""Build options from loose keyword arguments, ignoring unknown keys."""
		known = {f.name for f in fields(cls)}
		kwargs: dict[str, Any] = {}
		for key, value in (options or {}).items():
			key = _OPTION_ALIASES.get(key, key)
			if key not in known:
				logger.debug("Ignoring unknown render option %r", key)
				continue
			if value is None and key != "formatter":
				continue
			kwargs[key] = value
		return cls(**kwargs)


def resolve_options(
	options: RenderOptions | Mapping[str, Any] | None, extra: Mapping[str, Any]
) -> RenderOptions:
	if isinstance(options, RenderOptions):
		if not extra:
			return options
		merged = {f.name: getattr(options, f.name) for f in fields(RenderOptions)}
		merged.update(extra)
		return RenderOptions.from_mapping(merged)
	return RenderOptions.from_mapping({**(options or {}), **extra})


class Renderer(ABC):
	name: ClassVar[str]
	dialect: ClassVar[Dialect] = "html"
	grammar: ClassVar[BindingGrammar]

	def render(
		self, component: Component, options: RenderOptions | None = None
	) -> str:
		options = options or RenderOptions()
		tree = clone_component(component)
		run_pre_json_plugins(tree, options.plugins)
		run_post_json_plugins(tree, options.plugins)

		text = "\n".join(self.lower(child) for child in tree.children)

		css = options.collect_styles(tree)
		if css.strip():
			text += self.wrap_styles(css)

		if options.format:
			text = format_text(text, self.dialect, options.formatter)
		return text

	def is_valid_binding(self, code: str | None) -> bool:
		return self.grammar.is_valid(code)

	def lower(self, node: Node) -> str:
		"""Lower `node` and its subtree.

		Children are lowered before their parent and handed to it as `body`,
		joined by newlines. The walk keeps its own stack, so deeply nested
		trees do not hit the interpreter's recursion limit.
		"""
		output: list[str] = []
		# (node, kind, index into `output` where its children start)
		stack: list[tuple[Node, NodeKind | None, int]] = [(node, None, 0)]
		while stack:
			current, kind, start = stack.pop()
			if kind is None:
				kind = node_kind(current)
				if kind == "text":
					output.append(self.lower_text(current))
				elif kind == "dynamic-text":
					output.append(self.lower_dynamic_text(current))
				else:
					stack.append((current, kind, len(output)))
					if self.lowers_children(current, kind):
						for child in reversed(current.children or ()):
							stack.append((child, None, 0))
				continue

			body = "\n".join(output[start:])
			del output[start:]
			handler: Callable[[Node, str], str] = {
				"for": self.lower_for,
				"show": self.lower_show,
				"element": self.lower_element,
			}[kind]
			output.append(handler(current, body))
		return output[0]

	def lowers_children(self, node: Node, kind: NodeKind) -> bool:
		"""Whether the children of `node` contribute to its output.

		Targets return False for nodes they drop or render without a body, so
		those subtrees are never lowered.
		"""
		return True

	@abstractmethod
	def process_code(self, code_type: CodeType, component: Component) -> CodeRewriter:
		"""Code processor that prepares a component's code for this target."""

	@abstractmethod
	def lower_text(self, node: Node) -> str: ...

	@abstractmethod
	def lower_dynamic_text(self, node: Node) -> str: ...

	@abstractmethod
	def lower_for(self, node: Node, body: str) -> str: ...

	@abstractmethod
	def lower_show(self, node: Node, body: str) -> str: ...

	@abstractmethod
	def lower_element(self, node: Node, body: str) -> str: ...

	@abstractmethod
	def wrap_styles(self, css: str) -> str: ...


__all__ = ["Renderer", "RenderOptions", "resolve_options"]
