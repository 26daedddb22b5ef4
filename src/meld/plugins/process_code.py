"""Rewrite every embedded code fragment of a component.

Where code lives in the IR is the same for every target; how it must be
rewritten is not. A target supplies a `CodeProcessor` factory and this
module walks the component and applies it to each code-bearing site:

- hook bodies (`hooks`) and their dependency lists (`hooks-deps`)
- state initializers (`state`)
- node bindings (`bindings`)
- node names, which may be computed (`dynamic-element-names`)

The processor receives the site key (hook kind, state key, binding name)
so it can special-case particular sites. Rewrites happen in place and never
add, remove or reorder nodes.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Literal, TypeAlias

from meld.nodes import Component, Hook, Node, iter_hooks
from meld.plugins.base import Plugin
from meld.traverse import traverse_nodes

CodeType: TypeAlias = Literal[
	"hooks",
	"hooks-deps",
	"state",
	"bindings",
	"dynamic-element-names",
]
CodeRewriter: TypeAlias = Callable[[str, str], str]
CodeProcessor: TypeAlias = Callable[[CodeType, Component], CodeRewriter]

CODE_TYPES: tuple[CodeType, ...] = (
	"hooks",
	"hooks-deps",
	"state",
	"bindings",
	"dynamic-element-names",
)


def _process_hook(
	component: Component, kind: str, hook: Hook, code_processor: CodeProcessor
) -> None:
	hook.code = code_processor("hooks", component)(hook.code, kind)
	if hook.deps:
		hook.deps = code_processor("hooks-deps", component)(hook.deps, kind)


def _process_node(node: Node, component: Component, code_processor: CodeProcessor) -> None:
	rewrite_binding = code_processor("bindings", component)
	for key, binding in node.bindings.items():
		binding.code = rewrite_binding(binding.code, key)

	node.name = code_processor("dynamic-element-names", component)(node.name, "")


def process_component_code(component: Component, code_processor: CodeProcessor) -> None:
	"""Apply `code_processor` to all code in `component`, in place."""
	for kind, hook in iter_hooks(component):
		_process_hook(component, kind, hook, code_processor)

	rewrite_state = code_processor("state", component)
	for key, entry in component.state.items():
		entry.code = rewrite_state(entry.code, key)

	traverse_nodes(component, lambda node: _process_node(node, component, code_processor))


def create_code_processor_plugin(
	code_processor: CodeProcessor,
) -> Callable[[Component], None]:
	def plugin(component: Component) -> None:
		process_component_code(component, code_processor)

	return plugin


def code_processor_plugin(
	code_processor: CodeProcessor, name: str = "process-code"
) -> Plugin:
	"""Wrap a code processor as a plugin that runs after target JSON passes."""
	return Plugin(name=name, post_json=create_code_processor_plugin(code_processor))


def identity_processor(code_type: CodeType, component: Component) -> CodeRewriter:
	return lambda code, key: code


def compose_processors(*processors: CodeProcessor) -> CodeProcessor:
	"""Chain processors so each site is rewritten by all of them, left to right."""
	if not processors:
		return identity_processor

	def composed(code_type: CodeType, component: Component) -> CodeRewriter:
		rewriters = [processor(code_type, component) for processor in processors]

		def rewrite(code: str, key: str) -> str:
			for rewriter in rewriters:
				code = rewriter(code, key)
			return code

		return rewrite

	return composed


__all__ = [
	"CodeType",
	"CodeRewriter",
	"CodeProcessor",
	"CODE_TYPES",
	"process_component_code",
	"create_code_processor_plugin",
	"code_processor_plugin",
	"identity_processor",
	"compose_processors",
]
