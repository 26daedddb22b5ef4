"""Framework-neutral component IR.

A `Component` owns a tree of `Node`s plus the code fragments (state
initializers, lifecycle hooks) that targets rewrite before rendering.
Code is kept as opaque strings; nothing here parses it.

The JSON helpers accept the document shape produced by the upstream
component parser:

	{"@type": "@builder.io/mitosis/component", "name": ..., "state": {...},
	 "hooks": {...}, "children": [{"@type": "@builder.io/mitosis/node", ...}]}
"""

from __future__ import annotations

import json
from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal, TypeAlias, cast

from meld.errors import IRFormatError, MalformedNodeError

StateType: TypeAlias = Literal["property", "function", "getter"]
NodeKind: TypeAlias = Literal["text", "dynamic-text", "for", "show", "element"]

COMPONENT_TYPE = "@builder.io/mitosis/component"
NODE_TYPE = "@builder.io/mitosis/node"

FOR_NAME = "For"
SHOW_NAME = "Show"

# Hook kinds stored as a list of records. Every other kind holds one record.
REPEATABLE_HOOKS: frozenset[str] = frozenset({"onMount", "onUpdate", "onEvent"})

_STATE_TYPES: tuple[StateType, ...] = ("property", "function", "getter")
_CONTROL_FLOW_BINDINGS = ("_forEach", "_forName", "_when")


@dataclass(slots=True)
class Binding:
	code: str
	arguments: list[str] | None = None


@dataclass(slots=True)
class StateEntry:
	code: str
	type: StateType = "property"


@dataclass(slots=True)
class Hook:
	code: str
	deps: str | None = None


HookValue: TypeAlias = Hook | list[Hook]


@dataclass(slots=True)
class Node:
	"""One element, text leaf or control-flow construct.

	Reserved keys:
	- `properties["_text"]`: static text leaf
	- `bindings["_text"]`: dynamic text
	- `bindings["_forEach"]` / `bindings["_forName"]`: on `For` nodes
	- `bindings["_when"]`: on `Show` nodes
	- `bindings["_spread"]`, `bindings["ref"]`, `bindings["css"]`: consumed
	  by renderers, never serialized as plain attributes
	"""

	name: str = "div"
	properties: dict[str, str] = field(default_factory=dict)
	bindings: dict[str, Binding] = field(default_factory=dict)
	children: list[Node] = field(default_factory=list)


@dataclass(slots=True)
class Component:
	name: str = "MyComponent"
	state: dict[str, StateEntry] = field(default_factory=dict)
	hooks: dict[str, HookValue] = field(default_factory=dict)
	children: list[Node] = field(default_factory=list)


# =============================================================================
# Construction helpers
# =============================================================================


def create_node(
	name: str = "div",
	properties: Mapping[str, str] | None = None,
	bindings: Mapping[str, Binding | str] | None = None,
	children: Sequence[Node] | None = None,
) -> Node:
	"""Build a node, accepting bare strings as binding code."""
	return Node(
		name=name,
		properties=dict(properties or {}),
		bindings={
			key: value if isinstance(value, Binding) else Binding(value)
			for key, value in (bindings or {}).items()
		},
		children=list(children or []),
	)


def create_component(
	name: str = "MyComponent",
	*,
	state: Mapping[str, StateEntry | str] | None = None,
	hooks: Mapping[str, HookValue | str] | None = None,
	children: Sequence[Node] | None = None,
) -> Component:
	normalized_hooks: dict[str, HookValue] = {}
	for kind, value in (hooks or {}).items():
		if isinstance(value, str):
			value = Hook(value)
		if kind in REPEATABLE_HOOKS and isinstance(value, Hook):
			value = [value]
		normalized_hooks[kind] = value
	return Component(
		name=name,
		state={
			key: value if isinstance(value, StateEntry) else StateEntry(value)
			for key, value in (state or {}).items()
		},
		hooks=normalized_hooks,
		children=list(children or []),
	)


def iter_hooks(component: Component) -> Iterator[tuple[str, Hook]]:
	"""Yield every hook record with its kind, whatever its storage shape."""
	for kind, value in component.hooks.items():
		if value is None:
			continue
		if isinstance(value, list):
			for hook in value:
				yield kind, hook
		else:
			yield kind, value


def _copy_node_fields(node: Node) -> Node:
	return Node(
		name=node.name,
		properties=dict(node.properties),
		bindings={
			key: Binding(
				binding.code,
				None if binding.arguments is None else list(binding.arguments),
			)
			for key, binding in node.bindings.items()
		},
	)


def clone_node(node: Node) -> Node:
	"""Copy a node and its subtree. Depth is bounded by memory, not the stack."""
	root = _copy_node_fields(node)
	stack = [(node, root)]
	while stack:
		source, target = stack.pop()
		for child in source.children or ():
			copied = _copy_node_fields(child)
			target.children.append(copied)
			stack.append((child, copied))
	return root


def _copy_hook(value: HookValue) -> HookValue:
	if isinstance(value, list):
		return [Hook(hook.code, hook.deps) for hook in value]
	return Hook(value.code, value.deps)


def clone_component(component: Component) -> Component:
	return Component(
		name=component.name,
		state={
			key: StateEntry(entry.code, entry.type)
			for key, entry in component.state.items()
		},
		hooks={kind: _copy_hook(value) for kind, value in component.hooks.items()},
		children=[clone_node(child) for child in component.children],
	)


# =============================================================================
# Shape discriminant
# =============================================================================


def node_kind(node: Node) -> NodeKind:
	"""Classify a node, checking `_text` before control flow before elements."""
	has_text = "_text" in node.properties
	has_dynamic_text = "_text" in node.bindings

	if has_text and has_dynamic_text:
		raise MalformedNodeError(node, "both static and dynamic `_text` are set")
	if has_text or has_dynamic_text:
		if node.name in (FOR_NAME, SHOW_NAME):
			raise MalformedNodeError(node, f"`_text` cannot be set on <{node.name}>")
		conflicting = [key for key in _CONTROL_FLOW_BINDINGS if key in node.bindings]
		if conflicting:
			raise MalformedNodeError(
				node, f"`_text` conflicts with {', '.join(conflicting)}"
			)
		return "text" if has_text else "dynamic-text"

	if node.name == FOR_NAME:
		return "for"
	if node.name == SHOW_NAME:
		return "show"
	return "element"


# =============================================================================
# JSON interchange
# =============================================================================


def _expect_mapping(value: Any, path: str) -> Mapping[str, Any]:
	if value is None:
		return {}
	if not isinstance(value, Mapping):
		raise IRFormatError(f"Expected an object, got {type(value).__name__}", path=path)
	return cast(Mapping[str, Any], value)


def _expect_list(value: Any, path: str) -> list[Any]:
	if value is None:
		return []
	if not isinstance(value, list):
		raise IRFormatError(f"Expected an array, got {type(value).__name__}", path=path)
	return cast(list[Any], value)


def _expect_str(value: Any, path: str) -> str:
	if not isinstance(value, str):
		raise IRFormatError(f"Expected a string, got {type(value).__name__}", path=path)
	return value


def _binding_from_json(value: Any, path: str) -> Binding:
	if isinstance(value, str):
		return Binding(value)
	data = _expect_mapping(value, path)
	code = _expect_str(data.get("code", ""), f"{path}.code")
	arguments = data.get("arguments")
	if arguments is not None:
		arguments = [
			_expect_str(arg, f"{path}.arguments[{i}]")
			for i, arg in enumerate(_expect_list(arguments, f"{path}.arguments"))
		]
	return Binding(code, arguments)


def _hook_from_json(value: Any, path: str) -> Hook:
	if isinstance(value, str):
		return Hook(value)
	data = _expect_mapping(value, path)
	deps = data.get("deps")
	return Hook(
		code=_expect_str(data.get("code", ""), f"{path}.code"),
		deps=None if deps is None else _expect_str(deps, f"{path}.deps"),
	)


def node_from_json(data: Any, path: str = "$") -> Node:
	obj = _expect_mapping(data, path)
	node_type = obj.get("@type", NODE_TYPE)
	if node_type != NODE_TYPE:
		raise IRFormatError(f"Unexpected node type {node_type!r}", path=path)

	properties: dict[str, str] = {}
	for key, value in _expect_mapping(obj.get("properties"), f"{path}.properties").items():
		if value is None:
			continue
		properties[key] = _expect_str(value, f"{path}.properties.{key}")

	bindings: dict[str, Binding] = {}
	for key, value in _expect_mapping(obj.get("bindings"), f"{path}.bindings").items():
		if value is None:
			continue
		bindings[key] = _binding_from_json(value, f"{path}.bindings.{key}")

	children = [
		node_from_json(child, f"{path}.children[{i}]")
		for i, child in enumerate(_expect_list(obj.get("children"), f"{path}.children"))
	]
	return Node(
		name=_expect_str(obj.get("name", "div"), f"{path}.name"),
		properties=properties,
		bindings=bindings,
		children=children,
	)


def component_from_json(data: Any) -> Component:
	"""Build a component from the parser's JSON document."""
	obj = _expect_mapping(data, "$")
	component_type = obj.get("@type", COMPONENT_TYPE)
	if component_type != COMPONENT_TYPE:
		raise IRFormatError(f"Unexpected component type {component_type!r}")

	state: dict[str, StateEntry] = {}
	for key, value in _expect_mapping(obj.get("state"), "$.state").items():
		if value is None:
			continue
		entry_path = f"$.state.{key}"
		if isinstance(value, str):
			state[key] = StateEntry(value)
			continue
		entry = _expect_mapping(value, entry_path)
		state_type = entry.get("type", "property")
		if state_type not in _STATE_TYPES:
			raise IRFormatError(f"Unknown state type {state_type!r}", path=entry_path)
		state[key] = StateEntry(
			code=_expect_str(entry.get("code", ""), f"{entry_path}.code"),
			type=state_type,
		)

	hooks: dict[str, HookValue] = {}
	for kind, value in _expect_mapping(obj.get("hooks"), "$.hooks").items():
		if value is None:
			continue
		hook_path = f"$.hooks.{kind}"
		if isinstance(value, list):
			records = [
				_hook_from_json(item, f"{hook_path}[{i}]")
				for i, item in enumerate(cast(list[Any], value))
			]
			if kind not in REPEATABLE_HOOKS:
				if len(records) != 1:
					raise IRFormatError(
						f"Hook '{kind}' holds a single record, got {len(records)}",
						path=hook_path,
					)
				hooks[kind] = records[0]
			else:
				hooks[kind] = records
		else:
			record = _hook_from_json(value, hook_path)
			hooks[kind] = [record] if kind in REPEATABLE_HOOKS else record

	children = [
		node_from_json(child, f"$.children[{i}]")
		for i, child in enumerate(_expect_list(obj.get("children"), "$.children"))
	]
	return Component(
		name=_expect_str(obj.get("name", "MyComponent"), "$.name"),
		state=state,
		hooks=hooks,
		children=children,
	)


def node_to_json(node: Node) -> dict[str, Any]:
	bindings: dict[str, Any] = {}
	for key, binding in node.bindings.items():
		entry: dict[str, Any] = {"code": binding.code}
		if binding.arguments is not None:
			entry["arguments"] = list(binding.arguments)
		bindings[key] = entry
	return {
		"@type": NODE_TYPE,
		"name": node.name,
		"properties": dict(node.properties),
		"bindings": bindings,
		"children": [node_to_json(child) for child in node.children],
	}


def _hook_to_json(hook: Hook) -> dict[str, Any]:
	data: dict[str, Any] = {"code": hook.code}
	if hook.deps is not None:
		data["deps"] = hook.deps
	return data


def component_to_json(component: Component) -> dict[str, Any]:
	hooks: dict[str, Any] = {}
	for kind, value in component.hooks.items():
		if isinstance(value, list):
			hooks[kind] = [_hook_to_json(hook) for hook in value]
		else:
			hooks[kind] = _hook_to_json(value)
	return {
		"@type": COMPONENT_TYPE,
		"name": component.name,
		"state": {
			key: {"code": entry.code, "type": entry.type}
			for key, entry in component.state.items()
		},
		"hooks": hooks,
		"children": [node_to_json(child) for child in component.children],
	}


def load_component(path: str | Path) -> Component:
	source = Path(path)
	try:
		data = json.loads(source.read_text(encoding="utf-8"))
	except json.JSONDecodeError as exc:
		raise IRFormatError(f"Invalid JSON in {source}: {exc.msg}") from exc
	return component_from_json(data)


__all__ = [
	"Binding",
	"StateEntry",
	"StateType",
	"Hook",
	"HookValue",
	"Node",
	"NodeKind",
	"Component",
	"REPEATABLE_HOOKS",
	"FOR_NAME",
	"SHOW_NAME",
	"create_node",
	"create_component",
	"iter_hooks",
	"clone_node",
	"clone_component",
	"node_kind",
	"node_from_json",
	"node_to_json",
	"component_from_json",
	"component_to_json",
	"load_component",
]
