from __future__ import annotations

from collections.abc import Callable, Iterator

from meld.nodes import Component, Node


def traverse_nodes(component: Component, visit: Callable[[Node], object]) -> None:
	"""Call `visit` on every node of the component tree, parents first.

	Children are read after `visit` returns, so in-place edits to a node are
	seen before its subtree is walked.
	"""
	for node, _ in walk_nodes(component):
		visit(node)


def walk_nodes(component: Component) -> Iterator[tuple[Node, Node | None]]:
	"""Yield `(node, parent)` pairs in pre-order. Roots have no parent."""
	stack: list[tuple[Node, Node | None]] = [
		(root, None) for root in reversed(component.children)
	]
	while stack:
		node, parent = stack.pop()
		yield node, parent
		for child in reversed(node.children or ()):
			stack.append((child, node))


__all__ = ["traverse_nodes", "walk_nodes"]
