"""Target renderers and the registry used to look them up by name."""

from __future__ import annotations

from meld.errors import UnknownTargetError
from meld.targets.base import Renderer as Renderer
from meld.targets.base import RenderOptions as RenderOptions
from meld.targets.base import resolve_options as resolve_options
from meld.targets.liquid import LiquidRenderer as LiquidRenderer
from meld.targets.liquid import component_to_liquid as component_to_liquid
from meld.targets.liquid import is_valid_liquid_binding as is_valid_liquid_binding

TARGETS: dict[str, type[Renderer]] = {
	LiquidRenderer.name: LiquidRenderer,
}


def register_target(renderer: type[Renderer]) -> type[Renderer]:
	"""Class decorator adding a renderer to `TARGETS` under its `name`."""
	TARGETS[renderer.name] = renderer
	return renderer


def get_renderer(name: str) -> Renderer:
	renderer = TARGETS.get(name)
	if renderer is None:
		raise UnknownTargetError(name, TARGETS.keys())
	return renderer()
