"""End-to-end compilation: IR in, target source text out.

	IR -> pre-json plugins -> target code processing -> post-json plugins
	   -> renderer (lowering, styles, formatting) -> text
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import replace
from pathlib import Path
from typing import Any

from meld.nodes import Component, load_component
from meld.plugins import Plugin, code_processor_plugin
from meld.targets import RenderOptions, get_renderer, resolve_options

logger = logging.getLogger(__name__)


def compile_component(
	component: Component,
	target: str = "liquid",
	options: RenderOptions | Mapping[str, Any] | None = None,
	**kwargs: Any,
) -> str:
	"""Compile `component` for `target`. The component is left untouched."""
	renderer = get_renderer(target)
	resolved = resolve_options(options, kwargs)

	# Target code processing runs after user pre-json passes and before
	# user post-json passes.
	plugins = [
		*(Plugin(p.name, pre_json=p.pre_json) for p in resolved.plugins if p.pre_json),
		code_processor_plugin(renderer.process_code, name=f"{target}-code"),
		*(Plugin(p.name, post_json=p.post_json) for p in resolved.plugins if p.post_json),
	]

	logger.debug("Compiling %s for target %s", component.name, target)
	return renderer.render(component, replace(resolved, plugins=plugins))


def compile_file(
	path: str | Path,
	target: str = "liquid",
	options: RenderOptions | Mapping[str, Any] | None = None,
	**kwargs: Any,
) -> str:
	return compile_component(load_component(path), target, options, **kwargs)


__all__ = ["compile_component", "compile_file"]
