from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from meld.nodes import Component

logger = logging.getLogger(__name__)

JsonPass = Callable[[Component], object]


@dataclass(slots=True, frozen=True)
class Plugin:
	"""A pair of passes run on the component before rendering.

	`pre_json` runs on the fresh copy of the component, `post_json` after
	target code processing. Both mutate the component in place.
	"""

	name: str
	pre_json: JsonPass | None = None
	post_json: JsonPass | None = None


def run_pre_json_plugins(component: Component, plugins: Sequence[Plugin]) -> None:
	for plugin in plugins:
		if plugin.pre_json is not None:
			logger.debug("Running pre-json plugin %s", plugin.name)
			plugin.pre_json(component)


def run_post_json_plugins(component: Component, plugins: Sequence[Plugin]) -> None:
	for plugin in plugins:
		if plugin.post_json is not None:
			logger.debug("Running post-json plugin %s", plugin.name)
			plugin.post_json(component)


__all__ = ["Plugin", "JsonPass", "run_pre_json_plugins", "run_post_json_plugins"]
