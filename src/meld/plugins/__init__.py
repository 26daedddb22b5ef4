"""Component passes run before rendering."""

from meld.plugins.base import Plugin as Plugin
from meld.plugins.base import run_post_json_plugins as run_post_json_plugins
from meld.plugins.base import run_pre_json_plugins as run_pre_json_plugins
from meld.plugins.process_code import CODE_TYPES as CODE_TYPES
from meld.plugins.process_code import CodeProcessor as CodeProcessor
from meld.plugins.process_code import CodeRewriter as CodeRewriter
from meld.plugins.process_code import CodeType as CodeType
from meld.plugins.process_code import code_processor_plugin as code_processor_plugin
from meld.plugins.process_code import compose_processors as compose_processors
from meld.plugins.process_code import (
	create_code_processor_plugin as create_code_processor_plugin,
)
from meld.plugins.process_code import identity_processor as identity_processor
from meld.plugins.process_code import process_component_code as process_component_code
