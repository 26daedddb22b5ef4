"""Compile framework-neutral UI component IR to target template syntaxes."""

# Bindings
from meld.bindings import BindingGrammar as BindingGrammar
from meld.bindings import strip_prefixes as strip_prefixes

# Compiler
from meld.compiler import compile_component as compile_component
from meld.compiler import compile_file as compile_file

# Styles
from meld.css import collect_css as collect_css

# Config
from meld.env import env as env

# Errors
from meld.errors import FormatError as FormatError
from meld.errors import IRFormatError as IRFormatError
from meld.errors import MalformedNodeError as MalformedNodeError
from meld.errors import MeldError as MeldError
from meld.errors import UnknownTargetError as UnknownTargetError

# Formatting
from meld.formatting import Formatter as Formatter
from meld.formatting import PrettierFormatter as PrettierFormatter

# IR
from meld.nodes import Binding as Binding
from meld.nodes import Component as Component
from meld.nodes import Hook as Hook
from meld.nodes import Node as Node
from meld.nodes import StateEntry as StateEntry
from meld.nodes import clone_component as clone_component
from meld.nodes import clone_node as clone_node
from meld.nodes import component_from_json as component_from_json
from meld.nodes import component_to_json as component_to_json
from meld.nodes import create_component as create_component
from meld.nodes import create_node as create_node
from meld.nodes import load_component as load_component
from meld.nodes import node_kind as node_kind

# Plugins
from meld.plugins import Plugin as Plugin
from meld.plugins import code_processor_plugin as code_processor_plugin
from meld.plugins import compose_processors as compose_processors
from meld.plugins import process_component_code as process_component_code

# Targets
from meld.targets import TARGETS as TARGETS
from meld.targets import LiquidRenderer as LiquidRenderer
from meld.targets import Renderer as Renderer
from meld.targets import RenderOptions as RenderOptions
from meld.targets import component_to_liquid as component_to_liquid
from meld.targets import get_renderer as get_renderer
from meld.targets import is_valid_liquid_binding as is_valid_liquid_binding
from meld.targets import register_target as register_target

# Traversal
from meld.traverse import traverse_nodes as traverse_nodes
from meld.traverse import walk_nodes as walk_nodes
