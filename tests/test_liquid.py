import copy
import logging
import re

import pytest
from meld.errors import FormatError, MalformedNodeError
from meld.formatting import Dialect
from meld.nodes import Component, create_component, create_node
from meld.targets.base import RenderOptions
from meld.targets.liquid import LiquidRenderer, component_to_liquid, liquid_code_processor

from conftest import RecordingFormatter


def render(*children, **options) -> str:
	return component_to_liquid(create_component(children=list(children)), **options)


def text(value: str):
	return create_node(properties={"_text": value})


def dynamic(code: str):
	return create_node(bindings={"_text": code})


class TestText:
	def test_static_text_verbatim(self):
		assert render(text("Hello <b>world</b> & {{ raw }}")) == (
			"Hello <b>world</b> & {{ raw }}"
		)

	def test_dynamic_text_interpolated(self):
		assert render(dynamic("product.title")) == "{{product.title}}"

	def test_dynamic_text_strips_namespaces(self):
		assert render(dynamic("state.product.title")) == "{{product.title}}"
		assert render(dynamic("props.product.title")) == "{{product.title}}"

	def test_dynamic_text_not_validated(self):
		assert render(dynamic("price | money")) == "{{price | money}}"


class TestFor:
	def test_loop(self):
		node = create_node(
			"For",
			bindings={"_forEach": "items", "_forName": "item"},
			children=[dynamic("item.name")],
		)
		assert render(node) == "{% for item in items %}{{item.name}}{% endfor %}"

	def test_loop_children_joined_by_newline(self):
		node = create_node(
			"For",
			bindings={"_forEach": "state.items", "_forName": "item"},
			children=[dynamic("item.name"), text("!")],
		)
		assert render(node) == "{% for item in items %}{{item.name}}\n!{% endfor %}"

	def test_invalid_collection_drops_node(self):
		node = create_node(
			"For",
			bindings={"_forEach": "getItems()", "_forName": "item"},
			children=[dynamic("item.name")],
		)
		assert LiquidRenderer().lower(node) == ""

		result = render(text("before"), node, text("after"))
		assert "before" in result
		assert "after" in result
		assert result == "before\n\nafter"
		assert "item.name" not in result

	def test_invalid_loop_name_drops_node(self):
		node = create_node(
			"For",
			bindings={"_forEach": "items", "_forName": "[a, b]"},
			children=[dynamic("a")],
		)
		assert LiquidRenderer().lower(node) == ""

	def test_missing_loop_bindings_drop_node(self):
		node = create_node("For", children=[text("x")])
		assert LiquidRenderer().lower(node) == ""

	def test_escape_hatch_collection(self):
		node = create_node(
			"For",
			bindings={
				"_forEach": "context.shopify.liquid.get('collections.all.products')",
				"_forName": "product",
			},
			children=[dynamic("product.title")],
		)
		result = render(node)
		assert result.startswith("{% for product in context.shopify.liquid.get(")
		assert result.endswith("{{product.title}}{% endfor %}")

	def test_drop_is_logged(self, caplog: pytest.LogCaptureFixture):
		node = create_node("For", bindings={"_forEach": "a()", "_forName": "x"})
		with caplog.at_level(logging.DEBUG, logger="meld.targets.liquid"):
			render(node)
		assert "Dropping <For>" in caplog.text


class TestShow:
	def test_conditional(self):
		node = create_node(
			"Show", bindings={"_when": "state.open"}, children=[text("Open")]
		)
		assert render(node) == "{% if open %}Open{% endif %}"

	def test_invalid_condition_drops_node(self):
		node = create_node(
			"Show", bindings={"_when": "count > 1"}, children=[text("Many")]
		)
		assert render(node) == ""

	def test_nested_in_element(self):
		node = create_node(
			"div",
			children=[
				create_node("Show", bindings={"_when": "open"}, children=[text("A")]),
				create_node("Show", bindings={"_when": "!open"}, children=[text("B")]),
			],
		)
		assert render(node) == "<div>{% if open %}A{% endif %}\n</div>"


class TestElement:
	def test_properties_and_bindings(self):
		node = create_node(
			"a",
			properties={"class": "link"},
			bindings={"href": "state.product.url", "title": "props.title"},
			children=[text("View")],
		)
		assert render(node) == '<a class="link" href="{{product.url}}" title="{{title}}">View</a>'

	def test_empty_element(self):
		assert render(create_node("div")) == "<div></div>"

	def test_invalid_bindings_dropped(self):
		node = create_node(
			"div",
			properties={"id": "main"},
			bindings={"title": "a + b", "data-price": "product.price"},
		)
		assert render(node) == '<div id="main" data-price="{{product.price}}"></div>'

	@pytest.mark.parametrize("code", ["state.toggle()", "open", "context.liquid.x"])
	def test_event_bindings_never_emitted(self, code: str):
		node = create_node(
			"button",
			bindings={"onClick": code, "onMouseEnter": code, "type": "kind"},
			children=[text("Go")],
		)
		result = render(node)
		assert "onClick" not in result
		assert "onMouseEnter" not in result
		assert result == '<button type="{{kind}}">Go</button>'

	def test_reserved_bindings_skipped(self):
		node = create_node(
			"div",
			bindings={"ref": "myRef", "css": '{"color": "red"}', "title": "name"},
		)
		result = render(node, collect_styles=lambda component: "")
		assert result == '<div title="{{name}}"></div>'

	def test_self_closing_ignores_children(self):
		node = create_node(
			"img",
			properties={"src": "logo.png"},
			bindings={"alt": "shop.name"},
			children=[text("never")],
		)
		assert render(node) == '<img src="logo.png" alt="{{shop.name}}" />'

	def test_self_closing_children_warn_in_dev(
		self, caplog: pytest.LogCaptureFixture, monkeypatch: pytest.MonkeyPatch
	):
		monkeypatch.setenv("MELD_ENV", "dev")
		node = create_node("br", children=[text("x")])
		with caplog.at_level(logging.WARNING, logger="meld.targets.liquid"):
			assert render(node) == "<br />"
		assert "self-closing" in caplog.text

	def test_spread(self):
		node = create_node(
			"div", properties={"class": "box"}, bindings={"_spread": "state.attrs"}
		)
		result = render(node)
		assert result.startswith("<div \n{% for _attr in attrs %}\n")
		assert '{{ _attr[0] }}="{{ _attr[1] }}"' in result
		assert result.endswith('{% endfor %}\n class="box"></div>')

	def test_invalid_spread_dropped(self):
		node = create_node("div", bindings={"_spread": "{...a, ...b}"})
		assert render(node) == "<div></div>"

	def test_nested_children(self):
		node = create_node(
			"ul",
			children=[
				create_node(
					"For",
					bindings={"_forEach": "items", "_forName": "item"},
					children=[create_node("li", children=[dynamic("item.title")])],
				)
			],
		)
		assert render(node) == (
			"<ul>{% for item in items %}<li>{{item.title}}</li>{% endfor %}</ul>"
		)

	def test_malformed_node_raises(self):
		node = create_node(properties={"_text": "a"}, bindings={"_text": "b"})
		with pytest.raises(MalformedNodeError):
			render(create_node("div", children=[node]))


class TestComponent:
	def test_roots_joined_by_newline(self):
		assert render(text("a"), text("b")) == "a\nb"

	def test_styles_appended(self):
		node = create_node("div", bindings={"css": '{"color": "red", "fontSize": "12px"}'})
		result = render(node)
		match = re.fullmatch(
			r"<div></div><style>\.div-([0-9a-f]{7}) \{ color: red; font-size: 12px; \}</style>",
			result,
		)
		assert match is not None

	def test_no_style_block_without_styles(self):
		assert "<style>" not in render(create_node("div"))

	def test_custom_style_collector(self):
		result = render(text("x"), collect_styles=lambda component: ".a { color: blue; }")
		assert result == "x<style>.a { color: blue; }</style>"

	def test_whitespace_only_styles_ignored(self):
		assert render(text("x"), collect_styles=lambda component: "  \n") == "x"

	def test_does_not_mutate_input(self):
		component = create_component(
			children=[create_node("a", bindings={"href": "state.url"})]
		)
		snapshot = copy.deepcopy(component)
		component_to_liquid(component)
		assert component == snapshot

	def test_deterministic(self):
		component = create_component(
			children=[
				create_node(
					"div",
					properties={"class": "x"},
					bindings={"title": "state.t", "css": '{"margin": 0}'},
					children=[
						create_node(
							"For",
							bindings={"_forEach": "items", "_forName": "item"},
							children=[dynamic("item")],
						)
					],
				)
			]
		)
		first = component_to_liquid(copy.deepcopy(component))
		second = component_to_liquid(copy.deepcopy(component))
		assert first == second

	def test_unknown_options_ignored(self):
		assert render(text("x"), shopify_store="example", indent=4) == "x"


class TestFormatting:
	def test_formatter_called_once(self, formatter: RecordingFormatter):
		result = render(dynamic("a"), format=True, formatter=formatter)
		assert result == "<!-- formatted -->{{a}}"
		assert formatter.calls == [("{{a}}", "html")]

	def test_prettier_alias(self, formatter: RecordingFormatter):
		render(text("x"), prettier=False, formatter=formatter)
		assert formatter.calls == []

	def test_format_disabled(self, formatter: RecordingFormatter):
		assert render(text("x"), format=False, formatter=formatter) == "x"
		assert formatter.calls == []

	def test_format_default_from_env(
		self, monkeypatch: pytest.MonkeyPatch, formatter: RecordingFormatter
	):
		monkeypatch.setenv("MELD_FORMAT", "1")
		render(text("x"), formatter=formatter)
		assert formatter.calls == [("x", "html")]

	def test_formatter_failure_surfaces(self):
		class Broken:
			def format(self, text: str, dialect: Dialect) -> str:
				raise ValueError("Unexpected closing tag")

		with pytest.raises(FormatError) as exc_info:
			render(text("<div>"), format=True, formatter=Broken())
		assert exc_info.value.text == "<div>"
		assert "Unexpected closing tag" in exc_info.value.diagnostic


class TestCodeProcessor:
	def test_strips_namespaces_in_bindings_state_and_deps(self):
		component = Component()
		strip = liquid_code_processor("bindings", component)
		assert strip("state.product.price", "title") == "product.price"
		assert liquid_code_processor("state", component)("props.x", "y") == "x"
		assert liquid_code_processor("hooks-deps", component)("[state.a]", "onUpdate") == "[a]"

	def test_leaves_hook_bodies_and_names(self):
		component = Component()
		assert liquid_code_processor("hooks", component)("state.a = 1", "onMount") == (
			"state.a = 1"
		)
		assert liquid_code_processor("dynamic-element-names", component)("div", "") == "div"

	def test_renderer_options_object(self):
		options = RenderOptions(format=False)
		result = LiquidRenderer().render(create_component(children=[text("x")]), options)
		assert result == "x"


class TestDeepTrees:
	"""Nesting depth is limited by memory, not the interpreter's call stack."""

	DEPTH = 500

	def nested(self, leaf):
		node = leaf
		for _ in range(self.DEPTH):
			node = create_node("div", children=[node])
		return node

	def test_render_deeply_nested_elements(self):
		result = render(self.nested(create_node("span")))
		assert result == "<div>" * self.DEPTH + "<span></span>" + "</div>" * self.DEPTH

	def test_render_deeply_nested_control_flow(self):
		node = dynamic("state.item")
		for _ in range(self.DEPTH):
			node = create_node("Show", bindings={"_when": "state.open"}, children=[node])
		result = render(node)
		assert result == "{% if open %}" * self.DEPTH + "{{item}}" + "{% endif %}" * self.DEPTH

	def test_input_tree_untouched(self):
		component = create_component(
			children=[self.nested(create_node("span", bindings={"title": "state.title"}))]
		)
		component_to_liquid(component)
		node = component.children[0]
		while node.children:
			node = node.children[0]
		assert node.bindings["title"].code == "state.title"


def test_unrecognized_env_does_not_break_void_tags(
	caplog: pytest.LogCaptureFixture, monkeypatch: pytest.MonkeyPatch
):
	monkeypatch.setenv("MELD_ENV", "development")
	node = create_node("img", bindings={"src": "state.src"}, children=[text("x")])
	with caplog.at_level(logging.WARNING, logger="meld.targets.liquid"):
		assert render(node) == '<img src="{{src}}" />'
	assert "self-closing" not in caplog.text
