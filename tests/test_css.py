import copy
import logging

import pytest
from meld.css import collect_css
from meld.nodes import create_component, create_node


def styled(name: str, css: str, children=None):
	return create_node(name, bindings={"css": css}, children=children)


def test_no_styles():
	component = create_component(children=[create_node("div")])
	assert collect_css(component) == ""


def test_collects_nested_styles_in_tree_order():
	component = create_component(
		children=[
			styled("section", '{"padding": "8px"}', [styled("h2", '{"fontWeight": 700}')]),
			styled("footer", '{"marginTop": "1rem"}'),
		]
	)
	lines = collect_css(component).splitlines()
	assert len(lines) == 3
	assert lines[0].startswith(".section-") and lines[0].endswith("{ padding: 8px; }")
	assert lines[1].startswith(".h2-") and lines[1].endswith("{ font-weight: 700; }")
	assert lines[2].startswith(".footer-") and lines[2].endswith("{ margin-top: 1rem; }")


def test_identical_rules_emitted_once():
	component = create_component(
		children=[styled("p", '{"color": "red"}'), styled("p", '{"color": "red"}')]
	)
	assert len(collect_css(component).splitlines()) == 1


def test_custom_properties_kept():
	component = create_component(children=[styled("div", '{"--accent": "#f00"}')])
	assert "--accent: #f00;" in collect_css(component)


def test_media_queries_and_pseudo_selectors():
	component = create_component(
		children=[
			styled(
				"a",
				'{"color": "blue", "&:hover": {"color": "navy"},'
				' "@media (max-width: 600px)": {"fontSize": "14px"}}',
			)
		]
	)
	css = collect_css(component)
	selector = css.split(" ", 1)[0]
	assert f"{selector}:hover {{ color: navy; }}" in css
	assert f"@media (max-width: 600px) {{ {selector} {{ font-size: 14px; }} }}" in css


def test_non_json_css_skipped(caplog: pytest.LogCaptureFixture):
	component = create_component(children=[styled("div", "{ color: state.color }")])
	with caplog.at_level(logging.DEBUG, logger="meld.css"):
		assert collect_css(component) == ""
	assert "non-JSON" in caplog.text


def test_does_not_mutate():
	component = create_component(children=[styled("div", '{"color": "red"}')])
	snapshot = copy.deepcopy(component)
	collect_css(component)
	assert component == snapshot
