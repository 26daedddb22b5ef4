from mako.template import Template

# Loop over a collection. `body` is the already-lowered children.
FOR_TEMPLATE = Template("{% for ${name} in ${collection} %}${body}{% endfor %}")

IF_TEMPLATE = Template("{% if ${condition} %}${body}{% endif %}")

# Writes each [key, value] entry of a spread object as an attribute
SPREAD_TEMPLATE = Template(
	"""
{% for _attr in ${expression} %}
  {{ _attr[0] }}="{{ _attr[1] }}"
{% endfor %}
"""
)

STYLE_TEMPLATE = Template("<style>${css}</style>")
