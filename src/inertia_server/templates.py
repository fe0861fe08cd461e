from mako.template import Template

HEAD_MARKER = "<!-- @inertiaHead -->"
BODY_MARKER = "<!-- @inertia -->"

# Used when no index entrypoint is configured
DEFAULT_LAYOUT_TEMPLATE = Template(
	"""<!DOCTYPE html>
<html lang="${lang | h}">
  <head>
    <meta charset="utf-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1" />
    <title>${title | h}</title>
    ${head_marker}
  </head>
  <body>
    ${body_marker}
  </body>
</html>
"""
)

# The page object travels as an HTML-escaped JSON attribute
ROOT_ELEMENT_TEMPLATE = Template(
	"""<div id="${root_id | h}" data-page="${page | h}"></div>"""
)


def render_default_layout(title: str = "", lang: str = "en") -> str:
	return str(
		DEFAULT_LAYOUT_TEMPLATE.render(
			title=title,
			lang=lang,
			head_marker=HEAD_MARKER,
			body_marker=BODY_MARKER,
		)
	)


def render_root_element(root_id: str, page_json: str) -> str:
	return str(ROOT_ELEMENT_TEMPLATE.render(root_id=root_id, page=page_json))
