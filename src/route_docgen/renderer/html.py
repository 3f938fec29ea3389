"""Standalone HTML rendering from a Jinja2 template."""

from pathlib import Path

from jinja2 import Environment, FileSystemLoader

from route_docgen.config import RenderConfig
from route_docgen.extractor.base import RouteDescriptor
from route_docgen.renderer.grouping import group_by_tag, require_routes

TEMPLATES_DIR = Path(__file__).parent / "templates"

METHOD_CLASSES = {
    "GET": "green",
    "POST": "blue",
    "PUT": "orange",
    "PATCH": "dark-orange",
    "DELETE": "red",
}
DEFAULT_METHOD_CLASS = "grey"

_env = Environment(
    loader=FileSystemLoader(TEMPLATES_DIR),
    autoescape=True,
    trim_blocks=True,
    lstrip_blocks=True,
    keep_trailing_newline=True,
)


def method_class(method: str) -> str:
    return METHOD_CLASSES.get(method, DEFAULT_METHOD_CLASS)


def render_html(descriptors: list[RouteDescriptor], config: RenderConfig) -> str:
    """Render route descriptors as a self-contained HTML page."""
    require_routes(descriptors)
    template = _env.get_template("api_docs.html.j2")
    return template.render(
        config=config,
        groups=group_by_tag(descriptors),
        method_class=method_class,
    )
