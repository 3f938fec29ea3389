"""Render every requested output format into {filename: content}."""

from route_docgen.config import RenderConfig
from route_docgen.extractor.base import RouteDescriptor
from route_docgen.renderer.grouping import require_routes
from route_docgen.renderer.html import render_html
from route_docgen.renderer.markdown import render_markdown
from route_docgen.renderer.openapi import build_openapi, to_json, to_yaml

FORMATS = ("openapi", "markdown", "html")


def render_documents(
    descriptors: list[RouteDescriptor],
    config: RenderConfig,
    formats: tuple[str, ...] = FORMATS,
) -> dict[str, str]:
    """Render all requested formats.

    Returns a dict of {filename: content}. Nothing is returned unless
    every format rendered successfully.
    """
    require_routes(descriptors)

    files = {}
    for fmt in formats:
        if fmt == "openapi":
            doc = build_openapi(descriptors, config)
            files["openapi.json"] = to_json(doc)
            files["openapi.yaml"] = to_yaml(doc)
        elif fmt == "markdown":
            files["API.md"] = render_markdown(descriptors, config)
        elif fmt == "html":
            files["index.html"] = render_html(descriptors, config)
        else:
            raise ValueError(f"Unknown output format: {fmt}")
    return files
