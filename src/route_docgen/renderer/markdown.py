"""Markdown rendering: one section per route, grouped by tag."""

from route_docgen.config import RenderConfig
from route_docgen.extractor.base import RouteDescriptor
from route_docgen.renderer.grouping import group_by_tag, require_routes


def render_markdown(descriptors: list[RouteDescriptor], config: RenderConfig) -> str:
    """Render route descriptors as a Markdown document."""
    require_routes(descriptors)

    lines = [f"# {config.title}", "", config.description, "", f"**Version:** {config.version}", ""]
    if config.generated_at:
        lines.extend([f"_Generated: {config.generated_at}_", ""])

    if config.servers:
        lines.extend(["## Servers", ""])
        for server in config.servers:
            suffix = f" - {server.description}" if server.description else ""
            lines.append(f"- {server.url}{suffix}")
        lines.append("")

    lines.extend(["## Endpoints", ""])
    for tag, routes in group_by_tag(descriptors):
        lines.extend([f"### {tag}", ""])
        for route in routes:
            lines.extend(_render_route(route))

    return "\n".join(lines)


def _render_route(route: RouteDescriptor) -> list[str]:
    lines = [f"#### {route.method.value} {route.path}", ""]
    if route.summary:
        lines.extend([route.summary, ""])
    if route.description:
        lines.extend([route.description, ""])

    if route.parameters:
        lines.extend([
            "**Parameters:**",
            "",
            "| Name | Type | Required | Description |",
            "|------|------|----------|-------------|",
        ])
        for p in route.parameters:
            required = "Yes" if p.required else "No"
            lines.append(
                f"| {_cell(p.name)} | {_cell(p.param_type)} | {required} | {_cell(p.description) or '-'} |"
            )
        lines.append("")

    lines.extend([
        "**Responses:**",
        "",
        "| Status | Description |",
        "|--------|-------------|",
    ])
    for status, description in route.responses.items():
        lines.append(f"| {status} | {_cell(description) or '-'} |")
    lines.append("")

    if route.security:
        lines.extend([f"**Security:** {', '.join(route.security)}", ""])

    lines.extend(["---", ""])
    return lines


def _cell(text: str) -> str:
    return text.replace("|", "\\|").replace("\n", " ")
