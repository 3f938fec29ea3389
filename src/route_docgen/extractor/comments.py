"""Documentation comment extraction.

Recovers `/** ... */` block comments that carry an `@route` tag and parses
their tag lines into DocFact objects:

    /**
     * @route GET /api/users/:id
     * @summary Get a user
     * @param {string} id - User id
     * @response 200 - The user
     * @tag Users
     * @security bearerAuth
     */
"""

import re

from tree_sitter import Node

from route_docgen.extractor.base import DocFact, DocParam
from route_docgen.extractor.syntax import iter_nodes, node_text, parse_source

TAG_LINE_RE = re.compile(r"^@(\w+)\b\s*(.*)$")
ROUTE_RE = re.compile(r"^(\w+)\s+(/\S*)")
PARAM_RE = re.compile(
    r"^\{([^}]+)\}\s+"
    r"(?:\[([^\]\s=]+)(?:=([^\]]*))?\]|([^\s\[\]]+))"  # [name=default] or name
    r"(?:\s+(?:-\s*)?(.*))?$"
)
RESPONSE_RE = re.compile(r"^(\d{3})(?:\s+(?:-\s*)?(.*))?$")
LEADING_STAR_RE = re.compile(r"^\*+ ?")


def comment_lines(text: str) -> list[str]:
    """Strip block comment delimiters and `*` continuation markers."""
    body = text
    if body.startswith("/*"):
        body = body[2:]
    if body.endswith("*/"):
        body = body[:-2]
    return [LEADING_STAR_RE.sub("", raw.strip()).strip() for raw in body.splitlines()]


def parse_doc_comment(text: str, end_position: int) -> DocFact | None:
    """Parse one block comment. Returns None if it has no @route line."""
    has_route = False
    summary = ""
    route_summary = ""
    explicit_path = None
    description_parts: list[str] = []
    collecting = True  # free text before the first tag is description
    parameters: list[DocParam] = []
    responses: dict[str, str] = {}
    tags: list[str] = []
    security: list[str] = []

    for line in comment_lines(text):
        tag_match = TAG_LINE_RE.match(line)
        if tag_match is None:
            if collecting and line:
                description_parts.append(line)
            continue

        tag, rest = tag_match.group(1), tag_match.group(2).strip()
        collecting = False

        if tag == "route":
            has_route = True
            route_match = ROUTE_RE.match(rest)
            if route_match:
                route_summary = rest
                explicit_path = route_match.group(2)
        elif tag == "summary":
            summary = rest
        elif tag == "description":
            description_parts = [rest] if rest else []
            collecting = True
        elif tag == "param":
            param = _parse_param(rest)
            if param is not None:
                parameters.append(param)
        elif tag == "response":
            response_match = RESPONSE_RE.match(rest)
            if response_match:
                # re-assigning keeps the first declaration's position
                responses[response_match.group(1)] = (response_match.group(2) or "").strip()
        elif tag == "tag":
            if rest and rest not in tags:
                tags.append(rest)
        elif tag == "security":
            if rest:
                security.append(rest)

    if not has_route:
        return None

    return DocFact(
        summary=summary or route_summary,
        description=" ".join(description_parts),
        explicit_path=explicit_path,
        parameters=tuple(parameters),
        responses=responses,
        tags=tuple(tags),
        security=tuple(security),
        comment_end_position=end_position,
    )


def find_doc_comments(root: Node) -> list[DocFact]:
    """Collect documentation facts from an already parsed tree."""
    facts = []
    for node in iter_nodes(root):
        if node.type != "comment":
            continue
        text = node_text(node)
        if not text.startswith("/*"):
            continue
        fact = parse_doc_comment(text, node.end_byte)
        if fact is not None:
            facts.append(fact)
    return facts


def extract_doc_facts(source: str | bytes, file: str = "") -> list[DocFact]:
    """Parse source text and return its documentation facts."""
    tree = parse_source(source, file or "<source>")
    return find_doc_comments(tree.root_node)


def _parse_param(rest: str) -> DocParam | None:
    match = PARAM_RE.match(rest)
    if match is None:
        return None
    param_type, optional_name, default, required_name, description = match.groups()
    return DocParam(
        name=optional_name or required_name,
        type=param_type.strip(),
        required=optional_name is None,
        description=(description or "").strip(),
        default=default,
    )
