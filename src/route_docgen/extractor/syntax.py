"""Route call extraction from JavaScript / TypeScript source.

Parses source with tree-sitter (the TypeScript grammar for .ts files, the
TSX grammar for everything else, which covers plain JavaScript and JSX)
and recovers every `<object>.<verb>(<path>, ...handlers)` call expression
as a RouteFact.
"""

import re
from collections.abc import Iterator

import tree_sitter_typescript
from tree_sitter import Language, Node, Parser, Tree

from route_docgen.errors import SourceParseError
from route_docgen.extractor.base import HttpMethod, RouteFact

TSX_LANGUAGE = Language(tree_sitter_typescript.language_tsx())
TYPESCRIPT_LANGUAGE = Language(tree_sitter_typescript.language_typescript())
TYPESCRIPT_SUFFIXES = (".ts", ".mts", ".cts")

_ESCAPE_RE = re.compile(r"\\(u\{[0-9a-fA-F]+\}|u[0-9a-fA-F]{4}|x[0-9a-fA-F]{2}|.)", re.DOTALL)
_SIMPLE_ESCAPES = {"n": "\n", "t": "\t", "r": "\r", "b": "\b", "f": "\f", "v": "\v", "0": "\0", "\n": ""}


def parse_source(source: str | bytes, file: str = "<source>") -> Tree:
    """Parse source text into a syntax tree.

    Raises SourceParseError if the grammar reports any syntax error.
    """
    if isinstance(source, str):
        source = source.encode("utf-8")
    tree = Parser(language_for(file)).parse(source)
    if tree.root_node.has_error:
        raise SourceParseError(file, _describe_error(tree.root_node))
    return tree


def language_for(file: str) -> Language:
    """TypeScript grammar for .ts/.mts/.cts files (angle-bracket casts), TSX otherwise."""
    if file.lower().endswith(TYPESCRIPT_SUFFIXES):
        return TYPESCRIPT_LANGUAGE
    return TSX_LANGUAGE


def iter_nodes(root: Node) -> Iterator[Node]:
    """Yield every node below root (root included) in document pre-order."""
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))


def node_text(node: Node) -> str:
    return node.text.decode("utf-8", errors="replace")


def find_route_calls(root: Node, file: str = "") -> list[RouteFact]:
    """Collect route facts from an already parsed tree, in declaration order.

    Chained registrations (`app.get(...).post(...)`) share a call start, so
    facts are ordered by where their method name appears.
    """
    matches = []
    for node in iter_nodes(root):
        if node.type == "call_expression":
            match = _match_route_call(node, file)
            if match is not None:
                matches.append(match)
    matches.sort(key=lambda m: m[0])
    return [fact for _, fact in matches]


def extract_route_facts(source: str | bytes, file: str = "") -> list[RouteFact]:
    """Parse source text and return its route facts."""
    tree = parse_source(source, file or "<source>")
    return find_route_calls(tree.root_node, file)


def _match_route_call(node: Node, file: str) -> tuple[int, RouteFact] | None:
    """Return (method name offset, fact) for a route call, else None."""
    callee = node.child_by_field_name("function")
    if callee is None or callee.type != "member_expression":
        return None
    prop = callee.child_by_field_name("property")
    if prop is None:
        return None
    method = HttpMethod.from_name(node_text(prop))
    if method is None:
        return None

    args_node = node.child_by_field_name("arguments")
    # a tagged template call has a template_string here instead
    if args_node is None or args_node.type != "arguments":
        return None
    args = [a for a in args_node.named_children if a.type != "comment"]
    if not args:
        return None

    try:
        path = _literal_text(args[0])
    except ValueError as e:
        row, column = args[0].start_point
        raise SourceParseError(
            file or "<source>", f"invalid escape in string at line {row + 1}, column {column + 1}: {e}"
        ) from e
    if not path:
        return None

    return prop.start_byte, RouteFact(
        method=method,
        path=path,
        handler_names=tuple(node_text(a) for a in args[1:] if a.type == "identifier"),
        source_position=node.start_byte,
        file=file,
    )


def _literal_text(node: Node) -> str | None:
    """Return the static text of a string or substitution-free template literal."""
    if node.type == "string":
        return _unescape(node_text(node)[1:-1])
    if node.type == "template_string":
        if any(child.type == "template_substitution" for child in node.named_children):
            return None
        return _unescape(node_text(node)[1:-1])
    return None


def _unescape(raw: str) -> str:
    """Decode JS escape sequences. Raises ValueError for out-of-range code points."""

    def replace(match: re.Match) -> str:
        seq = match.group(1)
        if seq in _SIMPLE_ESCAPES:
            return _SIMPLE_ESCAPES[seq]
        if seq.startswith("u{"):
            return chr(int(seq[2:-1], 16))
        if seq[0] in "ux" and len(seq) > 1:
            return chr(int(seq[1:], 16))
        return seq

    text = _ESCAPE_RE.sub(replace, raw)
    # paired \uD83D\uDE00-style escapes decode to two surrogates; join them, replace strays
    return text.encode("utf-16", "surrogatepass").decode("utf-16", "replace")


def _describe_error(root: Node) -> str:
    for node in iter_nodes(root):
        if node.type == "ERROR" or node.is_missing:
            row, column = node.start_point
            return f"syntax error at line {row + 1}, column {column + 1}"
    return "syntax error"
