"""Per-file and multi-file route extraction."""

import logging
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from pydantic import BaseModel

from route_docgen.errors import NoRoutesError, NoSourceFilesError, SourceParseError
from route_docgen.extractor.base import RouteDescriptor
from route_docgen.extractor.comments import find_doc_comments
from route_docgen.extractor.merge import merge_facts
from route_docgen.extractor.normalize import assign_unique_operation_ids, normalize
from route_docgen.extractor.syntax import find_route_calls, parse_source

logger = logging.getLogger(__name__)


class ExtractionResult(BaseModel):
    """Descriptors from all files plus non-fatal per-file warnings."""

    descriptors: list[RouteDescriptor]
    warnings: list[str] = []


def extract_source(source: str | bytes, file: str = "") -> list[RouteDescriptor]:
    """Run both extractors, the merger and the normalizer over one source text."""
    tree = parse_source(source, file or "<source>")
    routes = find_route_calls(tree.root_node, file)
    docs = find_doc_comments(tree.root_node)
    return [normalize(route, doc) for route, doc in merge_facts(routes, docs)]


def extract_file(file_path: str | Path) -> list[RouteDescriptor]:
    """Extract descriptors from one file. Raises SourceParseError or OSError."""
    path = Path(file_path)
    descriptors = extract_source(path.read_bytes(), str(file_path))
    logger.debug("%s: %d routes", file_path, len(descriptors))
    return descriptors


def extract_routes(paths: list[str | Path], workers: int = 1) -> ExtractionResult:
    """Extract descriptors from every file, in the given file order.

    Files that cannot be read or parsed are reported as warnings and
    contribute nothing.
    """
    if not paths:
        raise NoSourceFilesError()

    if workers > 1:
        with ThreadPoolExecutor(max_workers=workers) as pool:
            outcomes = list(pool.map(_extract_or_warn, paths))
    else:
        outcomes = [_extract_or_warn(p) for p in paths]

    descriptors: list[RouteDescriptor] = []
    warnings: list[str] = []
    for file_descriptors, warning in outcomes:
        descriptors.extend(file_descriptors)
        if warning:
            warnings.append(warning)

    if not descriptors:
        raise NoRoutesError()

    return ExtractionResult(descriptors=assign_unique_operation_ids(descriptors), warnings=warnings)


def _extract_or_warn(file_path: str | Path) -> tuple[list[RouteDescriptor], str | None]:
    try:
        return extract_file(file_path), None
    except SourceParseError as e:
        message = str(e)
    except OSError as e:
        message = f"{file_path}: {e.strerror or e}"
    logger.warning("Failed to parse %s", message)
    return [], message
