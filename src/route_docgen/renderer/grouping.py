"""Tag grouping shared by the text and hypertext renderers."""

from route_docgen.errors import NoRoutesError
from route_docgen.extractor.base import RouteDescriptor

UNTAGGED = "untagged"


def require_routes(descriptors: list[RouteDescriptor]) -> None:
    if not descriptors:
        raise NoRoutesError("No routes to document")


def group_by_tag(descriptors: list[RouteDescriptor]) -> list[tuple[str, list[RouteDescriptor]]]:
    """Group descriptors by tag.

    Groups come in the order their tag is first seen, with the untagged
    group last. A descriptor with several tags is listed under each one.
    """
    groups: dict[str, list[RouteDescriptor]] = {}
    for descriptor in descriptors:
        for tag in descriptor.tags or [UNTAGGED]:
            groups.setdefault(tag, []).append(descriptor)

    result = [(tag, routes) for tag, routes in groups.items() if tag != UNTAGGED]
    if UNTAGGED in groups:
        result.append((UNTAGGED, groups[UNTAGGED]))
    return result
