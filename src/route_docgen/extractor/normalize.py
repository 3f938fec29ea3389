"""Turn merged (route, doc) pairs into RouteDescriptor objects."""

import re

from route_docgen.extractor.base import DocFact, Param, RouteDescriptor, RouteFact

DEFAULT_RESPONSES = {
    "200": "Successful response",
    "400": "Bad request",
    "500": "Internal server error",
}

PLACEHOLDER_RE = re.compile(r":([A-Za-z0-9_$]+)")
NON_ALNUM_RE = re.compile(r"[^A-Za-z0-9]")


def path_placeholders(path: str) -> set[str]:
    """Return the names of `:name` placeholders in a path template."""
    return set(PLACEHOLDER_RE.findall(path))


def make_operation_id(method: str, path: str) -> str:
    """`GET /api/users/:id` -> `get_api_users__id`."""
    return method.lower() + NON_ALNUM_RE.sub("_", path)


def normalize(route: RouteFact, doc: DocFact | None) -> RouteDescriptor:
    """Build the descriptor for one route and its (optional) doc comment."""
    path = doc.explicit_path if doc is not None and doc.explicit_path else route.path
    method = route.method.value

    parameters = []
    responses = dict(DEFAULT_RESPONSES)
    summary = ""
    description = ""
    tags: list[str] = []
    security: list[str] = []

    if doc is not None:
        placeholders = path_placeholders(path)
        parameters = [
            Param(
                name=p.name,
                location="path" if p.name in placeholders else "query",
                required=p.required,
                param_type=p.type,
                description=p.description,
                default=p.default,
            )
            for p in doc.parameters
        ]
        if doc.responses:
            responses = dict(doc.responses)
        summary = doc.summary
        description = doc.description
        tags = list(doc.tags)
        security = list(doc.security)

    return RouteDescriptor(
        method=route.method,
        path=path,
        handler_names=list(route.handler_names),
        source_position=route.source_position,
        file=route.file,
        summary=summary or f"{method} {path}",
        description=description,
        parameters=parameters,
        responses=responses,
        tags=tags,
        security=security,
        operation_id=make_operation_id(method, path),
        documented=doc is not None,
    )


def assign_unique_operation_ids(descriptors: list[RouteDescriptor]) -> list[RouteDescriptor]:
    """Suffix colliding operation ids with _2, _3, ... in list order.

    The first descriptor with a given id keeps it unchanged.
    """
    seen: dict[str, int] = {}
    taken = {d.operation_id for d in descriptors}
    result = []
    for descriptor in descriptors:
        base = descriptor.operation_id
        if base not in seen:
            seen[base] = 1
            result.append(descriptor)
            continue
        count = seen[base]
        candidate = base
        while candidate in taken:
            count += 1
            candidate = f"{base}_{count}"
        seen[base] = count
        taken.add(candidate)
        result.append(descriptor.model_copy(update={"operation_id": candidate}))
    return result
