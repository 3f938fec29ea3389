"""OpenAPI 3 document rendering.

Builds the document as plain dicts so it can be dumped to JSON or YAML
without any further conversion.
"""

import json
import logging

import yaml

from route_docgen.config import RenderConfig
from route_docgen.extractor.base import RouteDescriptor
from route_docgen.renderer.grouping import require_routes

logger = logging.getLogger(__name__)

OPENAPI_VERSION = "3.0.0"


def build_openapi(descriptors: list[RouteDescriptor], config: RenderConfig) -> dict:
    """Build an OpenAPI document from route descriptors."""
    require_routes(descriptors)

    info = {
        "title": config.title,
        "version": config.version,
        "description": config.description,
    }
    if config.generated_at:
        info["x-generated-at"] = config.generated_at

    paths: dict[str, dict] = {}
    for descriptor in descriptors:
        methods = paths.setdefault(descriptor.path, {})
        key = descriptor.method.value.lower()
        if key in methods:
            logger.warning(
                "Duplicate route %s %s in %s ignored in OpenAPI output",
                descriptor.method.value, descriptor.path, descriptor.file,
            )
            continue
        methods[key] = _operation(descriptor)

    return {
        "openapi": OPENAPI_VERSION,
        "info": info,
        "servers": [s.model_dump(exclude_none=True) for s in config.servers],
        "paths": paths,
        "components": {"schemas": {}, "securitySchemes": {}},
    }


def _operation(descriptor: RouteDescriptor) -> dict:
    operation = {
        "summary": descriptor.summary,
        "description": descriptor.description,
        "operationId": descriptor.operation_id,
        "tags": list(descriptor.tags),
        "parameters": [
            {
                "name": p.name,
                "in": p.location,
                "required": p.required,
                "description": p.description,
                "schema": {"type": p.param_type.lower()},
            }
            for p in descriptor.parameters
        ],
        "responses": {
            code: {"description": description}
            for code, description in descriptor.responses.items()
        },
    }
    if descriptor.security:
        operation["security"] = [{scheme: []} for scheme in descriptor.security]
    return operation


def to_json(doc: dict) -> str:
    return json.dumps(doc, indent=2, ensure_ascii=False) + "\n"


def to_yaml(doc: dict) -> str:
    return yaml.safe_dump(doc, sort_keys=False, allow_unicode=True, default_flow_style=False)
