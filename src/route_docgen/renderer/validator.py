"""Sanity checks for rendered documentation files."""

import json
import re

import yaml

OPERATION_METHODS = {"get", "post", "put", "patch", "delete", "options", "head"}


def validate_json(files: dict[str, str]) -> dict[str, str]:
    """Check JSON files for format errors.

    Returns dict of {filename: error_message} for files with errors.
    """
    errors = {}
    for filename, content in files.items():
        if not filename.endswith(".json"):
            continue
        try:
            json.loads(content)
        except json.JSONDecodeError as e:
            errors[filename] = f"JSONDecodeError: {e.msg} (line {e.lineno})"
    return errors


def validate_yaml(files: dict[str, str]) -> dict[str, str]:
    """Check YAML files for format errors.

    Returns dict of {filename: error_message} for files with errors.
    """
    errors = {}
    for filename, content in files.items():
        if not filename.endswith((".yaml", ".yml")):
            continue
        try:
            yaml.safe_load(content)
        except yaml.YAMLError as e:
            errors[filename] = f"YAMLError: {e}"
    return errors


def validate_consistency(files: dict[str, str]) -> dict[str, str]:
    """Check that every OpenAPI operation has a heading in API.md."""
    if "openapi.json" not in files or "API.md" not in files:
        return {}

    doc = json.loads(files["openapi.json"])
    headings = set(re.findall(r"^#### (\S+ .+)$", files["API.md"], flags=re.MULTILINE))
    missing = [
        f"{method.upper()} {path}"
        for path, operations in doc.get("paths", {}).items()
        for method in operations
        if method in OPERATION_METHODS and f"{method.upper()} {path}" not in headings
    ]
    if missing:
        return {"API.md": "missing sections for " + ", ".join(missing)}
    return {}


def validate_documents(files: dict[str, str]) -> dict[str, str]:
    """Run all validations on rendered files.

    Returns dict of {filename: error_message} for all files with errors.
    The cross-format check only runs when the encodings parse.
    """
    errors = {}
    errors.update(validate_json(files))
    errors.update(validate_yaml(files))

    if not errors:
        errors.update(validate_consistency(files))

    return errors
