"""Validates generated Swagger documents for internal consistency."""

import re
from typing import Any

from api2swagger.generator.swagger import Document
from api2swagger.generator.types import DEFINITIONS_PREFIX

PATH_TEMPLATE = re.compile(r"\{([^}/]+)\}")
OPERATION_KEYS = ("get", "delete", "post", "put", "patch")


def validate_refs(document: Document) -> dict[str, str]:
    """Check that every $ref points at an existing definition.

    Returns dict of {location: error_message} for references that do not resolve.
    """
    data = document.model_dump(by_alias=True, exclude_none=True)
    definitions = data.get("definitions", {})
    errors = {}
    for location, ref in _iter_refs(data, ""):
        name = ref.removeprefix(DEFINITIONS_PREFIX)
        if not ref.startswith(DEFINITIONS_PREFIX) or name not in definitions:
            errors[location] = f"unresolved $ref: {ref}"
    return errors


def validate_path_parameters(document: Document) -> dict[str, str]:
    """Check that each templated path segment has exactly one path parameter.

    Returns dict of {"METHOD path": error_message} for operations that disagree.
    """
    errors = {}
    for path, item in document.paths.items():
        expected = sorted(PATH_TEMPLATE.findall(path))
        for key in OPERATION_KEYS:
            operation = getattr(item, key)
            if operation is None:
                continue
            declared = sorted(p.name for p in operation.parameters or [] if p.location == "path")
            if declared != expected:
                errors[f"{key.upper()} {path}"] = (
                    f"path parameters {declared} do not match template {expected}"
                )
    return errors


def validate_document(document: Document) -> dict[str, str]:
    """Run all validations on a document.

    Returns dict of {location: error_message} for every problem found.
    """
    errors = {}
    errors.update(validate_refs(document))
    errors.update(validate_path_parameters(document))
    return errors


def _iter_refs(node: Any, location: str):
    if isinstance(node, dict):
        for key, value in node.items():
            if key == "$ref" and isinstance(value, str):
                yield location or "/", value
            else:
                yield from _iter_refs(value, f"{location}/{_escape(str(key))}")
    elif isinstance(node, list):
        for i, value in enumerate(node):
            yield from _iter_refs(value, f"{location}/{i}")


def _escape(token: str) -> str:
    # JSON pointer escaping
    return token.replace("~", "~0").replace("/", "~1")
