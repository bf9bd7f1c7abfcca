"""JSON Schema utilities for tool declarations."""

from typing import Any

from jsonschema import Draft7Validator
from jsonschema.exceptions import SchemaError


def check_tool_schema(schema: dict[str, Any]) -> list[str]:
    """
    Check that a tool input schema is itself a valid Draft 7 schema.

    Args:
        schema: JSON Schema to check

    Returns:
        List of problems (empty if the schema is valid)
    """
    if not schema:
        return []

    try:
        Draft7Validator.check_schema(schema)
    except SchemaError as e:
        return [e.message]

    if schema.get("type") != "object":
        return ["tool input schema must have type 'object'"]

    properties = schema.get("properties", {})
    return [
        f"required property '{name}' is not declared"
        for name in schema.get("required", [])
        if name not in properties
    ]


def create_tool_schema(
    parameters: list[dict[str, Any]],
    required: list[str] | None = None
) -> dict[str, Any]:
    """
    Create a JSON Schema from a list of parameter definitions.

    Args:
        parameters: List of parameter definitions with name, type, description
        required: List of required parameter names

    Returns:
        JSON Schema dictionary
    """
    properties = {}

    type_mapping = {
        "string": "string",
        "str": "string",
        "integer": "integer",
        "int": "integer",
        "number": "number",
        "float": "number",
        "boolean": "boolean",
        "bool": "boolean",
        "array": "array",
        "list": "array",
        "object": "object",
        "dict": "object",
    }

    for param in parameters:
        param_schema: dict[str, Any] = {
            "type": type_mapping.get(param.get("type", "string"), "string"),
            "description": param.get("description", ""),
        }

        if "enum" in param:
            param_schema["enum"] = param["enum"]

        if "default" in param:
            param_schema["default"] = param["default"]

        properties[param["name"]] = param_schema

    schema: dict[str, Any] = {
        "type": "object",
        "properties": properties,
    }

    if required is not None:
        schema["required"] = required
    else:
        schema["required"] = [
            p["name"] for p in parameters
            if p.get("required", True) and "default" not in p
        ]

    return schema
