"""JSON Schema inference from sample request and response bodies.

Each sample is turned into a schema with schema_from_value(), and the
schemas are folded left to right with merge_schemas(). Schemas use the
OpenAPI 3.0 dialect: null is expressed as "nullable" and type unions as
"anyOf".
"""

import json
import logging
from typing import Any

logger = logging.getLogger(__name__)

FALLBACK_SCHEMAS = {
    "request": {"type": "object", "description": "Request body"},
    "response": {"type": "string", "description": "Response content"},
}


class SchemaInferenceError(Exception):
    """Raised when valid JSON samples cannot be unified into a schema."""


def schema_from_value(value: Any) -> dict:
    """Infer the schema of a single decoded JSON value."""
    if value is None:
        return {"nullable": True}
    # bool is a subclass of int
    if isinstance(value, bool):
        return {"type": "boolean"}
    if isinstance(value, int):
        return {"type": "integer"}
    if isinstance(value, float):
        return {"type": "number"}
    if isinstance(value, str):
        return {"type": "string"}
    if isinstance(value, list):
        items: dict = {}
        for item in value:
            items = merge_schemas(items, schema_from_value(item))
        return {"type": "array", "items": items}
    if isinstance(value, dict):
        schema = {
            "type": "object",
            "properties": {key: schema_from_value(val) for key, val in value.items()},
        }
        if value:
            schema["required"] = list(value)
        return schema
    raise SchemaInferenceError(f"Unsupported JSON value of type {type(value).__name__}")


def merge_schemas(first: dict, second: dict) -> dict:
    """Merge two inferred schemas into one describing both.

    An empty schema carries no evidence and is the identity. Merging a
    schema with itself returns an equal schema.
    """
    nullable = first.get("nullable", False) or second.get("nullable", False)
    merged = _merge_core(_without_nullable(first), _without_nullable(second))
    if nullable:
        merged = {**merged, "nullable": True}
    return merged


def infer_schema(samples: list[str], role: str = "request") -> dict:
    """Infer one schema covering every sample that parses as JSON.

    Samples that are not JSON are ignored. When none are left, a
    permissive placeholder for the given role ("request" or "response")
    is returned instead.
    """
    if role not in FALLBACK_SCHEMAS:
        raise ValueError(f"Unknown schema role: {role}")

    values = []
    for sample in samples:
        try:
            values.append(json.loads(sample))
        except (json.JSONDecodeError, TypeError):
            logger.debug("Ignoring non-JSON %s sample", role)
        except RecursionError as e:
            raise SchemaInferenceError(f"Sample nested too deeply: {e}") from e

    if not values:
        return dict(FALLBACK_SCHEMAS[role])

    schema: dict = {}
    try:
        for value in values:
            schema = merge_schemas(schema, schema_from_value(value))
    except RecursionError as e:
        raise SchemaInferenceError(f"Schema inference failed: {e}") from e
    return schema


def _without_nullable(schema: dict) -> dict:
    return {k: v for k, v in schema.items() if k != "nullable"}


def _kind(schema: dict) -> str | None:
    schema_type = schema.get("type")
    if schema_type in ("integer", "number"):
        return "numeric"
    return schema_type


def _merge_core(first: dict, second: dict) -> dict:
    if not first:
        return dict(second)
    if not second:
        return dict(first)

    if "anyOf" in first or "anyOf" in second or _kind(first) != _kind(second):
        return _merge_union(first, second)

    kind = _kind(first)
    if kind == "object":
        return _merge_objects(first, second)
    if kind == "array":
        return {
            "type": "array",
            "items": merge_schemas(first.get("items", {}), second.get("items", {})),
        }
    if first["type"] == second["type"]:
        return dict(first)
    # integer with number
    return {"type": "number"}


def _merge_objects(first: dict, second: dict) -> dict:
    properties = dict(first.get("properties", {}))
    for name, prop in second.get("properties", {}).items():
        properties[name] = merge_schemas(properties[name], prop) if name in properties else prop

    present_in_second = set(second.get("required", []))
    required = [name for name in first.get("required", []) if name in present_in_second]

    schema = {"type": "object", "properties": properties}
    if required:
        schema["required"] = required
    return schema


def _merge_union(first: dict, second: dict) -> dict:
    variants: list[dict] = []
    for candidate in _variants(first) + _variants(second):
        for index, variant in enumerate(variants):
            if _kind(variant) == _kind(candidate):
                variants[index] = merge_schemas(variant, candidate)
                break
        else:
            variants.append(candidate)

    if len(variants) == 1:
        return variants[0]
    return {"anyOf": variants}


def _variants(schema: dict) -> list[dict]:
    if "anyOf" in schema:
        return list(schema["anyOf"])
    return [schema]
