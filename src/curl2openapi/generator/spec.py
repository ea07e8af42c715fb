"""OpenAPI document synthesis from a project's captures.

Captures are grouped by method and templated path; each group becomes
one operation whose parameters, request body and 200 response are
inferred from every capture in the group.
"""

import copy
import json
import logging
from urllib.parse import parse_qsl, urlsplit

import yaml
from pydantic import BaseModel

from curl2openapi.inference.params import infer_parameter_type
from curl2openapi.inference.schema import SchemaInferenceError, infer_schema
from curl2openapi.parser.base import Capture
from curl2openapi.parser.endpoint import (
    EndpointKey,
    MalformedURLInCapture,
    normalize_endpoint,
    origin_of,
)

logger = logging.getLogger(__name__)

OPENAPI_VERSION = "3.0.3"

BEARER_SCHEME = {"type": "http", "scheme": "bearer", "bearerFormat": "JWT"}

ERROR_RESPONSE = {
    "description": "Bad request",
    "content": {
        "application/json": {
            "schema": {
                "type": "object",
                "properties": {
                    "error": {"type": "string"},
                    "message": {"type": "string"},
                },
            },
        },
    },
}


class EmptyProjectError(ValueError):
    """Raised when there are no captures to build a spec from."""


class SpecResult(BaseModel):
    """A synthesized document and the captures that had to be skipped."""

    document: dict
    warnings: list[str] = []


class _NoAliasDumper(yaml.SafeDumper):
    def ignore_aliases(self, data):
        return True


def build_spec(
    captures: list[Capture],
    title: str = "Generated API",
    description: str | None = "Generated from cURL commands",
    version: str = "1.0.0",
) -> SpecResult:
    """Synthesize an OpenAPI document from captures.

    Captures with URLs that cannot be split into origin and path are
    left out and reported in SpecResult.warnings.
    """
    if not captures:
        raise EmptyProjectError("No captures found for project")

    warnings: list[str] = []
    usable: list[Capture] = []
    servers: list[dict] = []
    seen_origins: set[str] = set()
    groups: dict[EndpointKey, list[Capture]] = {}

    for capture in captures:
        try:
            origin = origin_of(capture.url)
            key = normalize_endpoint(capture.url, capture.method)
        except MalformedURLInCapture as e:
            logger.warning("%s", e)
            warnings.append(str(e))
            continue
        usable.append(capture)
        if origin not in seen_origins:
            seen_origins.add(origin)
            servers.append({"url": origin, "description": "API Server"})
        groups.setdefault(key, []).append(capture)

    paths: dict[str, dict] = {}
    operation_ids: set[str] = set()
    for key, group in groups.items():
        operation = _build_operation(key, group, warnings)
        operation["operationId"] = _unique_id(operation["operationId"], operation_ids)
        paths.setdefault(key.path, {})[key.method] = operation

    document = {
        "openapi": OPENAPI_VERSION,
        "info": {"title": title, "version": version, "description": description},
        "servers": servers,
        "paths": paths,
        "components": {
            "schemas": _build_schemas(captures, warnings),
            "securitySchemes": _infer_security_schemes(captures),
        },
    }
    logger.info(
        "Built spec with %d path(s) from %d capture(s), %d skipped",
        len(paths), len(usable), len(captures) - len(usable),
    )
    return SpecResult(document=document, warnings=warnings)


def render_spec(document: dict, fmt: str = "yaml") -> str:
    """Serialize a document as YAML or JSON, keeping key order."""
    if fmt == "json":
        return json.dumps(document, indent=2, ensure_ascii=False) + "\n"
    if fmt == "yaml":
        return yaml.dump(
            document,
            Dumper=_NoAliasDumper,
            sort_keys=False,
            allow_unicode=True,
            default_flow_style=False,
            indent=2,
        )
    raise ValueError(f"Unknown output format: {fmt}")


def convert_spec(text: str, fmt: str) -> str:
    """Re-serialize a YAML or JSON document in another format."""
    return render_spec(yaml.safe_load(text), fmt)


def generate_spec(
    captures: list[Capture],
    title: str = "Generated API",
    description: str | None = "Generated from cURL commands",
    version: str = "1.0.0",
    fmt: str = "yaml",
) -> str:
    """Build a document from captures and serialize it."""
    result = build_spec(captures, title=title, description=description, version=version)
    return render_spec(result.document, fmt)


def generate_from_project(store, project_id: str, **options) -> SpecResult:
    """Build a document from every capture a store holds for a project."""
    captures = store.find_many_by_project(project_id)
    if not captures:
        raise EmptyProjectError(f"No captures found for project {project_id}")
    return build_spec(captures, **options)


def _build_operation(key: EndpointKey, captures: list[Capture], warnings: list[str]) -> dict:
    method = key.method.upper()
    operation = {
        "summary": f"{method} {key.path}",
        "operationId": _operation_id(key),
        "description": f"Generated from {len(captures)} cURL command(s)",
        "parameters": _extract_parameters(key, captures, warnings),
        "responses": _build_responses(captures, warnings),
    }

    request_body = _build_request_body(key, captures, warnings)
    if request_body:
        operation["requestBody"] = request_body
    return operation


def _operation_id(key: EndpointKey) -> str:
    """getUsers for GET /users, getUsersById for GET /users/{id}."""
    words = []
    for segment in key.path.split("/"):
        placeholder = segment.startswith("{") and segment.endswith("}")
        word = "".join(ch for ch in segment if ch.isalnum())
        if word:
            words.append(("By" if placeholder else "") + word[:1].upper() + word[1:])
    return key.method + "".join(words)


def _unique_id(operation_id: str, taken: set[str]) -> str:
    candidate = operation_id
    suffix = 2
    while candidate in taken:
        candidate = f"{operation_id}{suffix}"
        suffix += 1
    taken.add(candidate)
    return candidate


def _extract_parameters(key: EndpointKey, captures: list[Capture], warnings: list[str]) -> list[dict]:
    parameters = []

    path_names: list[str] = []
    for segment in key.path.split("/"):
        if segment.startswith("{") and segment.endswith("}") and segment[1:-1] not in path_names:
            path_names.append(segment[1:-1])
    for name in path_names:
        parameters.append({
            "name": name,
            "in": "path",
            "required": True,
            "schema": {"type": "string"},
            "description": "Path parameter",
        })

    query_values: dict[str, list[str]] = {}
    for capture in captures:
        for name, value in parse_qsl(urlsplit(capture.url).query, keep_blank_values=True):
            query_values.setdefault(name, []).append(value)
    for name, values in query_values.items():
        if name in path_names:
            message = f"Query parameter '{name}' of {key} shadows a path parameter; dropped"
            logger.warning(message)
            warnings.append(message)
            continue
        parameters.append({
            "name": name,
            "in": "query",
            "required": False,
            "schema": infer_parameter_type(values),
            "description": "Query parameter",
        })

    return parameters


def _build_request_body(key: EndpointKey, captures: list[Capture], warnings: list[str]) -> dict | None:
    bodies = [c.body for c in captures if c.body and c.body.strip()]
    if not bodies:
        return None

    try:
        schema = infer_schema(bodies, role="request")
    except SchemaInferenceError as e:
        message = f"Failed to infer request body schema for {key}: {e}"
        logger.warning(message)
        warnings.append(message)
        schema = {"type": "object"}

    return {"required": True, "content": {"application/json": {"schema": schema}}}


def _build_responses(captures: list[Capture], warnings: list[str]) -> dict:
    samples = [c.response for c in captures if c.response and c.response.strip()]
    schema = {"type": "object"}
    if samples:
        try:
            schema = infer_schema(samples, role="response")
        except SchemaInferenceError as e:
            message = f"Failed to infer response schema: {e}"
            logger.warning(message)
            warnings.append(message)

    return {
        "200": {
            "description": "Successful response",
            "content": {"application/json": {"schema": schema}},
        },
        "400": copy.deepcopy(ERROR_RESPONSE),
    }


def _build_schemas(captures: list[Capture], warnings: list[str]) -> dict:
    schemas = {}
    bodies = [c.body for c in captures if c.body and c.body.strip()]
    if bodies:
        try:
            schemas["RequestBody"] = infer_schema(bodies, role="request")
        except SchemaInferenceError as e:
            message = f"Failed to infer shared request schema: {e}"
            logger.warning(message)
            warnings.append(message)
    return schemas


def _infer_security_schemes(captures: list[Capture]) -> dict:
    has_auth = any(
        name.lower() == "authorization" for capture in captures for name in capture.headers
    )
    return {"bearerAuth": dict(BEARER_SCHEME)} if has_auth else {}
