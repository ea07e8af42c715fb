"""Structural checks for generated OpenAPI documents."""

import yaml
from pydantic import BaseModel


class ValidationResult(BaseModel):
    is_valid: bool
    errors: list[str] = []
    warnings: list[str] = []


def validate_spec(spec_text: str) -> ValidationResult:
    """Check a YAML or JSON OpenAPI document for required fields.

    Missing openapi/info fields are errors. An empty paths section, or
    security schemes that no operation references, are warnings.
    """
    try:
        spec = yaml.safe_load(spec_text)
    except yaml.YAMLError as e:
        return ValidationResult(is_valid=False, errors=[f"Invalid YAML/JSON format: {e}"])

    if not isinstance(spec, dict):
        return ValidationResult(is_valid=False, errors=["Document is not a mapping"])

    errors = []
    warnings = []

    if not spec.get("openapi"):
        errors.append("Missing required field: openapi")

    info = spec.get("info")
    if not isinstance(info, dict):
        errors.append("Missing required field: info")
    else:
        if not info.get("title"):
            errors.append("Missing required field: info.title")
        if not info.get("version"):
            errors.append("Missing required field: info.version")

    paths = spec.get("paths") or {}
    if not paths:
        warnings.append("No paths defined in the specification")

    schemes = (spec.get("components") or {}).get("securitySchemes") or {}
    if schemes and not _uses_security(spec, paths):
        warnings.append("Security schemes defined but not used in any operations")

    return ValidationResult(is_valid=not errors, errors=errors, warnings=warnings)


def _uses_security(spec: dict, paths: dict) -> bool:
    if spec.get("security"):
        return True
    for path_item in paths.values():
        if not isinstance(path_item, dict):
            continue
        for operation in path_item.values():
            if isinstance(operation, dict) and operation.get("security"):
                return True
    return False
