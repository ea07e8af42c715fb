"""Query parameter type inference from observed string values."""

import re

INTEGER_VALUE = re.compile(r"^\d+$")
NUMBER_VALUE = re.compile(r"^\d*\.\d+$")
BOOLEAN_VALUES = ("true", "false")

MAX_EXAMPLES = 3


def _classify(value: str) -> str:
    if value in BOOLEAN_VALUES:
        return "boolean"
    if INTEGER_VALUE.match(value):
        return "integer"
    if NUMBER_VALUE.match(value):
        return "number"
    return "string"


def _resolve(kinds: set[str]) -> str:
    if kinds == {"boolean"}:
        return "boolean"
    if kinds == {"integer"}:
        return "integer"
    if kinds and kinds <= {"integer", "number"}:
        return "number"
    return "string"


def infer_parameter_type(values: list[str]) -> dict:
    """Infer the narrowest scalar type shared by every observed value.

    A single value that fits no pattern demotes the whole parameter to
    string. Integer and decimal values together widen to number.

    Returns {"type": ..., "examples": [...]} with up to three examples
    converted to the inferred type.
    """
    param_type = _resolve({_classify(v) for v in values})
    raw_examples = list(values)[:MAX_EXAMPLES]

    if param_type == "integer":
        examples = [int(v) for v in raw_examples]
    elif param_type == "number":
        examples = [float(v) for v in raw_examples]
    elif param_type == "boolean":
        examples = [v == "true" for v in raw_examples]
    else:
        examples = raw_examples

    return {"type": param_type, "examples": examples}
