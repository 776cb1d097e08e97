from __future__ import annotations

from typing import Any

import jsonschema

SCRIPT_SCHEMA: dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "type": "object",
    "required": ["steps"],
    "properties": {
        "name": {"type": "string"},
        "description": {"type": "string"},
        "functions": {
            "oneOf": [
                {
                    "type": "array",
                    "items": {"$ref": "#/definitions/function"},
                },
                {
                    "type": "object",
                    "additionalProperties": {"$ref": "#/definitions/steps"},
                },
            ]
        },
        "steps": {"$ref": "#/definitions/steps", "minItems": 1},
    },
    "additionalProperties": False,
    "definitions": {
        "function": {
            "type": "object",
            "required": ["name", "steps"],
            "properties": {
                "func": {},
                "name": {"type": "string", "minLength": 1},
                "description": {"type": "string"},
                "steps": {"$ref": "#/definitions/steps"},
            },
            "additionalProperties": False,
        },
        "steps": {
            "type": "array",
            "items": {"$ref": "#/definitions/step"},
        },
        "step": {
            "type": "object",
            "minProperties": 1,
            "maxProperties": 1,
            "properties": {
                "label": {"type": ["string", "integer", "null"]},
                "callfunc": {
                    "type": "object",
                    "required": ["name"],
                    "properties": {
                        "name": {"type": "string"},
                        "on_success": {"$ref": "#/definitions/control"},
                        "on_failure": {"$ref": "#/definitions/control"},
                    },
                },
                "loop": {
                    "type": "object",
                    "required": ["count", "steps"],
                    "properties": {
                        "steps": {"$ref": "#/definitions/steps"},
                        "on_success": {"$ref": "#/definitions/control"},
                        "on_failure": {"$ref": "#/definitions/control"},
                    },
                },
            },
            "additionalProperties": {"$ref": "#/definitions/params"},
        },
        "params": {
            "type": ["object", "null"],
            "properties": {
                "on_success": {"$ref": "#/definitions/control"},
                "on_failure": {"$ref": "#/definitions/control"},
            },
        },
        "control": {
            "type": "object",
            "required": ["action"],
            "properties": {
                "action": {"enum": ["goto", "break", "return"]},
                "target": {"type": ["string", "integer"]},
            },
            "if": {"properties": {"action": {"const": "goto"}}},
            "then": {"required": ["target"]},
            "additionalProperties": False,
        },
    },
}


def validate_script(payload: dict[str, Any]) -> None:
    jsonschema.validate(instance=payload, schema=SCRIPT_SCHEMA)
