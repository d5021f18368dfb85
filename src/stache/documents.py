"""
Document loading and dumping helpers.

Builds Value trees from JSON/YAML text and writes them back. Keys are
sorted on output so dumps are stable.
"""
from __future__ import annotations

import json

import yaml

from stache.errors import DocumentError
from stache.values import Value, from_python, to_python


def document_from_python(data) -> Value:
    try:
        return from_python(data)
    except TypeError as e:
        raise DocumentError(f"Unsupported document content: {e}") from e


def document_from_json(s: str) -> Value:
    try:
        data = json.loads(s)
    except json.JSONDecodeError as e:
        raise DocumentError(f"Invalid JSON document: {e}") from e
    return document_from_python(data)


def document_from_yaml(s: str) -> Value:
    try:
        data = yaml.safe_load(s)
    except yaml.YAMLError as e:
        raise DocumentError(f"Invalid YAML document: {e}") from e
    return document_from_python(data)


def document_to_json(v: Value) -> str:
    return json.dumps(to_python(v), sort_keys=True)


def document_to_yaml(v: Value) -> str:
    return yaml.safe_dump(to_python(v))
