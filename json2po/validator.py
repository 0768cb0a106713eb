#!/usr/bin/env python3
"""
Record validation for translation entries.

Validation runs in two steps:

1. normalize() coerces every list field given as a bare string into a
   one-element list and fills in the empty defaults for comment/flag fields.
2. validate() picks the entry variant from the presence of `idPlural` and
   checks the normalized record against that variant's closed field set.

`context`, `prevId` and `prevIdPlural` are plain strings and are never
coerced.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from .entry import (
    COMMENT_FIELDS,
    PLURAL_FIELDS,
    SINGULAR_FIELDS,
    Entry,
    EntryValidationError,
    PluralEntry,
    SingularEntry,
    ValidationIssue,
)

logger = logging.getLogger(__name__)

LIST_FIELDS = tuple(COMMENT_FIELDS) + ("id", "idPlural", "str")


@dataclass(frozen=True)
class EntrySchema:
    """Field layout of one entry variant."""
    name: str
    fields: frozenset
    scalar_fields: tuple[str, ...]
    plural: bool


SINGULAR_SCHEMA = EntrySchema(
    name="singular",
    fields=SINGULAR_FIELDS,
    scalar_fields=("prevId", "context"),
    plural=False,
)

PLURAL_SCHEMA = EntrySchema(
    name="plural",
    fields=PLURAL_FIELDS,
    scalar_fields=("prevId", "prevIdPlural", "context"),
    plural=True,
)


def normalize(record: Mapping) -> dict[str, Any]:
    """
    Coerce single values to one-element lists and apply defaults.

    Args:
        record: Decoded record (not modified)

    Returns:
        New dict with list fields wrapped and comment fields defaulted to []
    """
    data = dict(record)

    for key in COMMENT_FIELDS:
        data.setdefault(key, [])

    for key in LIST_FIELDS:
        if isinstance(data.get(key), str):
            data[key] = [data[key]]

    return data


def select_schema(record: Mapping) -> EntrySchema:
    """Pick the entry variant; `idPlural` is the discriminating field."""
    return PLURAL_SCHEMA if "idPlural" in record else SINGULAR_SCHEMA


def validate(record: Any) -> Entry:
    """
    Validate one decoded record and build the matching entry.

    Args:
        record: Value decoded from one input line

    Returns:
        SingularEntry or PluralEntry

    Raises:
        EntryValidationError: If the record fits neither entry shape
    """
    if not isinstance(record, Mapping):
        raise EntryValidationError([ValidationIssue(
            error_type="NOT_AN_OBJECT",
            field="",
            message=f"Expected an object, got {_type_name(record)}",
            suggestion='Each record must be a JSON object such as {"id": "...", "str": "..."}',
        )])

    data = normalize(record)
    schema = select_schema(data)
    issues = check(data, schema)
    if issues:
        logger.debug("Rejected %s record: %d issue(s)", schema.name, len(issues))
        raise EntryValidationError(issues)

    return _build_entry(data, schema)


def check(data: Mapping, schema: EntrySchema) -> list[ValidationIssue]:
    """
    Check a normalized record against a schema.

    Returns:
        List of issues (empty if the record is valid)
    """
    issues = []

    for key in sorted(set(data) - schema.fields, key=str):
        issues.append(ValidationIssue(
            error_type="UNKNOWN_FIELD",
            field=str(key),
            message=f"Field '{key}' is not allowed in a {schema.name} entry",
            suggestion=_unknown_field_hint(key, schema),
        ))

    for key in COMMENT_FIELDS:
        _check_string_list(issues, key, data[key])

    for key in schema.scalar_fields:
        if key not in data:
            continue
        if not isinstance(data[key], str):
            issues.append(_wrong_type(key, data[key], "a string"))
        elif not data[key]:
            issues.append(_empty(key, f"'{key}' must not be an empty string", f"Remove '{key}' or give it a value"))

    if "id" not in data:
        issues.append(_missing("id"))
    else:
        _check_string_list(issues, "id", data["id"], required=True)
        # msgid "" is reserved for the PO header entry
        if _is_string_list(data["id"]) and data["id"] and not "".join(data["id"]):
            issues.append(_empty("id", "'id' must not be empty text", "Give 'id' the source string to translate"))

    if schema.plural:
        _check_string_list(issues, "idPlural", data["idPlural"])

    if "str" not in data:
        issues.append(_missing("str"))
    elif schema.plural:
        _check_plural_forms(issues, data["str"])
    else:
        _check_string_list(issues, "str", data["str"], required=True)

    return issues


def _check_string_list(
    issues: list[ValidationIssue],
    key: str,
    value: Any,
    required: bool = False,
) -> None:
    """Check that value is a list of strings (non-empty when required)."""
    if not isinstance(value, list):
        issues.append(_wrong_type(key, value, "a string or a list of strings"))
        return

    if required and not value:
        issues.append(ValidationIssue(
            error_type="EMPTY_FIELD",
            field=key,
            message=f"'{key}' must contain at least one line",
            suggestion=f'Give \'{key}\' a string or a non-empty list of strings',
        ))

    for i, item in enumerate(value):
        if not isinstance(item, str):
            issues.append(_wrong_type(f"{key}[{i}]", item, "a string"))


def _check_plural_forms(issues: list[ValidationIssue], value: Any) -> None:
    if not isinstance(value, list):
        issues.append(_wrong_type("str", value, "a list with one entry per plural form"))
        return

    if not value:
        issues.append(ValidationIssue(
            error_type="EMPTY_FIELD",
            field="str",
            message="Plural entry needs at least one plural form in 'str'",
            suggestion='Use e.g. "str": [["one item"], ["%d items"]]',
        ))

    for i, form in enumerate(value):
        if not isinstance(form, list):
            issues.append(_wrong_type(f"str[{i}]", form, "a list of strings (one plural form)"))
            continue
        _check_string_list(issues, f"str[{i}]", form, required=True)


def _build_entry(data: Mapping, schema: EntrySchema) -> Entry:
    comments = {attr: list(data[key]) for key, attr in COMMENT_FIELDS.items()}

    if schema.plural:
        return PluralEntry(
            msgid=list(data["id"]),
            msgid_plural=list(data["idPlural"]),
            msgstr=[list(form) for form in data["str"]],
            prev_msgid=data.get("prevId"),
            prev_msgid_plural=data.get("prevIdPlural"),
            msgctxt=data.get("context"),
            **comments,
        )

    return SingularEntry(
        msgid=list(data["id"]),
        msgstr=list(data["str"]),
        prev_msgid=data.get("prevId"),
        msgctxt=data.get("context"),
        **comments,
    )


def _is_string_list(value: Any) -> bool:
    return isinstance(value, list) and all(isinstance(item, str) for item in value)


def _empty(key: str, message: str, suggestion: str) -> ValidationIssue:
    return ValidationIssue(
        error_type="EMPTY_FIELD",
        field=key,
        message=message,
        suggestion=suggestion,
    )


def _missing(key: str) -> ValidationIssue:
    return ValidationIssue(
        error_type="MISSING_FIELD",
        field=key,
        message=f"Required field '{key}' is missing",
        suggestion=f"Add '{key}' as a string or a list of strings",
    )


def _wrong_type(key: str, value: Any, expected: str) -> ValidationIssue:
    return ValidationIssue(
        error_type="WRONG_TYPE",
        field=key,
        message=f"'{key}' must be {expected}, got {_type_name(value)}",
        suggestion=f"Change '{key}' to {expected}",
    )


def _unknown_field_hint(key: Any, schema: EntrySchema) -> str:
    if key == "prevIdPlural" and not schema.plural:
        return "'prevIdPlural' is only allowed together with 'idPlural'"
    allowed = ", ".join(sorted(schema.fields))
    return f"Remove '{key}'. Allowed fields: {allowed}"


def _type_name(value: Any) -> str:
    """JSON-flavoured type name for error messages."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, Mapping):
        return "object"
    return type(value).__name__
