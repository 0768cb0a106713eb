#!/usr/bin/env python3
"""
Translation entry types and validation errors.

A record is either a SingularEntry (one translation, `str` is a list of
lines) or a PluralEntry (`idPlural` present, `str` is one list of lines
per plural form). List fields hold one element per physical PO line.
"""

from dataclasses import dataclass, field
from typing import Any, Optional, Union


VALIDATION_ERROR = "VALIDATION_ERROR"

# Comment/flag record keys mapped to entry attributes; default to []
COMMENT_FIELDS = {
    "translatorComments": "translator_comment",
    "extractedComments": "extracted_comment",
    "reference": "reference",
    "flag": "flags",
}

SINGULAR_FIELDS = frozenset({
    "translatorComments",
    "extractedComments",
    "reference",
    "flag",
    "prevId",
    "context",
    "id",
    "str",
})

PLURAL_FIELDS = SINGULAR_FIELDS | {"prevIdPlural", "idPlural"}


@dataclass
class SingularEntry:
    """
    Entry with a single translation.

    Attributes:
        msgid: msgid lines (at least one)
        msgstr: msgstr lines (at least one)
        translator_comment: "# " comment lines
        extracted_comment: "#. " comment lines
        reference: "#: " source references
        flags: "#, " gettext flags
        prev_msgid: previous msgid for fuzzy matches
        msgctxt: context disambiguator
    """
    msgid: list[str]
    msgstr: list[str]
    translator_comment: list[str] = field(default_factory=list)
    extracted_comment: list[str] = field(default_factory=list)
    reference: list[str] = field(default_factory=list)
    flags: list[str] = field(default_factory=list)
    prev_msgid: Optional[str] = None
    msgctxt: Optional[str] = None

    is_plural = False

    def to_dict(self) -> dict[str, Any]:
        """Convert back to record form (camelCase keys, unset optionals omitted)."""
        data = _common_dict(self)
        data["str"] = list(self.msgstr)
        return data


@dataclass
class PluralEntry:
    """
    Entry with plural forms.

    `msgstr` holds one list of lines per plural form, rendered as msgstr[N].
    """
    msgid: list[str]
    msgid_plural: list[str]
    msgstr: list[list[str]]
    translator_comment: list[str] = field(default_factory=list)
    extracted_comment: list[str] = field(default_factory=list)
    reference: list[str] = field(default_factory=list)
    flags: list[str] = field(default_factory=list)
    prev_msgid: Optional[str] = None
    prev_msgid_plural: Optional[str] = None
    msgctxt: Optional[str] = None

    is_plural = True

    def to_dict(self) -> dict[str, Any]:
        data = _common_dict(self)
        if self.prev_msgid_plural is not None:
            data["prevIdPlural"] = self.prev_msgid_plural
        data["idPlural"] = list(self.msgid_plural)
        data["str"] = [list(form) for form in self.msgstr]
        return data


Entry = Union[SingularEntry, PluralEntry]


def _common_dict(entry: Entry) -> dict[str, Any]:
    data: dict[str, Any] = {
        "translatorComments": list(entry.translator_comment),
        "extractedComments": list(entry.extracted_comment),
        "reference": list(entry.reference),
        "flag": list(entry.flags),
    }
    if entry.prev_msgid is not None:
        data["prevId"] = entry.prev_msgid
    if entry.msgctxt is not None:
        data["context"] = entry.msgctxt
    data["id"] = list(entry.msgid)
    return data


@dataclass
class ValidationIssue:
    """Structured validation problem for a single record field."""
    error_type: str
    field: str
    message: str
    suggestion: str
    line_num: int = 0  # 0 when the record did not come from a numbered line

    def to_dict(self) -> dict:
        return {
            "line": self.line_num,
            "type": self.error_type,
            "field": self.field,
            "message": self.message,
            "fix": self.suggestion,
        }


class EntryValidationError(ValueError):
    """
    A record matched neither the singular nor the plural entry shape.

    Attributes:
        issues: Every problem found in the record
        line_num: Input line the record came from (0 if unknown)
    """

    error_type = VALIDATION_ERROR

    def __init__(self, issues: list[ValidationIssue], line_num: int = 0):
        self.issues = list(issues)
        self.line_num = line_num
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        details = "; ".join(
            f"{issue.field or '<record>'}: {issue.message}" for issue in self.issues
        )
        prefix = f"line {self.line_num}: " if self.line_num else ""
        return f"{prefix}{VALIDATION_ERROR}: {details}"

    def at_line(self, line_num: int) -> "EntryValidationError":
        """Return a copy of this error tagged with an input line number."""
        issues = [
            ValidationIssue(
                error_type=issue.error_type,
                field=issue.field,
                message=issue.message,
                suggestion=issue.suggestion,
                line_num=line_num,
            )
            for issue in self.issues
        ]
        return EntryValidationError(issues, line_num=line_num)

    def to_dict(self) -> dict:
        return {
            "status": "error",
            "error_type": self.error_type,
            "line": self.line_num,
            "errors": [issue.to_dict() for issue in self.issues],
        }


class EncoderClosedError(RuntimeError):
    """Raised when an encoder is used after it stopped on an error."""
