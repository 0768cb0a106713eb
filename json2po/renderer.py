#!/usr/bin/env python3
"""
PO text rendering for validated entries.

Output layout of one entry:
```
# Translator comment
#. Extracted comment
#: file.js:42
#, fuzzy
#| msgid "Previous source"
msgctxt "context"
msgid "Source text"
msgstr "Translated text"

```

Plural entries replace the msgstr line with:
```
msgid_plural "%d items"
msgstr[0] "Un élément"
msgstr[1] "%d éléments"
```

Each list element is one physical line. A single-element list renders on the
keyword line; longer lists render as `keyword ""` followed by one quoted line
per element.
"""

from .entry import Entry


def escape_quotes(s: str) -> str:
    """Escape double quotes. Nothing else is escaped."""
    return s.replace('"', '\\"')


def quote(s: str) -> str:
    return f'"{escape_quotes(s)}"'


def format_field(keyword: str, lines: list[str]) -> list[str]:
    """
    Format a keyword block (msgid, msgid_plural, msgstr, msgstr[N]).

    Args:
        keyword: The PO keyword
        lines: String fragments, one per output line

    Returns:
        List of formatted lines
    """
    if len(lines) == 1:
        return [f"{keyword} {quote(lines[0])}"]

    return [f'{keyword} ""'] + [quote(line) for line in lines]


def render(entry: Entry) -> list[str]:
    """
    Render one entry as PO lines.

    The last element is always an empty string, the blank separator line
    that terminates the entry.
    """
    lines = []

    for comment in entry.translator_comment:
        lines.append(f"# {comment}")

    for comment in entry.extracted_comment:
        lines.append(f"#. {comment}")

    for ref in entry.reference:
        lines.append(f"#: {ref}")

    for flag in entry.flags:
        lines.append(f"#, {flag}")

    if entry.prev_msgid:
        lines.append(f"#| msgid {quote(entry.prev_msgid)}")

    if entry.is_plural and entry.prev_msgid_plural:
        lines.append(f"#| msgid_plural {quote(entry.prev_msgid_plural)}")

    if entry.msgctxt:
        lines.append(f"msgctxt {quote(entry.msgctxt)}")

    lines.extend(format_field("msgid", entry.msgid))

    if entry.is_plural:
        lines.extend(format_field("msgid_plural", entry.msgid_plural))
        for idx, form in enumerate(entry.msgstr):
            lines.extend(format_field(f"msgstr[{idx}]", form))
    else:
        lines.extend(format_field("msgstr", entry.msgstr))

    lines.append("")
    return lines


def render_block(entry: Entry) -> str:
    """Render one entry as newline-terminated PO text, blank separator included."""
    return "".join(f"{line}\n" for line in render(entry))
