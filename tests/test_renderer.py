#!/usr/bin/env python3
"""
Tests for PO rendering:
1. Single-line vs. multi-line keyword blocks
2. Quote escaping
3. Fixed output order of comments, context and plural forms
"""

import pytest

from json2po.entry import PluralEntry, SingularEntry
from json2po.renderer import escape_quotes, format_field, render, render_block
from json2po.validator import validate


@pytest.fixture
def full_plural_entry():
    return validate({
        "translatorComments": ["Shown in the toolbar", "Keep it short"],
        "extractedComments": "TRANSLATORS: file count",
        "reference": ["src/files.js:12", "src/files.js:88"],
        "flag": "javascript-format",
        "prevId": "One \"old\" file",
        "prevIdPlural": "%d old files",
        "context": "toolbar",
        "id": "One file",
        "idPlural": ["%d files", " selected"],
        "str": [["Un fichier"], ["%d fichiers", " sélectionnés"]],
    })


def test_minimal_entry():
    entry = SingularEntry(msgid=["X"], msgstr=["Y"])

    assert render_block(entry) == 'msgid "X"\nmsgstr "Y"\n\n'


def test_render_ends_with_separator():
    lines = render(SingularEntry(msgid=["X"], msgstr=["Y"]))

    assert lines == ['msgid "X"', 'msgstr "Y"', ""]


def test_escape_quotes_only_touches_quotes():
    assert escape_quotes('Say "hi"') == 'Say \\"hi\\"'
    assert escape_quotes("back\\slash\ttab") == "back\\slash\ttab"


def test_format_field_single_line():
    assert format_field("msgid", ["Hello"]) == ['msgid "Hello"']


def test_format_field_multi_line():
    assert format_field("msgstr", ["Line one ", "line two"]) == [
        'msgstr ""',
        '"Line one "',
        '"line two"',
    ]


def test_multi_line_msgid_keeps_order():
    entry = SingularEntry(msgid=["first ", "second ", "third"], msgstr=["x"])

    assert render(entry)[:4] == ['msgid ""', '"first "', '"second "', '"third"']


def test_quotes_in_msgid_are_escaped():
    entry = SingularEntry(msgid=['Click "Save"'], msgstr=['Cliquez sur "Enregistrer"'])

    assert render(entry) == [
        'msgid "Click \\"Save\\""',
        'msgstr "Cliquez sur \\"Enregistrer\\""',
        "",
    ]


def test_plural_forms():
    entry = PluralEntry(msgid=["item"], msgid_plural=["items"], msgstr=[["A"], ["B", "C"]])

    assert render(entry) == [
        'msgid "item"',
        'msgid_plural "items"',
        'msgstr[0] "A"',
        'msgstr[1] ""',
        '"B"',
        '"C"',
        "",
    ]


def test_full_entry_order(full_plural_entry):
    assert render(full_plural_entry) == [
        "# Shown in the toolbar",
        "# Keep it short",
        "#. TRANSLATORS: file count",
        "#: src/files.js:12",
        "#: src/files.js:88",
        "#, javascript-format",
        '#| msgid "One \\"old\\" file"',
        '#| msgid_plural "%d old files"',
        'msgctxt "toolbar"',
        'msgid "One file"',
        'msgid_plural ""',
        '"%d files"',
        '" selected"',
        'msgstr[0] "Un fichier"',
        'msgstr[1] ""',
        '"%d fichiers"',
        '" sélectionnés"',
        "",
    ]


def test_no_comment_lines_by_default():
    block = render_block(validate({"id": "Hello", "str": "Merhaba"}))

    assert "#" not in block


def test_empty_optional_strings_are_skipped():
    entry = SingularEntry(msgid=["X"], msgstr=["Y"], msgctxt="", prev_msgid="")

    assert render(entry) == ['msgid "X"', 'msgstr "Y"', ""]


def test_empty_msgid_plural_renders_header_only():
    entry = PluralEntry(msgid=["item"], msgid_plural=[], msgstr=[["A"]])

    assert render(entry)[1] == 'msgid_plural ""'
    assert render(entry)[2] == 'msgstr[0] "A"'


def test_untranslated_entry():
    entry = validate({"id": "Hello", "str": ""})

    assert render_block(entry) == 'msgid "Hello"\nmsgstr ""\n\n'
