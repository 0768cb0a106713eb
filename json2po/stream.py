#!/usr/bin/env python3
"""
Streaming JSON-to-PO encoder.

Input is newline-delimited JSON, one translation record per line. Output is
PO text, one block per record, each block terminated by a blank line.

Records are processed one at a time and in order. The encoder only pulls
the next record once the current block has been handed to the consumer, so a
slow consumer holds back the input. The first invalid record stops the
stream: blocks already produced stay produced, nothing after it is emitted.

Example:
    encoder = PoEncoder()
    with open("messages.ndjson", encoding="utf-8") as src, \\
            open("messages.po", "w", encoding="utf-8") as dst:
        encoder.pipe(src, dst)
"""

import json
import logging
from collections.abc import Iterable, Iterator
from typing import Any, Optional, TextIO

from .entry import EncoderClosedError, EntryValidationError, ValidationIssue
from .renderer import render_block
from .validator import validate

logger = logging.getLogger(__name__)


def iter_records(
    lines: Iterable[str],
    strict: bool = True,
) -> Iterator[tuple[int, Any]]:
    """
    Decode newline-delimited JSON.

    Args:
        lines: Text lines (trailing newlines are ignored)
        strict: Raise on undecodable lines instead of skipping them

    Yields:
        (line_num, record) pairs, line numbers starting at 1

    Raises:
        EntryValidationError: On an undecodable line in strict mode
    """
    for line_num, line in enumerate(lines, 1):
        line = line.rstrip("\r\n")
        if not line.strip():
            continue

        try:
            record = json.loads(line)
        except json.JSONDecodeError as e:
            if strict:
                raise EntryValidationError([ValidationIssue(
                    error_type="INVALID_JSON",
                    field="",
                    message=f"Invalid JSON: {e}",
                    suggestion="Each line must hold exactly one complete JSON object",
                    line_num=line_num,
                )], line_num=line_num) from e
            logger.warning("Skipping line %d: invalid JSON (%s)", line_num, e)
            continue

        yield line_num, record


class PoEncoder:
    """
    Record-at-a-time PO encoder.

    One encoder handles one stream. After a record fails validation, or the
    sink fails during pipe(), the encoder is closed for good and any further
    use raises EncoderClosedError. Streams already running on the encoder
    stop before pulling their next record.
    """

    def __init__(self, strict: bool = True):
        """
        Initialize encoder.

        Args:
            strict: Fail on lines that are not valid JSON (False skips them).
                Records that fail validation always stop the stream.
        """
        self.strict = strict
        self.entries_written = 0
        self.error: Optional[Exception] = None

    @property
    def failed(self) -> bool:
        return self.error is not None

    def encode(self, records: Iterable[Any]) -> Iterator[str]:
        """
        Encode decoded records lazily.

        Args:
            records: Decoded records (errors report the 1-based record index as line)

        Yields:
            One PO block per record

        Raises:
            EncoderClosedError: If the encoder already failed
        """
        self._check_open()
        return self._encode(enumerate(records, 1))

    def encode_lines(self, lines: Iterable[str]) -> Iterator[str]:
        """Encode newline-delimited JSON text lines lazily."""
        self._check_open()
        return self._encode(iter_records(lines, strict=self.strict))

    def pipe(self, lines: Iterable[str], sink: TextIO) -> int:
        """
        Encode NDJSON lines and write each block to sink as soon as it is ready.

        Blocks written before an error stay in the sink; the sink is flushed
        either way.

        Args:
            lines: NDJSON text lines, e.g. an open text file
            sink: Object with a write(str) method

        Returns:
            Number of entries written by this call
        """
        count = 0
        try:
            for block in self.encode_lines(lines):
                sink.write(block)
                count += 1
        except Exception as e:
            self._fail(e)
            raise
        finally:
            flush = getattr(sink, "flush", None)
            if flush is not None:
                flush()
        return count

    def _encode(self, numbered: Iterable[tuple[int, Any]]) -> Iterator[str]:
        records = iter(numbered)
        try:
            while True:
                self._check_open()
                try:
                    num, record = next(records)
                except StopIteration:
                    return

                try:
                    entry = validate(record)
                except EntryValidationError as e:
                    raise e.at_line(num) from None

                logger.debug("Encoding record %d (%s)", num, "plural" if entry.is_plural else "singular")
                yield render_block(entry)
                # Resumed, so the consumer took the block
                self.entries_written += 1
        except EncoderClosedError:
            raise
        except Exception as e:
            self._fail(e)
            raise

    def _fail(self, error: Exception) -> None:
        if self.error is None:
            self.error = error
            logger.error("Stopping PO stream: %s", error)

    def _check_open(self) -> None:
        if self.error is not None:
            raise EncoderClosedError(f"Encoder stopped after an error: {self.error}")


def encode(records: Iterable[Any]) -> Iterator[str]:
    """Encode decoded records with a fresh encoder."""
    return PoEncoder().encode(records)


def dumps(records: Iterable[Any]) -> str:
    """Encode decoded records and return the whole PO text."""
    return "".join(encode(records))
