"""Tests for manifest line parsing."""

from __future__ import annotations

import io

from corpus_mixer.corpus.manifest import MalformedLine, ManifestRecord, iter_manifest, parse_line


def test_iter_manifest_splits_reference_and_text() -> None:
    handle = io.StringIO("wavs/a.wav|First line.\nwavs/b.wav|Second line.\r\n")

    records = list(iter_manifest(handle))

    assert records == [
        ManifestRecord(line_number=1, clip_reference="wavs/a.wav", transcript_text="First line."),
        ManifestRecord(line_number=2, clip_reference="wavs/b.wav", transcript_text="Second line."),
    ]


def test_iter_manifest_is_lazy() -> None:
    handle = io.StringIO("wavs/a.wav|one\nwavs/b.wav|two\n")
    records = iter_manifest(handle)

    first = next(records)

    assert first.line_number == 1
    assert handle.readline() == "wavs/b.wav|two\n"


def test_line_without_delimiter_is_malformed() -> None:
    record = parse_line("wavs/a.wav no delimiter", 7)

    assert isinstance(record, MalformedLine)
    assert record.line_number == 7
    assert "line 7" in record.describe()


def test_extra_fields_are_dropped() -> None:
    record = parse_line("wavs/a.wav|text|speaker|extra", 1)

    assert isinstance(record, ManifestRecord)
    assert record.transcript_text == "text"


def test_transcript_whitespace_is_untouched_and_blank_lines_skipped() -> None:
    handle = io.StringIO("\nwavs/a.wav|  spaced text \n   \n")

    records = list(iter_manifest(handle))

    assert len(records) == 1
    assert records[0].line_number == 2
    assert records[0].transcript_text == "  spaced text "
