"""Unit tests for line classification and document building."""

import pytest

from notation_bridge.document import Diagnostics, Metadata
from notation_bridge.line_classifier import (
    LINE_BAR,
    LINE_FORMATTING,
    LINE_METADATA,
    LINE_OTHER,
    LINE_PITCH,
    LINE_VOICE_LABEL,
    build_document,
    classify_line,
    split_pitch_line,
)
from notation_bridge.metadata import collect_metadata


@pytest.mark.parametrize(
    ("line", "kind"),
    [
        ("Tempo: 120", LINE_METADATA),
        ("TimeSig: 4/4", LINE_METADATA),
        ("Key: C", LINE_METADATA),
        ("Legato: 80", LINE_METADATA),
        ("Bar: 1", LINE_BAR),
        ("Bar: one", LINE_BAR),
        ("C4: X . . .", LINE_PITCH),
        ("F#3: X", LINE_PITCH),
        ("Bb-1: X", LINE_PITCH),
        ("V1: X . . .", LINE_VOICE_LABEL),
        ("voice2: X", LINE_VOICE_LABEL),
        ("# Title", LINE_FORMATTING),
        ("---", LINE_FORMATTING),
        ("**bold**", LINE_FORMATTING),
        ("```", LINE_FORMATTING),
        ("Here is the notation", LINE_OTHER),
        ("c4: X", LINE_OTHER),
    ],
)
def test_classify_line(line: str, kind: str) -> None:
    assert classify_line(line) == kind


def test_split_pitch_line() -> None:
    assert split_pitch_line("F#3:   X . .(3)   ~") == ("F#3", ["X", ".", ".(3)", "~"])
    assert split_pitch_line("C4:") == ("C4", [])


def _build(text: str):
    lines = text.splitlines()
    diagnostics = Diagnostics()
    document = build_document(lines, collect_metadata(lines), [], diagnostics)
    return document, diagnostics


def test_bars_keep_their_marker_index_and_order() -> None:
    document, diagnostics = _build("Bar: 3\nC4: X\nBar: 1\nE4: X\nG4: .\nBar: 3\n")
    assert [bar.index for bar in document.bars] == [3, 1, 3]
    assert [line.pitch for line in document.bars[1].pitch_lines] == ["E4", "G4"]
    assert document.bars[2].pitch_lines == []
    assert diagnostics.warnings == []


def test_invalid_bar_marker_keeps_current_bar_open() -> None:
    document, diagnostics = _build("Bar: 1\nC4: X\nBar: two\nE4: X\n")
    assert len(document.bars) == 1
    assert [line.pitch for line in document.bars[0].pitch_lines] == ["C4", "E4"]
    assert diagnostics.warnings == ["Invalid bar marker at line 3: Bar: two"]


def test_preamble_chatter_is_ignored_silently() -> None:
    document, diagnostics = _build("Sure, here you go!\nC4: X . . .\nTempo: 90\nBar: 1\nC4: X\n")
    assert document.header == ["Tempo: 90"]
    assert len(document.bars[0].pitch_lines) == 1
    assert diagnostics.warnings == []


def test_body_chatter_is_warned() -> None:
    _, diagnostics = _build("Bar: 1\nC4: X\nThis bar builds tension\n")
    assert diagnostics.warnings == ["Unrecognized content at line 3: This bar builds tension"]


def test_unrecognized_content_preview_is_truncated() -> None:
    _, diagnostics = _build("Bar: 1\n" + "z" * 80 + "\n")
    assert diagnostics.warnings == ["Unrecognized content at line 2: " + "z" * 50]


def test_voice_label_and_formatting_are_removed() -> None:
    document, diagnostics = _build("```\nBar: 1\nV1: X . . .\n## Chorus\nC4: X\n```\n")
    assert [line.pitch for line in document.bars[0].pitch_lines] == ["C4"]
    assert diagnostics.warnings == [
        "Removed formatting at line 1",
        "Removed invalid voice label at line 3: V1: X . . .",
        "Removed formatting at line 4",
        "Removed formatting at line 6",
    ]


def test_duplicate_and_invalid_metadata_in_header() -> None:
    document, diagnostics = _build("Tempo: slow\nTempo: 96\nTempo: 140\nKey: C\nBar: 1\n")
    assert document.header == ["Tempo: 96", "Key: C"]
    assert diagnostics.warnings == [
        "Invalid Tempo at line 1: Tempo: slow",
        "Ignored duplicate Tempo at line 3",
    ]


def test_body_restatement_is_dropped_silently() -> None:
    document, diagnostics = _build("Tempo: 96\nBar: 1\nTempo: 140\nC4: X\n")
    assert document.header == ["Tempo: 96"]
    assert diagnostics.warnings == []
    assert diagnostics.fixed == []


def test_body_only_metadata_is_hoisted() -> None:
    document, diagnostics = _build("Key: C\nBar: 1\nTempo: 90\nC4: X\n")
    assert document.header == ["Key: C", "Tempo: 90"]
    assert diagnostics.fixed == ["Moved Tempo: 90 above the first bar"]


def test_blank_lines_mark_bar_separation() -> None:
    document, _ = _build("Bar: 1\nC4: X\n\n\nBar: 2\nC4: X\nBar: 3\nC4: X\n")
    assert [bar.separated for bar in document.bars] == [False, True, False]


def test_synthesized_lines_lead_the_header() -> None:
    lines = ["Key: D", "Bar: 1"]
    document = build_document(lines, Metadata(key="D"), ["Tempo: 120", "TimeSig: 4/4"], Diagnostics())
    assert document.header == ["Tempo: 120", "TimeSig: 4/4", "Key: D"]
