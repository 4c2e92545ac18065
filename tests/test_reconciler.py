"""Unit tests for per-bar subdivision padding and truncation."""

from notation_bridge.document import Diagnostics
from notation_bridge.reconciler import reconcile_subdivisions


def test_exact_count_is_untouched() -> None:
    diagnostics = Diagnostics()
    tokens = ["X"] + ["."] * 15
    assert reconcile_subdivisions(tokens, 16, 1, "C4", diagnostics) == tokens
    assert diagnostics.warnings == []
    assert diagnostics.fixed == []


def test_short_pattern_is_padded_with_rests() -> None:
    diagnostics = Diagnostics()
    tokens = ["X", ".", ".", ".", "X", ".", ".", ".", "X", "."]
    result = reconcile_subdivisions(tokens, 12, 1, "C4", diagnostics)
    assert result == tokens + [".", "."]
    assert diagnostics.warnings == ["Bar 1 C4: Expected 12 subdivisions (when expanded), got 10"]
    assert diagnostics.fixed == ["Bar 1 C4: Added 2 subdivisions (. .) to reach 12"]


def test_large_padding_is_described_compressed() -> None:
    diagnostics = Diagnostics()
    result = reconcile_subdivisions(["X", "X", "X", "X"], 16, 2, "E4", diagnostics)
    assert len(result) == 16
    assert result[4:] == ["."] * 12
    assert diagnostics.fixed == ["Bar 2 E4: Added 12 subdivisions (.(12)) to reach 16"]


def test_long_pattern_is_truncated_from_the_end() -> None:
    diagnostics = Diagnostics()
    tokens = ["X"] * 16 + ["~", "~", "~", "~"]
    result = reconcile_subdivisions(tokens, 16, 5, "G2", diagnostics)
    assert result == ["X"] * 16
    assert diagnostics.warnings == ["Bar 5 G2: Expected 16 subdivisions (when expanded), got 20"]
    assert diagnostics.fixed == ["Bar 5 G2: Removed 4 excess subdivisions"]


def test_input_list_is_not_mutated() -> None:
    tokens = ["X", "."]
    reconcile_subdivisions(tokens, 4, 1, "C4", Diagnostics())
    assert tokens == ["X", "."]


def test_true_count_drives_the_truncation_message() -> None:
    diagnostics = Diagnostics()
    result = reconcile_subdivisions(["X"] * 16, 16, 1, "C4", diagnostics, count=1000)
    assert result == ["X"] * 16
    assert diagnostics.fixed == ["Bar 1 C4: Removed 984 excess subdivisions"]
