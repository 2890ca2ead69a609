from __future__ import annotations

import pytest

ui = pytest.importorskip("ppe.ui")


@pytest.mark.parametrize(
    "widget, expected",
    [
        (".!projecteditor.!frame.!taginputwidget", True),
        (".!projecteditor.!frame.!taginputwidget.!listbox", True),
        (".!projecteditor.!frame.!taginputwidget.!frame.!entry", True),
        (".!projecteditor.!frame.!taginputwidget2", False),
        (".!projecteditor.!frame.!taginputwidget2.!frame.!entry", False),
        (".!projecteditor.!frame", False),
    ],
)
def test_is_within_matches_whole_path_components(widget: str, expected: bool) -> None:
    assert ui.is_within(widget, ".!projecteditor.!frame.!taginputwidget") is expected


def test_everything_is_within_the_root_window() -> None:
    assert ui.is_within(".!projecteditor", ".")
    assert ui.is_within(".", ".")
