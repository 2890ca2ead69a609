from __future__ import annotations

import pytest

from ppe.tag_input import TagInput

POOL = ["React", "Redux", "Vue"]


def test_query_filters_pool_case_insensitively_in_pool_order() -> None:
    tags = TagInput(POOL)

    assert tags.set_query("re") == ["React", "Redux"]
    assert tags.set_query("RE") == ["React", "Redux"]
    assert tags.set_query("") == POOL


def test_suggestions_exclude_selected_values() -> None:
    tags = TagInput(POOL, ["Redux"])

    assert tags.set_query("re") == ["React"]


def test_select_appends_and_clears_query() -> None:
    tags = TagInput(POOL)
    tags.set_query("re")

    assert tags.select("React")
    assert tags.selected == ["React"]
    assert tags.query == ""


def test_select_is_idempotent() -> None:
    tags = TagInput(POOL)
    tags.select("React")

    assert not tags.select("React")
    assert tags.selected == ["React"]


def test_initial_selection_is_deduplicated() -> None:
    assert TagInput(POOL, ["Vue", "Vue", "React"]).selected == ["Vue", "React"]


def test_remove_then_select_restores_value() -> None:
    tags = TagInput(POOL, ["React", "Vue"])

    assert tags.remove("React")
    assert tags.selected == ["Vue"]
    assert not tags.remove("React")

    tags.select("React")
    assert tags.selected == ["Vue", "React"]


def test_commit_free_text_adds_trimmed_custom_value() -> None:
    tags = TagInput(POOL)
    tags.set_query("  Svelte  ")

    assert tags.commit_free_text()
    assert tags.selected == ["Svelte"]
    assert tags.query == ""


@pytest.mark.parametrize("query", ["", "   ", "React"])
def test_commit_free_text_ignores_empty_and_exact_pool_entries(query: str) -> None:
    tags = TagInput(POOL)
    tags.set_query(query)

    assert not tags.commit_free_text()
    assert tags.selected == []
    assert tags.query == query


def test_commit_free_text_accepts_pool_entry_with_different_case() -> None:
    tags = TagInput(POOL)
    tags.set_query("react")

    assert tags.commit_free_text()
    assert tags.selected == ["react"]


def test_commit_free_text_never_duplicates() -> None:
    tags = TagInput(POOL, ["Svelte"])
    tags.set_query("Svelte")

    assert not tags.commit_free_text()
    assert tags.selected == ["Svelte"]


def test_selected_never_contains_duplicates() -> None:
    tags = TagInput(POOL)
    for value in ["React", "Svelte", "React", "Svelte", "Vue"]:
        tags.select(value)
        tags.set_query(value)
        tags.commit_free_text()

    assert tags.selected == ["React", "Svelte", "Vue"]


def test_backspace_at_empty_removes_last_value() -> None:
    tags = TagInput(POOL, ["A", "B"])

    assert tags.backspace_at_empty() == "B"
    assert tags.selected == ["A"]


def test_backspace_with_query_or_nothing_selected_is_a_no_op() -> None:
    tags = TagInput(POOL, ["A"])
    tags.set_query("x")
    assert tags.backspace_at_empty() is None
    assert tags.selected == ["A"]

    empty = TagInput(POOL)
    assert empty.backspace_at_empty() is None


def test_handle_key_dispatches_enter_and_backspace() -> None:
    tags = TagInput(POOL, ["A"])
    tags.set_query("Custom")

    assert tags.handle_key("Return")
    assert tags.selected == ["A", "Custom"]

    assert tags.handle_key("BackSpace")
    assert tags.selected == ["A"]

    assert not tags.handle_key("Tab")
    tags.set_query("R")
    assert not tags.handle_key("BackSpace")


def test_dropdown_opens_on_focus_or_typing_and_closes_only_explicitly() -> None:
    tags = TagInput(["React"])
    assert not tags.dropdown_visible

    tags.open()
    assert tags.dropdown_visible

    tags.close()
    tags.set_query("rea")
    assert tags.is_open
    assert tags.dropdown_visible

    tags.select("React")
    assert tags.is_open
    assert tags.suggestions == []
    assert not tags.dropdown_visible

    tags.remove("React")
    assert tags.dropdown_visible

    tags.close()
    assert not tags.dropdown_visible


def test_candidate_pool_is_not_modified() -> None:
    pool = list(POOL)
    tags = TagInput(pool)
    tags.set_query("Svelte")
    tags.commit_free_text()

    assert pool == POOL
    assert tags.candidate_pool == tuple(POOL)
