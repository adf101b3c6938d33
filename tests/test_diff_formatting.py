from listpack.diff import diff_sequences, render_diff_summary, render_edit_script


def test_summary_line_counts_operations() -> None:
    result = diff_sequences(["a", "b", "c"], ["c", "a", "x"])

    assert render_diff_summary(result) == "inserts=1 deletes=1 moves=1"


def test_edit_script_lists_moves_then_deletes_then_inserts() -> None:
    result = diff_sequences(["a", "b", "c"], ["c", "a", "x"])

    assert render_edit_script(result).splitlines() == [
        "~ [0] -> [1]",
        "- [1] 'b'",
        "+ [2] 'x'",
    ]


def test_edit_script_for_empty_diff() -> None:
    assert render_edit_script(diff_sequences([1, 2], [1, 2])) == "no changes"


def test_edit_script_truncates_long_output() -> None:
    result = diff_sequences([], list(range(5)))

    lines = render_edit_script(result, max_operations=2).splitlines()

    assert lines == ["+ [0] 0", "+ [1] 1", "... 3 additional operations omitted"]
