import pytest

from listpack.core.equality import never_equal
from listpack.diff import Move, SubrangeError
from listpack.observable import (
    BeginUpdates,
    ChangeEvent,
    Deletes,
    EndUpdates,
    Inserts,
    ListMirror,
    Moves,
    ObservableList,
    TransactionError,
)


def _recording(lst: ObservableList) -> list[ChangeEvent]:
    events: list[ChangeEvent] = []
    lst.subscribe(events.append)
    return events


def _kinds(events: list[ChangeEvent]) -> list[str]:
    return [event.kind for event in events]


def test_replace_with_identical_content_emits_only_brackets() -> None:
    lst = ObservableList(["A", "B", "C"])
    events = _recording(lst)

    lst.replace(["A", "B", "C"])

    assert events == [BeginUpdates(), EndUpdates()]


def test_replace_emits_moves_deletes_inserts_in_order() -> None:
    lst = ObservableList(["a", "b", "c"])
    events = _recording(lst)

    lst.replace(["c", "a", "x"])

    assert _kinds(events) == ["begin_updates", "moves", "deletes", "inserts", "end_updates"]
    assert events[1] == Moves(moves=(Move(0, 1),))
    assert events[2] == Deletes(indices=(1,), elements=("b",))
    assert events[3] == Inserts(indices=(2,), elements=("x",))
    assert lst == ["c", "a", "x"]


def test_swap_reports_single_move() -> None:
    lst = ObservableList.of("A", "B")
    events = _recording(lst)

    lst.replace(["B", "A"])

    assert events == [BeginUpdates(), Moves(moves=(Move(0, 1),)), EndUpdates()]


def test_replace_without_diff_is_silent() -> None:
    lst = ObservableList(["A", "B"])
    events = _recording(lst)

    lst.replace(["Z"], perform_diff=False)

    assert events == []
    assert lst.to_list() == ["Z"]


def test_never_equal_container_reports_delete_all_insert_all() -> None:
    lst = ObservableList(["a", "b"], equals=never_equal)
    events = _recording(lst)

    lst.replace(["b", "a"])

    assert _kinds(events) == ["begin_updates", "deletes", "inserts", "end_updates"]
    assert events[1] == Deletes(indices=(0, 1), elements=("a", "b"))
    assert events[2] == Inserts(indices=(0, 1), elements=("b", "a"))


def test_insert_contents_is_pure_insert() -> None:
    lst = ObservableList(["A", "B"])
    events = _recording(lst)

    lst.insert_contents(1, ["Z"])

    assert events == [BeginUpdates(), Inserts(indices=(1,), elements=("Z",)), EndUpdates()]
    assert lst == ["A", "Z", "B"]


def test_insert_of_nothing_still_brackets() -> None:
    lst = ObservableList(["A"])
    events = _recording(lst)

    lst.insert_contents(0, [])

    assert events == [BeginUpdates(), EndUpdates()]


def test_extend_and_append_insert_at_end() -> None:
    lst = ObservableList(["A"])
    events = _recording(lst)

    lst.extend(["B", "C"])
    lst.append("D")

    assert events[1] == Inserts(indices=(1, 2), elements=("B", "C"))
    assert events[4] == Inserts(indices=(3,), elements=("D",))
    assert lst == ["A", "B", "C", "D"]


def test_remove_all_is_pure_delete_without_diffing() -> None:
    compared: list[tuple[object, object]] = []

    def tracking(left: object, right: object) -> bool:
        compared.append((left, right))
        return left == right

    lst = ObservableList(["P", "Q", "R"], equals=tracking)
    events = _recording(lst)

    lst.remove_all()

    assert events == [
        BeginUpdates(),
        Deletes(indices=(0, 1, 2), elements=("P", "Q", "R")),
        EndUpdates(),
    ]
    assert compared == []
    assert len(lst) == 0
    assert not lst


def test_clear_is_remove_all() -> None:
    lst = ObservableList([1, 2])
    events = _recording(lst)

    lst.clear()

    assert events[1] == Deletes(indices=(0, 1), elements=(1, 2))


def test_index_assignment_is_silent() -> None:
    lst = ObservableList(["A", "B"])
    events = _recording(lst)

    lst[1] = "Z"
    lst.set_silently(0, "Y")

    assert events == []
    assert lst == ["Y", "Z"]


def test_index_assignment_out_of_range_raises() -> None:
    lst = ObservableList(["A"])

    with pytest.raises(IndexError):
        lst[3] = "Z"


def test_replace_subrange_rebases_indices() -> None:
    lst = ObservableList(["a", "b", "c", "d", "e"])
    events = _recording(lst)

    lst.replace_subrange(1, 4, ["d", "b", "x"])

    assert events == [
        BeginUpdates(),
        Moves(moves=(Move(1, 2),)),
        Deletes(indices=(2,), elements=("c",)),
        Inserts(indices=(3,), elements=("x",)),
        EndUpdates(),
    ]
    assert lst == ["a", "d", "b", "x", "e"]


def test_slice_assignment_routes_through_subrange_diff() -> None:
    lst = ObservableList(["a", "b", "c"])
    events = _recording(lst)

    lst[1:] = ["c", "b"]

    assert events == [BeginUpdates(), Moves(moves=(Move(1, 2),)), EndUpdates()]
    assert lst == ["a", "c", "b"]


def test_extended_slice_assignment_is_rejected() -> None:
    lst = ObservableList(["a", "b", "c"])

    with pytest.raises(ValueError, match="extended slices"):
        lst[::2] = ["x", "y"]


def test_delete_item_and_slice() -> None:
    lst = ObservableList(["a", "b", "c", "d"])
    events = _recording(lst)

    del lst[-1]
    del lst[0:2]

    assert events[1] == Deletes(indices=(3,), elements=("d",))
    assert events[4] == Deletes(indices=(0, 1), elements=("a", "b"))
    assert lst == ["c"]


def test_delete_out_of_range_raises_before_emitting() -> None:
    lst = ObservableList(["a"])
    events = _recording(lst)

    with pytest.raises(IndexError):
        del lst[2]

    assert events == []


def test_invalid_preconditions_leave_state_untouched() -> None:
    lst = ObservableList(["a", "b"])
    events = _recording(lst)

    with pytest.raises(IndexError):
        lst.insert_contents(5, ["z"])
    with pytest.raises(SubrangeError):
        lst.replace_subrange(2, 1, ["z"])

    assert events == []
    assert lst == ["a", "b"]


def test_every_mutation_is_one_bracketed_transaction() -> None:
    lst = ObservableList([3, 1, 2])
    events = _recording(lst)

    lst.replace([1, 2, 3, 4])
    lst.replace_subrange(0, 2, [2, 9])
    lst.insert_contents(0, [7])
    lst.extend([8])
    del lst[1]
    lst.remove_all()

    kinds = _kinds(events)
    assert kinds.count("begin_updates") == 6
    assert kinds.count("end_updates") == 6

    order = {"moves": 0, "deletes": 1, "inserts": 2}
    depth = 0
    last_body = -1
    for kind in kinds:
        if kind == "begin_updates":
            assert depth == 0
            depth = 1
            last_body = -1
        elif kind == "end_updates":
            assert depth == 1
            depth = 0
        else:
            assert depth == 1
            assert order[kind] > last_body
            last_body = order[kind]
    assert depth == 0


def test_subscriber_is_replaced_and_cleared() -> None:
    lst = ObservableList(["a"])
    first: list[ChangeEvent] = []
    second: list[ChangeEvent] = []

    lst.subscribe(first.append)
    lst.subscribe(second.append)
    lst.append("b")

    assert first == []
    assert len(second) == 3
    assert lst.subscriber == second.append

    lst.unsubscribe()
    lst.append("c")

    assert len(second) == 3
    assert lst.subscriber is None


def test_subscriber_failure_is_isolated_and_transaction_completes() -> None:
    seen: list[str] = []

    def flaky(event: ChangeEvent) -> None:
        seen.append(event.kind)
        if isinstance(event, Moves):
            raise RuntimeError("boom-from-subscriber")

    lst = ObservableList(["A", "B"], subscriber=flaky)

    with pytest.warns(RuntimeWarning, match="ListKit subscriber failure"):
        lst.replace(["B", "A"])

    assert seen == ["begin_updates", "moves", "end_updates"]
    assert len(lst.diagnostics) == 1
    diagnostic = lst.diagnostics[0]
    assert diagnostic.event_kind == "moves"
    assert diagnostic.error_type == "RuntimeError"
    assert "boom-from-subscriber" in diagnostic.message


def test_clear_diagnostics_empties_recorded_failures() -> None:
    def failing(_event: ChangeEvent) -> None:
        raise RuntimeError("always")

    lst = ObservableList(["A"], subscriber=failing)
    with pytest.warns(RuntimeWarning):
        lst.append("B")
    assert len(lst.diagnostics) == 3

    lst.clear_diagnostics()

    assert lst.diagnostics == []


def test_mutation_from_inside_a_transaction_is_rejected() -> None:
    lst = ObservableList(["a", "b"])
    seen: list[str] = []

    def reentrant(event: ChangeEvent) -> None:
        seen.append(event.kind)
        if isinstance(event, BeginUpdates):
            lst.append("nested")

    lst.subscribe(reentrant)
    with pytest.warns(RuntimeWarning, match="TransactionError"):
        lst.append("c")

    assert seen == ["begin_updates", "inserts", "end_updates"]
    assert lst == ["a", "b", "c"]
    assert lst.diagnostics[0].error_type == "TransactionError"
    assert lst.diagnostics[0].event_kind == "begin_updates"

    lst.unsubscribe()
    lst.append("d")
    assert lst == ["a", "b", "c", "d"]


def test_direct_reentrant_call_raises_before_mutating() -> None:
    lst = ObservableList([1, 2])
    errors: list[Exception] = []

    def reentrant(event: ChangeEvent) -> None:
        if isinstance(event, EndUpdates):
            for mutate in (
                lambda: lst.replace([9]),
                lambda: lst.replace_subrange(0, 1, [9]),
                lambda: lst.insert_contents(0, [9]),
                lambda: lst.remove_all(),
            ):
                try:
                    mutate()
                except TransactionError as error:
                    errors.append(error)

    lst.subscribe(reentrant)
    lst.append(3)

    assert len(errors) == 4
    assert "attempted while a transaction is being delivered" in str(errors[0])
    assert lst == [1, 2, 3]
    assert lst.diagnostics == []


def test_desynchronized_mirror_surfaces_as_diagnostic() -> None:
    lst = ObservableList(["a"])
    mirror = ListMirror.attach(lst)
    mirror(BeginUpdates())

    with pytest.warns(RuntimeWarning, match="TransactionError"):
        lst.append("b")

    assert len(lst.diagnostics) == 1
    assert lst.diagnostics[0].event_kind == "begin_updates"
    assert "inside an open transaction" in lst.diagnostics[0].message
    assert mirror.items == ["a", "b"]
    assert mirror.in_transaction is False


def test_equality_against_lists_and_tuples() -> None:
    lst = ObservableList.of("x", "y")

    assert lst == ["x", "y"]
    assert lst == ("x", "y")
    assert ("x", "y") == lst
    assert lst != ("y", "x")
    assert lst != "xy"


def test_read_access_matches_underlying_storage() -> None:
    lst = ObservableList.of(1, 2, 3)

    assert len(lst) == 3
    assert lst[0] == 1
    assert lst[-1] == 3
    assert lst[1:] == [2, 3]
    assert 2 in lst
    assert lst.index(3) == 2
    assert lst.count(1) == 1
    assert list(reversed(lst)) == [3, 2, 1]
    assert lst == ObservableList([1, 2, 3])
    assert repr(lst) == "ObservableList([1, 2, 3])"


def test_iteration_uses_snapshot_of_storage() -> None:
    lst = ObservableList(["a", "b"])
    iterator = iter(lst)

    lst.append("c")

    assert list(iterator) == ["a", "b"]


def test_empty_construction() -> None:
    lst: ObservableList[str] = ObservableList()

    assert len(lst) == 0
    assert lst.to_list() == []
    assert lst.subscriber is None
