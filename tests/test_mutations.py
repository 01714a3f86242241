"""Tests for the optimistic mutation state machine."""

import pytest

from pantry_chef.services.mutations import (
    InvalidTransitionError,
    MutationKind,
    MutationState,
    OptimisticList,
)


@pytest.fixture
def state():
    return OptimisticList.from_items([
        {"id": "a", "name": "Milk", "purchased": False},
        {"id": "b", "name": "Eggs", "purchased": False},
    ])


def test_update_applies_immediately(state):
    m = state.update({"id": "a", "name": "Milk", "purchased": True})
    assert m.state == MutationState.PENDING
    assert state.get("a")["purchased"] is True
    assert state.pending == [m]


def test_commit_adopts_server_view(state):
    m = state.update({"id": "a", "name": "Milk", "purchased": True})
    state.commit(m, {"id": "a", "name": "Whole Milk", "purchased": True})
    assert m.state == MutationState.COMMITTED
    assert state.get("a")["name"] == "Whole Milk"
    assert state.pending == []


def test_fail_restores_previous(state):
    m = state.update({"id": "a", "name": "Milk", "purchased": True})
    state.fail(m, "network down")
    assert m.state == MutationState.FAILED
    assert m.error == "network down"
    assert state.get("a")["purchased"] is False


def test_failed_create_is_removed(state):
    m = state.create({"id": "c", "name": "Bread", "purchased": False})
    assert state.items[0]["id"] == "c"
    state.fail(m)
    assert state.get("c") is None
    assert [i["id"] for i in state.items] == ["a", "b"]


def test_failed_delete_is_restored(state):
    m = state.delete("b")
    assert state.get("b") is None
    state.fail(m)
    assert state.get("b")["name"] == "Eggs"


def test_commit_create_with_server_id(state):
    m = state.create({"id": "tmp-1", "name": "Bread", "purchased": False})
    state.commit(m, {"id": "srv-9", "name": "Bread", "purchased": False})
    assert state.get("tmp-1") is None
    assert state.items[0]["id"] == "srv-9"


def test_fail_hands_pre_image_to_later_pending(state):
    first = state.update({"id": "a", "name": "Milk", "purchased": True})
    second = state.update({"id": "a", "name": "Milk", "purchased": False, "note": "x"})

    state.fail(first)
    # Later optimistic value stays visible
    assert state.get("a")["note"] == "x"

    state.fail(second)
    assert state.get("a") == {"id": "a", "name": "Milk", "purchased": False}


def test_fail_after_later_commit_keeps_committed(state):
    first = state.update({"id": "a", "name": "Milk", "purchased": True})
    second = state.update({"id": "a", "name": "Oat Milk", "purchased": True})
    state.commit(second, {"id": "a", "name": "Oat Milk", "purchased": True})

    state.fail(first)
    assert state.get("a")["name"] == "Oat Milk"


def test_commit_rebases_later_pending(state):
    first = state.update({"id": "a", "name": "Milk", "purchased": True})
    second = state.update({"id": "a", "name": "Milk 2", "purchased": True})

    state.commit(first, {"id": "a", "name": "Milk (server)", "purchased": True})
    assert state.get("a")["name"] == "Milk 2"

    state.fail(second)
    assert state.get("a")["name"] == "Milk (server)"


def test_only_pending_can_transition(state):
    m = state.update({"id": "a", "name": "Milk", "purchased": True})
    state.commit(m)
    with pytest.raises(InvalidTransitionError):
        state.fail(m)
    with pytest.raises(InvalidTransitionError):
        state.commit(m)


def test_begin_accepts_kind_strings(state):
    m = state.begin("delete", "a")
    assert m.kind == MutationKind.DELETE
    assert m.had_previous


def test_custom_key():
    state = OptimisticList.from_items([("x", 1)], key=lambda item: item[0])
    state.update(("x", 2))
    assert state.get("x") == ("x", 2)


class TestLogPruning:
    def test_settled_mutations_are_dropped(self, state):
        m1 = state.update({"id": "a", "name": "Milk", "purchased": True})
        m2 = state.delete("b")
        state.commit(m1)
        state.fail(m2)
        assert state.log == []

    def test_settled_kept_while_earlier_pending_on_same_key(self, state):
        first = state.update({"id": "a", "name": "Milk", "purchased": True})
        second = state.update({"id": "a", "name": "Oat Milk", "purchased": True})
        other = state.update({"id": "b", "name": "Eggs", "purchased": True})

        state.commit(second)
        state.commit(other)
        assert state.log == [first, second]

        state.fail(first)
        assert state.log == []
        assert state.get("a")["name"] == "Oat Milk"

    def test_log_stays_bounded(self, state):
        for i in range(50):
            state.commit(state.update({"id": "a", "name": f"Milk {i}", "purchased": False}))
        assert state.log == []
        assert state.get("a")["name"] == "Milk 49"
