import pytest
from pytest_mock import MockerFixture

from trashmap import FixedState, RandomState, Trash, TrashSet


class TestTrashSet:
    def test_insert_contains(self) -> None:
        ts: TrashSet[str] = TrashSet()

        trash = ts.insert("foo")
        assert ts.contains(trash)
        assert ts.contains_key("foo")
        assert not ts.contains_key("bar")
        assert trash in ts
        assert len(ts) == 1

    def test_insert_check(self) -> None:
        ts: TrashSet[str] = TrashSet()

        trash, added = ts.insert_check("foo")
        assert added

        again, added = ts.insert_check("foo")
        assert again == trash
        assert not added

        assert ts.remove(trash)

        again, added = ts.insert_check("foo")
        assert again == trash
        assert added

    def test_insert_id(self) -> None:
        ts: TrashSet[str] = TrashSet()

        trash = ts.trash("foo")
        assert ts.insert_id(trash)
        assert not ts.insert_id(trash)
        assert ts.contains_key("foo")

    def test_remove(self) -> None:
        ts: TrashSet[str] = TrashSet()

        trash = ts.insert("foo")
        assert ts.remove(trash)
        assert not ts.remove(trash)
        assert not ts.contains(trash)
        assert len(ts) == 0

    def test_remove_key(self) -> None:
        ts: TrashSet[str] = TrashSet()

        ts.insert("foo")
        assert ts.remove_key("foo")
        assert not ts.remove_key("foo")
        assert not ts.contains_key("foo")

    def test_never_inserted(self) -> None:
        ts: TrashSet[str] = TrashSet()

        assert not ts.contains(Trash(0))
        assert not ts.contains(ts.trash("foo"))
        assert not ts.remove(Trash(0))

    def test_duplicate_insert(self) -> None:
        ts: TrashSet[str] = TrashSet()

        assert ts.insert("foo") == ts.insert("foo")
        assert len(ts) == 1

    def test_id_operations_do_not_hash(self, mocker: MockerFixture) -> None:
        ts: TrashSet[str] = TrashSet()
        trash = ts.trash("foo")

        spy = mocker.spy(ts.hasher, "hash_one")

        assert ts.insert_id(trash)
        assert ts.contains(trash)
        assert ts.remove(trash)

        spy.assert_not_called()

    def test_insert_check_hashes_once(self, mocker: MockerFixture) -> None:
        ts: TrashSet[str] = TrashSet()
        spy = mocker.spy(ts.hasher, "hash_one")

        trash, _ = ts.insert_check("foo")
        ts.remove(trash)

        spy.assert_called_once_with("foo")

    def test_trash_is_stable(self) -> None:
        ts: TrashSet[str] = TrashSet()
        assert ts.trash("foo") == ts.trash("foo")
        assert ts.identifier_for("foo") == ts.trash("foo")

    def test_shared_fixed_state(self) -> None:
        ts1: TrashSet[str, FixedState] = TrashSet(FixedState(seed=9))
        ts2: TrashSet[str, FixedState] = TrashSet(FixedState(seed=9))

        ts2.insert_id(ts1.insert("foo"))
        assert ts2.contains_key("foo")

    def test_contains_only_trash(self) -> None:
        ts: TrashSet[str] = TrashSet()
        ts.insert("foo")

        assert "foo" not in ts

    def test_default_hasher(self) -> None:
        assert isinstance(TrashSet().hasher, RandomState)

    def test_with_capacity_and_hasher(self) -> None:
        hasher = FixedState()
        ts: TrashSet[str, FixedState] = TrashSet.with_capacity_and_hasher(8, hasher)

        assert ts.hasher is hasher
        assert len(ts) == 0

    def test_negative_capacity(self) -> None:
        with pytest.raises(ValueError):
            TrashSet(capacity=-1)

    def test_clear(self) -> None:
        ts: TrashSet[str] = TrashSet()
        trash = ts.insert("foo")

        ts.clear()
        assert not ts.contains(trash)
        assert len(ts) == 0

    def test_small_int_keys_are_distinct(self) -> None:
        ts: TrashSet[int] = TrashSet()

        ts.insert(0)
        assert not ts.contains_key(2**61 - 1)

        ts.insert(-1)
        assert not ts.contains_key(-2)
