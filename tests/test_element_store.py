"""
Tests for the ordered element store and its id allocator.
"""

from element_store import ElementStore
from model import SimpleSwitch

RED = (255, 0, 0, 255)


def switch(element_id=0, x=0.0):
    return SimpleSwitch(id=element_id, x=x, y=0.0, color=RED, gauge=10.0)


class TestAdd:
    def test_ids_start_at_one_and_increase(self):
        store = ElementStore()
        assert store.add(switch()) == 1
        assert store.add(switch()) == 2
        assert [element.id for element in store] == [1, 2]
        assert store.next_id == 3

    def test_add_overrides_incoming_id(self):
        store = ElementStore()
        element = switch(element_id=42)
        store.add(element)
        assert element.id == 1


class TestRemove:
    def test_remove_shifts_later_indices(self):
        store = ElementStore()
        for x in (0.0, 1.0, 2.0):
            store.add(switch(x=x))
        removed = store.remove(0)
        assert removed.id == 1
        assert store[0].id == 2
        assert len(store) == 2

    def test_ids_are_not_reused_after_remove(self):
        store = ElementStore()
        store.add(switch())
        store.add(switch())
        store.remove(1)
        assert store.add(switch()) == 3


class TestReplaceAll:
    def test_next_id_after_load(self):
        store = ElementStore()
        store.replace_all([switch(3), switch(7), switch(2)])
        assert store.add(switch()) == 8

    def test_empty_load_restarts_at_one(self):
        store = ElementStore()
        store.add(switch())
        store.replace_all([])
        assert store.next_id == 1


class TestLookup:
    def test_index_of(self):
        store = ElementStore()
        store.add(switch())
        store.add(switch(x=5.0))
        assert store.index_of(2) == 1
        assert store.index_of(99) is None

    def test_clear(self):
        store = ElementStore()
        store.add(switch())
        store.clear()
        assert len(store) == 0
        assert store.next_id == 1
