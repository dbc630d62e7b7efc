"""Tests for the persisted favorites."""

import logging

from storefront.application.favorites_store import FAVORITES_STORAGE_KEY, FavoritesStore
from tests.fakes import FailingKeyValueStore, InMemoryKeyValueStore, make_product


class TestFavoritesStore:

    def test_scenario_toggle_on_and_off(self):
        store = FavoritesStore(InMemoryKeyValueStore())
        product = make_product(5)

        assert store.toggle(product) is True
        assert store.ids == frozenset({5})
        assert store.is_favorite(product) is True

        assert store.toggle(product) is False
        assert store.ids == frozenset()
        assert store.is_favorite(product) is False

    def test_is_favorite_has_no_side_effect(self):
        storage = InMemoryKeyValueStore()
        store = FavoritesStore(storage)
        store.is_favorite(make_product(1))
        assert storage.writes == 0

    def test_every_toggle_writes_sorted_ids(self):
        storage = InMemoryKeyValueStore()
        store = FavoritesStore(storage)
        store.toggle(make_product(9))
        store.toggle(make_product(2))
        store.toggle(make_product(9))
        assert storage.writes == 3
        assert storage.get(FAVORITES_STORAGE_KEY) == [2]

    def test_reload_restores_ids(self):
        storage = InMemoryKeyValueStore({FAVORITES_STORAGE_KEY: [3, 1]})
        store = FavoritesStore(storage)
        assert store.is_favorite(make_product(1))
        assert store.is_favorite(make_product(3))

    def test_malformed_payload_starts_empty(self, caplog):
        storage = InMemoryKeyValueStore({FAVORITES_STORAGE_KEY: ["one", 2]})
        with caplog.at_level(logging.WARNING):
            store = FavoritesStore(storage)
        assert store.ids == frozenset()
        assert "Failed to load favorites" in caplog.text

    def test_storage_failures_are_not_raised(self):
        storage = FailingKeyValueStore()
        store = FavoritesStore(storage)
        assert store.toggle(make_product(1)) is True
        assert store.is_favorite(make_product(1))
        assert storage.write_attempts == 1

    def test_filter(self):
        store = FavoritesStore(InMemoryKeyValueStore({FAVORITES_STORAGE_KEY: [2]}))
        listing = [make_product(1), make_product(2)]
        assert store.filter(listing) == [make_product(2)]

    def test_listener_notified_on_toggle(self):
        store = FavoritesStore(InMemoryKeyValueStore())
        seen: list[frozenset[int]] = []
        store.subscribe(lambda s: seen.append(s.ids))
        store.toggle(make_product(4))
        store.toggle(make_product(4))
        assert seen == [frozenset({4}), frozenset()]
