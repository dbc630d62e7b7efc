"""Unit tests for the FavoriteSet aggregate."""

from storefront.domain.model.favorites import FavoriteSet
from tests.fakes import make_product


class TestFavoriteSet:

    def test_toggle_on_empty_set_adds(self):
        favorites = FavoriteSet()
        assert favorites.toggle(make_product(5)) is True
        assert favorites.ids == {5}
        assert favorites.contains(make_product(5))

    def test_second_toggle_removes(self):
        favorites = FavoriteSet()
        favorites.toggle(make_product(5))
        assert favorites.toggle(make_product(5)) is False
        assert favorites.ids == set()
        assert not favorites.contains(make_product(5))

    def test_double_toggle_restores_membership(self):
        favorites = FavoriteSet(ids={1, 2})
        for product_id in (1, 3):
            before = favorites.contains(make_product(product_id))
            favorites.toggle(make_product(product_id))
            favorites.toggle(make_product(product_id))
            assert favorites.contains(make_product(product_id)) == before
        assert favorites.ids == {1, 2}

    def test_filter_preserves_listing_order(self):
        favorites = FavoriteSet(ids={4, 2})
        listing = [make_product(i) for i in (1, 2, 3, 4)]
        assert [p.id for p in favorites.filter(listing)] == [2, 4]
