"""Application tests for favourites."""

import pytest
from protean import current_domain
from protean.exceptions import ObjectNotFoundError

from storefront.identity.favorite.toggling import ToggleFavorite, user_favorites


def _toggle(user_id, product_id):
    return current_domain.process(ToggleFavorite(user_id=user_id, product_id=product_id), asynchronous=False)


class TestToggleFavorite:
    def test_toggle_on_and_off(self, make_user, make_product):
        user_id = make_user()
        product_id = make_product()

        assert _toggle(user_id, product_id) is True
        assert user_favorites(user_id) == [product_id]

        assert _toggle(user_id, product_id) is False
        assert user_favorites(user_id) == []

    def test_favorites_are_per_user(self, make_user, make_product):
        first = make_user()
        second = make_user(email="other@example.com")
        product_id = make_product()

        _toggle(first, product_id)
        assert user_favorites(second) == []

    def test_unknown_product_rejected(self, make_user):
        with pytest.raises(ObjectNotFoundError):
            _toggle(make_user(), "missing-product")
