"""Tests for the Category aggregate."""

from storefront.catalogue.category.category import Category
from storefront.catalogue.category.events import CategoryCreated, CategoryRenamed


class TestCategory:
    def test_create_trims_name(self):
        category = Category.create(name="  Ceramics ")
        assert category.name == "Ceramics"
        assert isinstance(category._events[0], CategoryCreated)

    def test_rename(self):
        category = Category.create(name="Ceramics")
        category._events.clear()
        category.rename("Pottery")
        assert category.name == "Pottery"
        event = category._events[0]
        assert isinstance(event, CategoryRenamed)
        assert event.previous_name == "Ceramics"
