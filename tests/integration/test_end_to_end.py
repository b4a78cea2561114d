# ABOUTME: Integration tests for the full add / get / search / delete lifecycle.
# ABOUTME: Runs the reference scenario on both backends and checks persistence across reopen.

import pytest

from catalogstore.config import CatalogConfig
from catalogstore.core.store import CatalogStore, open_store
from catalogstore.errors import NotFoundError, ValidationError


class TestCatalogLifecycle:
    """The two-shirt scenario, end to end."""

    def test_reference_scenario(
        self, store: CatalogStore, image_a: bytes, image_b: bytes
    ) -> None:
        red = store.add_item("Red Shirt", "Clothing", image_a)
        assert (red.id, red.name, red.category) == (1, "Red Shirt", "Clothing")

        blue = store.add_item("Blue Shirt", "Clothing", image_a)
        assert (blue.id, blue.name, blue.category) == (2, "Blue Shirt", "Clothing")
        assert blue.category_id == red.category_id
        assert blue.image_name == red.image_name

        store.add_item("Coffee Mug", "Kitchen", image_b)

        assert store.get_item(1) == red
        with pytest.raises(NotFoundError):
            store.get_item(99)

        assert store.search_items("shirt") == [red, blue]
        with pytest.raises(ValidationError):
            store.search_items("")

        store.delete_item(1)
        with pytest.raises(NotFoundError):
            store.get_item(1)
        assert [i.id for i in store.list_items()] == [2, 3]
        # Blue Shirt still needs the shared image.
        assert store.blobs.exists(blue.image_name)

    def test_data_survives_reopen(
        self, config: CatalogConfig, image_a: bytes
    ) -> None:
        """Items and categories persist after the store is closed and reopened."""
        with open_store(config) as store:
            added = store.add_item("Red Shirt", "Clothing", image_a)

        with open_store(config) as reopened:
            assert reopened.list_items() == [added]
            again = reopened.add_item("Blue Shirt", "Clothing", image_a)

        assert again.id == added.id + 1
        assert again.category_id == added.category_id

    def test_ids_never_reused(self, store: CatalogStore, image_a: bytes) -> None:
        """Deleting the newest item does not hand its id out again."""
        store.add_item("One", "Misc", image_a)
        second = store.add_item("Two", "Misc", image_a)
        store.delete_item(second.id)
        third = store.add_item("Three", "Misc", image_a)
        assert third.id == second.id + 1

    def test_order_stable_across_failed_attempts(
        self, store: CatalogStore, image_a: bytes
    ) -> None:
        """Rejected adds in between successful ones do not disturb list order."""
        store.add_item("First", "Misc", image_a)
        with pytest.raises(ValidationError):
            store.add_item("", "Misc", image_a)
        store.add_item("Second", "Misc", image_a)
        with pytest.raises(ValidationError):
            store.add_item("Third", "   ", image_a)
        store.add_item("Third", "Misc", image_a)

        assert [i.name for i in store.list_items()] == ["First", "Second", "Third"]
