"""Unit tests for the MongoDB repository classes."""

from datetime import UTC, datetime
from unittest.mock import MagicMock

import pytest
from bson import ObjectId
from pymongo import ASCENDING, DESCENDING
from pymongo.errors import ServerSelectionTimeoutError

from restaurant_ordering_service.repositories.legacy_id_compat import delete_legacy_menu_item
from restaurant_ordering_service.repositories.menu_repository import MenuItemRepository
from restaurant_ordering_service.repositories.order_repository import OrderRepository
from restaurant_ordering_service.repositories.post_repository import PostRepository

ITEM_ID = "65a1f0c2e4b0a1b2c3d4e5f1"


def _database_with(collection: MagicMock) -> MagicMock:
    database = MagicMock()
    database.__getitem__.return_value = collection
    return database


@pytest.mark.unit
class TestMenuItemRepository:
    """Test suite for MenuItemRepository."""

    @pytest.fixture
    def mock_collection(self) -> MagicMock:
        """Create a mock menuItems collection."""
        return MagicMock()

    @pytest.fixture
    def repository(self, mock_collection: MagicMock) -> MenuItemRepository:
        """Create a MenuItemRepository over the mock collection."""
        return MenuItemRepository(database=_database_with(mock_collection))

    def test_repository_initialization(self, mock_collection: MagicMock) -> None:
        """Test that the repository binds the named collection."""
        database = _database_with(mock_collection)

        repo = MenuItemRepository(database=database, collection_name="dishes")

        assert repo.collection_name == "dishes"
        database.__getitem__.assert_called_once_with("dishes")

    def test_list_items_active_only(
        self, repository: MenuItemRepository, mock_collection: MagicMock, menu_item_document: dict
    ) -> None:
        """Test that only active items are queried, sorted by category then age."""
        mock_collection.find.return_value.sort.return_value = [menu_item_document]

        items = repository.list_items()

        assert len(items) == 1
        assert items[0].id == ITEM_ID
        mock_collection.find.assert_called_once_with({"isActive": True})
        mock_collection.find.return_value.sort.assert_called_once_with(
            [("categoryId", ASCENDING), ("createdAt", ASCENDING)]
        )

    def test_list_items_including_inactive(
        self, repository: MenuItemRepository, mock_collection: MagicMock
    ) -> None:
        """Test that include_inactive drops the filter."""
        mock_collection.find.return_value.sort.return_value = []

        assert repository.list_items(include_inactive=True) == []
        mock_collection.find.assert_called_once_with({})

    def test_get_item_found(
        self, repository: MenuItemRepository, mock_collection: MagicMock, menu_item_document: dict
    ) -> None:
        """Test retrieving an existing item."""
        mock_collection.find_one.return_value = menu_item_document

        item = repository.get_item(ObjectId(ITEM_ID))

        assert item is not None
        assert item.name == "Stir-Fried Pork with Chili"
        mock_collection.find_one.assert_called_once_with({"_id": ObjectId(ITEM_ID)})

    def test_get_item_not_found(
        self, repository: MenuItemRepository, mock_collection: MagicMock
    ) -> None:
        """Test that a miss returns None."""
        mock_collection.find_one.return_value = None

        assert repository.get_item(ObjectId(ITEM_ID)) is None

    def test_insert_item_returns_generated_id(
        self, repository: MenuItemRepository, mock_collection: MagicMock, menu_item_document: dict
    ) -> None:
        """Test that the inserted id is attached to the returned item."""
        document = {k: v for k, v in menu_item_document.items() if k != "_id"}
        new_id = ObjectId()
        mock_collection.insert_one.return_value.inserted_id = new_id

        item = repository.insert_item(document)

        assert item.id == str(new_id)
        mock_collection.insert_one.assert_called_once_with(document)

    def test_update_item_uses_matched_count(
        self, repository: MenuItemRepository, mock_collection: MagicMock
    ) -> None:
        """Test that a matched but unmodified document still counts as found."""
        mock_collection.update_one.return_value.matched_count = 1
        mock_collection.update_one.return_value.modified_count = 0

        assert repository.update_item(ObjectId(ITEM_ID), {"price": 10}) is True
        mock_collection.update_one.assert_called_once_with(
            {"_id": ObjectId(ITEM_ID)}, {"$set": {"price": 10}}
        )

    def test_update_item_no_match(
        self, repository: MenuItemRepository, mock_collection: MagicMock
    ) -> None:
        """Test that an unmatched update returns False."""
        mock_collection.update_one.return_value.matched_count = 0

        assert repository.update_item(ObjectId(ITEM_ID), {"price": 10}) is False

    def test_delete_item(self, repository: MenuItemRepository, mock_collection: MagicMock) -> None:
        """Test that delete reports whether a document was removed."""
        mock_collection.delete_one.return_value.deleted_count = 1
        assert repository.delete_item(ObjectId(ITEM_ID)) is True

        mock_collection.delete_one.return_value.deleted_count = 0
        assert repository.delete_item(ObjectId(ITEM_ID)) is False

    def test_find_active_by_ids(
        self, repository: MenuItemRepository, mock_collection: MagicMock, menu_item_document: dict
    ) -> None:
        """Test that ids are resolved with $in restricted to active items."""
        mock_collection.find.return_value = [menu_item_document]
        ids = [ObjectId(ITEM_ID), ObjectId()]

        items = repository.find_active_by_ids(ids)

        assert [item.id for item in items] == [ITEM_ID]
        mock_collection.find.assert_called_once_with({"_id": {"$in": ids}, "isActive": True})

    def test_seed_if_empty_inserts(
        self, repository: MenuItemRepository, mock_collection: MagicMock
    ) -> None:
        """Test that seeding an empty collection inserts every document."""
        mock_collection.count_documents.return_value = 0
        mock_collection.insert_many.return_value.inserted_ids = [ObjectId(), ObjectId()]

        assert repository.seed_if_empty([{"name": "a"}, {"name": "b"}]) == 2

    def test_seed_if_empty_skips_populated_collection(
        self, repository: MenuItemRepository, mock_collection: MagicMock
    ) -> None:
        """Test that a non-empty collection is left alone."""
        mock_collection.count_documents.return_value = 3

        assert repository.seed_if_empty([{"name": "a"}]) == 0
        mock_collection.insert_many.assert_not_called()

    def test_driver_errors_propagate(
        self, repository: MenuItemRepository, mock_collection: MagicMock
    ) -> None:
        """Test that PyMongo errors are not swallowed."""
        mock_collection.find_one.side_effect = ServerSelectionTimeoutError("no servers")

        with pytest.raises(ServerSelectionTimeoutError):
            repository.get_item(ObjectId(ITEM_ID))


@pytest.mark.unit
class TestLegacyIdCompat:
    """Tests for deleting menu items stored with string ids."""

    def test_deletes_by_raw_string(self) -> None:
        """Test that the raw string is used as the _id value."""
        repository = MagicMock(spec=MenuItemRepository)
        repository.delete_item.return_value = True

        assert delete_legacy_menu_item(repository, "old-7") is True
        repository.delete_item.assert_called_once_with("old-7")

    def test_reports_miss(self) -> None:
        """Test that a miss returns False."""
        repository = MagicMock(spec=MenuItemRepository)
        repository.delete_item.return_value = False

        assert delete_legacy_menu_item(repository, "old-7") is False


@pytest.mark.unit
class TestOrderRepository:
    """Test suite for OrderRepository."""

    @pytest.fixture
    def mock_collection(self) -> MagicMock:
        """Create a mock orders collection."""
        return MagicMock()

    @pytest.fixture
    def repository(self, mock_collection: MagicMock) -> OrderRepository:
        """Create an OrderRepository over the mock collection."""
        return OrderRepository(database=_database_with(mock_collection))

    def test_insert_order_returns_id_string(
        self, repository: OrderRepository, mock_collection: MagicMock
    ) -> None:
        """Test that the generated id is returned as a string."""
        new_id = ObjectId()
        mock_collection.insert_one.return_value.inserted_id = new_id

        assert repository.insert_order({"items": []}) == str(new_id)

    def test_list_recent(self, repository: OrderRepository, mock_collection: MagicMock) -> None:
        """Test that orders are read newest first with a limit."""
        created_at = datetime(2024, 1, 15, tzinfo=UTC)
        mock_collection.find.return_value.sort.return_value.limit.return_value = [
            {
                "_id": ObjectId(),
                "items": [
                    {
                        "menuItemId": ITEM_ID,
                        "name": "Stir-Fried Pork with Chili",
                        "price": 38.0,
                        "quantity": 2,
                        "subtotal": 76.0,
                        "categoryId": "stirfry",
                    }
                ],
                "totalPrice": 76.0,
                "createdAt": created_at,
            }
        ]

        orders = repository.list_recent(limit=50)

        assert len(orders) == 1
        assert orders[0].items[0].menu_item_id == ITEM_ID
        assert orders[0].note == ""
        assert orders[0].status.value == "new"
        mock_collection.find.return_value.sort.assert_called_once_with("createdAt", DESCENDING)
        mock_collection.find.return_value.sort.return_value.limit.assert_called_once_with(50)


@pytest.mark.unit
class TestPostRepository:
    """Test suite for PostRepository."""

    @pytest.fixture
    def mock_collection(self) -> MagicMock:
        """Create a mock posts collection."""
        return MagicMock()

    @pytest.fixture
    def repository(self, mock_collection: MagicMock) -> PostRepository:
        """Create a PostRepository over the mock collection."""
        return PostRepository(database=_database_with(mock_collection))

    def test_insert_post(self, repository: PostRepository, mock_collection: MagicMock) -> None:
        """Test that inserted posts carry their generated id."""
        created_at = datetime(2024, 2, 1, tzinfo=UTC)
        new_id = ObjectId()
        mock_collection.insert_one.return_value.inserted_id = new_id

        post = repository.insert_post("Hello", "World", created_at)

        assert post.id == str(new_id)
        mock_collection.insert_one.assert_called_once_with(
            {"title": "Hello", "content": "World", "createdAt": created_at}
        )

    def test_list_posts_newest_first(
        self, repository: PostRepository, mock_collection: MagicMock
    ) -> None:
        """Test that posts are sorted by creation time descending."""
        mock_collection.find.return_value.sort.return_value = []

        assert repository.list_posts() == []
        mock_collection.find.return_value.sort.assert_called_once_with("createdAt", DESCENDING)

    def test_update_post_matched(self, repository: PostRepository, mock_collection: MagicMock) -> None:
        """Test that an identical rewrite still counts as found."""
        mock_collection.update_one.return_value.matched_count = 1
        mock_collection.update_one.return_value.modified_count = 0

        assert repository.update_post(ObjectId(), "Same", "Same") is True

    def test_delete_post_miss(self, repository: PostRepository, mock_collection: MagicMock) -> None:
        """Test that deleting nothing returns False."""
        mock_collection.delete_one.return_value.deleted_count = 0

        assert repository.delete_post(ObjectId()) is False
