import pytest
from sqlalchemy.exc import OperationalError

from models.cart import CartItem
from models.product import Product
from models.users import User
from services.cart_store import CartStore
from services.errors import ConflictError, NotFoundError, StorageError


@pytest.fixture
def seeded(db_session):
    user = User(username="alice", email="alice@example.com", password_hash="x")
    product = Product(title="Mouse", description="Mouse", category="electronics",
                      price=10.0, rating=4.0, stock=10)
    db_session.add_all([user, product])
    db_session.commit()
    return user, product


def test_increment_is_applied_in_sql(db_session, seeded):
    user, product = seeded
    store = CartStore(db_session)

    with store.transaction():
        item = store.create_item(user.id, product.id, 2)
    with store.transaction():
        store.increment_quantity(item, 3)

    assert db_session.query(CartItem).one().quantity == 5


def test_list_items_joins_product(db_session, seeded):
    user, product = seeded
    store = CartStore(db_session)
    with store.transaction():
        store.create_item(user.id, product.id, 1)

    rows = store.list_items(user.id)

    assert [(item.quantity, p.title) for item, p in rows] == [(1, "Mouse")]
    assert store.list_items(user.id + 1) == []


def test_duplicate_entry_raises_conflict(db_session, seeded):
    user, product = seeded
    store = CartStore(db_session)
    with store.transaction():
        store.create_item(user.id, product.id, 1)

    with pytest.raises(ConflictError):
        with store.transaction():
            store.create_item(user.id, product.id, 1)

    assert db_session.query(CartItem).count() == 1


def test_domain_errors_roll_back(db_session, seeded):
    user, product = seeded
    store = CartStore(db_session)

    with pytest.raises(NotFoundError):
        with store.transaction():
            store.create_item(user.id, product.id, 1)
            raise NotFoundError()

    assert db_session.query(CartItem).count() == 0


def test_driver_errors_become_storage_error(db_session, seeded, monkeypatch):
    store = CartStore(db_session)

    def failing_commit():
        raise OperationalError("COMMIT", {}, Exception("database is locked"))

    monkeypatch.setattr(db_session, "commit", failing_commit)

    with pytest.raises(StorageError) as exc:
        with store.transaction():
            store.get_product(seeded[1].id)

    assert exc.value.message == "Server error"
    assert "locked" not in str(exc.value)


def test_driver_overflow_becomes_storage_error(db_session, seeded):
    store = CartStore(db_session)

    with pytest.raises(StorageError):
        with store.transaction():
            store.get_product(2**70)


def test_new_item_is_fully_loaded_before_commit(db_session, seeded):
    user, product = seeded
    store = CartStore(db_session)

    with store.transaction():
        item = store.create_item(user.id, product.id, 1)
        added_at = item.added_at

    assert added_at is not None
