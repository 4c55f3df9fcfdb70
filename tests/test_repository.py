# tests/test_repository.py

from product_api.repository import ProductRepository


def test_insert_assigns_id_and_defaults_availability(db_session):
    repo = ProductRepository(db_session)

    product = repo.insert(name="Keyboard", price=49.5)

    assert product.id == 1
    assert product.availability is True
    assert product.price == 49.5
    assert product.created_at is not None


def test_find_all_orders_by_id_descending(db_session):
    repo = ProductRepository(db_session)
    for name in ("Mouse", "Monitor", "Headset"):
        repo.insert(name=name, price=10)

    assert [p.name for p in repo.find_all()] == ["Headset", "Monitor", "Mouse"]


def test_update_and_delete(db_session):
    repo = ProductRepository(db_session)
    product = repo.insert(name="Mouse", price=10)

    updated = repo.update(product, name="Wireless Mouse", price=25, availability=False)
    assert updated.name == "Wireless Mouse"
    assert updated.price == 25
    assert updated.availability is False

    repo.delete(updated)
    assert repo.find_by_id(product.id) is None
    assert repo.find_all() == []


def test_find_by_id_missing_returns_none(db_session):
    assert ProductRepository(db_session).find_by_id(99) is None
