import pytest
from sqlalchemy.exc import SQLAlchemyError

from sunatstock.models.medical_item import MedicalItem
from sunatstock.models.stock_transaction import StockTransaction
from sunatstock.schemas.stock import RestockRequest
from sunatstock.services import restock_service
from sunatstock.services.ledger_service import get_stock_history, ledger_balance
from sunatstock.services.restock_service import restock_item


def test_restock_increments_stock_and_records_purchase(db_session, make_item):
    item = make_item(current_stock=10, purchase_price=25000)

    updated = restock_item(db_session, item.id, RestockRequest(quantity=50, notes="Supplier A"))

    assert updated.current_stock == 60
    history = get_stock_history(db_session, item.id)
    purchases = [t for t in history if t.transaction_type == "purchase"]
    assert len(purchases) == 1
    assert purchases[0].quantity == 50
    assert purchases[0].remaining_stock == 60
    assert purchases[0].notes == "Supplier A"


def test_restock_without_price_keeps_existing_price(db_session, make_item):
    item = make_item(purchase_price=25000)

    updated = restock_item(db_session, item.id, RestockRequest(quantity=5))

    assert float(updated.purchase_price) == 25000


def test_restock_with_price_overwrites_price(db_session, make_item):
    item = make_item(purchase_price=25000)

    updated = restock_item(db_session, item.id, RestockRequest(quantity=5, purchase_price=27500))

    assert float(updated.purchase_price) == 27500


def test_restock_missing_item_returns_none(db_session):
    assert restock_item(db_session, 999, RestockRequest(quantity=5)) is None
    assert db_session.query(StockTransaction).count() == 0


def test_restock_keeps_ledger_reconciled(db_session, make_item):
    item = make_item(current_stock=0)

    restock_item(db_session, item.id, RestockRequest(quantity=5))
    restock_item(db_session, item.id, RestockRequest(quantity=7))

    assert item.current_stock == 12
    assert ledger_balance(db_session, item.id) == 12
    assert [t.remaining_stock for t in get_stock_history(db_session, item.id)] == [12, 5]


def test_restock_database_failure_rolls_back(db_session, make_item, monkeypatch):
    item = make_item(current_stock=10, purchase_price=25000)

    def _fail(*args, **kwargs):
        raise SQLAlchemyError("database is locked")

    monkeypatch.setattr(restock_service, "add_stock_transaction", _fail)

    with pytest.raises(SQLAlchemyError):
        restock_service.restock_item(db_session, item.id, RestockRequest(quantity=50, purchase_price=30000))

    reloaded = db_session.get(MedicalItem, item.id)
    assert reloaded.current_stock == 10
    assert float(reloaded.purchase_price) == 25000
    assert db_session.query(StockTransaction).count() == 1
    assert ledger_balance(db_session, item.id) == 10
