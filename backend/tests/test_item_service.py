import pytest
from sqlalchemy.exc import SQLAlchemyError

from sunatstock.models.medical_item import MedicalItem
from sunatstock.models.stock_transaction import StockTransaction
from sunatstock.schemas.medical_item import ItemFilter, MedicalItemCreate, MedicalItemResponse, MedicalItemUpdate
from sunatstock.services import item_service
from sunatstock.services.ledger_service import ledger_balance
from sunatstock.services.stock_status import StockStatus


def test_create_item_with_stock_records_initial_adjustment(db_session, make_item):
    item = make_item(name="Lidocaine 2%", category="obat", unit="ampul", current_stock=50)

    rows = db_session.query(StockTransaction).filter(StockTransaction.item_id == item.id).all()
    assert len(rows) == 1
    assert rows[0].transaction_type == "adjustment"
    assert rows[0].quantity == 50
    assert rows[0].remaining_stock == 50
    assert rows[0].notes == "Initial stock entry"


def test_create_item_with_zero_stock_records_nothing(db_session, make_item):
    item = make_item(current_stock=0)

    assert db_session.query(StockTransaction).filter(StockTransaction.item_id == item.id).count() == 0
    assert item.current_stock == 0


def test_create_item_round_trip(db_session, make_item):
    item = make_item(
        name="Gunting Jaringan", category="alat", unit="pcs",
        current_stock=7, minimum_threshold=2, purchase_price=85000.5, image_path="/img/gunting.png",
    )

    loaded = MedicalItemResponse.model_validate(item_service.get_medical_item(db_session, item.id))
    assert loaded.name == "Gunting Jaringan"
    assert loaded.category == "alat"
    assert loaded.unit == "pcs"
    assert loaded.current_stock == 7
    assert loaded.minimum_threshold == 2
    assert loaded.purchase_price == 85000.5
    assert isinstance(loaded.purchase_price, float)
    assert loaded.image_path == "/img/gunting.png"
    assert loaded.created_at is not None
    assert loaded.stock_status == StockStatus.CUKUP


def test_create_item_without_price_serialises_null(make_item):
    item = make_item(purchase_price=None)
    assert MedicalItemResponse.model_validate(item).purchase_price is None


def test_update_only_changes_supplied_fields(db_session, make_item):
    item = make_item(name="Kasa", unit="pcs", minimum_threshold=2, purchase_price=3500)

    updated = item_service.update_medical_item(db_session, item.id, MedicalItemUpdate(name="Kasa Steril"))

    assert updated.name == "Kasa Steril"
    assert updated.unit == "pcs"
    assert updated.minimum_threshold == 2
    assert float(updated.purchase_price) == 3500
    assert updated.current_stock == 10


def test_update_price_tri_state(db_session, make_item):
    item = make_item(purchase_price=1000)

    # omitted: untouched
    item_service.update_medical_item(db_session, item.id, MedicalItemUpdate(unit="box"))
    assert float(db_session.get(MedicalItem, item.id).purchase_price) == 1000

    # number: set
    item_service.update_medical_item(db_session, item.id, MedicalItemUpdate(purchase_price=1250.75))
    assert float(db_session.get(MedicalItem, item.id).purchase_price) == 1250.75

    # explicit null: cleared
    item_service.update_medical_item(db_session, item.id, MedicalItemUpdate(purchase_price=None))
    assert db_session.get(MedicalItem, item.id).purchase_price is None


def test_update_missing_item_returns_none(db_session):
    assert item_service.update_medical_item(db_session, 999, MedicalItemUpdate(name="X")) is None


def test_update_does_not_touch_ledger(db_session, make_item):
    item = make_item(current_stock=10)
    item_service.update_medical_item(db_session, item.id, MedicalItemUpdate(minimum_threshold=20))

    assert db_session.query(StockTransaction).count() == 1
    assert ledger_balance(db_session, item.id) == 10


def test_list_items_filters(db_session, make_item):
    make_item(name="Gunting", category="alat", current_stock=10, minimum_threshold=2)
    make_item(name="Lidocaine", category="obat", current_stock=2, minimum_threshold=5)
    make_item(name="Kasa Steril", category="habis_pakai", current_stock=0, minimum_threshold=5)
    make_item(name="Kasa Gulung", category="habis_pakai", current_stock=50, minimum_threshold=5)

    names = lambda items: [i.name for i in items]  # noqa: E731

    assert names(item_service.list_medical_items(db_session)) == ["Gunting", "Kasa Gulung", "Kasa Steril", "Lidocaine"]
    assert names(item_service.list_medical_items(db_session, ItemFilter(category="habis_pakai"))) == ["Kasa Gulung", "Kasa Steril"]
    assert names(item_service.list_medical_items(db_session, ItemFilter(status=StockStatus.KOSONG))) == ["Kasa Steril"]
    assert names(item_service.list_medical_items(db_session, ItemFilter(status=StockStatus.HAMPIR_HABIS))) == ["Lidocaine"]
    assert names(item_service.list_medical_items(db_session, ItemFilter(status=StockStatus.CUKUP))) == ["Gunting", "Kasa Gulung"]
    assert names(item_service.list_medical_items(db_session, ItemFilter(search="kasa"))) == ["Kasa Gulung", "Kasa Steril"]
    assert names(
        item_service.list_medical_items(db_session, ItemFilter(search="kasa", status=StockStatus.CUKUP))
    ) == ["Kasa Gulung"]


def test_low_stock_items(db_session, make_item):
    make_item(name="Cukup", current_stock=11, minimum_threshold=10)
    make_item(name="Batas", current_stock=10, minimum_threshold=10)
    make_item(name="Habis", current_stock=0, minimum_threshold=0)
    make_item(name="Sedikit", current_stock=3, minimum_threshold=5)

    low = item_service.get_low_stock_items(db_session)
    assert [i.name for i in low] == ["Habis", "Sedikit", "Batas"]


def test_search_treats_wildcards_literally(db_session, make_item):
    make_item(name="Lidocaine 2%")
    make_item(name="Lidocaine 20 ml")
    make_item(name="Kasa_Gulung")
    make_item(name="Kasa Steril")

    names = lambda items: [i.name for i in items]  # noqa: E731

    assert names(item_service.list_medical_items(db_session, ItemFilter(search="2%"))) == ["Lidocaine 2%"]
    assert names(item_service.list_medical_items(db_session, ItemFilter(search="a_"))) == ["Kasa_Gulung"]


def test_create_item_database_failure_leaves_no_rows(db_session, monkeypatch):
    def _fail(*args, **kwargs):
        raise SQLAlchemyError("disk I/O error")

    monkeypatch.setattr(item_service, "add_stock_transaction", _fail)

    with pytest.raises(SQLAlchemyError):
        item_service.create_medical_item(
            db_session,
            MedicalItemCreate(name="Kasa Steril", category="habis_pakai", unit="pcs", current_stock=10, minimum_threshold=2),
        )

    assert db_session.query(MedicalItem).count() == 0
    assert db_session.query(StockTransaction).count() == 0
