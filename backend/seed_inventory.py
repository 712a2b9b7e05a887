"""Seed a typical circumcision-clinic inventory.

Items are created through item_service so every starting stock gets its
"Initial stock entry" ledger row. Existing items (matched by name) are skipped.

Usage: python seed_inventory.py
"""
from sunatstock.db.init_db import init_db
from sunatstock.db.session import SessionLocal
from sunatstock.models.medical_item import MedicalItem
from sunatstock.schemas.medical_item import MedicalItemCreate
from sunatstock.services.item_service import create_medical_item

ITEMS = [
    # Tools
    {"name": "Gunting Jaringan", "category": "alat", "unit": "pcs", "current_stock": 10, "minimum_threshold": 2, "purchase_price": 85000},
    {"name": "Klem Arteri", "category": "alat", "unit": "pcs", "current_stock": 12, "minimum_threshold": 3, "purchase_price": 65000},
    {"name": "Pinset Anatomis", "category": "alat", "unit": "pcs", "current_stock": 8, "minimum_threshold": 2, "purchase_price": 45000},
    {"name": "Alat Sunat Klamp", "category": "alat", "unit": "pcs", "current_stock": 30, "minimum_threshold": 10, "purchase_price": 120000},
    {"name": "Electrocauter Tip", "category": "alat", "unit": "pcs", "current_stock": 6, "minimum_threshold": 2, "purchase_price": 150000},
    # Medicines
    {"name": "Lidocaine 2%", "category": "obat", "unit": "ampul", "current_stock": 50, "minimum_threshold": 15, "purchase_price": 4500},
    {"name": "Povidone Iodine 60ml", "category": "obat", "unit": "botol", "current_stock": 20, "minimum_threshold": 5, "purchase_price": 18000},
    {"name": "Salep Antibiotik", "category": "obat", "unit": "tube", "current_stock": 25, "minimum_threshold": 8, "purchase_price": 22000},
    {"name": "Paracetamol Sirup", "category": "obat", "unit": "botol", "current_stock": 15, "minimum_threshold": 5, "purchase_price": 12000},
    {"name": "Anestesi Gel", "category": "obat", "unit": "tube", "current_stock": 5, "minimum_threshold": 5, "purchase_price": 35000},
    # Consumables
    {"name": "Kasa Steril", "category": "habis_pakai", "unit": "bungkus", "current_stock": 100, "minimum_threshold": 30, "purchase_price": 3500},
    {"name": "Sarung Tangan Steril", "category": "habis_pakai", "unit": "pasang", "current_stock": 80, "minimum_threshold": 20, "purchase_price": 6000},
    {"name": "Spuit 3cc", "category": "habis_pakai", "unit": "pcs", "current_stock": 60, "minimum_threshold": 20, "purchase_price": 2500},
    {"name": "Benang Jahit Catgut", "category": "habis_pakai", "unit": "pcs", "current_stock": 40, "minimum_threshold": 10, "purchase_price": 15000},
    {"name": "Plester Luka", "category": "habis_pakai", "unit": "box", "current_stock": 0, "minimum_threshold": 3, "purchase_price": None},
]


def seed_inventory():
    init_db()
    db = SessionLocal()
    created = 0
    try:
        for data in ITEMS:
            exists = db.query(MedicalItem).filter(MedicalItem.name == data["name"]).first()
            if exists:
                print(f"[SKIP] {data['name']} already exists")
                continue
            item = create_medical_item(db, MedicalItemCreate(**data))
            print(f"[OK] {item.name}: {item.current_stock} {item.unit}")
            created += 1
    finally:
        db.close()

    print(f"\nSeeded {created} items ({len(ITEMS) - created} skipped)")


if __name__ == "__main__":
    seed_inventory()
