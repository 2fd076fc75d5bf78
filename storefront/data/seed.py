# storefront/data/seed.py
from decimal import Decimal

from storefront.data.database import SessionLocal
from storefront.data.models import CategoryModel, ProductModel
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

DEMO_CATEGORIES = [
    {"name": "Hortifruti", "slug": "hortifruti", "type": "supermarket"},
    {"name": "Bebidas", "slug": "bebidas", "type": "supermarket"},
    {"name": "Lanches", "slug": "lanches", "type": "snacks"},
]

DEMO_PRODUCTS = [
    {"name": "Banana Prata", "price": Decimal("6.99"), "unit": "kg", "stock": 40, "category": "hortifruti"},
    {"name": "Tomate", "price": Decimal("8.49"), "unit": "kg", "stock": 6, "category": "hortifruti"},
    {"name": "Água Mineral 500ml", "price": Decimal("2.50"), "unit": "un", "stock": 120, "category": "bebidas"},
    {"name": "Refrigerante Lata", "price": Decimal("5.00"), "unit": "un", "stock": 0, "category": "bebidas"},
    {
        "name": "Cachorro-Quente",
        "price": Decimal("12.50"),
        "unit": "un",
        "stock": 30,
        "category": "lanches",
        "ingredients": ["Pão", "Salsicha", "Molho", "Batata Palha", "Milho"],
    },
]


def seed():
    db = SessionLocal()
    try:
        # not forcing: only seed if empty
        if db.query(CategoryModel).first():
            return

        categories = {}
        for data in DEMO_CATEGORIES:
            category = CategoryModel(**data)
            db.add(category)
            categories[data["slug"]] = category
        db.flush()

        for data in DEMO_PRODUCTS:
            data = dict(data)
            category = categories[data.pop("category")]
            db.add(ProductModel(category_id=category.id, **data))

        db.commit()
        logger.info(f"Seeded {len(DEMO_CATEGORIES)} categories and {len(DEMO_PRODUCTS)} products")
    finally:
        db.close()
