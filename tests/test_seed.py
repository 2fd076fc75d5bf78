from unittest.mock import patch

from storefront.data.models import CategoryModel, ProductModel
from storefront.data.seed import DEMO_PRODUCTS, seed


class TestSeed:
    def test_seeds_empty_database_once(self, db, session_factory):
        with patch("storefront.data.seed.SessionLocal", session_factory):
            seed()
            seed()

        assert db.query(ProductModel).count() == len(DEMO_PRODUCTS)
        hotdog = db.query(ProductModel).filter_by(name="Cachorro-Quente").one()
        assert hotdog.ingredients[:2] == ["Pão", "Salsicha"]

    def test_skips_when_catalog_exists(self, db, session_factory, snacks):
        with patch("storefront.data.seed.SessionLocal", session_factory):
            seed()

        assert db.query(CategoryModel).count() == 1
        assert db.query(ProductModel).count() == 0
