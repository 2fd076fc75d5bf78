"""Integration tests for the public HTTP surface."""

from datetime import date, timedelta
from decimal import Decimal
from unittest.mock import patch

from sqlalchemy.exc import SQLAlchemyError

from storefront.data.models import ProductModel, ProfileModel
from storefront.repos.order_repo import OrderRepo


class TestHealth:
    def test_health(self, client):
        assert client.get("/health").status_code == 200


class TestCatalogEndpoints:
    def test_list_by_type(self, client, hotdog, banana):
        snacks = client.get("/products", params={"type": "snacks"}).json()
        market = client.get("/products", params={"type": "supermarket"}).json()

        assert [p["name"] for p in snacks] == ["Cachorro-Quente"]
        assert [p["name"] for p in market] == ["Banana Prata"]

    def test_uncategorized_products_in_market(self, client, db):
        db.add(ProductModel(name="Arroz 5kg", price=Decimal("25.90"), unit="un", stock=0))
        db.commit()

        market = client.get("/products", params={"type": "supermarket"}).json()

        assert market[0]["name"] == "Arroz 5kg"
        assert market[0]["in_stock"] is False

    def test_search_is_case_insensitive(self, client, hotdog, banana):
        result = client.get("/products", params={"search": "banana"}).json()

        assert [p["name"] for p in result] == ["Banana Prata"]

    def test_low_stock_flag(self, client, banana):
        product = client.get(f"/products/{banana.id}").json()

        assert product["low_stock"] is True
        assert product["in_stock"] is True

    def test_unknown_product(self, client):
        assert client.get("/products/nope").status_code == 404

    def test_categories_by_type(self, client, snacks, market):
        result = client.get("/categories", params={"type": "snacks"}).json()

        assert [c["slug"] for c in result] == ["lanches"]


class TestCartEndpoints:
    def test_add_merges_customized_lines(self, client, hotdog):
        client.post("/carts/s1/items", json={"product_id": hotdog.id, "ingredients": ["Pão", "Salsicha"]})
        resp = client.post("/carts/s1/items", json={"product_id": hotdog.id, "ingredients": ["Salsicha", "Pão"]})

        cart = resp.json()
        assert resp.status_code == 200
        assert len(cart["lines"]) == 1
        assert cart["lines"][0]["quantity"] == 2
        assert Decimal(cart["total"]) == Decimal("25.50")

    def test_add_zero_quantity_rejected(self, client, hotdog):
        resp = client.post("/carts/s1/items", json={"product_id": hotdog.id, "quantity": 0})

        assert resp.status_code == 422

    def test_add_unknown_product(self, client):
        assert client.post("/carts/s1/items", json={"product_id": "nope"}).status_code == 404

    def test_add_invalid_ingredient(self, client, hotdog):
        resp = client.post("/carts/s1/items", json={"product_id": hotdog.id, "ingredients": ["Bacon"]})

        assert resp.status_code == 400

    def test_update_clamps_quantity(self, client, hotdog):
        line_id = client.post("/carts/s1/items", json={"product_id": hotdog.id, "quantity": 3}).json()["lines"][0]["line_id"]

        cart = client.patch(f"/carts/s1/items/{line_id}", json={"quantity": 0}).json()

        assert cart["lines"][0]["quantity"] == 1

    def test_update_unknown_line(self, client):
        assert client.patch("/carts/s1/items/nope", json={"quantity": 2}).status_code == 404

    def test_remove_unknown_line_is_noop(self, client, hotdog):
        client.post("/carts/s1/items", json={"product_id": hotdog.id})

        resp = client.delete("/carts/s1/items/nope")

        assert resp.status_code == 200
        assert len(resp.json()["lines"]) == 1

    def test_clear(self, client, hotdog):
        client.post("/carts/s1/items", json={"product_id": hotdog.id})

        assert client.delete("/carts/s1").json()["lines"] == []
        assert client.get("/carts/s1").json()["item_count"] == 0

    def test_add_bundle(self, client, bundle):
        resp = client.post(f"/carts/s1/promotions/{bundle.id}")

        assert resp.status_code == 200
        assert Decimal(resp.json()["total"]) == Decimal("15.00")

    def test_add_percentage_promotion_rejected(self, client, discount):
        assert client.post(f"/carts/s1/promotions/{discount.id}").status_code == 400


class TestPromotionEndpoints:
    def test_list_both_variants(self, client, bundle, discount):
        result = client.get("/promotions/").json()

        kinds = {p["id"]: p["kind"] for p in result}
        assert kinds == {bundle.id: "bundle", discount.id: "percentage"}

    def test_banner_dismissal(self, client):
        assert client.get("/promotions/banner/s1").json() == {"dismissed": False}

        client.post("/promotions/banner/s1/dismiss")

        assert client.get("/promotions/banner/s1").json() == {"dismissed": True}
        assert client.get("/promotions/banner/s2").json() == {"dismissed": False}


class TestCheckoutEndpoints:
    def test_delivery_dates_are_weekdays(self, client):
        dates = [date.fromisoformat(d) for d in client.get("/checkout/delivery-dates").json()]

        assert dates
        assert all(d.weekday() < 5 for d in dates)

    def test_time_slots_for_offered_date(self, client):
        day = client.get("/checkout/delivery-dates").json()[-1]

        body = client.get("/checkout/time-slots", params={"date": day}).json()

        assert body["submission_allowed"] is True
        assert body["message"] is None
        assert all(s["available"] for s in body["slots"])

    def test_weekend_has_no_slots(self, client):
        today = date.today()
        saturday = today + timedelta(days=(5 - today.weekday()) % 7 or 7)

        body = client.get("/checkout/time-slots", params={"date": saturday.isoformat()}).json()

        assert body["submission_allowed"] is False
        assert body["message"] == "Data de entrega indisponível"
        assert not any(s["available"] for s in body["slots"])

    def test_date_beyond_window_has_no_slots(self, client):
        day = date.today() + timedelta(days=60)

        body = client.get("/checkout/time-slots", params={"date": day.isoformat()}).json()

        assert body["submission_allowed"] is False

    def test_time_slots_for_past_date(self, client):
        day = date.today() - timedelta(days=1)

        body = client.get("/checkout/time-slots", params={"date": day.isoformat()}).json()

        assert body["submission_allowed"] is False
        assert body["message"]

    def test_missing_fields(self, client, hotdog):
        client.post("/carts/s1/items", json={"product_id": hotdog.id})

        resp = client.post("/checkout/s1", json={"order_type": "delivery", "payment_method": "pix"})

        assert resp.status_code == 422
        assert resp.json()["detail"]["missing"] == ["customer"]
        assert resp.json()["detail"]["state"] == "collecting"

    def test_submit_express(self, client, hotdog):
        client.post("/carts/s1/items", json={"product_id": hotdog.id, "quantity": 2})

        resp = client.post("/checkout/s1", json={"order_type": "express", "payment_method": "credit_card"})

        body = resp.json()
        assert resp.status_code == 201
        assert body["state"] == "completed"
        assert Decimal(body["total"]) == Decimal("25.50")
        assert client.get("/carts/s1").json()["lines"] == []

    def test_partial_order_reported(self, client, hotdog):
        client.post("/carts/s1/items", json={"product_id": hotdog.id})
        with patch.object(OrderRepo, "add_items", side_effect=SQLAlchemyError("boom")):
            resp = client.post("/checkout/s1", json={"order_type": "express", "payment_method": "pix"})

        detail = resp.json()["detail"]
        assert resp.status_code == 502
        assert detail["partial"] is True
        assert detail["order_id"]


class TestOrderEndpoints:
    def test_mine_requires_session(self, client):
        assert client.get("/orders/mine").status_code == 401

    def test_mine_uses_profile_phone(self, client, customer, make_order):
        make_order()

        resp = client.get("/orders/mine", headers={"X-User-Id": customer.id})

        assert resp.status_code == 200
        assert resp.json()[0]["status_info"]["label"] == "Pendente"

    def test_mine_unapproved_is_403(self, client, db, make_order):
        db.add(ProfileModel(id="user-9", full_name="Novo Cliente", phone="11999990000", approved=False))
        db.commit()
        make_order()

        assert client.get("/orders/mine", headers={"X-User-Id": "user-9"}).status_code == 403

    def test_lookup_own_phone(self, client, customer, make_order):
        make_order(status="ready")

        orders = client.get("/orders", params={"phone": "11999990000"}, headers={"X-User-Id": customer.id}).json()

        assert orders[0]["status"] == "ready"

    def test_anonymous_lookup_rejected(self, client, make_order):
        make_order()

        assert client.get("/orders", params={"phone": "11999990000"}).status_code == 401

    def test_lookup_of_other_customer_rejected(self, client, customer, make_order):
        make_order(customer_phone="11888880000")

        resp = client.get("/orders", params={"phone": "11888880000"}, headers={"X-User-Id": customer.id})

        assert resp.status_code == 403

    def test_admin_lookup(self, client, admin_headers, make_order):
        make_order(customer_phone="11888880000")

        resp = client.get("/orders", params={"phone": "11888880000"}, headers=admin_headers)

        assert len(resp.json()) == 1

    def test_lookup_needs_phone_or_email(self, client, admin_headers):
        assert client.get("/orders", headers=admin_headers).status_code == 400

    def test_session_info(self, client, customer):
        body = client.get("/session", headers={"X-User-Id": customer.id}).json()

        assert body["authenticated"] is True
        assert body["phone"] == "11999990000"
        assert body["is_admin"] is False

    def test_anonymous_session(self, client):
        assert client.get("/session").json()["authenticated"] is False

    def test_sign_out(self, client, customer):
        client.get("/session", headers={"X-User-Id": customer.id})

        body = client.post("/session/sign-out", headers={"X-User-Id": customer.id}).json()

        assert body["authenticated"] is False

    def test_unapproved_customer_cannot_check_out(self, client, db, hotdog):
        db.add(ProfileModel(id="user-9", full_name="Novo Cliente", approved=False))
        db.commit()
        client.post("/carts/s1/items", json={"product_id": hotdog.id})

        resp = client.post(
            "/checkout/s1",
            json={"order_type": "express", "payment_method": "pix"},
            headers={"X-User-Id": "user-9"},
        )

        assert resp.status_code == 403
        assert len(client.get("/carts/s1").json()["lines"]) == 1
