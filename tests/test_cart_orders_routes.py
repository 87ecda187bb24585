from __future__ import annotations

from decimal import Decimal

from cart import repository as cart_repository
from orders import repository as orders_repository
from products import repository as products_repository

CART = {"id": 30, "user_id": 7, "is_order": False, "name": None, "address": None}
LINES = [
    {"id": 1, "product_id": 5, "name": "Widget", "price": Decimal("2.50"), "quantity": 2, "total": Decimal("5.00")},
    {"id": 2, "product_id": 6, "name": "Gadget", "price": Decimal("1.25"), "quantity": 4, "total": Decimal("5.00")},
]


def _patch(monkeypatch, module, name, value):
    async def _fake(*args, **kwargs):
        return value(*args, **kwargs) if callable(value) else value

    monkeypatch.setattr(module, name, _fake)


def test_cart_requires_login(client):
    assert client.get("/cart").status_code == 401


def test_empty_cart(client, login_as, user, monkeypatch):
    login_as(user)
    _patch(monkeypatch, cart_repository, "get_cart", None)

    response = client.get("/cart")

    assert response.status_code == 200
    assert response.json()["lines"] == []
    assert float(response.json()["total"]) == 0


def test_cart_with_lines_has_total(client, login_as, user, monkeypatch):
    login_as(user)
    _patch(monkeypatch, cart_repository, "get_cart", CART)
    _patch(monkeypatch, cart_repository, "list_lines", LINES)

    body = client.get("/cart").json()

    assert body["id"] == 30
    assert len(body["lines"]) == 2
    assert float(body["total"]) == 10.0


def test_add_to_cart_creates_cart_when_missing(client, login_as, user, monkeypatch):
    login_as(user)
    added = {}
    _patch(monkeypatch, products_repository, "get_product", {"id": 5})
    _patch(monkeypatch, cart_repository, "get_cart", None)
    _patch(monkeypatch, cart_repository, "create_cart", lambda user_id: {**CART, "user_id": user_id})

    def _add_line(**kwargs):
        added.update(kwargs)
        return {"id": 1, **kwargs}

    _patch(monkeypatch, cart_repository, "add_line", _add_line)

    response = client.post("/cart", json={"product": 5, "quantity": 3})

    assert response.status_code == 201
    assert added == {"order_id": 30, "product_id": 5, "quantity": 3}


def test_add_unknown_product_to_cart(client, login_as, user, monkeypatch):
    login_as(user)
    _patch(monkeypatch, products_repository, "get_product", None)
    assert client.post("/cart", json={"product": 99}).status_code == 400


def test_add_to_cart_rejects_non_positive_quantity(client, login_as, user):
    login_as(user)
    assert client.post("/cart", json={"product": 5, "quantity": 0}).status_code == 422


def test_cart_line_of_another_user_is_not_found(client, login_as, user, fake_conn):
    login_as(user)

    response = client.get("/cart/line/1")

    assert response.status_code == 404
    assert fake_conn.calls[0][1] == [1, 7]


def test_update_cart_line_quantity(client, login_as, user, fake_conn):
    login_as(user)
    fake_conn.results = [[LINES[0]], [{"id": 1, "order_id": 30, "product_id": 5, "quantity": 9}]]

    response = client.patch("/cart/line/1", json={"quantity": 9})

    assert response.status_code == 200
    assert response.json()["quantity"] == 9
    sql, values = fake_conn.calls[1]
    assert "UPDATE order_lines" in sql
    assert "SET quantity = $2" in sql
    assert values == [1, 9]


def test_delete_cart_line(client, login_as, user, monkeypatch):
    login_as(user)
    _patch(monkeypatch, cart_repository, "get_cart_line", LINES[0])
    _patch(monkeypatch, cart_repository, "delete_line", True)
    assert client.delete("/cart/line/1").status_code == 204


def test_order_from_empty_cart(client, login_as, user, monkeypatch):
    login_as(user)
    _patch(monkeypatch, cart_repository, "get_cart", CART)
    _patch(monkeypatch, cart_repository, "list_lines", [])

    response = client.post("/orders", json={"name": "Jane", "address": "Main St 1"})
    assert response.status_code == 400


def test_place_order(client, login_as, user, monkeypatch):
    login_as(user)
    placed = {}
    _patch(monkeypatch, cart_repository, "get_cart", CART)
    _patch(monkeypatch, cart_repository, "list_lines", LINES)

    def _place(cart_id, *, name, address):
        placed.update(cart_id=cart_id, name=name, address=address)
        return {**CART, "is_order": True, "name": name, "address": address}

    _patch(monkeypatch, orders_repository, "place_order", _place)

    response = client.post("/orders", json={"name": "Jane", "address": "Main St 1"})

    assert response.status_code == 201
    assert placed == {"cart_id": 30, "name": "Jane", "address": "Main St 1"}
    assert response.json()["is_order"] is True
    assert float(response.json()["total"]) == 10.0


def test_users_list_only_their_orders(client, login_as, user, fake_conn):
    login_as(user)

    response = client.get("/orders", params={"limit": "5"})

    assert response.status_code == 200
    sql, values = fake_conn.calls[0]
    assert "user_id = $1" in sql
    assert values == [7, 5, 0]


def test_admins_list_all_orders(client, login_as, admin, fake_conn):
    login_as(admin)

    client.get("/orders")

    sql, values = fake_conn.calls[0]
    assert "AND user_id" not in sql
    assert values == [10, 0]


def test_order_of_another_user_is_not_found(client, login_as, user, fake_conn):
    login_as(user)
    assert client.get("/orders/3").status_code == 404
    assert fake_conn.calls[0][1] == [3, 7]


def test_get_order_with_lines(client, login_as, admin, monkeypatch):
    login_as(admin)
    _patch(monkeypatch, orders_repository, "get_order", {**CART, "is_order": True})
    _patch(monkeypatch, cart_repository, "list_lines", LINES)

    body = client.get("/orders/30").json()

    assert len(body["lines"]) == 2
