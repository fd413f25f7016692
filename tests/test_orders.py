import uuid

ORDERS = "/api/v1/orders"


def _stock(api, product_id) -> int:
    return api.client.get(f"/api/v1/products/{product_id}").json()["stock"]


def test_place_order_captures_prices_and_decrements_stock(api, admin_token, customer_token):
    scarf = api.create_product(admin_token, price="25.50", stock=5)
    hat = api.create_product(admin_token, name="Bobble Hat", price="9.99", stock=2)

    response = api.place_order(customer_token, (scarf["id"], 2), (hat["id"], 1))

    assert response.status_code == 201
    order = response.json()
    assert order["status"] == "pending"
    assert order["total"] == 60.99
    assert order["currency"] == "USD"
    assert order["userId"] == api.user_id(customer_token)
    assert order["shippingAddress"] == "1 Yarn Street"
    assert {(i["productId"], i["quantity"], i["unitPrice"]) for i in order["items"]} == {
        (scarf["id"], 2, 25.5),
        (hat["id"], 1, 9.99),
    }
    assert _stock(api, scarf["id"]) == 3
    assert _stock(api, hat["id"]) == 1


def test_price_change_does_not_alter_placed_order(api, admin_token, customer_token):
    scarf = api.create_product(admin_token, price="25.50")
    order = api.place_order(customer_token, (scarf["id"], 1)).json()

    api.client.put(f"/api/v1/products/{scarf['id']}", json={"price": "99"}, headers=api.auth(admin_token))

    orders = api.client.get(f"{ORDERS}/my", headers=api.auth(customer_token)).json()
    assert orders[0]["id"] == order["id"]
    assert orders[0]["total"] == 25.5


def test_order_for_all_remaining_stock(api, admin_token, customer_token):
    scarf = api.create_product(admin_token, stock=3)

    assert api.place_order(customer_token, (scarf["id"], 3)).status_code == 201
    assert _stock(api, scarf["id"]) == 0


def test_last_item_sells_once(api, admin_token, customer_token):
    scarf = api.create_product(admin_token, stock=1, price="25.50")
    other = api.token_for("other@example.com")

    first = api.place_order(customer_token, (scarf["id"], 1))
    second = api.place_order(other, (scarf["id"], 1))

    assert first.status_code == 201
    assert first.json()["total"] == 25.5
    assert second.status_code == 400
    assert _stock(api, scarf["id"]) == 0


def test_insufficient_stock_rejects_order(api, admin_token, customer_token):
    scarf = api.create_product(admin_token, stock=1)

    response = api.place_order(customer_token, (scarf["id"], 2))

    assert response.status_code == 400
    assert response.json()["detail"] == "Not enough stock for Chunky Scarf"
    assert _stock(api, scarf["id"]) == 1


def test_short_line_rolls_back_earlier_lines(api, admin_token, customer_token):
    scarf = api.create_product(admin_token, stock=5)
    hat = api.create_product(admin_token, name="Bobble Hat", stock=0)

    response = api.place_order(customer_token, (scarf["id"], 2), (hat["id"], 1))

    assert response.status_code == 400
    assert _stock(api, scarf["id"]) == 5
    assert api.client.get(f"{ORDERS}/my", headers=api.auth(customer_token)).json() == []


def test_unknown_product_rejects_order(api, admin_token, customer_token):
    scarf = api.create_product(admin_token, stock=5)

    response = api.place_order(customer_token, (scarf["id"], 1), (str(uuid.uuid4()), 1))

    assert response.status_code == 404
    assert _stock(api, scarf["id"]) == 5


def test_order_requires_items(api, customer_token):
    assert api.place_order(customer_token).status_code == 400


def test_order_requires_positive_quantity(api, admin_token, customer_token):
    scarf = api.create_product(admin_token)

    assert api.place_order(customer_token, (scarf["id"], 0)).status_code == 400


def test_order_requires_shipping_address(api, admin_token, customer_token):
    scarf = api.create_product(admin_token)

    response = api.place_order(customer_token, (scarf["id"], 1), shipping_address="   ")

    assert response.status_code == 400
    assert _stock(api, scarf["id"]) == 5


def test_admin_cannot_place_orders(api, admin_token):
    scarf = api.create_product(admin_token)

    assert api.place_order(admin_token, (scarf["id"], 1)).status_code == 403


def test_customer_sees_only_own_orders(api, admin_token, customer_token):
    scarf = api.create_product(admin_token)
    other = api.token_for("other@example.com")
    mine = api.place_order(customer_token, (scarf["id"], 1)).json()
    api.place_order(other, (scarf["id"], 1))

    for path in (f"{ORDERS}/my", "/api/v1/users/orders"):
        orders = api.client.get(path, headers=api.auth(customer_token)).json()
        assert [o["id"] for o in orders] == [mine["id"]]


def test_admin_lists_all_orders(api, admin_token, customer_token):
    scarf = api.create_product(admin_token)
    first = api.place_order(customer_token, (scarf["id"], 1)).json()
    second = api.place_order(customer_token, (scarf["id"], 1)).json()

    response = api.client.get(ORDERS, headers=api.auth(admin_token))

    assert response.status_code == 200
    assert [o["id"] for o in response.json()] == [second["id"], first["id"]]

    page = api.client.get(ORDERS, params={"skip": 1, "limit": 1}, headers=api.auth(admin_token)).json()
    assert [o["id"] for o in page] == [first["id"]]


def test_customer_cannot_list_all_orders(api, customer_token):
    assert api.client.get(ORDERS, headers=api.auth(customer_token)).status_code == 403


def test_order_lifecycle(api, admin_token, customer_token):
    scarf = api.create_product(admin_token)
    order_id = api.place_order(customer_token, (scarf["id"], 1)).json()["id"]

    shipped = api.set_order_status(admin_token, order_id, "shipped")
    delivered = api.set_order_status(admin_token, order_id, "delivered")

    assert shipped.status_code == 200
    assert shipped.json()["status"] == "shipped"
    assert delivered.json()["status"] == "delivered"


def test_invalid_transitions_are_rejected(api, admin_token, customer_token):
    scarf = api.create_product(admin_token)
    order_id = api.place_order(customer_token, (scarf["id"], 1)).json()["id"]

    skipped = api.set_order_status(admin_token, order_id, "delivered")
    assert skipped.status_code == 400
    assert skipped.json()["detail"] == "Cannot change order status from pending to delivered"

    assert api.set_order_status(admin_token, order_id, "cancelled").status_code == 200
    assert api.set_order_status(admin_token, order_id, "shipped").status_code == 400


def test_unknown_status_value(api, admin_token, customer_token):
    scarf = api.create_product(admin_token)
    order_id = api.place_order(customer_token, (scarf["id"], 1)).json()["id"]

    assert api.set_order_status(admin_token, order_id, "lost").status_code == 400


def test_status_update_for_unknown_order(api, admin_token):
    response = api.set_order_status(admin_token, str(uuid.uuid4()), "shipped")

    assert response.status_code == 404
    assert response.json()["detail"] == "Order not found"


def test_customer_cannot_change_status(api, admin_token, customer_token):
    scarf = api.create_product(admin_token)
    order_id = api.place_order(customer_token, (scarf["id"], 1)).json()["id"]

    assert api.set_order_status(customer_token, order_id, "shipped").status_code == 403
