import asyncio
import uuid

import pytest

from knotty.db.database import SessionLocal
from knotty.domain.exceptions import DomainError
from knotty.infrastructure.repositories.unit_of_work_impl import UnitOfWorkImpl
from make_admin import make_admin


USERS = "/api/v1/users"


# Self-service profile

def test_get_profile(api, customer_token):
    response = api.client.get(f"{USERS}/profile", headers=api.auth(customer_token))

    assert response.status_code == 200
    body = response.json()
    assert body["email"] == "buyer@example.com"
    assert body["role"] == "customer"
    assert body["isActive"] is True
    assert body["shippingAddresses"] == []
    assert body["wishlist"] == []
    assert "hashedPassword" not in body


def test_update_profile_keeps_password_unless_given(api, customer_token):
    response = api.client.put(
        f"{USERS}/profile",
        json={"name": "Renamed Buyer", "phoneNumber": "555-0101", "newsletter": False},
        headers=api.auth(customer_token),
    )

    assert response.status_code == 200
    user = response.json()["user"]
    assert user["name"] == "Renamed Buyer"
    assert user["phoneNumber"] == "555-0101"
    assert user["newsletter"] is False
    assert api.login("buyer@example.com").status_code == 200


def test_update_profile_changes_password(api, customer_token):
    response = api.client.put(f"{USERS}/profile", json={"password": "changed99"}, headers=api.auth(customer_token))

    assert response.status_code == 200
    assert api.login("buyer@example.com").status_code == 401
    assert api.login("buyer@example.com", "changed99").status_code == 200


def test_update_profile_validates_age(api, customer_token):
    response = api.client.put(f"{USERS}/profile", json={"age": 12}, headers=api.auth(customer_token))

    assert response.status_code == 400


def test_customer_profile_lists_recent_orders(api, admin_token, customer_token):
    product = api.create_product(admin_token, stock=20)
    for _ in range(11):
        api.place_order(customer_token, (product["id"], 1))

    response = api.client.get(f"{USERS}/profile/customer", headers=api.auth(customer_token))

    assert response.status_code == 200
    body = response.json()
    assert body["user"]["email"] == "buyer@example.com"
    assert len(body["recentOrders"]) == 10


def test_customer_profile_is_customer_only(api, admin_token):
    assert api.client.get(f"{USERS}/profile/customer", headers=api.auth(admin_token)).status_code == 403


# Wishlist and shipping addresses

def test_wishlist_add_list_remove(api, admin_token, customer_token):
    product = api.create_product(admin_token)
    headers = api.auth(customer_token)

    added = api.client.post(f"{USERS}/wishlist", json={"productId": product["id"]}, headers=headers)
    again = api.client.post(f"{USERS}/wishlist", json={"productId": product["id"]}, headers=headers)

    assert added.status_code == 200
    assert added.json()["wishlist"] == [product["id"]]
    assert again.json()["wishlist"] == [product["id"]]

    listed = api.client.get(f"{USERS}/wishlist", headers=headers).json()
    assert [p["id"] for p in listed] == [product["id"]]

    removed = api.client.delete(f"{USERS}/wishlist/{product['id']}", headers=headers)
    assert removed.status_code == 200
    assert removed.json()["wishlist"] == []


def test_wishlist_rejects_unknown_product(api, customer_token):
    response = api.client.post(
        f"{USERS}/wishlist",
        json={"productId": str(uuid.uuid4())},
        headers=api.auth(customer_token),
    )

    assert response.status_code == 404


def test_new_default_shipping_address_demotes_old(api, customer_token):
    headers = api.auth(customer_token)
    api.client.post(f"{USERS}/shipping-address", json={"address": "1 Old Road", "isDefault": True}, headers=headers)

    response = api.client.post(
        f"{USERS}/shipping-address",
        json={"address": "2 New Road", "city": "Leeds", "zipCode": "LS1", "isDefault": True},
        headers=headers,
    )

    assert response.status_code == 200
    addresses = response.json()["shippingAddresses"]
    assert [(a["address"], a["isDefault"]) for a in addresses] == [("1 Old Road", False), ("2 New Road", True)]
    assert addresses[1]["zipCode"] == "LS1"

    profile = api.client.get(f"{USERS}/profile", headers=headers).json()
    assert [a["isDefault"] for a in profile["shippingAddresses"]] == [False, True]


def test_shipping_address_requires_address(api, customer_token):
    response = api.client.post(f"{USERS}/shipping-address", json={"address": ""}, headers=api.auth(customer_token))

    assert response.status_code == 400


# Administration

def test_admin_lists_users_with_pagination(api, admin_token, customer_token):
    api.token_for("third@example.com")

    response = api.client.get(USERS, params={"page": 1, "limit": 2}, headers=api.auth(admin_token))

    assert response.status_code == 200
    body = response.json()
    assert body["total"] == 3
    assert body["page"] == 1
    assert body["limit"] == 2
    assert body["pages"] == 2
    assert len(body["users"]) == 2

    last = api.client.get(USERS, params={"page": 2, "limit": 2}, headers=api.auth(admin_token)).json()
    assert len(last["users"]) == 1


def test_admin_gets_user(api, admin_token, customer_token):
    user_id = api.user_id(customer_token)

    response = api.client.get(f"{USERS}/{user_id}", headers=api.auth(admin_token))

    assert response.status_code == 200
    assert response.json()["email"] == "buyer@example.com"


def test_admin_get_unknown_user(api, admin_token):
    response = api.client.get(f"{USERS}/{uuid.uuid4()}", headers=api.auth(admin_token))

    assert response.status_code == 404
    assert response.json()["detail"] == "User not found"


def test_admin_updates_user(api, admin_token, customer_token):
    user_id = api.user_id(customer_token)

    response = api.client.put(
        f"{USERS}/{user_id}",
        json={"name": "Updated Name", "isActive": False},
        headers=api.auth(admin_token),
    )

    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "User updated successfully"
    assert body["user"]["name"] == "Updated Name"
    assert body["user"]["isActive"] is False
    assert api.login("buyer@example.com").status_code == 403


def test_admin_changes_role(api, admin_token, customer_token):
    user_id = api.user_id(customer_token)

    response = api.client.put(f"{USERS}/{user_id}/role", json={"role": "admin"}, headers=api.auth(admin_token))

    assert response.status_code == 200
    assert response.json()["message"] == "User role updated successfully"
    assert response.json()["user"]["role"] == "admin"
    assert api.login("buyer@example.com").json()["user"]["role"] == "admin"


def test_change_role_rejects_unknown_role(api, admin_token, customer_token):
    user_id = api.user_id(customer_token)

    response = api.client.put(f"{USERS}/{user_id}/role", json={"role": "owner"}, headers=api.auth(admin_token))

    assert response.status_code == 400


def test_admin_deletes_user(api, admin_token, customer_token):
    user_id = api.user_id(customer_token)

    response = api.client.delete(f"{USERS}/{user_id}", headers=api.auth(admin_token))

    assert response.status_code == 200
    assert response.json()["message"] == "User deleted successfully"
    assert api.login("buyer@example.com").status_code == 404


def test_delete_user_with_orders_conflicts(api, admin_token, customer_token):
    product = api.create_product(admin_token)
    api.place_order(customer_token, (product["id"], 1))
    user_id = api.user_id(customer_token)

    response = api.client.delete(f"{USERS}/{user_id}", headers=api.auth(admin_token))

    assert response.status_code == 409
    assert api.client.get(f"{USERS}/{user_id}", headers=api.auth(admin_token)).status_code == 200


def test_delete_unknown_user(api, admin_token):
    assert api.client.delete(f"{USERS}/{uuid.uuid4()}", headers=api.auth(admin_token)).status_code == 404


def test_customer_cannot_administer_users(api, customer_token):
    user_id = api.user_id(customer_token)

    assert api.client.get(f"{USERS}/{user_id}", headers=api.auth(customer_token)).status_code == 403
    assert api.client.delete(f"{USERS}/{user_id}", headers=api.auth(customer_token)).status_code == 403


# make_admin script

def _run_make_admin(email, **kwargs):
    db = SessionLocal()
    try:
        return asyncio.run(make_admin(UnitOfWorkImpl(db), email, **kwargs))
    finally:
        db.close()


def test_make_admin_promotes_existing_user(api):
    api.register("promote@example.com")

    assert _run_make_admin("promote@example.com") == "promoted"
    assert _run_make_admin("Promote@example.com") == "unchanged"
    assert api.login("promote@example.com").json()["user"]["role"] == "admin"


def test_make_admin_creates_account(api):
    outcome = _run_make_admin("new-admin@example.com", name="New Admin", age=40, password="adminpass")

    assert outcome == "created"
    assert api.login("new-admin@example.com", "adminpass").json()["user"]["role"] == "admin"


def test_make_admin_needs_details_for_new_account():
    with pytest.raises(DomainError):
        _run_make_admin("missing@example.com")
