import os

os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["TESTING"] = "true"
os.environ["ENVIRONMENT"] = "test"
os.environ["BCRYPT_ROUNDS"] = "4"

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import List

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import update

from knotty.api.dependencies import get_email_service
from knotty.application.use_cases import forgot_password_use_case, login_user, setup_mfa
from knotty.db.database import SessionLocal, engine
from knotty.db.models import Base
from knotty.domain.enums import CodePurpose
from knotty.infrastructure.orm import UserModel
from knotty.main import app

PASSWORD = "secret123"


@dataclass
class SentCode:
    to_email: str
    code: str
    purpose: CodePurpose


class FakeEmailService:
    """Collects codes instead of sending them"""

    def __init__(self):
        self.outbox: List[SentCode] = []
        self.fail = False

    async def send_verification_code(self, to_email: str, code: str, purpose: CodePurpose) -> bool:
        if self.fail:
            return False
        self.outbox.append(SentCode(to_email, code, CodePurpose(purpose)))
        return True

    def last_code(self, to_email: str, purpose: CodePurpose) -> str:
        for sent in reversed(self.outbox):
            if sent.to_email == to_email and sent.purpose == purpose:
                return sent.code
        raise AssertionError(f"no {purpose.value} code sent to {to_email}")


class Api:
    """Shortcuts for the flows most tests need as setup"""

    def __init__(self, client: TestClient, email_service: FakeEmailService):
        self.client = client
        self.email = email_service

    @staticmethod
    def auth(token: str) -> dict:
        return {"Authorization": f"Bearer {token}"}

    def register(self, email: str, password: str = PASSWORD, role: str = None, name: str = "Test User", age: int = 30):
        body = {"name": name, "email": email, "password": password, "age": age}
        if role:
            body["role"] = role
        return self.client.post("/api/v1/users/register", json=body)

    def login(self, email: str, password: str = PASSWORD):
        return self.client.post("/api/v1/users/login", json={"email": email, "password": password})

    def token_for(self, email: str, role: str = "customer", password: str = PASSWORD) -> str:
        """Register (if needed) and log in a user without MFA"""
        self.register(email, password=password, role=role)
        response = self.login(email, password)
        assert response.status_code == 200, response.text
        return response.json()["token"]

    def user_id(self, token: str) -> str:
        response = self.client.get("/api/v1/users/profile", headers=self.auth(token))
        return response.json()["id"]

    def enable_mfa(self, token: str, email: str) -> None:
        response = self.client.post("/api/v1/users/setup-mfa", headers=self.auth(token))
        assert response.status_code == 200, response.text
        code = self.email.last_code(email, CodePurpose.MFA_SETUP)
        response = self.client.post(
            "/api/v1/users/verify-mfa-setup",
            json={"setupCode": code},
            headers=self.auth(token),
        )
        assert response.status_code == 200, response.text

    def create_product(self, admin_token: str, **overrides) -> dict:
        body = {
            "name": "Chunky Scarf",
            "description": "Hand-knitted merino scarf",
            "price": "25.50",
            "color": "red",
            "size": "M",
            "shape": "rectangle",
            "images": ["scarf.jpg"],
            "stock": 5,
        }
        body.update(overrides)
        response = self.client.post("/api/v1/products", json=body, headers=self.auth(admin_token))
        assert response.status_code == 201, response.text
        return response.json()

    def place_order(self, token: str, *lines, shipping_address: str = "1 Yarn Street"):
        items = [{"productId": product_id, "quantity": quantity} for product_id, quantity in lines]
        return self.client.post(
            "/api/v1/orders",
            json={"items": items, "shippingAddress": shipping_address},
            headers=self.auth(token),
        )

    def set_order_status(self, admin_token: str, order_id: str, status: str):
        return self.client.put(
            f"/api/v1/orders/{order_id}/status",
            json={"status": status},
            headers=self.auth(admin_token),
        )


def _expire_user_codes(email: str, *columns: str) -> None:
    """Move the given *_expires columns of a user into the past"""
    past = datetime.utcnow() - timedelta(minutes=1)
    with SessionLocal() as db:
        db.execute(
            update(UserModel)
            .where(UserModel.email == email)
            .values(**{column: past for column in columns})
        )
        db.commit()


@pytest.fixture(autouse=True)
def database():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def expire_codes():
    return _expire_user_codes


@pytest.fixture
def issue_codes(monkeypatch):
    """Make the next generated one-time codes come out in the given order"""
    def issue(*codes):
        pending = iter(codes)
        for module in (login_user, setup_mfa, forgot_password_use_case):
            monkeypatch.setattr(module, "generate_verification_code", lambda: next(pending))

    return issue


@pytest.fixture
def email_service():
    return FakeEmailService()


@pytest.fixture
def client(email_service):
    app.dependency_overrides[get_email_service] = lambda: email_service
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def api(client, email_service):
    return Api(client, email_service)


@pytest.fixture
def admin_token(api):
    return api.token_for("admin@example.com", role="admin")


@pytest.fixture
def customer_token(api):
    return api.token_for("buyer@example.com")
