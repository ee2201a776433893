"""Pytest configuration for storefront tests."""

import os

os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ.setdefault("JWT_SECRET", "test-secret-key")
os.environ["STORAGE_PUBLIC_URL"] = "https://cdn.test"
os.environ["ENABLE_SCHEDULER"] = "false"

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session, SQLModel

from storefront import create_app
from storefront.auth.auth import generate_jwt, hash_password
from storefront.cache.cache import CacheManager
from storefront.database.connection import engine, init_db
from storefront.enums.role import Role
from storefront.models.category import Category
from storefront.models.product import Package, Product
from storefront.models.user import User
from storefront.storage.bucket import BucketService, get_bucket_service


class FakeS3Client:
    """Client S3 em memória: guarda os objetos enviados e removidos."""

    def __init__(self):
        self.objects = {}
        self.deleted = []

    def put_object(self, Bucket, Key, Body, ContentType, CacheControl=None):
        self.objects[Key] = {"bucket": Bucket, "body": Body, "content_type": ContentType}

    def delete_object(self, Bucket, Key):
        self.deleted.append(Key)
        self.objects.pop(Key, None)


@pytest.fixture(autouse=True)
def database():
    SQLModel.metadata.drop_all(engine)
    init_db()
    CacheManager().invalidate()
    yield engine
    CacheManager().invalidate()


@pytest.fixture
def session(database):
    with Session(database) as session:
        yield session


@pytest.fixture
def s3_client():
    return FakeS3Client()


@pytest.fixture
def app(s3_client):
    app = create_app(start_jobs=False)
    bucket = BucketService(client=s3_client, bucket_name="test-bucket", public_url="https://cdn.test")
    app.dependency_overrides[get_bucket_service] = lambda: bucket
    return app


@pytest.fixture
def client(app):
    with TestClient(app) as client:
        yield client


def create_user(session, email="user@example.com", role=Role.USER, password="secret123"):
    user = User(name=email.split("@")[0], email=email, password_hash=hash_password(password), role=role)
    session.add(user)
    session.commit()
    session.refresh(user)
    return user


@pytest.fixture
def user(session):
    return create_user(session)


@pytest.fixture
def admin_user(session):
    return create_user(session, email="admin@example.com", role=Role.ADMIN)


@pytest.fixture
def user_headers(user):
    return {"Authorization": f"Bearer {generate_jwt(user)}"}


@pytest.fixture
def admin_headers(admin_user):
    return {"Authorization": f"Bearer {generate_jwt(admin_user)}"}


@pytest.fixture
def category(session):
    category = Category(name="Pizzas", slug="pizzas")
    session.add(category)
    session.commit()
    session.refresh(category)
    return category


@pytest.fixture
def products(session, category):
    """Quatro produtos A..D com sequência 0..3; B tem pacotes."""
    created = []
    for index, name in enumerate(["A", "B", "C", "D"]):
        product = Product(
            name=name,
            price=10.0 * (index + 1),
            stock=5,
            sequence=index,
            image=f"{name.lower()}.png",
            category_id=category.id,
        )
        if name == "B":
            product.packages = [
                Package(id="small", name="Small", price=15.0, position=0),
                Package(id="large", name="Large", price=30.0, position=1),
            ]
        session.add(product)
        created.append(product)
    session.commit()
    for product in created:
        session.refresh(product)
    return created
