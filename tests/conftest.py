# tests/conftest.py
"""
Configuração global do pytest para o Portal de Contas.

Cada teste recebe um banco SQLite em memória novo, com os perfis padrão
já criados. O cliente HTTP usa a aplicação sem lifespan e com get_db
sobrescrito para a sessão do teste.
"""

import sys
import os

project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if project_root not in sys.path:
    sys.path.insert(0, project_root)

os.environ.setdefault("ENV", "test")
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("SECRET_KEY_JWT", "test-secret-key")

from datetime import datetime, timedelta, timezone

import pytest
import structlog
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from auth.security import get_password_hash
from database.connection import Base, get_db
from database.init_db import seed_roles
from dependencies import get_email_service, get_i18n
from email_template.service import EmailTemplateService
from i18n.service import I18nService
from roles.models import Role
from roles.service import RoleService
from services.email_service import EmailService, SmtpSettings
from users.models import User
from users.service import UserService

# capture_logs (structlog.testing) só funciona com loggers não cacheados
structlog.configure(cache_logger_on_first_use=False)


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db(engine):
    Session = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    session = Session()
    seed_roles(session)
    session.commit()
    yield session
    session.close()


@pytest.fixture(scope="session")
def i18n() -> I18nService:
    return I18nService.from_directory()


@pytest.fixture
def role_service(db, i18n):
    return RoleService(db, i18n)


@pytest.fixture
def user_service(db, role_service, i18n):
    return UserService(db, role_service, i18n)


@pytest.fixture
def email_template_service(i18n):
    return EmailTemplateService(i18n)


@pytest.fixture
def email_service(email_template_service, i18n):
    """EmailService sem SMTP configurado (apenas registra em log)"""
    return EmailService(email_template_service, i18n, SmtpSettings(host=""))


@pytest.fixture
def make_user(db):
    """
    Cria usuários diretamente no banco.

    Uso:
        user = make_user("ana", role="admin", minutes_ago=5)
    """
    counter = {"n": 0}

    def _make_user(username, role="user", password="secret123", minutes_ago=0, **fields):
        counter["n"] += 1
        role_db = db.query(Role).filter(Role.name_role == role).one()
        user = User(
            document=fields.pop("document", f"DOC{counter['n']:04d}"),
            email=fields.pop("email", f"{username.lower()}@example.com"),
            username=username,
            password=get_password_hash(password, rounds=4),
            role=role_db,
            created_at=datetime.now(timezone.utc) - timedelta(minutes=minutes_ago),
            **fields,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make_user


@pytest.fixture
def app(db, i18n, email_service):
    from main import create_app

    app = create_app(use_lifespan=False)

    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_i18n] = lambda: i18n
    app.dependency_overrides[get_email_service] = lambda: email_service
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def client(app):
    with TestClient(app) as client:
        yield client


@pytest.fixture
def login(client):
    """Faz login e devolve o header Authorization"""
    def _login(document, password):
        response = client.post("/auth/login", data={"username": document, "password": password})
        assert response.status_code == 200, response.text
        return {"Authorization": f"Bearer {response.json()['access_token']}"}

    return _login


@pytest.fixture
def admin_headers(login, make_user):
    admin = make_user("root", role="admin", password="admin-pass", document="ADMIN001")
    return login(admin.document, "admin-pass")


@pytest.fixture
def user_headers(login, make_user):
    user = make_user("comum", role="user", password="user-pass", document="USER001")
    return login(user.document, "user-pass")
