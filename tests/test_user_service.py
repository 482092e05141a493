# tests/test_user_service.py
"""
Testes do UserService.

Cobertura:
- Consultas por documento, id, email e token de recuperação
- Busca paginada com filtros
- Criação (hash da senha, perfil por nome, duplicidade)
- Atualização parcial (payload vazio, re-hash, troca de perfil)
- Recuperação de senha
"""

from unittest.mock import MagicMock

import bcrypt
import pytest
from fastapi import HTTPException
from pydantic import ValidationError
from sqlalchemy.exc import OperationalError
from structlog.testing import capture_logs

from auth.security import verify_password
from users.models import User
from users.schemas import (
    CreateUserDto,
    FiltersUserDto,
    GetUserDto,
    UpdateUserDto,
)
from users.service import UserService


def _create_dto(**overrides):
    data = {
        "document": "12345678900",
        "email": "ana@example.com",
        "username": "ana",
        "password": "s3nha-forte",
        "role": {"name_role": "user"},
    }
    data.update(overrides)
    return CreateUserDto(**data)


# ==================================================
# CONSULTAS
# ==================================================


class TestLookups:

    def test_find_one_by_document_returns_user_with_role_and_hash(self, user_service, make_user):
        make_user("ana", document="111", role="admin")

        user = user_service.find_one_by_document("111")

        assert user.username == "ana"
        assert user.role.name_role == "admin"
        assert user.password.startswith("$2")

    def test_find_one_by_document_not_found(self, user_service):
        with pytest.raises(HTTPException) as exc:
            user_service.find_one_by_document("999")

        assert exc.value.status_code == 404
        assert "document" in exc.value.detail
        assert "999" in exc.value.detail

    def test_find_by_one_by_id_excludes_password(self, user_service, make_user):
        created = make_user("bia")

        user = user_service.find_by_one_by_id(created.id)

        assert isinstance(user, GetUserDto)
        assert user.username == "bia"
        assert "password" not in user.model_dump()
        assert user.created_at.tzinfo is not None

    def test_find_by_one_by_id_not_found(self, user_service):
        with pytest.raises(HTTPException) as exc:
            user_service.find_by_one_by_id(4242)

        assert exc.value.status_code == 404
        assert "ID" in exc.value.detail
        assert "4242" in exc.value.detail

    def test_find_one_by_email(self, user_service, make_user):
        make_user("caio", email="caio@example.com")

        user = user_service.find_one_by_email("caio@example.com")

        assert user.username == "caio"

    def test_find_one_by_email_not_found(self, user_service):
        with pytest.raises(HTTPException) as exc:
            user_service.find_one_by_email("ninguem@example.com")

        assert exc.value.status_code == 404
        assert "email" in exc.value.detail
        assert "ninguem@example.com" in exc.value.detail

    def test_find_one_by_reset_password_token(self, user_service, make_user):
        make_user("duda", reset_password_token="tok-123")

        user = user_service.find_one_by_reset_password_token("tok-123")

        assert user.username == "duda"
        assert user.reset_password_token == "tok-123"
        assert user.role.name_role == "user"

    @pytest.mark.parametrize("token", ["nao-existe", ""])
    def test_find_one_by_reset_password_token_not_found(self, user_service, make_user, token):
        make_user("duda")  # usuário sem token (NULL) não pode casar com ""

        with pytest.raises(HTTPException) as exc:
            user_service.find_one_by_reset_password_token(token)

        assert exc.value.status_code == 404
        assert "resetPasswordToken" in exc.value.detail

    def test_not_found_message_follows_language(self, user_service, i18n):
        from middleware.locale import set_request_locale

        set_request_locale("en")
        try:
            with pytest.raises(HTTPException) as exc:
                user_service.find_one_by_email("x@example.com")
        finally:
            set_request_locale(None)

        assert exc.value.detail == "User with email 'x@example.com' not found"


# ==================================================
# BUSCA PAGINADA
# ==================================================


class TestFindAllFilter:

    def test_defaults_page_1_limit_10(self, user_service, make_user):
        for i in range(12):
            make_user(f"user{i:02d}", minutes_ago=i)

        result = user_service.find_all_filter(FiltersUserDto())

        assert result.page == 1
        assert result.limit == 10
        assert len(result.data) == 10
        assert result.total_count == 12
        assert result.total_pages == 2

    def test_orders_newest_first_and_paginates(self, user_service, make_user):
        make_user("antigo", minutes_ago=30)
        make_user("meio", minutes_ago=20)
        make_user("novo", minutes_ago=10)

        first = user_service.find_all_filter(FiltersUserDto(page=1, limit=2))
        second = user_service.find_all_filter(FiltersUserDto(page=2, limit=2))

        assert [u.username for u in first.data] == ["novo", "meio"]
        assert [u.username for u in second.data] == ["antigo"]
        assert first.total_pages == second.total_pages == 2

    def test_username_filter_is_case_insensitive_substring(self, user_service, make_user):
        make_user("MariaSilva")
        make_user("joao")
        make_user("ana_maria")

        result = user_service.find_all_filter(FiltersUserDto(username="MARIA"))

        assert {u.username for u in result.data} == {"MariaSilva", "ana_maria"}
        assert result.total_count == 2

    def test_role_filter_is_case_insensitive_substring(self, user_service, make_user):
        make_user("chefe", role="admin")
        make_user("fulano", role="user")

        result = user_service.find_all_filter(FiltersUserDto(name_role="ADM"))

        assert [u.username for u in result.data] == ["chefe"]
        assert result.data[0].role.name_role == "admin"

    def test_combined_filters(self, user_service, make_user):
        make_user("ana_admin", role="admin")
        make_user("ana_user", role="user")

        result = user_service.find_all_filter(FiltersUserDto(username="ana", name_role="user"))

        assert [u.username for u in result.data] == ["ana_user"]

    def test_empty_result_has_zero_pages(self, user_service):
        result = user_service.find_all_filter(FiltersUserDto(username="ninguem"))

        assert result.data == []
        assert result.total_count == 0
        assert result.total_pages == 0

    def test_total_pages_rounds_up(self, user_service, make_user):
        for i in range(7):
            make_user(f"u{i}")

        result = user_service.find_all_filter(FiltersUserDto(limit=3))

        assert result.total_pages == 3

    @pytest.mark.parametrize("term, expected", [
        ("a_b", {"a_b"}),
        ("50%", {"50%off"}),
    ])
    def test_like_wildcards_are_literal(self, user_service, make_user, term, expected):
        make_user("a_b")
        make_user("axb")
        make_user("50%off")
        make_user("500ff")

        result = user_service.find_all_filter(FiltersUserDto(username=term))

        assert {u.username for u in result.data} == expected

    def test_results_never_expose_password(self, user_service, make_user):
        make_user("ana")

        result = user_service.find_all_filter(FiltersUserDto())

        assert "password" not in result.model_dump()["data"][0]

    def test_query_failure_becomes_500(self, role_service, i18n):
        db = MagicMock()
        query = db.query.return_value.outerjoin.return_value.options.return_value
        query.order_by.return_value.count.side_effect = OperationalError("SELECT", {}, Exception("db down"))
        service = UserService(db, role_service, i18n)

        with pytest.raises(HTTPException) as exc:
            service.find_all_filter(FiltersUserDto())

        assert exc.value.status_code == 500
        assert exc.value.detail == i18n.translate("errors.user.search_failed")
        db.rollback.assert_called_once()


# ==================================================
# CRIAÇÃO
# ==================================================


class TestCreateUser:

    def test_stores_bcrypt_hash_with_cost_10(self, user_service, db):
        result = user_service.create_user(_create_dto())

        stored = db.query(User).filter(User.id == result.id).one()
        assert stored.password != "s3nha-forte"
        assert stored.password.startswith("$2b$10$")
        assert bcrypt.checkpw(b"s3nha-forte", stored.password.encode())

    def test_returns_public_dto_with_role(self, user_service):
        result = user_service.create_user(_create_dto(role={"name_role": "admin"}))

        assert isinstance(result, GetUserDto)
        assert result.role.name_role == "admin"
        assert result.created_at is not None
        assert "password" not in result.model_dump()

    def test_unknown_role_is_not_found(self, user_service, db):
        with pytest.raises(HTTPException) as exc:
            user_service.create_user(_create_dto(role={"name_role": "superuser"}))

        assert exc.value.status_code == 404
        assert "superuser" in exc.value.detail
        assert db.query(User).count() == 0

    def test_duplicate_document_is_bad_request(self, user_service, make_user):
        make_user("existente", document="12345678900")

        with pytest.raises(HTTPException) as exc:
            user_service.create_user(_create_dto())

        assert exc.value.status_code == 400

    def test_session_still_usable_after_duplicate(self, user_service, make_user):
        make_user("existente", email="ana@example.com")

        with pytest.raises(HTTPException):
            user_service.create_user(_create_dto())

        created = user_service.create_user(_create_dto(email="outra@example.com"))
        assert created.email == "outra@example.com"


# ==================================================
# ATUALIZAÇÃO
# ==================================================


class TestUpdateUser:

    def test_empty_payload_fails_before_touching_store(self, role_service, i18n):
        db = MagicMock()
        service = UserService(db, role_service, i18n)

        with pytest.raises(HTTPException) as exc:
            service.update_user(1, UpdateUserDto())

        assert exc.value.status_code == 400
        assert exc.value.detail == i18n.translate("errors.user.update_empty_data")
        db.query.assert_not_called()
        db.commit.assert_not_called()

    def test_only_null_fields_count_as_empty(self, user_service, make_user):
        user = make_user("ana")

        with pytest.raises(HTTPException) as exc:
            user_service.update_user(user.id, UpdateUserDto(email=None))

        assert exc.value.status_code == 400

    def test_merges_only_sent_fields(self, user_service, make_user):
        user = make_user("ana", email="ana@example.com")

        result = user_service.update_user(user.id, UpdateUserDto(username="ana_maria"))

        assert result.username == "ana_maria"
        assert result.email == "ana@example.com"
        assert "password" not in result.model_dump()

    def test_password_is_rehashed(self, user_service, make_user, db):
        user = make_user("ana", password="antiga123")

        user_service.update_user(user.id, UpdateUserDto(password="nova-senha"))

        stored = db.query(User).filter(User.id == user.id).one()
        assert stored.password != "nova-senha"
        assert verify_password("nova-senha", stored.password)
        assert not verify_password("antiga123", stored.password)

    def test_role_change_by_name(self, user_service, make_user):
        user = make_user("ana", role="user")

        result = user_service.update_user(user.id, UpdateUserDto(role={"name_role": "admin"}))

        assert result.role.name_role == "admin"

    def test_missing_user_is_not_found(self, user_service):
        with pytest.raises(HTTPException) as exc:
            user_service.update_user(999, UpdateUserDto(username="novo"))

        assert exc.value.status_code == 404

    def test_duplicate_email_is_bad_request(self, user_service, make_user):
        make_user("ana", email="ana@example.com")
        bia = make_user("bia", email="bia@example.com")

        with pytest.raises(HTTPException) as exc:
            user_service.update_user(bia.id, UpdateUserDto(email="ana@example.com"))

        assert exc.value.status_code == 400


# ==================================================
# RECUPERAÇÃO DE SENHA
# ==================================================


class TestResetPassword:

    def test_set_reset_password_token(self, user_service, make_user):
        user = make_user("ana")

        user_service.set_reset_password_token(user.id, "abc")

        assert user_service.find_one_by_reset_password_token("abc").id == user.id

    def test_reset_password_changes_hash_and_clears_token(self, user_service, make_user, db):
        user = make_user("ana", password="antiga123", reset_password_token="abc")

        user_service.reset_password("abc", "nova-senha")

        stored = db.query(User).filter(User.id == user.id).one()
        assert stored.reset_password_token is None
        assert verify_password("nova-senha", stored.password)

    def test_token_is_single_use(self, user_service, make_user):
        make_user("ana", reset_password_token="abc")
        user_service.reset_password("abc", "nova-senha")

        with pytest.raises(HTTPException) as exc:
            user_service.reset_password("abc", "outra-senha")

        assert exc.value.status_code == 404


# ==================================================
# LIMITE DE SENHA DO BCRYPT
# ==================================================


class TestPasswordByteLimit:
    """bcrypt aceita no máximo 72 bytes: caracteres multibyte contam em dobro"""

    def test_create_rejects_password_over_72_bytes(self):
        with pytest.raises(ValidationError):
            _create_dto(password="ç" * 40)

    def test_update_rejects_password_over_72_bytes(self):
        with pytest.raises(ValidationError):
            UpdateUserDto(password="ç" * 40)

    def test_password_with_exactly_72_bytes_is_stored(self, user_service, db):
        password = "ç" * 36

        result = user_service.create_user(_create_dto(password=password))

        stored = db.query(User).filter(User.id == result.id).one()
        assert verify_password(password, stored.password)


# ==================================================
# LOGS
# ==================================================


class TestLogging:

    def test_not_found_is_logged_as_error_before_raising(self, user_service, i18n):
        with capture_logs() as logs:
            with pytest.raises(HTTPException) as exc:
                user_service.find_one_by_email("ninguem@example.com")

        errors = [entry for entry in logs if entry["log_level"] == "error"]
        assert [entry["event"] for entry in errors] == [exc.value.detail]
        assert exc.value.detail == i18n.translate(
            "errors.user.not_found", {"key": "email", "value": "ninguem@example.com"}
        )

    def test_create_user_logs_info(self, user_service, i18n):
        with capture_logs() as logs:
            user_service.create_user(_create_dto())

        assert {"event": i18n.translate("user.created"), "log_level": "info"}.items() <= _last(logs).items()

    def test_update_user_logs_info(self, user_service, make_user, i18n):
        user = make_user("ana")

        with capture_logs() as logs:
            user_service.update_user(user.id, UpdateUserDto(username="ana_maria"))

        assert {"event": i18n.translate("user.updated"), "log_level": "info"}.items() <= _last(logs).items()

    def test_empty_update_is_logged_as_error(self, user_service, i18n):
        with capture_logs() as logs:
            with pytest.raises(HTTPException):
                user_service.update_user(1, UpdateUserDto())

        assert logs == [{
            "event": i18n.translate("errors.user.update_empty_data"),
            "log_level": "error",
            "status_code": 400,
        }]


def _last(logs):
    assert logs, "nenhum log capturado"
    return logs[-1]
