# users/service.py
"""
Serviço de gestão de contas de usuário.

Cada operação é uma ida e volta independente ao banco; o serviço não guarda
estado entre chamadas. Toda falha vira HTTPException com mensagem traduzida
(404 não encontrado, 400 requisição inválida, 500 erro interno) e é
registrada em log antes de ser lançada.

Uso:
    service = UserService(db, RoleService(db, i18n), i18n)
    user = service.find_by_one_by_id(1)
"""

import math
from typing import Any, Dict, Optional

from fastapi import HTTPException, status
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from auth.security import get_password_hash
from i18n.service import I18nService
from roles.models import Role
from roles.service import RoleService
from users.models import User
from users.schemas import (
    AuthUserDto,
    CreateUserDto,
    FiltersUserDto,
    GetUserDto,
    PaginatedUsersDto,
    UpdateUserDto,
)
from utils.logging_config import get_logger

logger = get_logger(__name__)


def _contains(text: str) -> str:
    """Padrão LIKE de substring, com % e _ tratados como literais"""
    escaped = text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


class UserService:

    def __init__(self, db: Session, role_service: RoleService, i18n: I18nService):
        self.db = db
        self.role_service = role_service
        self.i18n = i18n

    def _create_http_exception(
        self,
        message_key: str,
        args: Optional[Dict[str, Any]] = None,
        status_code: int = status.HTTP_404_NOT_FOUND,
    ) -> HTTPException:
        """Traduz a mensagem, registra em log e devolve a exceção para ser lançada"""
        error_msg = self.i18n.translate(message_key, args)

        logger.error(error_msg, status_code=status_code)
        return HTTPException(status_code=status_code, detail=error_msg)

    def _not_found(self, key: str, value) -> HTTPException:
        return self._create_http_exception(
            "errors.user.not_found", {"key": key, "value": value}
        )

    def _get_entity(self, user_id: int) -> User:
        user = (
            self.db.query(User)
            .options(joinedload(User.role))
            .filter(User.id == user_id)
            .first()
        )
        if not user:
            raise self._not_found("ID", user_id)
        return user

    def _commit(self) -> None:
        """Confirma a transação; violação de unicidade vira 400"""
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise self._create_http_exception(
                "errors.user.already_exists", {}, status.HTTP_400_BAD_REQUEST
            )

    # ============================================
    # Consultas
    # ============================================

    def find_one_by_document(self, document: str) -> AuthUserDto:
        user = (
            self.db.query(User)
            .options(joinedload(User.role))
            .filter(User.document == document)
            .first()
        )

        if not user:
            raise self._not_found("document", document)

        return AuthUserDto.model_validate(user)

    def find_by_one_by_id(self, user_id: int) -> GetUserDto:
        return GetUserDto.model_validate(self._get_entity(user_id))

    def find_one_by_email(self, email: str) -> AuthUserDto:
        user = self.db.query(User).filter(User.email == email).first()

        if not user:
            raise self._not_found("email", email)

        return AuthUserDto.model_validate(user)

    def find_one_by_reset_password_token(self, reset_password_token: str) -> AuthUserDto:
        user = None
        if reset_password_token:
            user = (
                self.db.query(User)
                .options(joinedload(User.role))
                .filter(User.reset_password_token == reset_password_token)
                .first()
            )

        if not user:
            raise self._not_found("resetPasswordToken", reset_password_token)

        return AuthUserDto.model_validate(user)

    def find_all_filter(self, filters: FiltersUserDto) -> PaginatedUsersDto:
        """
        Busca paginada com filtros parciais e sem distinção de maiúsculas.

        - username: ILIKE %username%
        - name_role: ILIKE %name_role%
        - Ordenação: mais recentes primeiro
        """
        page, limit = filters.page, filters.limit

        query = (
            self.db.query(User)
            .outerjoin(User.role)
            .options(joinedload(User.role))
        )

        if filters.username:
            query = query.filter(User.username.ilike(_contains(filters.username), escape="\\"))

        if filters.name_role:
            query = query.filter(Role.name_role.ilike(_contains(filters.name_role), escape="\\"))

        query = query.order_by(User.created_at.desc(), User.id.desc())

        try:
            total_count = query.count()
            users = query.offset((page - 1) * limit).limit(limit).all()
            logger.info(self.i18n.translate("user.searching"), total_count=total_count)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error("Falha na consulta de usuários", error=str(e))
            raise self._create_http_exception(
                "errors.user.search_failed", {}, status.HTTP_500_INTERNAL_SERVER_ERROR
            )

        return PaginatedUsersDto(
            data=[GetUserDto.model_validate(user) for user in users],
            total_count=total_count,
            total_pages=math.ceil(total_count / limit),
            page=page,
            limit=limit,
        )

    # ============================================
    # Escrita
    # ============================================

    def create_user(self, user_dto: CreateUserDto) -> GetUserDto:
        fields = user_dto.model_dump(exclude={"role", "password"})

        hashed_password = get_password_hash(user_dto.password)
        role_db = self.role_service.find_by_name(user_dto.role.name_role)

        new_user = User(**fields, role=role_db, password=hashed_password)
        self.db.add(new_user)
        self._commit()
        self.db.refresh(new_user)

        logger.info(self.i18n.translate("user.created"), user_id=new_user.id)

        return GetUserDto.model_validate(new_user)

    def update_user(self, user_id: int, update_user_dto: UpdateUserDto) -> GetUserDto:
        changes = update_user_dto.changes()

        # Validado antes de qualquer acesso ao banco
        if not changes:
            raise self._create_http_exception(
                "errors.user.update_empty_data", {}, status.HTTP_400_BAD_REQUEST
            )

        user = self._get_entity(user_id)

        if "password" in changes:
            changes["password"] = get_password_hash(changes["password"])

        if "role" in changes:
            user.role = self.role_service.find_by_name(changes.pop("role")["name_role"])

        for field, value in changes.items():
            setattr(user, field, value)

        self._commit()
        self.db.refresh(user)

        logger.info(self.i18n.translate("user.updated"), user_id=user.id)

        return GetUserDto.model_validate(user)

    # ============================================
    # Recuperação de senha
    # ============================================

    def set_reset_password_token(self, user_id: int, token: str) -> None:
        """Atribui o token de recuperação de senha ao usuário"""
        user = self._get_entity(user_id)
        user.reset_password_token = token
        self._commit()
        logger.info(self.i18n.translate("user.reset_token_assigned", {"id": user_id}))

    def reset_password(self, reset_password_token: str, new_password: str) -> GetUserDto:
        """Troca a senha do dono do token e invalida o token (uso único)"""
        found = self.find_one_by_reset_password_token(reset_password_token)
        user = self._get_entity(found.id)

        user.password = get_password_hash(new_password)
        user.reset_password_token = None
        self._commit()
        self.db.refresh(user)

        logger.info(self.i18n.translate("user.password_reset", {"id": user.id}))

        return GetUserDto.model_validate(user)
