# roles/service.py
"""
Consulta de perfis de acesso.
"""

from typing import List

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from i18n.service import I18nService
from roles.models import Role
from utils.logging_config import get_logger

logger = get_logger(__name__)


class RoleService:
    """
    Resolve perfis pelo nome. Perfis não são criados aqui (ver init_db).

    Uso:
        role = RoleService(db, i18n).find_by_name("admin")
    """

    def __init__(self, db: Session, i18n: I18nService):
        self.db = db
        self.i18n = i18n

    def find_by_name(self, name_role: str) -> Role:
        role = self.db.query(Role).filter(Role.name_role == name_role).first()

        if not role:
            message = self.i18n.translate("errors.role.not_found", {"value": name_role})
            logger.error(message)
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=message)

        return role

    def find_all(self) -> List[Role]:
        return self.db.query(Role).order_by(Role.name_role).all()
