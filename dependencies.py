# dependencies.py
"""
Composição explícita dos serviços para injeção nas rotas (FastAPI Depends).

Cada requisição recebe serviços novos ligados à sua sessão do banco; o
I18nService é compartilhado (somente leitura).

Uso:
    @router.get("/rota")
    def rota(user_service: UserService = Depends(get_user_service)):
        ...
"""

from functools import lru_cache

from fastapi import Depends
from sqlalchemy.orm import Session

from auth.service import AuthService
from database.connection import get_db
from email_template.service import EmailTemplateService
from i18n.service import I18nService
from roles.service import RoleService
from services.email_service import EmailService
from users.service import UserService


@lru_cache()
def get_i18n() -> I18nService:
    """I18nService único por processo (traduções carregadas uma vez)"""
    return I18nService.from_directory()


def get_email_template_service(i18n: I18nService = Depends(get_i18n)) -> EmailTemplateService:
    return EmailTemplateService(i18n)


def get_email_service(
    template_service: EmailTemplateService = Depends(get_email_template_service),
    i18n: I18nService = Depends(get_i18n),
) -> EmailService:
    return EmailService(template_service, i18n)


def get_role_service(
    db: Session = Depends(get_db),
    i18n: I18nService = Depends(get_i18n),
) -> RoleService:
    return RoleService(db, i18n)


def get_user_service(
    db: Session = Depends(get_db),
    role_service: RoleService = Depends(get_role_service),
    i18n: I18nService = Depends(get_i18n),
) -> UserService:
    return UserService(db, role_service, i18n)


def get_auth_service(
    user_service: UserService = Depends(get_user_service),
    email_service: EmailService = Depends(get_email_service),
    i18n: I18nService = Depends(get_i18n),
) -> AuthService:
    return AuthService(user_service, email_service, i18n)
