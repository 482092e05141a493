# auth/service.py
"""
Serviço de autenticação: validação de credenciais locais, emissão de JWT e
recuperação de senha por email.
"""

import secrets
from typing import Optional

from fastapi import HTTPException, status

from auth.schemas import TokenDto
from auth.security import create_access_token, verify_password
from config import FRONTEND_URL
from i18n.service import I18nService
from services.email_service import EmailService
from users.schemas import AuthUserDto, GetUserDto
from users.service import UserService
from utils.logging_config import get_logger

logger = get_logger(__name__)

RESET_PASSWORD_TEMPLATE = "reset_password"


def generate_reset_token() -> str:
    """Token aleatório, seguro para URL"""
    return secrets.token_urlsafe(32)


class AuthService:
    """
    Uso:
        auth_service = AuthService(user_service, email_service, i18n)
        user = auth_service.validate_user(document, password)
        token = auth_service.login(user)
    """

    def __init__(
        self,
        user_service: UserService,
        email_service: EmailService,
        i18n: I18nService,
        frontend_url: str = FRONTEND_URL,
    ):
        self.user_service = user_service
        self.email_service = email_service
        self.i18n = i18n
        self.frontend_url = frontend_url.rstrip("/")

    def validate_user(self, document: str, password: str) -> Optional[AuthUserDto]:
        """
        Valida documento e senha contra o hash armazenado.

        Returns:
            O usuário autenticado ou None (usuário inexistente e senha errada
            não são diferenciados)
        """
        try:
            user = self.user_service.find_one_by_document(document)
        except HTTPException as e:
            if e.status_code != status.HTTP_404_NOT_FOUND:
                raise
            return None

        if not verify_password(password, user.password):
            return None

        return user

    def login(self, user: AuthUserDto) -> TokenDto:
        """Emite o token de acesso para um usuário já validado"""
        payload = {
            "sub": user.document,
            "user_id": user.id,
            "username": user.username,
            "role": user.role.name_role if user.role else None,
        }
        access_token = create_access_token(payload)

        logger.info(self.i18n.translate("auth.login_success", {"username": user.username}), user_id=user.id)

        return TokenDto(access_token=access_token, token_type="bearer")

    def build_reset_url(self, token: str) -> str:
        return f"{self.frontend_url}/reset-password?token={token}"

    async def forgot_password(self, email: str) -> str:
        """
        Gera um novo token de recuperação e envia o link por email.

        Returns:
            Mensagem traduzida de confirmação

        Raises:
            HTTPException 404: email não cadastrado
            HTTPException 500: falha no envio do email
        """
        user = self.user_service.find_one_by_email(email)

        token = generate_reset_token()

        # Gravado somente após o envio do email
        await self.email_service.send(
            RESET_PASSWORD_TEMPLATE,
            {"username": user.username, "reset_url": self.build_reset_url(token)},
            user.email,
        )
        self.user_service.set_reset_password_token(user.id, token)

        message = self.i18n.translate("auth.reset_email_sent", {"email": user.email})
        logger.info(message, user_id=user.id)
        return message

    def reset_password(self, token: str, new_password: str) -> GetUserDto:
        """
        Redefine a senha do dono do token. O token é de uso único.

        Raises:
            HTTPException 404: token inexistente ou já utilizado
        """
        user = self.user_service.reset_password(token, new_password)
        logger.info(self.i18n.translate("auth.password_reset"), user_id=user.id)
        return user
