# auth/router.py
"""
Endpoints de autenticação: login, perfil e recuperação de senha
"""

from fastapi import APIRouter, Depends

from auth.dependencies import get_current_user, local_auth_guard
from auth.schemas import ForgotPasswordRequest, MessageResponse, ResetPasswordRequest, TokenDto
from auth.service import AuthService
from dependencies import get_auth_service, get_i18n
from i18n.service import I18nService
from users.schemas import AuthUserDto, GetUserDto

router = APIRouter(prefix="/auth", tags=["Autenticação"])


@router.post("/login", response_model=TokenDto)
async def login(
    user: AuthUserDto = Depends(local_auth_guard),
    auth_service: AuthService = Depends(get_auth_service),
):
    """
    Autentica o usuário e retorna um token JWT.

    - **username**: Documento do usuário
    - **password**: Senha
    """
    return auth_service.login(user)


@router.get("/profile", response_model=GetUserDto)
async def profile(current_user: AuthUserDto = Depends(get_current_user)):
    """
    Retorna os dados do usuário autenticado (sem a senha).
    """
    return GetUserDto.model_validate(current_user.model_dump(exclude={"password", "reset_password_token"}))


@router.post("/forgot-password", response_model=MessageResponse)
async def forgot_password(
    request: ForgotPasswordRequest,
    auth_service: AuthService = Depends(get_auth_service),
):
    """
    Envia para o email informado o link de redefinição de senha.
    """
    message = await auth_service.forgot_password(request.email)
    return MessageResponse(message=message)


@router.post("/reset-password", response_model=MessageResponse)
async def reset_password(
    request: ResetPasswordRequest,
    auth_service: AuthService = Depends(get_auth_service),
    i18n: I18nService = Depends(get_i18n),
):
    """
    Redefine a senha usando o token recebido por email (uso único).
    """
    auth_service.reset_password(request.token, request.password)
    return MessageResponse(message=i18n.translate("auth.password_reset"))
