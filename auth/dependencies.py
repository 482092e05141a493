# auth/dependencies.py
"""
Dependencies de autenticação para injeção nas rotas

- local_auth_guard: valida documento/senha do formulário de login
- get_current_user: valida o token JWT (Authorization: Bearer)
- require_role / require_admin: restringe a rota a perfis específicos
"""

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer, OAuth2PasswordRequestForm

from auth.security import decode_token
from auth.service import AuthService
from dependencies import get_auth_service, get_i18n, get_user_service
from i18n.service import I18nService
from users.schemas import AuthUserDto
from users.service import UserService
from utils.logging_config import get_logger

logger = get_logger(__name__)

# OAuth2 scheme - define o endpoint de login
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/login")


def _unauthorized(i18n: I18nService, message_key: str) -> HTTPException:
    error_msg = i18n.translate(message_key)
    logger.error(error_msg)
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=error_msg,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def local_auth_guard(
    form_data: OAuth2PasswordRequestForm = Depends(),
    auth_service: AuthService = Depends(get_auth_service),
    i18n: I18nService = Depends(get_i18n),
) -> AuthUserDto:
    """
    Valida as credenciais locais antes da emissão do token.

    O campo `username` do formulário OAuth2 carrega o documento do usuário.
    Lança HTTPException 401 se as credenciais forem inválidas.
    """
    user = auth_service.validate_user(form_data.username, form_data.password)
    if user is None:
        raise _unauthorized(i18n, "errors.auth.invalid_credentials")
    return user


async def get_current_user(
    token: str = Depends(oauth2_scheme),
    user_service: UserService = Depends(get_user_service),
    i18n: I18nService = Depends(get_i18n),
) -> AuthUserDto:
    """
    Dependency que retorna o usuário atual a partir do token JWT.
    Lança HTTPException 401 se o token for inválido ou o usuário não existir.

    Uso:
        @router.get("/rota-protegida")
        def rota(user: AuthUserDto = Depends(get_current_user)):
            ...
    """
    payload = decode_token(token)
    if payload is None or not payload.get("sub"):
        raise _unauthorized(i18n, "errors.auth.unauthorized")

    try:
        return user_service.find_one_by_document(payload["sub"])
    except HTTPException as e:
        if e.status_code != status.HTTP_404_NOT_FOUND:
            raise
        raise _unauthorized(i18n, "errors.auth.unauthorized")


def require_role(*role_names: str):
    """
    Cria uma dependency que exige um dos perfis informados.
    Lança HTTPException 403 caso contrário.

    Uso:
        @router.get("/rota-admin")
        def rota(admin: AuthUserDto = Depends(require_role("admin"))):
            ...
    """
    allowed = set(role_names)

    async def dependency(
        current_user: AuthUserDto = Depends(get_current_user),
        i18n: I18nService = Depends(get_i18n),
    ) -> AuthUserDto:
        role_name = current_user.role.name_role if current_user.role else None
        if role_name not in allowed:
            error_msg = i18n.translate("errors.auth.forbidden")
            logger.error(error_msg, user_id=current_user.id, role=role_name)
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=error_msg)
        return current_user

    return dependency


require_admin = require_role("admin")
