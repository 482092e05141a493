# users/router.py
"""
Endpoints de gestão de usuários (somente admin)
"""

from fastapi import APIRouter, Depends, Query, status
from typing import Optional

from auth.dependencies import require_admin
from dependencies import get_user_service
from users.schemas import (
    AuthUserDto,
    CreateUserDto,
    FiltersUserDto,
    GetUserDto,
    PaginatedUsersDto,
    UpdateUserDto,
)
from users.service import UserService

router = APIRouter(prefix="/users", tags=["Usuários"])


@router.get("", response_model=PaginatedUsersDto)
async def list_users(
    username: Optional[str] = None,
    name_role: Optional[str] = None,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    admin: AuthUserDto = Depends(require_admin),
    user_service: UserService = Depends(get_user_service),
):
    """
    Lista usuários com filtros parciais (sem distinção de maiúsculas),
    do mais recente para o mais antigo.

    **Acesso:** Apenas administradores
    """
    filters = FiltersUserDto(username=username, name_role=name_role, page=page, limit=limit)
    return user_service.find_all_filter(filters)


@router.post("", response_model=GetUserDto, status_code=status.HTTP_201_CREATED)
async def create_user(
    user_data: CreateUserDto,
    admin: AuthUserDto = Depends(require_admin),
    user_service: UserService = Depends(get_user_service),
):
    """
    Cria um novo usuário com o perfil informado (por nome).

    **Acesso:** Apenas administradores
    """
    return user_service.create_user(user_data)


@router.get("/{user_id}", response_model=GetUserDto)
async def get_user(
    user_id: int,
    admin: AuthUserDto = Depends(require_admin),
    user_service: UserService = Depends(get_user_service),
):
    """
    Retorna detalhes de um usuário específico.

    **Acesso:** Apenas administradores
    """
    return user_service.find_by_one_by_id(user_id)


@router.patch("/{user_id}", response_model=GetUserDto)
async def update_user(
    user_id: int,
    user_data: UpdateUserDto,
    admin: AuthUserDto = Depends(require_admin),
    user_service: UserService = Depends(get_user_service),
):
    """
    Atualiza parcialmente um usuário. A senha, se enviada, é re-hasheada.

    **Acesso:** Apenas administradores
    """
    return user_service.update_user(user_id, user_data)
