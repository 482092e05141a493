# roles/router.py
"""
Endpoints de consulta de perfis
"""

from typing import List

from fastapi import APIRouter, Depends

from auth.dependencies import get_current_user
from dependencies import get_role_service
from roles.schemas import RoleDto
from roles.service import RoleService
from users.schemas import AuthUserDto

router = APIRouter(prefix="/roles", tags=["Perfis"])


@router.get("", response_model=List[RoleDto])
async def list_roles(
    current_user: AuthUserDto = Depends(get_current_user),
    role_service: RoleService = Depends(get_role_service),
):
    """Lista os perfis disponíveis"""
    return role_service.find_all()
