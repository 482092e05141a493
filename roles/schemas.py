# roles/schemas.py
"""
Schemas Pydantic para perfis
"""

from pydantic import BaseModel, Field


class RoleDto(BaseModel):
    """Perfil exposto nas respostas"""
    id: int
    name_role: str

    class Config:
        from_attributes = True


class RoleRefDto(BaseModel):
    """Referência a um perfil pelo nome (criação/atualização de usuário)"""
    name_role: str = Field(..., min_length=1, max_length=50)
