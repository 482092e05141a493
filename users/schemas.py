# users/schemas.py
"""
Schemas Pydantic (DTOs) de usuário.

As projeções são por lista de campos permitidos: qualquer atributo da
entidade que não esteja declarado aqui é descartado na conversão.
Apenas AuthUserDto carrega o hash da senha.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, EmailStr, Field, field_validator

from auth.security import check_password_bytes
from roles.schemas import RoleDto, RoleRefDto
from utils.timezone import ensure_utc


# ==========================================
# Schemas de saída
# ==========================================

class GetUserDto(BaseModel):
    """Visão pública do usuário (sem senha)"""
    id: int
    document: str
    email: str
    username: str
    created_at: Optional[datetime] = None
    role: Optional[RoleDto] = None

    @field_validator("created_at")
    @classmethod
    def created_at_as_utc(cls, value):
        return ensure_utc(value)

    class Config:
        from_attributes = True


class AuthUserDto(GetUserDto):
    """Usuário completo para autenticação (inclui o hash da senha)"""
    password: str
    reset_password_token: Optional[str] = None


class PaginatedUsersDto(BaseModel):
    """Resultado paginado da busca de usuários"""
    data: List[GetUserDto]
    total_count: int
    total_pages: int
    page: int
    limit: int


# ==========================================
# Schemas de entrada
# ==========================================

class CreateUserDto(BaseModel):
    """Criação de usuário"""
    document: str = Field(..., min_length=1, max_length=30)
    email: EmailStr
    username: str = Field(..., min_length=3, max_length=50)
    password: str = Field(..., min_length=6, max_length=72)
    role: RoleRefDto

    @field_validator("password")
    @classmethod
    def password_within_bcrypt_limit(cls, value):
        return check_password_bytes(value)


class UpdateUserDto(BaseModel):
    """Atualização parcial: apenas os campos enviados são aplicados"""
    document: Optional[str] = Field(None, min_length=1, max_length=30)
    email: Optional[EmailStr] = None
    username: Optional[str] = Field(None, min_length=3, max_length=50)
    password: Optional[str] = Field(None, min_length=6, max_length=72)
    role: Optional[RoleRefDto] = None

    @field_validator("password")
    @classmethod
    def password_within_bcrypt_limit(cls, value):
        return check_password_bytes(value)

    def changes(self) -> dict:
        """Campos efetivamente enviados (nulos são ignorados)"""
        return self.model_dump(exclude_unset=True, exclude_none=True)


class FiltersUserDto(BaseModel):
    """Filtros e paginação da listagem de usuários"""
    username: Optional[str] = None
    name_role: Optional[str] = None
    page: int = Field(1, ge=1)
    limit: int = Field(10, ge=1, le=100)
