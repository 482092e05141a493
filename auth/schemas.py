# auth/schemas.py
"""
Schemas Pydantic para autenticação
"""

from pydantic import BaseModel, EmailStr, Field, field_validator

from auth.security import check_password_bytes


# ==========================================
# Schemas de Token
# ==========================================

class TokenDto(BaseModel):
    """Token JWT retornado no login"""
    access_token: str
    token_type: str = "bearer"


# ==========================================
# Schemas de recuperação de senha
# ==========================================

class ForgotPasswordRequest(BaseModel):
    """Solicitação de email de recuperação"""
    email: EmailStr


class ResetPasswordRequest(BaseModel):
    """Redefinição de senha com o token recebido por email"""
    token: str = Field(..., min_length=1)
    password: str = Field(..., min_length=6, max_length=72)

    @field_validator("password")
    @classmethod
    def password_within_bcrypt_limit(cls, value):
        return check_password_bytes(value)


class MessageResponse(BaseModel):
    """Resposta simples com mensagem traduzida"""
    message: str
