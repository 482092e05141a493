# auth/security.py
"""
Funções de segurança: hash de senha e JWT
"""

import re
from datetime import timedelta
from typing import Optional

import bcrypt
from jose import JWTError, jwt

from config import BCRYPT_ROUNDS, EXPIRES_IN_JWT, JWT_ALGORITHM, SECRET_KEY_JWT
from utils.timezone import now_utc

_EXPIRES_IN_PATTERN = re.compile(r"^\s*(\d+)\s*([smhd]?)\s*$", re.IGNORECASE)
_UNIT_SECONDS = {"": 1, "s": 1, "m": 60, "h": 3600, "d": 86400}

# Limite do bcrypt (em bytes, não caracteres)
MAX_PASSWORD_BYTES = 72


def check_password_bytes(password: Optional[str]) -> Optional[str]:
    """
    Rejeita senhas acima de 72 bytes em UTF-8.

    Usado pelos validators dos schemas: o ValueError vira 422.
    """
    if password is not None and len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValueError(f"A senha excede {MAX_PASSWORD_BYTES} bytes em UTF-8")
    return password


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verifica se a senha plain corresponde ao hash"""
    try:
        return bcrypt.checkpw(
            plain_password.encode('utf-8'),
            hashed_password.encode('utf-8')
        )
    except ValueError:
        # Hash inválido/corrompido no banco
        return False


def get_password_hash(password: str, rounds: int = BCRYPT_ROUNDS) -> str:
    """Gera hash bcrypt da senha (custo padrão 10)"""
    return bcrypt.hashpw(
        password.encode('utf-8'),
        bcrypt.gensalt(rounds=rounds)
    ).decode('utf-8')


def parse_expires_in(value) -> timedelta:
    """
    Converte a configuração de expiração em timedelta.

    Aceita segundos (3600 ou "3600") ou número com sufixo s/m/h/d
    ("60s", "15m", "12h", "7d").

    Raises:
        ValueError: formato não reconhecido ou duração zero
    """
    if isinstance(value, timedelta):
        return value
    if isinstance(value, int):
        seconds = value
    else:
        match = _EXPIRES_IN_PATTERN.match(str(value))
        if not match:
            raise ValueError(f"EXPIRES_IN_JWT inválido: {value!r}")
        amount, unit = match.groups()
        seconds = int(amount) * _UNIT_SECONDS[unit.lower()]

    if seconds <= 0:
        raise ValueError(f"EXPIRES_IN_JWT deve ser positivo: {value!r}")
    return timedelta(seconds=seconds)


def create_access_token(
    data: dict,
    expires_in=None,
    secret_key: str = SECRET_KEY_JWT,
    algorithm: str = JWT_ALGORITHM,
) -> str:
    """
    Cria um token JWT assinado com os dados fornecidos.

    Args:
        data: Claims a codificar (ex: {"sub": document})
        expires_in: Expiração (timedelta, segundos ou "15m"); padrão EXPIRES_IN_JWT

    Returns:
        Token JWT como string
    """
    to_encode = data.copy()

    issued_at = now_utc()
    expire = issued_at + parse_expires_in(expires_in if expires_in is not None else EXPIRES_IN_JWT)
    to_encode.update({"iat": issued_at, "exp": expire})

    return jwt.encode(to_encode, secret_key, algorithm=algorithm)


def decode_token(
    token: str,
    secret_key: str = SECRET_KEY_JWT,
    algorithm: str = JWT_ALGORITHM,
) -> Optional[dict]:
    """
    Decodifica e valida um token JWT.

    Returns:
        Dicionário com os claims ou None se inválido/expirado
    """
    try:
        return jwt.decode(token, secret_key, algorithms=[algorithm])
    except JWTError:
        return None
