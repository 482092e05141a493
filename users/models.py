# users/models.py
"""
Modelo de usuário
"""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from database.connection import Base
from roles.models import Role
from utils.timezone import get_utc_now


class User(Base):
    """Conta de usuário; document e email identificam o usuário de forma única"""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    document = Column(String(30), unique=True, index=True, nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    username = Column(String(50), unique=True, index=True, nullable=False)
    password = Column(String(255), nullable=False)  # hash bcrypt
    reset_password_token = Column("resetPasswordToken", String(255), unique=True, nullable=True)
    created_at = Column("createdAt", DateTime(timezone=True), default=get_utc_now, nullable=False)
    role_id = Column(Integer, ForeignKey("roles.id"), nullable=False)

    role = relationship(Role)

    def __repr__(self):
        return f"<User(id={self.id}, username='{self.username}', document='{self.document}')>"
