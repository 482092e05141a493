# roles/models.py
"""
Modelo de perfil (role) de acesso
"""

from sqlalchemy import Column, Integer, String

from database.connection import Base


class Role(Base):
    """Agrupamento nomeado de permissões, referenciado pelos usuários"""

    __tablename__ = "roles"

    id = Column(Integer, primary_key=True, index=True)
    name_role = Column(String(50), unique=True, index=True, nullable=False)

    def __repr__(self):
        return f"<Role(id={self.id}, name_role='{self.name_role}')>"
