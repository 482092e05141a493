# database/init_db.py
"""
Inicialização do banco de dados e seed de perfis e do usuário admin
"""

import time

from sqlalchemy import text
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from auth.security import get_password_hash
from config import ADMIN_DOCUMENT, ADMIN_EMAIL, ADMIN_PASSWORD, ADMIN_USERNAME, DEFAULT_ROLES
from database.connection import Base, engine, session_scope
from roles.models import Role
from users.models import User
from utils.logging_config import get_logger

logger = get_logger(__name__)


def wait_for_db(max_retries=10, delay=3):
    """Aguarda o banco de dados ficar disponível"""
    for attempt in range(max_retries):
        try:
            with engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            logger.info("Conexão com banco de dados estabelecida")
            return True
        except OperationalError:
            if attempt < max_retries - 1:
                logger.warning("Aguardando banco de dados", attempt=attempt + 1, max_retries=max_retries)
                time.sleep(delay)
            else:
                logger.error("Não foi possível conectar ao banco", max_retries=max_retries)
                raise
    return False


def create_tables(bind=engine):
    """Cria todas as tabelas no banco de dados"""
    Base.metadata.create_all(bind=bind)
    logger.info("Tabelas criadas")


def seed_roles(db: Session, role_names=DEFAULT_ROLES):
    """Cria os perfis padrão que ainda não existem"""
    existing = {name for (name,) in db.query(Role.name_role).all()}
    created = [Role(name_role=name) for name in role_names if name not in existing]
    if created:
        db.add_all(created)
        db.flush()
        logger.info("Perfis criados", roles=[role.name_role for role in created])
    return created


def seed_admin(db: Session):
    """Cria o usuário admin inicial se nenhum usuário com o documento existir"""
    if db.query(User).filter(User.document == ADMIN_DOCUMENT).first():
        return None

    admin_role = db.query(Role).filter(Role.name_role == "admin").one()
    admin = User(
        document=ADMIN_DOCUMENT,
        email=ADMIN_EMAIL,
        username=ADMIN_USERNAME,
        password=get_password_hash(ADMIN_PASSWORD),
        role=admin_role,
    )
    db.add(admin)
    db.flush()
    logger.info("Usuário admin criado", username=ADMIN_USERNAME)
    return admin


def init_database():
    """Fluxo completo de inicialização (chamado no lifespan da aplicação)"""
    wait_for_db()
    create_tables()
    with session_scope() as db:
        seed_roles(db)
        seed_admin(db)


if __name__ == "__main__":
    init_database()
