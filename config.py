# config.py
# -*- coding: utf-8 -*-
"""
Configurações centralizadas do Portal de Contas
"""

import os
import warnings
from pathlib import Path
from dotenv import load_dotenv

# Carrega variáveis de ambiente (apenas se existir .env)
load_dotenv()

# ==================================================
# AMBIENTE
# ==================================================
ENV = os.getenv("ENV", "development")
IS_PRODUCTION = ENV == "production"

# ==================================================
# CONFIGURAÇÕES DO BANCO DE DADOS
# ==================================================
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./portal_contas.db")

# Alguns provedores usam postgres:// mas SQLAlchemy precisa de postgresql://
if DATABASE_URL.startswith("postgres://"):
    DATABASE_URL = DATABASE_URL.replace("postgres://", "postgresql://", 1)

# ==================================================
# CONFIGURAÇÕES DE AUTENTICAÇÃO JWT
# ==================================================
# ATENÇÃO: Em produção, SEMPRE defina SECRET_KEY_JWT via variável de ambiente
SECRET_KEY_JWT = os.getenv("SECRET_KEY_JWT")
if not SECRET_KEY_JWT:
    warnings.warn("SECRET_KEY_JWT não definida! Usando chave temporária. DEFINA EM PRODUÇÃO!", RuntimeWarning)
    SECRET_KEY_JWT = "INSECURE-DEV-KEY-CHANGE-IN-PRODUCTION"

# Aceita segundos ("3600") ou sufixos s/m/h/d ("15m", "12h", "7d")
EXPIRES_IN_JWT = os.getenv("EXPIRES_IN_JWT", "1h")
JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")

# Custo do bcrypt
BCRYPT_ROUNDS = int(os.getenv("BCRYPT_ROUNDS", "10"))

# Usuário admin inicial (DEVE ser definido via variáveis de ambiente em produção)
ADMIN_DOCUMENT = os.getenv("ADMIN_DOCUMENT", "00000000000")
ADMIN_EMAIL = os.getenv("ADMIN_EMAIL", "admin@localhost")
ADMIN_USERNAME = os.getenv("ADMIN_USERNAME", "admin")
ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD")
if not ADMIN_PASSWORD:
    warnings.warn("ADMIN_PASSWORD não definida! Usando senha padrão insegura.", RuntimeWarning)
    ADMIN_PASSWORD = "admin"

# Perfis criados na inicialização do banco
DEFAULT_ROLES = ["admin", "user"]

# ==================================================
# CONFIGURAÇÕES DE INTERNACIONALIZAÇÃO
# ==================================================
FALLBACK_LANGUAGE = os.getenv("FALLBACK_LANGUAGE", "es")
SUPPORTED_LANGUAGES = ["es", "en", "pt-BR"]

# ==================================================
# CONFIGURAÇÕES DE EMAIL (SMTP)
# ==================================================
# Sem SMTP_HOST os emails são apenas registrados em log
SMTP_HOST = os.getenv("SMTP_HOST", "")
SMTP_PORT = int(os.getenv("SMTP_PORT", "587"))
SMTP_USER = os.getenv("SMTP_USER", "")
SMTP_PASSWORD = os.getenv("SMTP_PASSWORD", "")
SMTP_FROM = os.getenv("SMTP_FROM", "no-reply@localhost")
SMTP_USE_TLS = os.getenv("SMTP_USE_TLS", "false").lower() == "true"
SMTP_START_TLS = os.getenv("SMTP_START_TLS", "true").lower() == "true"

# Base do link enviado no email de redefinição de senha
FRONTEND_URL = os.getenv("FRONTEND_URL", "http://localhost:3000")

# ==================================================
# CONFIGURAÇÕES DE ARQUIVOS
# ==================================================
BASE_DIR = Path(__file__).resolve().parent
LOCALES_DIR = BASE_DIR / "i18n" / "locales"
EMAIL_TEMPLATES_DIR = BASE_DIR / "email_template" / "templates"
