# services/__init__.py
"""
Serviços de integração externa do Portal de Contas (email).
"""

from services.email_service import EmailService, SmtpSettings

__all__ = [
    "EmailService",
    "SmtpSettings",
]
