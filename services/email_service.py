# services/email_service.py
"""
Envio de emails transacionais via SMTP (aiosmtplib).

Sem SMTP_HOST configurado o email é apenas registrado em log, o que
permite rodar em desenvolvimento sem servidor de email.

USO:
    email_service = EmailService(EmailTemplateService(i18n), i18n)
    await email_service.send("reset_password", {"username": "ana", "reset_url": url}, "ana@x.com")
"""

from dataclasses import dataclass
from email.message import EmailMessage
from typing import Any, Dict, Optional

import aiosmtplib
from fastapi import HTTPException, status
from jinja2 import TemplateNotFound

import config
from email_template.service import EmailTemplateService, RenderedEmail
from i18n.service import I18nService
from utils.logging_config import get_logger

logger = get_logger(__name__)


@dataclass
class SmtpSettings:
    """Configuração do servidor SMTP."""
    host: str = ""
    port: int = 587
    user: Optional[str] = None
    password: Optional[str] = None
    sender: str = "no-reply@localhost"
    use_tls: bool = False
    start_tls: bool = True
    timeout: float = 30.0

    @property
    def enabled(self) -> bool:
        return bool(self.host)

    @classmethod
    def from_config(cls) -> "SmtpSettings":
        """Carrega a configuração de config.py (variáveis de ambiente)."""
        return cls(
            host=config.SMTP_HOST,
            port=config.SMTP_PORT,
            user=config.SMTP_USER or None,
            password=config.SMTP_PASSWORD or None,
            sender=config.SMTP_FROM,
            use_tls=config.SMTP_USE_TLS,
            start_tls=config.SMTP_START_TLS,
        )


def build_message(rendered: RenderedEmail, sender: str, recipient: str) -> EmailMessage:
    """Monta a mensagem MIME (texto + alternativa HTML)."""
    msg = EmailMessage()
    msg["Subject"] = rendered.subject
    msg["From"] = sender
    msg["To"] = recipient
    msg.set_content(rendered.text or rendered.subject)
    msg.add_alternative(rendered.html, subtype="html")
    return msg


class EmailService:

    def __init__(
        self,
        template_service: EmailTemplateService,
        i18n: I18nService,
        settings: Optional[SmtpSettings] = None,
    ):
        self.template_service = template_service
        self.i18n = i18n
        self.settings = settings or SmtpSettings.from_config()

    def _send_failed(self, recipient: str) -> HTTPException:
        error_msg = self.i18n.translate("errors.email.send_failed", {"recipient": recipient})
        logger.error(error_msg)
        return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=error_msg)

    async def send(
        self,
        template: str,
        data: Dict[str, Any],
        recipient: str,
        lang: Optional[str] = None,
    ) -> bool:
        """
        Renderiza o template e envia para o destinatário.

        Returns:
            True se enviado, False se SMTP não configurado

        Raises:
            HTTPException 500: template inexistente ou falha de SMTP
        """
        args = {"template": template, "recipient": recipient}

        try:
            rendered = self.template_service.render(template, data, lang)
        except TemplateNotFound:
            logger.error("Template de email não encontrado", template=template)
            raise self._send_failed(recipient)

        if not self.settings.enabled:
            logger.warning(self.i18n.translate("email.skipped", args), subject=rendered.subject)
            return False

        message = build_message(rendered, self.settings.sender, recipient)
        logger.info(self.i18n.translate("email.sending", args))

        try:
            await aiosmtplib.send(
                message,
                hostname=self.settings.host,
                port=self.settings.port,
                username=self.settings.user,
                password=self.settings.password,
                use_tls=self.settings.use_tls,
                start_tls=self.settings.start_tls and not self.settings.use_tls,
                timeout=self.settings.timeout,
            )
        except (aiosmtplib.SMTPException, OSError) as e:
            logger.error("Falha no envio SMTP", error=str(e))
            raise self._send_failed(recipient)

        logger.info(self.i18n.translate("email.sent", args))
        return True
