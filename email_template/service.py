# email_template/service.py
"""
Renderização dos emails transacionais com Jinja2.

Cada template tem uma versão HTML (<nome>.html) e, opcionalmente, uma versão
texto (<nome>.txt). Os textos fixos vêm do i18n, nas chaves
email.<nome>.<campo>, e ficam disponíveis no template pela função t():

    {{ t("greeting") }}   ->  i18n "email.reset_password.greeting"

O assunto é sempre email.<nome>.subject.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from jinja2 import Environment, FileSystemLoader, TemplateNotFound, select_autoescape

from config import EMAIL_TEMPLATES_DIR
from i18n.service import I18nService
from utils.logging_config import get_logger

logger = get_logger(__name__)


@dataclass
class RenderedEmail:
    """Email pronto para envio"""
    subject: str
    html: str
    text: Optional[str] = None


class EmailTemplateService:

    def __init__(self, i18n: I18nService, templates_dir: Path = EMAIL_TEMPLATES_DIR):
        self.i18n = i18n
        self.env = Environment(
            loader=FileSystemLoader(str(templates_dir)),
            autoescape=select_autoescape(["html"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )

    def render(self, template: str, data: Dict[str, Any], lang: Optional[str] = None) -> RenderedEmail:
        """
        Renderiza o template no idioma resolvido.

        Raises:
            TemplateNotFound: template HTML inexistente
        """
        language = self.i18n.resolve_language(lang)

        def t(field: str, **extra) -> str:
            return self.i18n.translate(f"email.{template}.{field}", {**data, **extra}, language)

        subject = t("subject")
        context = {**data, "t": t, "lang": language, "subject": subject}

        html = self.env.get_template(f"{template}.html").render(**context)
        try:
            text = self.env.get_template(f"{template}.txt").render(**context)
        except TemplateNotFound:
            text = None

        logger.debug("Template de email renderizado", template=template, lang=language)
        return RenderedEmail(subject=subject, html=html, text=text)
