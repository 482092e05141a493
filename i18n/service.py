# i18n/service.py
"""
Serviço de internacionalização (mensagens de erro e de log).

As traduções ficam em i18n/locales/<idioma>/<namespace>.json. O primeiro
segmento da chave é o namespace (nome do arquivo) e o restante é o caminho
dentro do JSON:

    errors.user.not_found  ->  locales/es/errors.json  ->  {"user": {"not_found": "..."}}

Interpolação no formato {nome}:

    i18n.translate("errors.user.not_found", {"key": "email", "value": "a@b.c"})
"""

import json
import string
from pathlib import Path
from typing import Any, Dict, Iterable, Optional

from config import FALLBACK_LANGUAGE, LOCALES_DIR
from i18n.languages import normalize_language
from middleware.locale import get_request_locale
from utils.logging_config import get_logger

logger = get_logger(__name__)


class _SafeArgs(dict):
    """Mantém o placeholder original quando o argumento não foi informado."""

    def __missing__(self, key):
        return "{" + key + "}"


_formatter = string.Formatter()


def interpolate(template: str, args: Optional[Dict[str, Any]] = None) -> str:
    """
    Substitui placeholders {nome} pelos valores de args.

    Placeholders sem valor permanecem no texto.
    """
    if not args:
        return template
    try:
        return _formatter.vformat(template, (), _SafeArgs(args))
    except (ValueError, IndexError):
        # Template com chaves soltas: devolve sem interpolar
        logger.warning("Template i18n inválido", template=template)
        return template


def _flatten(prefix: str, node: Any, out: Dict[str, str]) -> None:
    if isinstance(node, dict):
        for key, value in node.items():
            _flatten(f"{prefix}.{key}" if prefix else key, value, out)
    else:
        out[prefix] = str(node)


def load_translations(locales_dir: Path) -> Dict[str, Dict[str, str]]:
    """
    Carrega todos os arquivos JSON de tradução.

    Returns:
        {idioma: {chave_completa: template}}
    """
    translations: Dict[str, Dict[str, str]] = {}
    for lang_dir in sorted(p for p in Path(locales_dir).iterdir() if p.is_dir()):
        table: Dict[str, str] = {}
        for file in sorted(lang_dir.glob("*.json")):
            with open(file, "r", encoding="utf-8") as f:
                _flatten(file.stem, json.load(f), table)
        translations[lang_dir.name] = table
    return translations


class I18nService:
    """
    Resolve chaves de mensagem para textos no idioma do usuário.

    Ordem do idioma: argumento `lang` -> idioma da requisição -> fallback.
    Chave ausente no idioma cai para o fallback e, por fim, para a própria chave.
    """

    def __init__(
        self,
        translations: Dict[str, Dict[str, str]],
        fallback_language: str = FALLBACK_LANGUAGE,
    ):
        if fallback_language not in translations:
            raise ValueError(f"Idioma de fallback sem traduções: {fallback_language}")
        self.translations = translations
        self.fallback_language = fallback_language

    @classmethod
    def from_directory(cls, locales_dir: Path = LOCALES_DIR, fallback_language: str = FALLBACK_LANGUAGE) -> "I18nService":
        return cls(load_translations(locales_dir), fallback_language)

    @property
    def languages(self) -> Iterable[str]:
        return list(self.translations.keys())

    def resolve_language(self, lang: Optional[str] = None) -> str:
        for candidate in (lang, get_request_locale()):
            resolved = normalize_language(candidate, self.languages)
            if resolved:
                return resolved
        return self.fallback_language

    def translate(self, key: str, args: Optional[Dict[str, Any]] = None, lang: Optional[str] = None) -> str:
        language = self.resolve_language(lang)

        template = self.translations[language].get(key)
        if template is None and language != self.fallback_language:
            template = self.translations[self.fallback_language].get(key)
        if template is None:
            logger.warning("Chave de tradução não encontrada", key=key, lang=language)
            return key

        return interpolate(template, args)
