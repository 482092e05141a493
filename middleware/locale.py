"""
Middleware que resolve o idioma de cada requisição.

Ordem de resolução:
1. Query string ?lang=
2. Header x-lang
3. Header Accept-Language (respeitando os pesos q)

O idioma resolvido fica disponível via get_request_locale() para o
I18nService e para os logs. Sem correspondência, nada é definido e o
I18nService usa o idioma de fallback.
"""

from contextvars import ContextVar
from typing import Iterable, Optional

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from config import SUPPORTED_LANGUAGES
from i18n.languages import normalize_language, parse_accept_language

LANG_QUERY_PARAM = "lang"
LANG_HEADER = "x-lang"

_locale_ctx: ContextVar[Optional[str]] = ContextVar("request_locale", default=None)


def get_request_locale() -> Optional[str]:
    """Retorna o idioma da requisição atual ou None fora de uma requisição."""
    return _locale_ctx.get()


def set_request_locale(locale: Optional[str]) -> None:
    _locale_ctx.set(locale)


def resolve_locale(request: Request, supported: Iterable[str] = SUPPORTED_LANGUAGES) -> Optional[str]:
    """Resolve o idioma a partir da query string e dos headers."""
    supported = list(supported)

    for candidate in (request.query_params.get(LANG_QUERY_PARAM), request.headers.get(LANG_HEADER)):
        locale = normalize_language(candidate, supported)
        if locale:
            return locale

    for tag in parse_accept_language(request.headers.get("accept-language")):
        locale = normalize_language(tag, supported)
        if locale:
            return locale

    return None


class LocaleMiddleware(BaseHTTPMiddleware):
    """
    Uso:
        app.add_middleware(LocaleMiddleware)
    """

    async def dispatch(self, request: Request, call_next) -> Response:
        locale = resolve_locale(request)
        request.state.locale = locale
        set_request_locale(locale)
        try:
            response: Response = await call_next(request)
            if locale:
                response.headers["Content-Language"] = locale
            return response
        finally:
            set_request_locale(None)
