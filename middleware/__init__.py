"""
Middlewares customizados do Portal de Contas.
"""

from middleware.request_id import RequestIDMiddleware, get_request_id, REQUEST_ID_HEADER
from middleware.locale import LocaleMiddleware, get_request_locale

__all__ = [
    "RequestIDMiddleware",
    "get_request_id",
    "REQUEST_ID_HEADER",
    "LocaleMiddleware",
    "get_request_locale",
]
