# i18n/languages.py
"""
Normalização de tags de idioma (BCP 47) para os idiomas suportados.
"""

from typing import Iterable, List, Optional


def normalize_language(tag: Optional[str], supported: Iterable[str]) -> Optional[str]:
    """
    Mapeia uma tag de idioma para um dos idiomas suportados.

    Aceita variações de caixa e separador ("pt_br", "PT-BR") e cai para o
    idioma base quando a região não é suportada ("en-US" -> "en").
    Retorna None se nenhum idioma suportado corresponder.

    Example:
        >>> normalize_language("pt_br", ["es", "pt-BR"])
        'pt-BR'
        >>> normalize_language("pt-PT", ["es", "pt-BR"])
        'pt-BR'
    """
    if not tag:
        return None

    wanted = tag.strip().replace("_", "-").lower()
    if not wanted or wanted == "*":
        return None

    by_lower = {lang.lower(): lang for lang in supported}
    if wanted in by_lower:
        return by_lower[wanted]

    base = wanted.split("-", 1)[0]
    if base in by_lower:
        return by_lower[base]

    # Mesma língua base com outra região (pt-PT -> pt-BR)
    for lowered, lang in by_lower.items():
        if lowered.split("-", 1)[0] == base:
            return lang
    return None


def parse_accept_language(header: Optional[str]) -> List[str]:
    """
    Extrai as tags de um header Accept-Language ordenadas por peso (q).

    Example:
        >>> parse_accept_language("fr;q=0.5, en-US, es;q=0.8")
        ['en-US', 'es', 'fr']
    """
    if not header:
        return []

    weighted = []
    for position, part in enumerate(header.split(",")):
        pieces = part.strip().split(";")
        tag = pieces[0].strip()
        if not tag:
            continue
        weight = 1.0
        for param in pieces[1:]:
            name, _, value = param.strip().partition("=")
            if name == "q":
                try:
                    weight = float(value)
                except ValueError:
                    weight = 0.0
        if weight > 0:
            weighted.append((-weight, position, tag))

    return [tag for _, _, tag in sorted(weighted)]
