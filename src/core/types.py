"""
Tipos customizados e enumerações do sistema.
"""

from enum import Enum
from typing import Annotated

from pydantic import StringConstraints

from config.stores import STORE_CODE_PATTERN


# ENUMERAÇÕES

class ScrapeStatus(str, Enum):
    """Desfecho da verificação de uma loja."""

    FOUND = "found"
    NOT_FOUND = "not_found"               # Produtos listados, nenhum corresponde
    NO_RESULTS = "no_results"             # Loja exibiu mensagem de busca vazia
    NAVIGATION_FAILED = "navigation_failed"
    LAUNCH_FAILED = "launch_failed"
    ERROR = "error"

    @property
    def is_failure(self) -> bool:
        """Indica se o status representa uma falha técnica."""
        return self in (
            ScrapeStatus.NAVIGATION_FAILED,
            ScrapeStatus.LAUNCH_FAILED,
            ScrapeStatus.ERROR,
        )


class WaitPolicy(str, Enum):
    """Condição de espera da navegação no Playwright."""

    NETWORK_IDLE = "networkidle"
    DOM_CONTENT_LOADED = "domcontentloaded"
    LOAD = "load"


# TIPOS ANOTADOS

# Código estável de uma loja (mesmo formato aceito por StoreDescriptor)
StoreCode = Annotated[
    str,
    StringConstraints(
        pattern=STORE_CODE_PATTERN,
        strip_whitespace=True,
    ),
]

# Query de busca
SearchQuery = Annotated[
    str,
    StringConstraints(
        min_length=1,
        max_length=200,
        strip_whitespace=True,
    ),
]