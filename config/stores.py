"""
Configuração das lojas suportadas.
Define URLs de busca, formato da query e seletores de cada loja.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional
from urllib.parse import quote

# Mesmo conjunto de caracteres preservados pelo encodeURIComponent
_URI_COMPONENT_SAFE = "-_.!~*'()"

# Códigos de loja: letras, dígitos, "_" e "-"
STORE_CODE_PATTERN = r"^[A-Za-z0-9_-]+$"
_STORE_CODE_RE = re.compile(STORE_CODE_PATTERN)


class QueryFormat(str, Enum):
    """Forma como o termo de busca entra na URL."""
    QUERY_PARAM = "query_param"   # /search?q=<termo>
    PATH = "path"                 # /search/<termo>


@dataclass(frozen=True)
class StoreDescriptor:
    """Configuração imutável de uma loja."""

    code: str
    name: str
    base_search_url: str

    query_param: Optional[str] = "q"
    query_format: QueryFormat = QueryFormat.QUERY_PARAM

    # Estratégias de localização dos cards de produto
    product_selector: str = ""
    fallback_selectors: tuple[str, ...] = ()

    # Seletores de mensagem de "nenhum resultado"
    no_results_selectors: tuple[str, ...] = ()

    # Varredura genérica como último recurso
    heuristic_scan: bool = True

    def __post_init__(self):
        if not _STORE_CODE_RE.fullmatch(self.code):
            raise ValueError(
                f"Código de loja inválido: {self.code!r} (use letras, dígitos, '_' ou '-')"
            )
        if not self.base_search_url:
            raise ValueError(f"Loja {self.code} sem URL de busca")

    def build_search_url(self, query: str) -> str:
        """
        Monta URL de busca.

        Args:
            query: Termo de busca (sem codificação)

        Returns:
            URL completa de busca
        """
        encoded = quote(query.strip(), safe=_URI_COMPONENT_SAFE)
        base = self.base_search_url.rstrip("/")

        if self.query_format == QueryFormat.PATH:
            return f"{base}/{encoded}"

        return f"{base}?{self.query_param}={encoded}"

    @property
    def selector_chain(self) -> tuple[str, ...]:
        """Seletor principal seguido dos fallbacks, na ordem de tentativa."""
        chain = (self.product_selector,) if self.product_selector else ()
        return chain + self.fallback_selectors


# =============================================================================
# NTUC FAIRPRICE
# =============================================================================

FAIRPRICE_CONFIG = StoreDescriptor(
    code="fairprice",
    name="NTUC FairPrice",
    base_search_url="https://www.fairprice.com.sg/search",
    query_param="query",
    query_format=QueryFormat.QUERY_PARAM,
    product_selector='[data-testid="product"]',
    fallback_selectors=(
        'a[class*="sc-e68f503d-3"]',
        '[class*="product-card"]',
        '[class*="product-item"]',
        "article",
    ),
    no_results_selectors=(
        ".no-results",
        ".empty-state",
        '[data-testid="no-results"]',
    ),
)


# =============================================================================
# SHENG SIONG
# =============================================================================

# Sheng Siong usa /search/<termo> ao invés de ?q=
SHENG_SIONG_CONFIG = StoreDescriptor(
    code="shengsiong",
    name="Sheng Siong",
    base_search_url="https://shengsiong.com.sg/search",
    query_param="q",
    query_format=QueryFormat.PATH,
    product_selector="a.product-preview",
    fallback_selectors=(
        ".product-item",
        'a[href*="/product/"]',
        "article",
    ),
    no_results_selectors=(
        ".no-results",
        ".empty-state",
        '[class*="no-result"]',
    ),
)


# =============================================================================
# COLD STORAGE
# =============================================================================

COLD_STORAGE_CONFIG = StoreDescriptor(
    code="coldstorage",
    name="Cold Storage",
    base_search_url="https://coldstorage.com.sg/en/search",
    query_param="keyword",
    query_format=QueryFormat.QUERY_PARAM,
    product_selector="a.ware-wrapper",
    fallback_selectors=(
        "a.router-link",
        '[class*="product"]',
        "article",
    ),
    no_results_selectors=(
        ".no-results",
        ".empty-state",
        '[class*="no-result"]',
    ),
)


# =============================================================================
# REGISTRO DE LOJAS
# =============================================================================

STORE_REGISTRY: tuple[StoreDescriptor, ...] = (
    FAIRPRICE_CONFIG,
    SHENG_SIONG_CONFIG,
    COLD_STORAGE_CONFIG,
)


def get_default_stores() -> tuple[StoreDescriptor, ...]:
    """Retorna o registro padrão de lojas."""
    return STORE_REGISTRY


def get_store(
    code: str,
    stores: Iterable[StoreDescriptor] = STORE_REGISTRY,
) -> StoreDescriptor:
    """
    Retorna configuração de uma loja.

    Args:
        code: Código da loja
        stores: Registro onde procurar

    Returns:
        Configuração da loja

    Raises:
        ValueError: Se loja não encontrada
    """
    for store in stores:
        if store.code == code:
            return store
    raise ValueError(f"Loja não encontrada: {code}")


def select_stores(
    codes: Optional[Iterable[str]] = None,
    stores: tuple[StoreDescriptor, ...] = STORE_REGISTRY,
) -> tuple[StoreDescriptor, ...]:
    """
    Filtra o registro pelos códigos informados, mantendo a ordem do registro.

    Args:
        codes: Códigos desejados (None = todas)
        stores: Registro de origem

    Returns:
        Subconjunto imutável do registro

    Raises:
        ValueError: Se algum código não existir
    """
    if not codes:
        return stores

    wanted = set(codes)
    unknown = wanted - {store.code for store in stores}
    if unknown:
        raise ValueError(f"Loja não encontrada: {', '.join(sorted(unknown))}")

    return tuple(store for store in stores if store.code in wanted)
