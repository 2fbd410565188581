"""
Modelos de dados do sistema.
Define o resultado por loja, o resumo do lote e os contratos de entrada/saída.
"""

from dataclasses import dataclass, field
from typing import Any, Iterable, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    computed_field,
    field_validator,
)
from pydantic.alias_generators import to_camel

from config.stores import StoreDescriptor
from src.core.types import ScrapeStatus, SearchQuery, StoreCode, WaitPolicy


# =============================================================================
# ESTADO TRANSITÓRIO DE UMA VERIFICAÇÃO
# =============================================================================

@dataclass
class ScrapeTask:
    """Uma verificação (loja, query) em andamento."""

    store: StoreDescriptor
    query: str
    url: str = ""

    def __post_init__(self):
        if not self.url:
            self.url = self.store.build_search_url(self.query)


@dataclass(frozen=True)
class NavigationOutcome:
    """Resultado da navegação até a página de busca."""

    url: str
    loaded: bool
    wait_policy: Optional[WaitPolicy] = None
    error: Optional[str] = None


@dataclass(frozen=True)
class LocatorOutcome:
    """Textos candidatos encontrados na página de resultados."""

    texts: list[str] = field(default_factory=list)
    no_results_detected: bool = False
    strategy: Optional[str] = None

    @property
    def candidates_count(self) -> int:
        """Quantidade de candidatos."""
        return len(self.texts)


# =============================================================================
# RESULTADO POR LOJA
# =============================================================================

class ScrapeResult(BaseModel):
    """
    Resultado da verificação de uma loja.
    Imutável depois de criado. Serializa para o contrato JSON com
    chaves camelCase (storeName, storeCode, url, hasItem, error).
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    store_name: str
    store_code: StoreCode
    url: str
    has_item: bool = False
    error: Optional[str] = None

    # Diagnóstico (fora do contrato JSON)
    status: ScrapeStatus = Field(default=ScrapeStatus.NOT_FOUND, exclude=True)
    matched_product: Optional[str] = Field(default=None, exclude=True)

    @classmethod
    def for_store(
        cls,
        store: StoreDescriptor,
        *,
        url: Optional[str] = None,
        has_item: bool = False,
        status: ScrapeStatus = ScrapeStatus.NOT_FOUND,
        error: Optional[str] = None,
        matched_product: Optional[str] = None,
    ) -> "ScrapeResult":
        """Cria resultado a partir da configuração da loja."""
        return cls(
            store_name=store.name,
            store_code=store.code,
            url=url or store.base_search_url,
            has_item=has_item,
            status=status,
            error=error,
            matched_product=matched_product,
        )

    @classmethod
    def failure(
        cls,
        store: StoreDescriptor,
        error: str,
        *,
        url: Optional[str] = None,
        status: ScrapeStatus = ScrapeStatus.ERROR,
    ) -> "ScrapeResult":
        """Cria resultado de falha (has_item sempre False)."""
        return cls.for_store(
            store,
            url=url,
            has_item=False,
            status=status,
            error=error,
        )

    def to_payload(self) -> dict[str, Any]:
        """Serializa no formato do contrato externo."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


# =============================================================================
# RESUMO DO LOTE
# =============================================================================

class BatchSummary(BaseModel):
    """Contagem derivada dos resultados de um lote."""

    total: int = Field(..., ge=0)
    available: int = Field(..., ge=0)
    unavailable: int = Field(..., ge=0)

    @classmethod
    def from_results(cls, results: Iterable[ScrapeResult]) -> "BatchSummary":
        """Recalcula o resumo a partir dos resultados."""
        results = list(results)
        available = sum(1 for r in results if r.has_item)
        return cls(
            total=len(results),
            available=available,
            unavailable=len(results) - available,
        )


# =============================================================================
# CONTRATOS DE ENTRADA/SAÍDA
# =============================================================================

class SearchRequest(BaseModel):
    """Requisição de busca: {"query": "..."}."""

    model_config = ConfigDict(extra="ignore")

    query: SearchQuery

    @field_validator("query", mode="before")
    @classmethod
    def validate_query(cls, v: Any) -> str:
        """Exige string não vazia após strip."""
        if not isinstance(v, str):
            raise ValueError("Query must be a non-empty string")
        v = v.strip()
        if not v:
            raise ValueError("Query must be a non-empty string")
        return v


class SearchResponse(BaseModel):
    """Resposta de busca com resultados por loja e resumo."""

    query: str
    results: list[ScrapeResult] = Field(default_factory=list)

    @computed_field
    @property
    def summary(self) -> BatchSummary:
        """Resumo calculado sob demanda a partir dos resultados."""
        return BatchSummary.from_results(self.results)

    @property
    def available_stores(self) -> list[ScrapeResult]:
        """Lojas onde o produto foi encontrado."""
        return [r for r in self.results if r.has_item]

    def to_payload(self) -> dict[str, Any]:
        """Serializa no formato do contrato externo."""
        return {
            "query": self.query,
            "results": [r.to_payload() for r in self.results],
            "summary": self.summary.model_dump(mode="json"),
        }


class StoreInfo(BaseModel):
    """Visão pública de uma loja configurada."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    name: str
    code: StoreCode
    base_search_url: str

    @classmethod
    def from_descriptor(cls, store: StoreDescriptor) -> "StoreInfo":
        """Cria a partir da configuração da loja."""
        return cls(
            name=store.name,
            code=store.code,
            base_search_url=store.base_search_url,
        )
