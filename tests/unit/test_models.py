"""
Testes unitários para os modelos de dados.
"""

import pytest
from pydantic import ValidationError as PydanticValidationError

from src.core.exceptions import (
    InvalidQueryError,
    LaunchError,
    LocationExhausted,
    SiteTaskError,
)
from src.core.models import (
    BatchSummary,
    ScrapeResult,
    ScrapeTask,
    SearchRequest,
    SearchResponse,
    StoreInfo,
)
from src.core.types import ScrapeStatus


class TestScrapeResult:
    """Testes para ScrapeResult."""

    def test_payload_camel_case(self, store_alpha):
        """Serialização usa as chaves do contrato externo."""
        result = ScrapeResult.for_store(
            store_alpha,
            url="https://alpha.example/search?query=milk",
            has_item=True,
            status=ScrapeStatus.FOUND,
            matched_product="Full Cream Milk",
        )

        assert result.to_payload() == {
            "storeName": "Alpha Mart",
            "storeCode": "alpha",
            "url": "https://alpha.example/search?query=milk",
            "hasItem": True,
        }

    def test_payload_inclui_erro(self, store_beta):
        """Campo error aparece só quando presente."""
        result = ScrapeResult.failure(
            store_beta,
            "Failed to load page: timeout",
            status=ScrapeStatus.NAVIGATION_FAILED,
        )

        payload = result.to_payload()
        assert payload["hasItem"] is False
        assert payload["error"] == "Failed to load page: timeout"
        assert "status" not in payload
        assert "matchedProduct" not in payload

    def test_url_padrao_e_base_da_loja(self, store_alpha):
        """Sem URL explícita, usa a URL base."""
        result = ScrapeResult.for_store(store_alpha)
        assert result.url == store_alpha.base_search_url

    def test_falha_nunca_tem_item(self, store_alpha):
        """failure() sempre gera has_item False e status ERROR."""
        result = ScrapeResult.failure(store_alpha, "Scraping error")
        assert result.has_item is False
        assert result.status == ScrapeStatus.ERROR
        assert result.status.is_failure is True

    def test_imutavel(self, store_alpha):
        """Resultado não pode ser alterado."""
        result = ScrapeResult.for_store(store_alpha)
        with pytest.raises(PydanticValidationError):
            result.has_item = True

    def test_codigo_invalido(self):
        """Código de loja fora do padrão é rejeitado."""
        with pytest.raises(PydanticValidationError):
            ScrapeResult(store_name="X", store_code="Bad Code", url="https://x")

    def test_codigo_com_hifen_e_maiusculas(self):
        """Mesmo formato aceito pela configuração da loja."""
        result = ScrapeResult(store_name="X", store_code="Cold-Storage", url="https://x")
        assert result.to_payload()["storeCode"] == "Cold-Storage"

    def test_aceita_alias(self):
        """Pode ser construído com as chaves camelCase."""
        result = ScrapeResult.model_validate({
            "storeName": "Alpha Mart",
            "storeCode": "alpha",
            "url": "https://alpha.example",
            "hasItem": True,
        })
        assert result.has_item is True


class TestBatchSummary:
    """Testes para BatchSummary."""

    def test_contagem(self, store_alpha, store_beta, store_gamma):
        """available + unavailable == total."""
        results = [
            ScrapeResult.for_store(store_alpha, has_item=True, status=ScrapeStatus.FOUND),
            ScrapeResult.failure(store_beta, "boom"),
            ScrapeResult.for_store(store_gamma, status=ScrapeStatus.NO_RESULTS),
        ]

        summary = BatchSummary.from_results(results)

        assert summary.total == 3
        assert summary.available == 1
        assert summary.unavailable == 2

    def test_vazio(self):
        """Lote vazio tem contagens zeradas."""
        summary = BatchSummary.from_results([])
        assert (summary.total, summary.available, summary.unavailable) == (0, 0, 0)


class TestSearchRequest:
    """Testes para SearchRequest."""

    def test_query_valida(self):
        """Query é normalizada com strip."""
        request = SearchRequest.model_validate({"query": "  almond milk "})
        assert request.query == "almond milk"

    @pytest.mark.parametrize("value", ["", "   ", None, 42, ["milk"]])
    def test_query_invalida(self, value):
        """Query vazia ou não-string é rejeitada."""
        with pytest.raises(PydanticValidationError) as exc_info:
            SearchRequest.model_validate({"query": value})
        assert "Query must be a non-empty string" in str(exc_info.value)

    def test_query_ausente(self):
        """Campo obrigatório."""
        with pytest.raises(PydanticValidationError):
            SearchRequest.model_validate({})

    def test_query_muito_longa(self):
        """Limite de 200 caracteres."""
        with pytest.raises(PydanticValidationError):
            SearchRequest.model_validate({"query": "a" * 201})


class TestSearchResponse:
    """Testes para SearchResponse."""

    def test_resumo_e_payload(self, store_alpha, store_beta):
        """Resumo é derivado dos resultados."""
        response = SearchResponse(
            query="milk",
            results=[
                ScrapeResult.for_store(store_alpha, has_item=True, status=ScrapeStatus.FOUND),
                ScrapeResult.failure(store_beta, "boom"),
            ],
        )

        payload = response.to_payload()

        assert payload["query"] == "milk"
        assert payload["summary"] == {"total": 2, "available": 1, "unavailable": 1}
        assert [r["storeCode"] for r in payload["results"]] == ["alpha", "beta"]
        assert [r.store_code for r in response.available_stores] == ["alpha"]


class TestScrapeTask:
    """Testes para ScrapeTask."""

    def test_monta_url(self, store_alpha):
        """URL é derivada da loja e da query."""
        task = ScrapeTask(store=store_alpha, query="almond milk")
        assert task.url == "https://alpha.example/search?query=almond%20milk"


class TestStoreInfo:
    """Testes para StoreInfo."""

    def test_from_descriptor(self, store_gamma):
        """Expõe nome, código e URL base com aliases camelCase."""
        info = StoreInfo.from_descriptor(store_gamma)
        assert info.model_dump(by_alias=True) == {
            "name": "Gamma Storage",
            "code": "gamma",
            "baseSearchUrl": "https://gamma.example/en/search",
        }


class TestExceptions:
    """Testes para a hierarquia de exceções."""

    def test_launch_error_diagnostico(self):
        """Mensagem padrão com a causa."""
        error = LaunchError(cause=RuntimeError("Executable doesn't exist"))
        assert error.diagnostic == "Browser launch failed: Executable doesn't exist"

    def test_invalid_query_padrao(self):
        """Mensagem e campo padrão."""
        error = InvalidQueryError(value="  ")
        assert error.message == "Query must be a non-empty string"
        assert error.details == {"field": "query", "invalid_value": "  "}

    def test_location_exhausted_guarda_estrategias(self):
        """Estratégias tentadas ficam disponíveis."""
        error = LocationExhausted(store_code="alpha", strategies=["a", "b"])
        assert error.strategies == ["a", "b"]
        assert error.to_dict()["details"]["strategies_tried"] == ["a", "b"]

    def test_site_task_error_sem_causa(self):
        """Sem causa, diagnóstico é só a mensagem."""
        assert SiteTaskError().diagnostic == "Scraping error"
