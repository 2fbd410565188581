"""
Testes de integração para o StockChecker.
"""

import json
import logging

import pytest
import structlog

from src.checker import StockChecker
from src.core.exceptions import InvalidQueryError
from src.scrapers.manager import ScraperManager


class TestStockChecker:
    """Testes de integração para StockChecker."""

    @pytest.fixture
    def checker(self, three_stores, settings, milk_scenario) -> StockChecker:
        """Verificador com navegador simulado."""
        manager = ScraperManager(
            three_stores,
            settings,
            session_factory=lambda _: milk_scenario,
        )
        return StockChecker(
            three_stores,
            settings,
            manager=manager,
            configure_logging=False,
        )

    # TESTES: LOJAS

    def test_list_stores(self, checker):
        """Lista lojas na ordem do registro."""
        stores = checker.list_stores()

        assert [s.code for s in stores] == ["alpha", "beta", "gamma"]
        assert stores[0].name == "Alpha Mart"

    def test_handle_stores_request(self, checker):
        """Contrato de listagem de lojas."""
        status, body = checker.handle_stores_request()

        assert status == 200
        assert body["stores"][1] == {
            "name": "Beta Grocer",
            "code": "beta",
            "baseSearchUrl": "https://beta.example/search",
        }

    def test_lojas_padrao(self, settings):
        """Sem registro explícito, usa as três lojas padrão."""
        checker = StockChecker(settings=settings, configure_logging=False)

        codes = [s.code for s in checker.list_stores()]

        assert codes == ["fairprice", "shengsiong", "coldstorage"]

    # TESTES: BUSCA

    @pytest.mark.asyncio
    async def test_check_availability(self, checker):
        """Resposta com um resultado por loja e resumo."""
        response = await checker.check_availability("  milk ")

        assert response.query == "milk"
        assert [r.store_code for r in response.results] == ["alpha", "beta", "gamma"]
        assert response.summary.available == 1
        assert [r.store_name for r in response.available_stores] == ["Alpha Mart"]

    @pytest.mark.asyncio
    async def test_check_availability_filtrando_lojas(self, checker, milk_scenario):
        """Restringe o lote a algumas lojas."""
        response = await checker.check_availability("milk", store_codes=["gamma"])

        assert [r.store_code for r in response.results] == ["gamma"]
        assert len(milk_scenario.pages) == 1

    @pytest.mark.asyncio
    async def test_loja_desconhecida(self, checker, milk_scenario):
        """Código desconhecido é erro antes de abrir o navegador."""
        with pytest.raises(ValueError):
            await checker.check_availability("milk", store_codes=["giant"])

        assert milk_scenario.start_count == 0

    @pytest.mark.asyncio
    async def test_query_invalida(self, checker):
        """Query vazia levanta InvalidQueryError."""
        with pytest.raises(InvalidQueryError):
            await checker.check_availability("   ")

    # TESTES: CONTRATO DE BUSCA

    @pytest.mark.asyncio
    async def test_handle_search_request(self, checker):
        """Requisição válida retorna 200 com o payload do contrato."""
        status, body = await checker.handle_search_request({"query": "milk"})

        assert status == 200
        assert body["query"] == "milk"
        assert body["summary"] == {"total": 3, "available": 1, "unavailable": 2}
        assert body["results"][0] == {
            "storeName": "Alpha Mart",
            "storeCode": "alpha",
            "url": "https://alpha.example/search?query=milk",
            "hasItem": True,
        }
        assert body["results"][1]["hasItem"] is False
        assert body["results"][1]["error"].startswith("Failed to load page")
        assert "error" not in body["results"][2]

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "payload",
        [
            {"query": ""},
            {"query": "   "},
            {"query": None},
            {"query": 42},
            {},
        ],
    )
    async def test_handle_search_request_invalida(self, checker, milk_scenario, payload):
        """Query inválida retorna 400 sem iniciar o navegador."""
        status, body = await checker.handle_search_request(payload)

        assert status == 400
        assert body == {"error": "Query must be a non-empty string"}
        assert milk_scenario.start_count == 0

    @pytest.mark.asyncio
    async def test_handle_search_request_query_longa(self, checker, milk_scenario):
        """Query acima do limite informa o tamanho máximo."""
        status, body = await checker.handle_search_request({"query": "a" * 201})

        assert status == 400
        assert body == {"error": "Query must be at most 200 characters"}
        assert milk_scenario.start_count == 0

    @pytest.mark.asyncio
    async def test_handle_search_request_corpo_nao_objeto(self, checker):
        """Corpo que não é objeto JSON retorna 400."""
        status, body = await checker.handle_search_request(["milk"])

        assert status == 400
        assert "error" in body


class TestLoggingSetup:
    """Testes da configuração de logging feita pelo StockChecker."""

    @pytest.fixture
    def restore_logging(self):
        """Restaura structlog e o logger raiz após o teste."""
        root = logging.getLogger()
        handlers = list(root.handlers)
        level = root.level
        yield
        root.setLevel(level)
        for handler in root.handlers[:]:
            if handler not in handlers:
                root.removeHandler(handler)
                handler.close()
        structlog.reset_defaults()

    def test_cria_arquivo_de_log(self, settings, temp_log_dir, restore_logging):
        """configure_logging=True cria o arquivo de log no diretório configurado."""
        StockChecker(settings=settings)

        assert (temp_log_dir / "stock_checker.log").exists()

    def test_evento_chega_ao_arquivo(self, settings, temp_log_dir, restore_logging):
        """Evento emitido pelo LoggerMixin é gravado como JSON no arquivo."""
        checker = StockChecker(settings=settings)

        checker.logger.info("Evento de teste", query="milk")
        for handler in logging.getLogger().handlers:
            handler.flush()

        lines = (temp_log_dir / "stock_checker.log").read_text(encoding="utf-8").splitlines()
        events = [json.loads(line) for line in lines if line.strip()]
        event = next(e for e in events if e["event"] == "Evento de teste")
        assert event["query"] == "milk"
        assert event["level"] == "info"
        assert event["logger"] == "StockChecker"

    def test_reconfigurar_nao_duplica_handlers(self, settings, restore_logging):
        """Chamar setup duas vezes substitui os handlers anteriores."""
        StockChecker(settings=settings)
        StockChecker(settings=settings)

        names = [h.get_name() for h in logging.getLogger().handlers]
        assert names.count("stock_checker.file") == 1
        assert names.count("stock_checker.console") == 1
