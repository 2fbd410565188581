"""
StockChecker: ponto de entrada do sistema para colaboradores.
Valida requisições, executa o lote e monta respostas no formato do contrato.
"""

from typing import Any, Iterable, Optional

from pydantic import ValidationError as PydanticValidationError

from config.logging_config import LoggerMixin, setup_logging
from config.settings import Settings, get_settings
from config.stores import StoreDescriptor, get_default_stores, select_stores
from src.core.exceptions import InvalidQueryError
from src.core.models import SearchRequest, SearchResponse, StoreInfo
from src.scrapers.manager import ScraperManager


class StockChecker(LoggerMixin):
    """
    Orquestrador principal da verificação de disponibilidade.

    Responsabilidades:
    - Expor o registro de lojas (somente leitura)
    - Validar a query e executar o lote
    - Converter resultados para o contrato JSON
    """

    def __init__(
        self,
        stores: Optional[tuple[StoreDescriptor, ...]] = None,
        settings: Optional[Settings] = None,
        manager: Optional[ScraperManager] = None,
        configure_logging: bool = True,
    ):
        """
        Inicializa o verificador.

        Args:
            stores: Registro de lojas (None = registro padrão)
            settings: Configurações (None = globais)
            manager: Gerenciador de scrapers
            configure_logging: Se deve configurar o structlog
        """
        self.settings = settings or get_settings()
        self.stores = tuple(stores) if stores is not None else get_default_stores()
        self.manager = manager or ScraperManager(self.stores, self.settings)

        if configure_logging:
            setup_logging(
                level=self.settings.log_level,
                log_path=self.settings.log_path,
                json_format=self.settings.is_production,
            )

        self.logger.debug(
            "StockChecker inicializado",
            stores=[store.code for store in self.stores],
        )

    def list_stores(self) -> list[StoreInfo]:
        """Retorna as lojas configuradas. Não faz scraping."""
        return [StoreInfo.from_descriptor(store) for store in self.stores]

    async def check_availability(
        self,
        query: Any,
        store_codes: Optional[Iterable[str]] = None,
    ) -> SearchResponse:
        """
        Verifica a disponibilidade do produto em todas as lojas.

        Args:
            query: Termo de busca
            store_codes: Restringe a algumas lojas (None = todas)

        Returns:
            SearchResponse com um resultado por loja

        Raises:
            InvalidQueryError: Se a query for vazia ou não for string
            ValueError: Se algum código de loja não existir
        """
        query = self.manager.validate_query(query)
        stores = select_stores(store_codes, self.stores)

        results = await self.manager.scrape_all(query, stores)
        return SearchResponse(query=query, results=results)

    async def handle_search_request(
        self,
        payload: Any,
    ) -> tuple[int, dict[str, Any]]:
        """
        Trata uma requisição {"query": ...} vinda de um colaborador.

        Args:
            payload: Corpo da requisição já decodificado

        Returns:
            Tupla (status HTTP, corpo da resposta)
        """
        if not isinstance(payload, dict):
            return 400, {"error": "Request body must be a JSON object"}

        try:
            request = SearchRequest.model_validate(payload)
        except PydanticValidationError as e:
            message = self._request_error_message(e)
            self.logger.warning("Requisição inválida", error=message)
            return 400, {"error": message}

        try:
            response = await self.check_availability(request.query)
        except InvalidQueryError as e:
            return 400, {"error": e.message}

        return 200, response.to_payload()

    @staticmethod
    def _request_error_message(error: PydanticValidationError) -> str:
        """Mensagem do primeiro erro de validação, sem o prefixo do pydantic."""
        first = error.errors()[0]
        if first["type"] == "value_error":
            return str(first["ctx"]["error"])
        if first["type"] == "string_too_long":
            return f"Query must be at most {first['ctx']['max_length']} characters"
        return "Query must be a non-empty string"

    def handle_stores_request(self) -> tuple[int, dict[str, Any]]:
        """Lista as lojas no formato do contrato."""
        return 200, {
            "stores": [
                store.model_dump(mode="json", by_alias=True)
                for store in self.list_stores()
            ]
        }
