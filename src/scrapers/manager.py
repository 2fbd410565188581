"""
Gerenciador de scrapers.
Orquestra a verificação paralela de todas as lojas e agrega resultados.
"""

import asyncio
from datetime import datetime
from typing import Any, Callable, Optional

from config.logging_config import LoggerMixin
from config.settings import Settings, get_settings
from config.stores import StoreDescriptor, get_default_stores
from src.core.exceptions import InvalidQueryError, LaunchError, SiteTaskError
from src.core.models import BatchSummary, ScrapeResult
from src.core.types import ScrapeStatus
from src.scrapers.session import BrowserSession
from src.scrapers.store_scraper import StoreScraper


class ScraperManager(LoggerMixin):
    """
    Gerenciador central de verificações.

    Uma sessão de navegador por lote; todas as lojas são disparadas ao
    mesmo tempo, cada uma em seu próprio contexto. A falha de uma loja
    vira o resultado dela e não afeta as demais.
    """

    def __init__(
        self,
        stores: Optional[tuple[StoreDescriptor, ...]] = None,
        settings: Optional[Settings] = None,
        session_factory: Optional[Callable[[Settings], BrowserSession]] = None,
        scraper: Optional[StoreScraper] = None,
    ):
        """
        Inicializa o gerenciador.

        Args:
            stores: Registro de lojas (None = registro padrão)
            settings: Configurações (None = globais)
            session_factory: Cria a sessão do navegador de cada lote
            scraper: Executor da verificação de uma loja
        """
        self.settings = settings or get_settings()
        self.stores = tuple(stores) if stores is not None else get_default_stores()
        self._session_factory = session_factory or BrowserSession
        self._scraper = scraper or StoreScraper(self.settings)

    @staticmethod
    def validate_query(query: Any) -> str:
        """
        Valida o termo de busca.

        Raises:
            InvalidQueryError: Se não for string ou estiver vazio
        """
        if not isinstance(query, str) or not query.strip():
            raise InvalidQueryError(value=query)
        return query.strip()

    async def scrape_all(
        self,
        query: Any,
        stores: Optional[tuple[StoreDescriptor, ...]] = None,
    ) -> list[ScrapeResult]:
        """
        Verifica a query em todas as lojas.

        Args:
            query: Termo de busca
            stores: Lojas a verificar (None = registro do gerenciador)

        Returns:
            Um ScrapeResult por loja, na ordem do registro

        Raises:
            InvalidQueryError: Única falha que aborta o lote
        """
        query = self.validate_query(query)
        target_stores = tuple(stores) if stores is not None else self.stores
        started_at = datetime.now()

        self.logger.info(
            "Iniciando verificação em múltiplas lojas",
            query=query,
            stores=[store.code for store in target_stores],
        )

        results: list[ScrapeResult] = []

        try:
            async with self._session_factory(self.settings) as session:
                results = await self._fan_out(session, target_stores, query)

        except LaunchError as e:
            self.logger.error("Navegador não iniciou - todas as lojas com erro", error=str(e))
            results = [
                ScrapeResult.failure(
                    store,
                    e.diagnostic,
                    url=store.build_search_url(query),
                    status=ScrapeStatus.LAUNCH_FAILED,
                )
                for store in target_stores
            ]

        except Exception as e:
            self.logger.error("Erro fatal no lote", error=str(e), exc_info=True)
            error = SiteTaskError("Batch failed", cause=e)
            # Lojas já concluídas mantêm o resultado; as demais recebem o erro
            results = results + [
                ScrapeResult.failure(
                    store,
                    error.diagnostic,
                    url=store.build_search_url(query),
                )
                for store in target_stores[len(results):]
            ]

        self._log_summary(results, started_at)
        return results

    async def _fan_out(
        self,
        session: BrowserSession,
        stores: tuple[StoreDescriptor, ...],
        query: str,
    ) -> list[ScrapeResult]:
        """Dispara todas as lojas e converte exceções em resultados, na ordem recebida."""
        limit = self.settings.max_concurrency or max(len(stores), 1)
        semaphore = asyncio.Semaphore(limit)

        async def run(store: StoreDescriptor) -> ScrapeResult:
            async with semaphore:
                return await self._scraper.check_store(session, store, query)

        outcomes = await asyncio.gather(
            *(run(store) for store in stores),
            return_exceptions=True,
        )

        results: list[ScrapeResult] = []
        for store, outcome in zip(stores, outcomes):
            if isinstance(outcome, BaseException):
                if not isinstance(outcome, Exception):
                    raise outcome
                self.logger.error(
                    "Erro em loja",
                    store=store.code,
                    error=str(outcome),
                )
                error = SiteTaskError(store_code=store.code, cause=outcome)
                outcome = ScrapeResult.failure(
                    store,
                    error.diagnostic,
                    url=store.build_search_url(query),
                )
            results.append(outcome)

        return results

    def summarize(self, results: list[ScrapeResult]) -> BatchSummary:
        """Resumo derivado dos resultados."""
        return BatchSummary.from_results(results)

    def _log_summary(self, results: list[ScrapeResult], started_at: datetime) -> None:
        summary = self.summarize(results)
        self.logger.info(
            "Verificação finalizada",
            total=summary.total,
            available=summary.available,
            unavailable=summary.unavailable,
            available_at=[r.store_name for r in results if r.has_item],
            duration=f"{(datetime.now() - started_at).total_seconds():.2f}s",
        )
