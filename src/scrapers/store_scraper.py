"""
Verificação de disponibilidade em uma loja.
Navega, localiza cards, limpa o texto e decide se o produto existe.
"""

from datetime import datetime
from typing import Optional

from playwright.async_api import Page

from config.logging_config import LoggerMixin
from config.settings import Settings, get_settings
from config.stores import StoreDescriptor
from src.core.exceptions import (
    LocationExhausted,
    NavigationFailure,
    SiteTaskError,
)
from src.core.models import NavigationOutcome, ScrapeResult, ScrapeTask
from src.core.types import ScrapeStatus
from src.pipeline.matcher import MatchEngine
from src.pipeline.normalizer import TextNormalizer
from src.scrapers.locator import ProductLocator
from src.scrapers.navigator import PageNavigator
from src.scrapers.session import BrowserSession


class StoreScraper(LoggerMixin):
    """
    Executa o pipeline de uma loja: navegação -> localização -> matching.
    Nunca levanta exceção; toda falha vira um ScrapeResult com erro.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        navigator: Optional[PageNavigator] = None,
        locator: Optional[ProductLocator] = None,
        matcher: Optional[MatchEngine] = None,
    ):
        """
        Inicializa o scraper.

        Args:
            settings: Configurações (None = globais)
            navigator: Navegador de páginas
            locator: Localizador de produtos
            matcher: Motor de correspondência
        """
        self.settings = settings or get_settings()
        normalizer = TextNormalizer()

        self.navigator = navigator or PageNavigator(self.settings)
        self.locator = locator or ProductLocator(self.settings, normalizer)
        self.matcher = matcher or MatchEngine(
            substring_min_length=self.settings.substring_min_length,
            normalizer=normalizer,
        )

    async def check_store(
        self,
        session: BrowserSession,
        store: StoreDescriptor,
        query: str,
    ) -> ScrapeResult:
        """
        Verifica se a loja lista um produto que corresponde à query.

        Args:
            session: Sessão do navegador do lote
            store: Configuração da loja
            query: Termo de busca

        Returns:
            Exatamente um ScrapeResult para a loja
        """
        task = ScrapeTask(store=store, query=query)
        log = self.log_operation("check_store", store=store.code)
        started_at = datetime.now()

        log.info("Verificando loja", url=task.url)

        try:
            async with session.page() as page:
                navigation = await self.navigator.navigate(page, task.url)

                if not navigation.loaded and self.settings.abort_on_navigation_failure:
                    raise NavigationFailure(
                        navigation.error or "Failed to load page",
                        store_code=store.code,
                        url=task.url,
                    )

                await self.navigator.dismiss_consent_banner(page)
                result = await self._evaluate_page(page, task, navigation)

        except NavigationFailure as e:
            result = ScrapeResult.failure(
                store,
                e.message,
                url=task.url,
                status=ScrapeStatus.NAVIGATION_FAILED,
            )

        except Exception as e:
            error = SiteTaskError(store_code=store.code, url=task.url, cause=e)
            log.error("Erro na verificação", error=str(e), exc_info=True)
            result = ScrapeResult.failure(store, error.diagnostic, url=task.url)

        log.info(
            "Loja verificada",
            has_item=result.has_item,
            status=result.status.value,
            error=result.error,
            duration=f"{(datetime.now() - started_at).total_seconds():.2f}s",
        )
        return result

    async def _evaluate_page(
        self,
        page: Page,
        task: ScrapeTask,
        navigation: NavigationOutcome,
    ) -> ScrapeResult:
        """Localiza candidatos e aplica o matching."""
        store = task.store

        try:
            located = await self.locator.locate_candidates(page, store)
        except LocationExhausted as e:
            self.logger.info(
                "Nenhum produto localizado",
                store=store.code,
                strategies=e.strategies,
            )
            if not navigation.loaded:
                return ScrapeResult.failure(
                    store,
                    navigation.error or "Failed to load page",
                    url=task.url,
                    status=ScrapeStatus.NAVIGATION_FAILED,
                )
            return ScrapeResult.for_store(
                store,
                url=task.url,
                status=ScrapeStatus.NOT_FOUND,
            )

        if located.no_results_detected:
            return ScrapeResult.for_store(
                store,
                url=task.url,
                status=ScrapeStatus.NO_RESULTS,
            )

        matched = self.matcher.find_match(task.query, located.texts)
        if matched is None:
            self.logger.info(
                "Nenhum candidato corresponde à query",
                store=store.code,
                candidates=located.candidates_count,
                sample=[text[:40] for text in located.texts[:5]],
            )
            if not navigation.loaded:
                return ScrapeResult.failure(
                    store,
                    navigation.error or "Failed to load page",
                    url=task.url,
                    status=ScrapeStatus.NAVIGATION_FAILED,
                )

        return ScrapeResult.for_store(
            store,
            url=task.url,
            has_item=matched is not None,
            status=ScrapeStatus.FOUND if matched else ScrapeStatus.NOT_FOUND,
            matched_product=matched,
        )
