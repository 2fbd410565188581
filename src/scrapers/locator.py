"""
Localização de produtos na página de resultados.

Cascata de estratégias avaliada em ordem, parando na primeira que retorna
candidatos: seletor principal, seletores de fallback e, por último, uma
varredura heurística genérica.
"""

from abc import ABC, abstractmethod
from typing import Optional

from playwright.async_api import (
    Error as PlaywrightError,
    Page,
    TimeoutError as PlaywrightTimeout,
)

from config.logging_config import LoggerMixin
from config.settings import Settings, get_settings
from config.stores import StoreDescriptor
from src.core.constants import (
    EMPTY_STATE_PHRASES,
    HEURISTIC_MAX_TEXT_LENGTH,
    HEURISTIC_MIN_TEXT_LENGTH,
    HEURISTIC_SCAN_SCRIPT,
    HEURISTIC_SCAN_SELECTOR,
    UI_NOISE_PATTERNS,
)
from src.core.exceptions import LocationExhausted
from src.core.models import LocatorOutcome
from src.pipeline.normalizer import TextNormalizer


# =============================================================================
# ESTRATÉGIAS
# =============================================================================

class LocatorStrategy(ABC, LoggerMixin):
    """Estratégia de localização de cards de produto."""

    name: str = "strategy"

    @abstractmethod
    async def locate(self, page: Page) -> Optional[list[str]]:
        """
        Coleta textos de candidatos.

        Returns:
            Lista de textos, ou None se a estratégia não encontrou nada
        """


class SelectorStrategy(LocatorStrategy):
    """Espera um seletor CSS e extrai o texto de todos os elementos."""

    def __init__(self, selector: str, timeout: int):
        self.selector = selector
        self.timeout = timeout
        self.name = selector

    async def locate(self, page: Page) -> Optional[list[str]]:
        try:
            await page.wait_for_selector(self.selector, timeout=self.timeout)
            elements = await page.query_selector_all(self.selector)
        except PlaywrightTimeout:
            self.logger.debug(
                "Seletor não apareceu",
                selector=self.selector,
                timeout_ms=self.timeout,
            )
            return None
        except PlaywrightError as e:
            # Seletor malformado ou página fechada: passa para a próxima estratégia
            self.logger.warning(
                "Falha ao avaliar seletor",
                selector=self.selector,
                error=str(e),
            )
            return None

        if not elements:
            return None

        texts = []
        for element in elements:
            try:
                text = await element.inner_text()
            except PlaywrightError:
                continue
            if text and text.strip():
                texts.append(text.strip())

        self.logger.debug(
            "Elementos encontrados",
            selector=self.selector,
            elements=len(elements),
            texts=len(texts),
        )
        return texts or None


class HeuristicScanStrategy(LocatorStrategy):
    """
    Varredura genérica: elementos com semântica de produto/item de lista
    ou links, com texto de tamanho plausível para nome de produto.
    """

    name = "heuristic_scan"

    def __init__(
        self,
        min_length: int = HEURISTIC_MIN_TEXT_LENGTH,
        max_length: int = HEURISTIC_MAX_TEXT_LENGTH,
    ):
        self.min_length = min_length
        self.max_length = max_length

    async def locate(self, page: Page) -> Optional[list[str]]:
        try:
            texts = await page.evaluate(
                HEURISTIC_SCAN_SCRIPT,
                {
                    "selector": HEURISTIC_SCAN_SELECTOR,
                    "minLength": self.min_length,
                    "maxLength": self.max_length,
                },
            )
        except PlaywrightError as e:
            self.logger.debug("Falha na varredura heurística", error=str(e))
            return None

        texts = [
            text.strip() for text in texts or []
            if isinstance(text, str)
            and self.min_length <= len(text.strip()) <= self.max_length
        ]
        return texts or None


class NoResultsDetector(LoggerMixin):
    """Detecta a mensagem explícita de busca sem resultados."""

    def __init__(self, selectors: tuple[str, ...]):
        self.selectors = selectors

    async def detect(self, page: Page) -> bool:
        """Retorna True se algum seletor mostrar uma frase de lista vazia."""
        for selector in self.selectors:
            try:
                element = await page.query_selector(selector)
                if element is None:
                    continue
                text = (await element.text_content() or "").lower()
            except PlaywrightError:
                continue

            if any(phrase in text for phrase in EMPTY_STATE_PHRASES):
                self.logger.debug(
                    "Mensagem de nenhum resultado detectada",
                    selector=selector,
                    text=text.strip()[:80],
                )
                return True

        return False


# =============================================================================
# LOCALIZADOR
# =============================================================================

class ProductLocator(LoggerMixin):
    """Executa a cascata de estratégias para uma loja."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        normalizer: Optional[TextNormalizer] = None,
    ):
        """
        Inicializa o localizador.

        Args:
            settings: Configurações (None = globais)
            normalizer: Normalizador usado no pós-filtro
        """
        self.settings = settings or get_settings()
        self.normalizer = normalizer or TextNormalizer()

    def build_strategies(self, store: StoreDescriptor) -> list[LocatorStrategy]:
        """
        Monta a cascata de estratégias da loja.

        Args:
            store: Configuração da loja

        Returns:
            Estratégias na ordem de tentativa
        """
        strategies: list[LocatorStrategy] = []

        if store.product_selector:
            strategies.append(
                SelectorStrategy(
                    store.product_selector,
                    self.settings.primary_selector_timeout,
                )
            )

        strategies.extend(
            SelectorStrategy(selector, self.settings.fallback_selector_timeout)
            for selector in store.fallback_selectors
        )

        if store.heuristic_scan and self.settings.heuristic_scan_enabled:
            strategies.append(HeuristicScanStrategy())

        return strategies

    async def locate_candidates(
        self,
        page: Page,
        store: StoreDescriptor,
    ) -> LocatorOutcome:
        """
        Localiza textos candidatos na página de resultados.

        Args:
            page: Página já navegada
            store: Configuração da loja

        Returns:
            LocatorOutcome com textos filtrados ou no_results_detected=True

        Raises:
            LocationExhausted: Se nenhuma estratégia encontrar candidatos
        """
        detector = NoResultsDetector(store.no_results_selectors)
        if await detector.detect(page):
            return LocatorOutcome(texts=[], no_results_detected=True)

        tried = []
        for strategy in self.build_strategies(store):
            tried.append(strategy.name)

            texts = await strategy.locate(page)
            if not texts:
                continue

            candidates = self.filter_candidates(texts)
            if not candidates:
                self.logger.debug(
                    "Candidatos descartados pelo filtro",
                    store=store.code,
                    strategy=strategy.name,
                    raw=len(texts),
                )
                continue

            self.logger.info(
                "Produtos localizados",
                store=store.code,
                strategy=strategy.name,
                candidates=len(candidates),
            )
            return LocatorOutcome(texts=candidates, strategy=strategy.name)

        raise LocationExhausted(store_code=store.code, strategies=tried)

    def filter_candidates(self, texts: list[str]) -> list[str]:
        """
        Remove texto de interface e fragmentos curtos demais; limita a lista.

        Args:
            texts: Textos brutos coletados

        Returns:
            Candidatos plausíveis (no máximo max_candidates)
        """
        candidates = []
        for text in texts:
            if self.is_ui_noise(text):
                continue
            candidates.append(text)
            if len(candidates) >= self.settings.max_candidates:
                break
        return candidates

    def is_ui_noise(self, text: str) -> bool:
        """Verifica se o texto é mensagem de interface e não produto."""
        normalized = self.normalizer.normalize(text)
        if len(normalized) < self.settings.min_candidate_length:
            return True
        return any(pattern.search(normalized) for pattern in UI_NOISE_PATTERNS)
