"""
Navegação até a página de busca.
Tenta primeiro esperar a rede assentar e, se falhar, uma espera mais leve.
"""

from typing import Optional

from playwright.async_api import (
    Error as PlaywrightError,
    Page,
    TimeoutError as PlaywrightTimeout,
)
from tenacity import (
    AsyncRetrying,
    RetryError,
    retry_if_exception_type,
    stop_after_attempt,
    wait_none,
)

from config.logging_config import LoggerMixin
from config.settings import Settings, get_settings
from src.core.constants import (
    CONSENT_CANDIDATE_SELECTOR,
    CONSENT_LABEL_PATTERN,
    CONSENT_SCAN_LIMIT,
    RESULTS_CONTAINER_SELECTORS,
)
from src.core.models import NavigationOutcome
from src.core.types import WaitPolicy
from src.pipeline.normalizer import normalize


class PageNavigator(LoggerMixin):
    """Carrega URLs de busca com política de espera em cascata."""

    def __init__(self, settings: Optional[Settings] = None):
        """
        Inicializa o navegador de páginas.

        Args:
            settings: Configurações (None = globais)
        """
        self.settings = settings or get_settings()

        # (política, timeout em ms), na ordem de tentativa
        self.wait_policies: list[tuple[WaitPolicy, int]] = [
            (WaitPolicy.NETWORK_IDLE, self.settings.navigation_timeout),
            (WaitPolicy.DOM_CONTENT_LOADED, self.settings.navigation_fallback_timeout),
        ]

    async def navigate(self, page: Page, url: str) -> NavigationOutcome:
        """
        Navega até a URL. Nunca levanta erro de navegação.

        Args:
            page: Página do Playwright
            url: URL de busca

        Returns:
            NavigationOutcome com loaded=False se todas as políticas falharem
        """
        last_error: Optional[BaseException] = None
        policy_used: Optional[WaitPolicy] = None

        try:
            async for attempt in AsyncRetrying(
                stop=stop_after_attempt(len(self.wait_policies)),
                wait=wait_none(),
                retry=retry_if_exception_type((PlaywrightTimeout, PlaywrightError)),
                reraise=False,
            ):
                with attempt:
                    policy, timeout = self.wait_policies[
                        attempt.retry_state.attempt_number - 1
                    ]
                    if attempt.retry_state.attempt_number > 1:
                        self.logger.info(
                            "Tentando navegação com espera mais leve",
                            url=url,
                            wait_until=policy.value,
                            previous_error=str(last_error),
                        )
                    try:
                        await page.goto(url, wait_until=policy.value, timeout=timeout)
                    except PlaywrightError as e:
                        last_error = e
                        raise
                    policy_used = policy
        except RetryError:
            self.logger.warning(
                "Página não carregou",
                url=url,
                error=str(last_error),
            )
            return NavigationOutcome(
                url=url,
                loaded=False,
                error=f"Failed to load page: {last_error}",
            )

        self.logger.debug("Página carregada", url=url, wait_until=policy_used.value)

        await self._wait_for_render(page)
        return NavigationOutcome(url=url, loaded=True, wait_policy=policy_used)

    async def _wait_for_render(self, page: Page) -> None:
        """Aguarda conteúdo dinâmico e, se houver, o container de resultados."""
        if self.settings.render_delay:
            await page.wait_for_timeout(self.settings.render_delay)

        if not self.settings.container_timeout:
            return

        for selector in RESULTS_CONTAINER_SELECTORS:
            try:
                await page.wait_for_selector(
                    selector,
                    timeout=self.settings.container_timeout,
                )
                self.logger.debug("Container de resultados encontrado", selector=selector)
                return
            except PlaywrightError:
                continue

        self.logger.debug("Nenhum container de resultados encontrado - continuando")

    async def dismiss_consent_banner(self, page: Page) -> None:
        """
        Tenta fechar banner de cookies/consentimento.
        Qualquer erro é ignorado; não afeta o resultado da loja.
        """
        try:
            elements = await page.query_selector_all(CONSENT_CANDIDATE_SELECTOR)
            for element in elements[:CONSENT_SCAN_LIMIT]:
                try:
                    label = normalize(await element.inner_text() or "")
                except PlaywrightError:
                    continue

                if not self._is_consent_label(label):
                    continue

                await element.click(timeout=1000)
                self.logger.debug("Banner de consentimento fechado", label=label)
                return
        except Exception as e:
            self.logger.debug("Erro ao fechar banner de consentimento", error=str(e))

    @staticmethod
    def _is_consent_label(label: str) -> bool:
        """Verifica se o rótulo normalizado é exatamente um botão de aceitar/fechar."""
        return bool(CONSENT_LABEL_PATTERN.match(label))
