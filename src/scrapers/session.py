"""
Gerenciamento da sessão do navegador.
Um processo Chromium por lote; cada loja usa seu próprio contexto.
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from playwright.async_api import (
    async_playwright,
    Browser,
    BrowserContext,
    Error as PlaywrightError,
    Page,
    Playwright,
)

from config.logging_config import LoggerMixin
from config.settings import Settings, get_settings
from src.core.constants import BROWSER_LAUNCH_ARGS, EXTRA_HTTP_HEADERS
from src.core.exceptions import LaunchError


class BrowserSession(LoggerMixin):
    """
    Sessão do Playwright compartilhada por todas as lojas de um lote.

    Uso:
        async with BrowserSession() as session:
            async with session.page() as page:
                ...
    """

    def __init__(self, settings: Optional[Settings] = None):
        """
        Inicializa a sessão (sem iniciar o navegador).

        Args:
            settings: Configurações (None = globais)
        """
        self.settings = settings or get_settings()

        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None
        self._browser_version: Optional[str] = None

    @property
    def is_running(self) -> bool:
        """Indica se o navegador está ativo."""
        return self._browser is not None

    @property
    def browser_version(self) -> Optional[str]:
        """Versão do navegador (após start)."""
        return self._browser_version

    async def __aenter__(self) -> "BrowserSession":
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.release()

    async def start(self) -> None:
        """
        Inicia o Playwright e o Chromium.

        Raises:
            LaunchError: Se o navegador não puder ser iniciado
        """
        if self._browser is not None:
            return

        self.logger.info(
            "Iniciando navegador",
            headless=self.settings.headless,
            args=BROWSER_LAUNCH_ARGS,
        )

        try:
            self._playwright = await async_playwright().start()
            self._browser = await self._playwright.chromium.launch(
                headless=self.settings.headless,
                args=BROWSER_LAUNCH_ARGS,
            )
            self._browser_version = self._browser.version
        except Exception as e:
            self.logger.error("Falha ao iniciar navegador", error=str(e))
            await self.release()
            raise LaunchError(cause=e) from e

        self.logger.info("Navegador iniciado", version=self._browser_version)

    async def new_page(self) -> Page:
        """
        Cria página num contexto novo e isolado.

        Returns:
            Página do Playwright (fechar com close_page)
        """
        if self._browser is None:
            raise LaunchError("Browser session is not running")

        context: BrowserContext = await self._browser.new_context(
            user_agent=self.settings.user_agent,
            viewport={
                "width": self.settings.viewport_width,
                "height": self.settings.viewport_height,
            },
            locale=self.settings.locale,
            timezone_id=self.settings.timezone_id,
            java_script_enabled=True,
            accept_downloads=False,
            extra_http_headers=EXTRA_HTTP_HEADERS,
        )

        try:
            page = await context.new_page()
        except Exception:
            await context.close()
            raise

        page.set_default_timeout(self.settings.page_timeout)
        return page

    async def close_page(self, page: Page) -> None:
        """Fecha a página e o contexto dela. Erros são só registrados."""
        try:
            await page.context.close()
        except PlaywrightError as e:
            self.logger.warning("Erro ao fechar página", error=str(e))

    @asynccontextmanager
    async def page(self) -> AsyncIterator[Page]:
        """Página com fechamento garantido em qualquer saída."""
        page = await self.new_page()
        try:
            yield page
        finally:
            await self.close_page(page)

    async def release(self) -> None:
        """Fecha navegador e libera recursos. Pode ser chamado mais de uma vez."""
        browser, self._browser = self._browser, None
        playwright, self._playwright = self._playwright, None

        if browser is not None:
            try:
                await browser.close()
                self.logger.debug("Navegador fechado")
            except PlaywrightError as e:
                self.logger.warning("Erro ao fechar navegador", error=str(e))

        if playwright is not None:
            try:
                await playwright.stop()
            except PlaywrightError as e:
                self.logger.warning("Erro ao parar Playwright", error=str(e))
