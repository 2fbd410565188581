"""
Configurações e fixtures compartilhadas para pytest.
"""

from pathlib import Path

import pytest

from config.settings import Settings, get_settings
from config.stores import QueryFormat, StoreDescriptor
from tests.fixtures.fake_browser import FakeElement, FakeSession, FakeSite


# FIXTURES DE DIRETÓRIOS

@pytest.fixture
def temp_log_dir(tmp_path) -> Path:
    """Cria diretório temporário para logs de teste."""
    log_dir = tmp_path / "logs"
    log_dir.mkdir()
    return log_dir


# FIXTURES DE CONFIGURAÇÃO

@pytest.fixture
def settings(temp_log_dir) -> Settings:
    """Configurações rápidas: sem esperas de renderização nem container."""
    return Settings(
        env="testing",
        log_level="DEBUG",
        log_path=temp_log_dir,
        render_delay=0,
        container_timeout=0,
        primary_selector_timeout=150,
        fallback_selector_timeout=100,
    )


@pytest.fixture
def settings_override(temp_log_dir, monkeypatch):
    """Override de settings globais via variáveis de ambiente."""
    monkeypatch.setenv("LOG_PATH", str(temp_log_dir))
    monkeypatch.setenv("ENV", "testing")
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


# FIXTURES DE LOJAS

@pytest.fixture
def store_alpha() -> StoreDescriptor:
    """Loja com query string e cascata completa."""
    return StoreDescriptor(
        code="alpha",
        name="Alpha Mart",
        base_search_url="https://alpha.example/search",
        query_param="query",
        product_selector='[data-testid="product"]',
        fallback_selectors=(".product-item", "article"),
        no_results_selectors=(".no-results", ".empty-state"),
    )


@pytest.fixture
def store_beta() -> StoreDescriptor:
    """Loja com query no caminho da URL."""
    return StoreDescriptor(
        code="beta",
        name="Beta Grocer",
        base_search_url="https://beta.example/search",
        query_format=QueryFormat.PATH,
        product_selector="a.product-preview",
        fallback_selectors=('a[href*="/product/"]',),
        no_results_selectors=(".no-results",),
    )


@pytest.fixture
def store_gamma() -> StoreDescriptor:
    """Loja com parâmetro keyword."""
    return StoreDescriptor(
        code="gamma",
        name="Gamma Storage",
        base_search_url="https://gamma.example/en/search",
        query_param="keyword",
        product_selector="a.ware-wrapper",
        fallback_selectors=('[class*="product"]',),
        no_results_selectors=('[class*="no-result"]',),
    )


@pytest.fixture
def three_stores(store_alpha, store_beta, store_gamma) -> tuple[StoreDescriptor, ...]:
    """Registro com três lojas."""
    return (store_alpha, store_beta, store_gamma)


# FIXTURES DE PÁGINAS

@pytest.fixture
def milk_scenario(store_alpha, store_beta, store_gamma) -> FakeSession:
    """
    Cenário "milk":
    - alpha lista "Full Cream Milk / 1 Liter"
    - beta não carrega e nenhuma estratégia encontra nada
    - gamma mostra a mensagem de nenhum resultado
    """
    routes = {
        store_alpha.base_search_url: FakeSite(
            elements={
                '[data-testid="product"]': [
                    FakeElement("Fresh Eggs\n10 pcs"),
                    FakeElement("Full Cream Milk\n1 Liter"),
                ],
            },
        ),
        store_beta.base_search_url: FakeSite(navigation_failures=99),
        store_gamma.base_search_url: FakeSite(
            elements={
                '[class*="no-result"]': [
                    FakeElement("No results found for 'milk'"),
                ],
            },
        ),
    }
    return FakeSession(routes=routes)
