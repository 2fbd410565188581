"""
Testes de integração para a CLI.
Nenhum comando testado aqui inicia o navegador.
"""

import json

import pytest
from typer.testing import CliRunner

from src import __version__
from src import cli
from src.checker import StockChecker

runner = CliRunner()


@pytest.fixture(autouse=True)
def quiet_checker(settings_override, monkeypatch):
    """StockChecker da CLI sem reconfigurar o structlog."""
    monkeypatch.setattr(
        cli,
        "StockChecker",
        lambda: StockChecker(configure_logging=False),
    )


class TestCli:
    """Testes dos comandos da CLI."""

    def test_version(self):
        """Exibe a versão do pacote."""
        result = runner.invoke(cli.app, ["version"])

        assert result.exit_code == 0
        assert __version__ in result.stdout

    def test_stores_tabela(self):
        """Lista as lojas padrão."""
        result = runner.invoke(cli.app, ["stores"])

        assert result.exit_code == 0
        assert "fairprice" in result.stdout
        assert "shengsiong" in result.stdout
        assert "coldstorage" in result.stdout

    def test_stores_json(self):
        """Lista as lojas no formato do contrato."""
        result = runner.invoke(cli.app, ["stores", "--json"])

        assert result.exit_code == 0
        body = json.loads(result.stdout)
        assert [s["code"] for s in body["stores"]] == [
            "fairprice",
            "shengsiong",
            "coldstorage",
        ]
        assert body["stores"][0]["baseSearchUrl"] == "https://www.fairprice.com.sg/search"

    def test_search_query_vazia(self):
        """Query em branco sai com código 2."""
        result = runner.invoke(cli.app, ["search", "   "])

        assert result.exit_code == 2
        assert "Query must be a non-empty string" in result.stdout

    def test_search_loja_desconhecida(self):
        """Código de loja inexistente sai com código 2."""
        result = runner.invoke(cli.app, ["search", "milk", "--store", "giant"])

        assert result.exit_code == 2
        assert "giant" in result.stdout
