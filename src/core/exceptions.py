"""
Hierarquia de exceções do sistema.
Todas as exceções herdam de StockCheckerError para facilitar tratamento.
"""

from typing import Any, Optional


class StockCheckerError(Exception):
    """
    Exceção base do sistema.
    Todas as exceções customizadas herdam desta classe.
    """

    def __init__(
        self,
        message: str,
        *,
        details: Optional[dict[str, Any]] = None,
        cause: Optional[Exception] = None,
    ):
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.cause = cause

    def __str__(self) -> str:
        base = self.message
        if self.details:
            base += f" | Details: {self.details}"
        if self.cause:
            base += f" | Caused by: {self.cause}"
        return base

    def to_dict(self) -> dict[str, Any]:
        """Serializa exceção para dicionário."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
            "cause": str(self.cause) if self.cause else None,
        }

    @property
    def diagnostic(self) -> str:
        """Mensagem curta para o campo de erro de um resultado."""
        if self.cause:
            return f"{self.message}: {self.cause}"
        return self.message


# EXCEÇÕES DE VALIDAÇÃO

class ValidationError(StockCheckerError):
    """Erro de validação de dados de entrada."""

    def __init__(
        self,
        message: str,
        *,
        field: Optional[str] = None,
        value: Optional[Any] = None,
        **kwargs,
    ):
        details = kwargs.pop("details", {})
        if field:
            details["field"] = field
        if value is not None:
            details["invalid_value"] = str(value)
        super().__init__(message, details=details, **kwargs)


class InvalidQueryError(ValidationError):
    """Termo de busca vazio ou inválido. Aborta o lote inteiro."""

    def __init__(
        self,
        message: str = "Query must be a non-empty string",
        *,
        value: Optional[Any] = None,
        **kwargs,
    ):
        super().__init__(message, field="query", value=value, **kwargs)


# EXCEÇÕES DE SCRAPING

class ScraperError(StockCheckerError):
    """Erro genérico de scraping."""

    def __init__(
        self,
        message: str,
        *,
        store_code: Optional[str] = None,
        url: Optional[str] = None,
        **kwargs,
    ):
        details = kwargs.pop("details", {})
        if store_code:
            details["store_code"] = store_code
        if url:
            details["url"] = url
        super().__init__(message, details=details, **kwargs)
        self.store_code = store_code
        self.url = url


class LaunchError(ScraperError):
    """O navegador não pôde ser iniciado (binário ausente, sandbox, recursos)."""

    def __init__(
        self,
        message: str = "Browser launch failed",
        **kwargs,
    ):
        super().__init__(message, **kwargs)


class NavigationFailure(ScraperError):
    """A página de busca não carregou com nenhuma política de espera."""

    def __init__(
        self,
        message: str = "Failed to load page",
        *,
        wait_policies: Optional[list[str]] = None,
        **kwargs,
    ):
        details = kwargs.pop("details", {})
        if wait_policies:
            details["wait_policies"] = wait_policies
        super().__init__(message, details=details, **kwargs)


class LocationExhausted(ScraperError):
    """Nenhuma estratégia de localização encontrou candidatos."""

    def __init__(
        self,
        message: str = "No product elements located",
        *,
        strategies: Optional[list[str]] = None,
        **kwargs,
    ):
        details = kwargs.pop("details", {})
        if strategies:
            details["strategies_tried"] = strategies
        super().__init__(message, details=details, **kwargs)
        self.strategies = strategies or []


class SiteTaskError(ScraperError):
    """Qualquer outra falha dentro do pipeline de uma loja."""

    def __init__(
        self,
        message: str = "Scraping error",
        **kwargs,
    ):
        super().__init__(message, **kwargs)
