"""
Normalizador de texto de produtos.
Remove linhas de quantidade/unidade dos cards e gera a forma comparável
(minúscula, sem pontuação) usada no matching.
"""

from config.logging_config import LoggerMixin
from src.core.constants import (
    NON_ALPHANUMERIC_PATTERN,
    QUANTITY_LINE_PATTERN,
    QUANTITY_PREFIX_PATTERN,
    WHITESPACE_PATTERN,
)


class TextNormalizer(LoggerMixin):
    """
    Normalizador de texto de produtos e queries.

    Cards costumam trazer a quantidade numa linha separada, em qualquer
    ordem ("1 kg\\nNuts" ou "Nuts\\n1 kg"); essas linhas são descartadas
    antes da comparação.
    """

    def clean_product_name(self, text: str) -> str:
        """
        Remove linhas de quantidade/unidade do texto do card.

        Args:
            text: Texto bruto do card (pode ter várias linhas)

        Returns:
            Nome do produto sem as linhas de quantidade
        """
        if not text:
            return ""

        lines = [line.strip() for line in text.splitlines()]
        kept = [
            line for line in lines
            if line and not QUANTITY_LINE_PATTERN.match(line)
        ]

        if kept:
            return " ".join(kept)

        # Todas as linhas pareciam quantidade: remove só o prefixo
        return QUANTITY_PREFIX_PATTERN.sub("", text.strip(), count=1).strip()

    def normalize(self, text: str) -> str:
        """
        Gera forma comparável: minúsculas, só [a-z0-9] e espaços simples.

        Args:
            text: Texto qualquer (query ou candidato)

        Returns:
            Texto normalizado
        """
        if not text:
            return ""

        text = NON_ALPHANUMERIC_PATTERN.sub(" ", text.lower())
        return WHITESPACE_PATTERN.sub(" ", text).strip()

    def prepare_candidate(self, text: str) -> str:
        """Limpa e normaliza o texto de um candidato."""
        return self.normalize(self.clean_product_name(text))

    def tokenize(self, text: str) -> list[str]:
        """Divide texto normalizado em palavras."""
        return [word for word in text.split(" ") if word]


_default_normalizer = TextNormalizer()


def clean_product_name(text: str) -> str:
    """Atalho para TextNormalizer.clean_product_name."""
    return _default_normalizer.clean_product_name(text)


def normalize(text: str) -> str:
    """Atalho para TextNormalizer.normalize."""
    return _default_normalizer.normalize(text)
