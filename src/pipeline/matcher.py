"""
Motor de correspondência entre query e nome de produto.

Regras, avaliadas para cada palavra da query (todas precisam casar):
1. palavra inteira igual a uma palavra do candidato;
2. singular/plural ("almond" <-> "almonds");
3. substring limitada: só para palavras com 5+ caracteres, dentro de uma
   palavra do candidato pelo menos do mesmo tamanho.

A regra 3 deixa "chocolate" casar com "ferrero-chocolate" sem deixar
"pen" casar com "peng".
"""

from typing import Iterable, Optional

from config.logging_config import LoggerMixin
from src.pipeline.normalizer import TextNormalizer

DEFAULT_SUBSTRING_MIN_LENGTH = 5


class MatchEngine(LoggerMixin):
    """Decide se um candidato normalizado satisfaz a query normalizada."""

    def __init__(
        self,
        substring_min_length: int = DEFAULT_SUBSTRING_MIN_LENGTH,
        normalizer: Optional[TextNormalizer] = None,
    ):
        """
        Inicializa o motor.

        Args:
            substring_min_length: Tamanho mínimo da palavra para a regra de substring
            normalizer: Normalizador usado em find_match
        """
        self.substring_min_length = substring_min_length
        self.normalizer = normalizer or TextNormalizer()

    def matches(self, normalized_query: str, normalized_candidate: str) -> bool:
        """
        Verifica se o candidato satisfaz todas as palavras da query.

        Args:
            normalized_query: Query já normalizada
            normalized_candidate: Texto do candidato já normalizado

        Returns:
            True se todas as palavras da query casarem
        """
        query_words = normalized_query.split()
        if not query_words:
            return False

        candidate_words = normalized_candidate.split()
        if not candidate_words:
            return False

        candidate_set = set(candidate_words)
        return all(
            self._word_matches(word, candidate_words, candidate_set)
            for word in query_words
        )

    def _word_matches(
        self,
        query_word: str,
        candidate_words: list[str],
        candidate_set: set[str],
    ) -> bool:
        """Aplica as três regras a uma palavra da query."""
        # 1. Palavra inteira
        if query_word in candidate_set:
            return True

        # 2. Singular/plural
        singular = query_word[:-1] if query_word.endswith("s") else query_word
        plural = query_word + "s"
        if singular in candidate_set or plural in candidate_set:
            return True

        # 3. Substring limitada
        if len(query_word) >= self.substring_min_length:
            return any(
                len(word) >= len(query_word) and query_word in word
                for word in candidate_words
            )

        return False

    def find_match(
        self,
        query: str,
        candidates: Iterable[str],
    ) -> Optional[str]:
        """
        Procura o primeiro candidato que corresponde à query.

        Args:
            query: Query original (não normalizada)
            candidates: Textos brutos dos cards

        Returns:
            Nome limpo do primeiro candidato que casou, ou None
        """
        normalized_query = self.normalizer.normalize(query)
        if not normalized_query:
            return None

        for text in candidates:
            cleaned = self.normalizer.clean_product_name(text)
            if self.matches(normalized_query, self.normalizer.normalize(cleaned)):
                self.logger.debug(
                    "Candidato corresponde à query",
                    query=normalized_query,
                    candidate=cleaned[:80],
                )
                return cleaned

        return None


_default_engine = MatchEngine()


def matches(normalized_query: str, normalized_candidate: str) -> bool:
    """Atalho para MatchEngine.matches com o limite padrão."""
    return _default_engine.matches(normalized_query, normalized_candidate)
