"""
Constantes e padrões regex para limpeza de texto, localização e matching.
"""

import re
from typing import Final

# =============================================================================
# UNIDADES E PADRÕES DE QUANTIDADE
# =============================================================================

# Alternativas mais longas primeiro para o regex não parar no prefixo
UNIT_TOKENS: Final[tuple[str, ...]] = (
    "kilograms", "kilogram", "kg",
    "milligrams", "milligram", "mg",
    "grams", "gram", "g",
    "ounces", "ounce", "oz",
    "milliliters", "milliliter", "millilitres", "millilitre", "ml",
    "centiliters", "centiliter", "cl",
    "liters", "liter", "litres", "litre", "l",
    r"fl\s*oz",
    "packs", "pack",
    "pcs", "pc",
    "pieces", "piece",
    "each", "ea",
    "boxes", "box",
    "bottles", "bottle",
    "cans", "can",
    "jars", "jar",
    "lbs", "lb",
    "pounds", "pound",
)

# Número, multiplicador opcional ("2x1kg", "3 x 100g") e unidade
_QUANTITY_PREFIX: Final[str] = (
    r"^\s*\d+(?:\.\d+)?\s*[x×]?\s*\d*(?:\.\d+)?\s*"
    r"(?:" + "|".join(UNIT_TOKENS) + r")"
)

# Linha que começa com quantidade + unidade
QUANTITY_LINE_PATTERN: Final[re.Pattern] = re.compile(
    _QUANTITY_PREFIX + r"\b",
    re.IGNORECASE,
)

# Prefixo de quantidade seguido de espaço (fallback de limpeza)
QUANTITY_PREFIX_PATTERN: Final[re.Pattern] = re.compile(
    _QUANTITY_PREFIX + r"\s+",
    re.IGNORECASE,
)


# =============================================================================
# NORMALIZAÇÃO
# =============================================================================

NON_ALPHANUMERIC_PATTERN: Final[re.Pattern] = re.compile(r"[^a-z0-9\s]")
WHITESPACE_PATTERN: Final[re.Pattern] = re.compile(r"\s+")


# =============================================================================
# LOCALIZAÇÃO DE PRODUTOS
# =============================================================================

# Frases que indicam busca sem resultados
EMPTY_STATE_PHRASES: Final[tuple[str, ...]] = (
    "no result",
    "not found",
    "no product",
    "no items",
    "nothing found",
)

# Texto de interface que não é nome de produto (comparado já normalizado)
UI_NOISE_PATTERNS: Final[list[re.Pattern]] = [
    re.compile(r"\bno (?:products?|items?|results?) (?:were )?found\b"),
    re.compile(r"\btry again\b"),
    re.compile(r"\bsearch returned\b"),
    re.compile(r"\bcheck out our\b"),
    re.compile(r"\bdid you mean\b"),
    re.compile(r"\bshowing (?:\d+ )?results?\b"),
    re.compile(r"\bsomething went wrong\b"),
    re.compile(r"^(?:sort|filter|filters|sort by|load more|view all|see all)$"),
]

# Containers genéricos de resultados
RESULTS_CONTAINER_SELECTORS: Final[tuple[str, ...]] = (
    '[data-testid="search-results"]',
    ".search-results",
    ".products-grid",
    ".product-list",
    "main",
    ".main-content",
    '[role="main"]',
)

# Elementos varridos pela busca heurística
HEURISTIC_SCAN_SELECTOR: Final[str] = (
    '[class*="product" i], [class*="item" i], [role="listitem"], li, a'
)

HEURISTIC_MIN_TEXT_LENGTH: Final[int] = 3
HEURISTIC_MAX_TEXT_LENGTH: Final[int] = 200

# Coleta o texto de elementos candidatos numa única chamada ao browser
HEURISTIC_SCAN_SCRIPT: Final[str] = """
({selector, minLength, maxLength}) => {
    const seen = new Set();
    const texts = [];
    for (const el of document.querySelectorAll(selector)) {
        const text = (el.innerText || el.textContent || '').trim();
        if (text.length < minLength || text.length > maxLength) continue;
        if (seen.has(text)) continue;
        seen.add(text);
        texts.push(text);
    }
    return texts;
}
"""


# =============================================================================
# BANNER DE COOKIES / CONSENTIMENTO
# =============================================================================

# Só botões; links de produto ("Closeup Toothpaste") ficam de fora
CONSENT_CANDIDATE_SELECTOR: Final[str] = 'button, [role="button"]'

# Rótulo inteiro do botão, já normalizado (minúsculas, sem pontuação)
CONSENT_LABEL_PATTERN: Final[re.Pattern] = re.compile(
    r"^(?:accept(?: all)?(?: cookies)?|i agree|agree|got it|allow all(?: cookies)?"
    r"|close|ok|okay)$"
)

# Limite de elementos inspecionados na busca pelo banner
CONSENT_SCAN_LIMIT: Final[int] = 50


# =============================================================================
# BROWSER
# =============================================================================

BROWSER_LAUNCH_ARGS: Final[list[str]] = [
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-dev-shm-usage",
    "--disable-accelerated-2d-canvas",
    "--disable-gpu",
    "--no-first-run",
    "--no-zygote",
]

EXTRA_HTTP_HEADERS: Final[dict[str, str]] = {
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8",
    "Accept-Language": "en-SG,en;q=0.9",
}
