"""Módulo de canonicalização de requisições e cálculo do query string hash (QSH).

A requisição canônica tem o formato ``METHOD&PATH&QUERY``. Os valores dos
parâmetros de query são codificados conforme a RFC 5849: apenas letras,
dígitos e ``-._~`` passam sem escape.
"""

import hashlib
from abc import ABC, abstractmethod
from collections.abc import Iterable
from urllib.parse import SplitResult, parse_qsl, quote, urlsplit


def percent_encode(value: str) -> str:
    """Codifica um valor de query com o conjunto restrito da RFC 5849.

    Args:
        value (str): Valor já decodificado do parâmetro.

    Returns:
        str: Valor com cada byte fora do conjunto não reservado como ``%XX``.

    """
    # Com safe="" o quote só preserva ALPHA, DIGIT e "-._~"
    return quote(value, safe="", encoding="utf-8")


def split_url(url: str | SplitResult) -> tuple[str, list[tuple[str, str]]]:
    """Extrai o caminho e os pares de query de uma URL.

    Os pares mantêm a ordem e as duplicatas da URL original; ``+`` e
    sequências ``%XX`` são decodificados.
    """
    parts = url if isinstance(url, SplitResult) else urlsplit(url)
    # URL sem caminho ("https://host") é normalizada para "/"
    path = parts.path or "/"
    query_pairs = parse_qsl(parts.query, keep_blank_values=True)
    return path, query_pairs


class CanonicalRequestStrategy(ABC):
    """Regra de serialização de uma requisição em sua forma canônica."""

    name: str = ""

    @abstractmethod
    def canonicalize(
        self,
        method: str,
        path: str,
        query_pairs: Iterable[tuple[str, str]],
    ) -> str:
        """Serializa método, caminho e parâmetros em uma única string."""


class Rfc5849Strategy(CanonicalRequestStrategy):
    """Canonicalização com valores codificados e pares ordenados.

    O caminho é usado como recebido; assume-se que já está canônico. As
    chaves não são recodificadas.
    """

    name = "rfc5849"

    def canonicalize(
        self,
        method: str,
        path: str,
        query_pairs: Iterable[tuple[str, str]],
    ) -> str:
        rendered = sorted(
            f"{key}={percent_encode(value)}" for key, value in query_pairs
        )
        return f"{method.upper()}&{path}&{'&'.join(rendered)}"


DEFAULT_STRATEGY: CanonicalRequestStrategy = Rfc5849Strategy()


def create_canonical_request(
    method: str,
    url: str | SplitResult,
    strategy: CanonicalRequestStrategy = DEFAULT_STRATEGY,
) -> str:
    """Gera a requisição canônica para um método e uma URL.

    Args:
        method (str): Método HTTP, em qualquer caixa.
        url (str | SplitResult): URL completa da requisição.
        strategy (CanonicalRequestStrategy): Regra de canonicalização.

    Returns:
        str: String no formato ``METHOD&PATH&QUERY``.

    """
    path, query_pairs = split_url(url)
    return strategy.canonicalize(method, path, query_pairs)


def create_query_string_hash(
    method: str,
    url: str | SplitResult,
    strategy: CanonicalRequestStrategy = DEFAULT_STRATEGY,
) -> str:
    """Calcula o QSH: SHA-256 da requisição canônica em hexadecimal minúsculo."""
    canonical_request = create_canonical_request(method, url, strategy)
    return hashlib.sha256(canonical_request.encode("utf-8")).hexdigest()
