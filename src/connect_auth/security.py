"""Módulo de segurança para gerar o cabeçalho de autenticação das requisições.

O token é um JWT HS256 assinado com o segredo compartilhado do app e
vinculado à requisição pelo claim ``qsh``.
"""

import logging
import time
from collections.abc import Callable
from dataclasses import asdict, dataclass, field
from datetime import timedelta
from urllib.parse import SplitResult

import jwt

from .canonical import (
    DEFAULT_STRATEGY,
    CanonicalRequestStrategy,
    create_query_string_hash,
    split_url,
)
from .errors import ClockError, EncodingError

AUTH_HEADER_NAME = "Authorization"
AUTH_SCHEME = "JWT"
JWT_ALGORITHM = "HS256"

logger = logging.getLogger(__name__)


def _as_seconds(valid_for: timedelta | int) -> int:
    if isinstance(valid_for, timedelta):
        return int(valid_for.total_seconds())
    return int(valid_for)


def _as_bytes(secret: bytes | str) -> bytes:
    if isinstance(secret, str):
        return secret.encode("utf-8")
    return bytes(secret)


@dataclass(frozen=True)
class Parameters:
    """Entrada de uma operação de assinatura.

    Attributes:
        method: Método HTTP da requisição.
        url: URL completa da requisição.
        valid_for: Validade do token a partir de agora (segundos ou timedelta).
        app_key: Chave do app Connect, usada como emissor (``iss``).
        shared_secret: Segredo compartilhado, usado como chave do HMAC.

    """

    method: str
    url: str | SplitResult
    valid_for: timedelta | int
    app_key: str
    shared_secret: bytes | str = field(repr=False)

    def __post_init__(self):
        if _as_seconds(self.valid_for) < 0:
            raise ValueError("A validade do token (valid_for) não pode ser negativa.")


@dataclass(frozen=True)
class Claims:
    """Claims do JWT: emissor, QSH, emissão e expiração (segundos Unix)."""

    iss: str
    qsh: str
    iat: int
    exp: int

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class Header:
    """Cabeçalho HTTP pronto para ser anexado à requisição."""

    value: str
    name: str = AUTH_HEADER_NAME

    def as_dict(self) -> dict[str, str]:
        return {self.name: self.value}


def _read_clock(clock: Callable[[], float]) -> int:
    now = clock()
    if now < 0:
        raise ClockError(
            f"O relógio do sistema está antes da época Unix ({now}).",
        )
    return int(now)


def build_claims(
    params: Parameters,
    clock: Callable[[], float] = time.time,
    strategy: CanonicalRequestStrategy = DEFAULT_STRATEGY,
) -> Claims:
    """Monta os claims de uma requisição.

    O relógio é lido uma única vez; ``iat`` e ``exp`` partem do mesmo instante.

    Args:
        params (Parameters): Dados da requisição e do app.
        clock (Callable[[], float]): Fonte de tempo em segundos Unix.
        strategy (CanonicalRequestStrategy): Regra de canonicalização.

    Raises:
        ClockError: Se o relógio reportar um instante anterior à época.

    Returns:
        Claims: Claims prontos para assinatura.

    """
    qsh = create_query_string_hash(params.method, params.url, strategy)
    now = _read_clock(clock)
    return Claims(
        iss=params.app_key,
        qsh=qsh,
        iat=now,
        exp=now + _as_seconds(params.valid_for),
    )


def sign_claims(claims: Claims, shared_secret: bytes | str) -> str:
    """Codifica os claims como um JWT compacto assinado com HS256.

    Raises:
        EncodingError: Se o PyJWT não conseguir gerar o token.

    """
    try:
        return jwt.encode(
            claims.to_dict(),
            _as_bytes(shared_secret),
            algorithm=JWT_ALGORITHM,
        )
    except (jwt.PyJWTError, TypeError, ValueError) as e:
        raise EncodingError(f"Falha ao codificar o JWT: {e}", cause=e) from e


def create_auth_header(
    params: Parameters,
    clock: Callable[[], float] = time.time,
    strategy: CanonicalRequestStrategy = DEFAULT_STRATEGY,
) -> Header:
    """Gera o cabeçalho ``Authorization: JWT <token>`` para uma requisição.

    Args:
        params (Parameters): Dados da requisição e do app.
        clock (Callable[[], float]): Fonte de tempo em segundos Unix.
        strategy (CanonicalRequestStrategy): Regra de canonicalização.

    Raises:
        ClockError: Se o relógio reportar um instante anterior à época.
        EncodingError: Se a codificação do token falhar.

    Returns:
        Header: Nome e valor do cabeçalho.

    """
    claims = build_claims(params, clock=clock, strategy=strategy)
    token = sign_claims(claims, params.shared_secret)
    path, _ = split_url(params.url)
    logger.debug(
        f"Cabeçalho gerado para {params.method.upper()} {path} "
        f"(qsh={claims.qsh}, exp={claims.exp})",
    )
    return Header(value=f"{AUTH_SCHEME} {token}")


class RequestSigner:
    """Assina requisições de um app Connect com sua chave e segredo."""

    def __init__(
        self,
        app_key: str,
        shared_secret: bytes | str,
        valid_for: timedelta | int = 30,
        clock: Callable[[], float] = time.time,
    ):
        """Inicializa o assinador.

        Args:
            app_key (str): Chave do app Connect.
            shared_secret (bytes | str): Segredo compartilhado do app.
            valid_for (timedelta | int): Validade padrão dos tokens.
            clock (Callable[[], float]): Fonte de tempo em segundos Unix.

        """
        if not app_key or not isinstance(app_key, str):
            raise ValueError("A chave do app (app_key) é inválida.")
        if not shared_secret or not isinstance(shared_secret, (bytes, str)):
            raise ValueError("O segredo compartilhado é inválido.")
        if _as_seconds(valid_for) < 0:
            raise ValueError("A validade do token (valid_for) não pode ser negativa.")
        self.app_key = app_key
        self._secret = _as_bytes(shared_secret)
        self.valid_for = valid_for
        self.clock = clock

    def __repr__(self) -> str:
        return f"RequestSigner(app_key={self.app_key!r}, valid_for={self.valid_for!r})"

    def create_auth_header(
        self,
        method: str,
        url: str | SplitResult,
        valid_for: timedelta | int | None = None,
    ) -> Header:
        params = Parameters(
            method=method,
            url=url,
            valid_for=self.valid_for if valid_for is None else valid_for,
            app_key=self.app_key,
            shared_secret=self._secret,
        )
        return create_auth_header(params, clock=self.clock)

    def sign_headers(
        self,
        method: str,
        url: str | SplitResult,
        headers: dict | None = None,
    ) -> dict:
        """Retorna uma cópia dos cabeçalhos com o ``Authorization`` adicionado."""
        signed = dict(headers or {})
        signed.update(self.create_auth_header(method, url).as_dict())
        return signed
