"""Exceções levantadas durante a geração do cabeçalho de autenticação."""


class AuthError(Exception):
    """Erro base para falhas na assinatura de uma requisição.

    Args:
        message (str): Descrição do erro.
        cause (BaseException | None): Exceção original que provocou a falha.

    """

    def __init__(self, message: str, cause: BaseException | None = None):
        super().__init__(message)
        self.cause = cause


class ClockError(AuthError):
    """O relógio do sistema reportou um instante anterior à época Unix."""


class EncodingError(AuthError):
    """A biblioteca de JWT não conseguiu produzir o token."""
