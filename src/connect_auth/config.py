"""Módulo de configuração para carregar as credenciais do app Connect."""

import json
import os
from pathlib import Path

from dotenv import load_dotenv

# Carrega as variáveis de ambiente do arquivo .env
load_dotenv()

DEFAULT_VALID_FOR = 30


class ConfigError(Exception):
    """Exceção para erros de configuração."""


class Config:
    """Credenciais do app e validade padrão dos tokens."""

    def __init__(
        self,
        app_key: str,
        shared_secret: str,
        valid_for: int = DEFAULT_VALID_FOR,
    ):
        """Inicializa a configuração.

        Args:
            app_key (str): A chave do app ("key" do descritor do app).
            shared_secret (str): O segredo compartilhado ("sharedSecret").
            valid_for (int): Validade dos tokens em segundos.

        """
        if not app_key or not isinstance(app_key, str):
            raise ConfigError("A chave do app (app_key) é inválida.")
        if not shared_secret or not isinstance(shared_secret, str):
            raise ConfigError("O segredo compartilhado (shared_secret) é inválido.")
        if not isinstance(valid_for, int) or valid_for < 0:
            raise ConfigError("A validade do token (valid_for) é inválida.")

        self.app_key = app_key
        self.shared_secret = shared_secret
        self.valid_for = valid_for

    def __repr__(self) -> str:
        return f"Config(app_key={self.app_key!r}, valid_for={self.valid_for})"

    @classmethod
    def from_env(cls):
        """Cria uma instância de Config a partir de variáveis de ambiente.

        Raises:
            ConfigError: Se as variáveis de ambiente não estiverem definidas.

        Returns:
            Config: Uma instância da classe Config.

        """
        app_key = os.getenv("CONNECT_APP_KEY")
        shared_secret = os.getenv("CONNECT_SHARED_SECRET")
        valid_for = os.getenv("CONNECT_TOKEN_VALIDITY", str(DEFAULT_VALID_FOR))

        if not app_key:
            raise ConfigError(
                "A variável de ambiente CONNECT_APP_KEY não está definida.",
            )
        if not shared_secret:
            raise ConfigError(
                "A variável de ambiente CONNECT_SHARED_SECRET não está definida.",
            )
        try:
            valid_for = int(valid_for)
        except ValueError as e:
            raise ConfigError(
                f"CONNECT_TOKEN_VALIDITY deve ser um inteiro: {valid_for!r}",
            ) from e

        return cls(app_key=app_key, shared_secret=shared_secret, valid_for=valid_for)

    @classmethod
    def from_creds_file(cls, path: str | Path, valid_for: int = DEFAULT_VALID_FOR):
        """Cria uma instância de Config a partir de um arquivo JSON de credenciais.

        O arquivo tem o formato ``{"key": "...", "secret": "..."}``.

        Raises:
            ConfigError: Se o arquivo não puder ser lido ou estiver incompleto.

        """
        try:
            creds = json.loads(Path(path).read_text(encoding="utf-8"))
        except OSError as e:
            raise ConfigError(f"Falha ao ler o arquivo de credenciais: {e}") from e
        except json.JSONDecodeError as e:
            raise ConfigError(f"Arquivo de credenciais inválido: {e}") from e

        if not isinstance(creds, dict) or "key" not in creds or "secret" not in creds:
            raise ConfigError(
                "O arquivo de credenciais deve conter os campos 'key' e 'secret'.",
            )
        return cls(
            app_key=creds["key"],
            shared_secret=creds["secret"],
            valid_for=valid_for,
        )
