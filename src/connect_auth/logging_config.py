"""Módulo de configuração centralizada de logging do connect-auth.
Implementa handlers de console e arquivo com mascaramento de segredos.
"""

import logging
import logging.handlers
import re
import sys
from pathlib import Path

REDACTED = "[REDACTED]"

# Valor do cabeçalho Authorization: "JWT <header>.<payload>.<assinatura>"
_TOKEN_PATTERN = re.compile(r"JWT [A-Za-z0-9_\-]+\.[A-Za-z0-9_\-]+\.[A-Za-z0-9_\-]*")


class SecretRedactionFilter(logging.Filter):
    """Filtro que mascara segredos e tokens nas mensagens de log."""

    def __init__(self) -> None:
        super().__init__()
        self._secrets: set[str] = set()

    def add_secret(self, secret: bytes | str) -> None:
        if isinstance(secret, bytes):
            secret = secret.decode("utf-8", errors="replace")
        if secret:
            self._secrets.add(secret)

    def redact(self, message: str) -> str:
        for secret in self._secrets:
            message = message.replace(secret, REDACTED)
        return _TOKEN_PATTERN.sub(f"JWT {REDACTED}", message)

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        redacted = self.redact(message)
        if redacted != message:
            record.msg = redacted
            record.args = None
        return True


class ConnectAuthLogger:
    """Sistema de logging centralizado do connect-auth."""

    def __init__(self, log_dir: str | None = None, log_level: str = "INFO") -> None:
        """Inicializa o sistema de logging.

        Args:
            log_dir: Diretório para armazenar os logs (None desativa o arquivo)
            log_level: Nível de logging (DEBUG, INFO, WARNING, ERROR, CRITICAL)

        """
        self.log_dir = Path(log_dir) if log_dir else None
        self.log_level = getattr(logging, log_level.upper())
        self.redaction_filter = SecretRedactionFilter()

        if self.log_dir:
            self.log_dir.mkdir(parents=True, exist_ok=True)

        self._setup_logging()

    def _setup_logging(self) -> None:
        """Configura o sistema de logging."""
        # Remove handlers existentes
        for handler in logging.root.handlers[:]:
            logging.root.removeHandler(handler)

        logging.root.setLevel(self.log_level)

        detailed_formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(funcName)s - %(message)s",
        )
        simple_formatter = logging.Formatter(
            "%(asctime)s - %(levelname)s - %(message)s",
        )

        # Console em stderr para não misturar com a saída do CLI
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(self.log_level)
        console_handler.setFormatter(simple_formatter)
        console_handler.addFilter(self.redaction_filter)
        logging.root.addHandler(console_handler)

        if self.log_dir:
            file_handler = logging.handlers.TimedRotatingFileHandler(
                self.log_dir / "connect_auth.log",
                when="midnight",
                interval=1,
                backupCount=30,
                encoding="utf-8",
            )
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(detailed_formatter)
            file_handler.addFilter(self.redaction_filter)
            logging.root.addHandler(file_handler)

    def get_logger(self, name: str) -> logging.Logger:
        return logging.getLogger(name)

    def register_secret(self, secret: bytes | str) -> None:
        """Registra um segredo para ser mascarado em todos os handlers."""
        self.redaction_filter.add_secret(secret)

    def shutdown(self) -> None:
        """Fecha todos os handlers de logging."""
        for handler in logging.root.handlers[:]:
            handler.close()
            logging.root.removeHandler(handler)


# Instância global do logger
_connect_logger: ConnectAuthLogger | None = None


def setup_logging(
    log_dir: str | None = None,
    log_level: str = "INFO",
) -> ConnectAuthLogger:
    """Configura o sistema de logging global.

    Args:
        log_dir: Diretório para logs
        log_level: Nível de logging

    Returns:
        Instância do ConnectAuthLogger

    """
    global _connect_logger
    _connect_logger = ConnectAuthLogger(log_dir, log_level)
    return _connect_logger


def get_logger(name: str) -> logging.Logger:
    """Obtém um logger configurado."""
    if _connect_logger is None:
        setup_logging()
    return _connect_logger.get_logger(name)


def register_secret(secret: bytes | str) -> None:
    """Registra um segredo no logger global."""
    if _connect_logger is None:
        setup_logging()
    _connect_logger.register_secret(secret)
