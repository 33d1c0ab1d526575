"""Cliente de linha de comando: envia uma requisição assinada e imprime o JSON."""

import argparse
import json
import sys

import requests

from .api_client import ApiClient, ApiRequestError
from .config import Config, ConfigError
from .errors import AuthError
from .logging_config import get_logger, register_secret, setup_logging

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="connect-auth",
        description="Envia uma requisição assinada com JWT e imprime a resposta JSON.",
    )
    parser.add_argument(
        "creds",
        help="arquivo JSON de credenciais com os campos 'key' e 'secret'",
    )
    parser.add_argument("method", help='método HTTP, por exemplo "get"')
    parser.add_argument(
        "url",
        help="URL, por exemplo https://mycorp.atlassian.net/rest/api/3/project/search?query=KEY",
    )
    parser.add_argument(
        "--valid-for",
        type=int,
        default=30,
        help="validade do token em segundos (padrão: 30)",
    )
    parser.add_argument(
        "--sign-only",
        action="store_true",
        help="apenas imprime o valor do cabeçalho Authorization",
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default="WARNING",
        help="nível de logging (padrão: WARNING)",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(log_level=args.log_level)
    logger = get_logger(__name__)

    try:
        config = Config.from_creds_file(args.creds, valid_for=args.valid_for)
    except ConfigError as e:
        logger.error(f"Erro de configuração: {e}")
        return 2
    register_secret(config.shared_secret)

    client = ApiClient(config)
    try:
        if args.sign_only:
            prepared = client.prepare(args.method, args.url)
            print(prepared.headers["Authorization"])
            return 0
        data = client.request(args.method, args.url)
    except AuthError as e:
        logger.error(f"Falha ao gerar o cabeçalho de autenticação: {e}")
        return 1
    except ApiRequestError as e:
        print(f"request failed: {e}, body: {e.body}")
        return 1
    except requests.RequestException as e:
        print(f"request failed: {e}")
        return 1

    print(json.dumps(data, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
