import logging
from typing import Any

import requests

from .config import Config
from .security import RequestSigner

logger = logging.getLogger(__name__)


class ApiRequestError(Exception):
    """A API respondeu com um status de erro."""

    def __init__(self, status_code: int, reason: str, body: str):
        super().__init__(f"{status_code} {reason}")
        self.status_code = status_code
        self.reason = reason
        self.body = body


class ApiClient:
    """Cliente HTTP que assina cada requisição com o JWT do app Connect."""

    def __init__(self, config: Config, session: requests.Session | None = None):
        self.config = config
        self.signer = RequestSigner(
            config.app_key,
            config.shared_secret,
            valid_for=config.valid_for,
        )
        self.session = session or requests.Session()

    def prepare(
        self,
        method: str,
        url: str,
        json: Any = None,
    ) -> requests.PreparedRequest:
        """Prepara a requisição e anexa o cabeçalho de autenticação.

        A assinatura usa o método e a URL já normalizados pelo requests, que
        são exatamente os enviados ao servidor.
        """
        request = requests.Request(method.upper(), url, json=json)
        prepared = self.session.prepare_request(request)
        header = self.signer.create_auth_header(prepared.method, prepared.url)
        prepared.headers[header.name] = header.value
        return prepared

    def request(
        self,
        method: str,
        url: str,
        json: Any = None,
        timeout: float = 30,
    ) -> Any:
        """Envia uma requisição assinada e retorna o corpo JSON da resposta.

        Raises:
            ApiRequestError: Se a resposta tiver status de erro.
            requests.RequestException: Em falhas de conexão.

        """
        prepared = self.prepare(method, url, json=json)
        logger.info(f"{prepared.method} {prepared.url}")
        # Proxies e CA bundle do ambiente, como em Session.request
        settings = self.session.merge_environment_settings(
            prepared.url, {}, None, None, None
        )
        response = self.session.send(prepared, timeout=timeout, **settings)
        try:
            response.raise_for_status()
        except requests.HTTPError as e:
            logger.warning(f"Requisição falhou: {e}")
            raise ApiRequestError(
                response.status_code,
                response.reason,
                response.text,
            ) from e
        if not response.content:
            return None
        return response.json()

    def get(self, url: str) -> Any:
        return self.request("GET", url)
