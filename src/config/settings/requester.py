"""Settings do proxy requester.

O worker fala com a REST API apenas através do requester; o requester
expõe as rotas sob um base path fixo.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

DEFAULT_BASE_PATH = "/api"
DEFAULT_REQUESTER_URL = "http://localhost:8088"


@dataclass(frozen=True)
class RequesterSettings:
    """Configurações do requester.

    Attributes:
        base_path: Prefixo das rotas do proxy (ex: /api)
        requester_url: URL do requester usada pelo worker
        timeout_seconds: Timeout das chamadas worker → requester
        max_retries: Tentativas em falha de conexão worker → requester
    """

    base_path: str = DEFAULT_BASE_PATH
    requester_url: str = DEFAULT_REQUESTER_URL
    timeout_seconds: float = 10.0
    max_retries: int = 2

    def validate(self) -> list[str]:
        errors: list[str] = []
        if not self.base_path.startswith("/"):
            errors.append("REQUESTER_BASE_PATH deve começar com '/'")
        if not self.requester_url.startswith(("http://", "https://")):
            errors.append("BOT_REQUESTER_URL deve ser http(s)")
        if self.timeout_seconds <= 0:
            errors.append("REQUESTER_TIMEOUT_SECONDS deve ser > 0")
        return errors


def _load_from_env() -> RequesterSettings:
    """Carrega RequesterSettings de variáveis de ambiente."""
    return RequesterSettings(
        base_path=os.getenv("REQUESTER_BASE_PATH", DEFAULT_BASE_PATH).rstrip("/")
        or DEFAULT_BASE_PATH,
        requester_url=os.getenv("BOT_REQUESTER_URL", DEFAULT_REQUESTER_URL).rstrip("/"),
        timeout_seconds=float(os.getenv("REQUESTER_TIMEOUT_SECONDS", "10")),
        max_retries=int(os.getenv("REQUESTER_MAX_RETRIES", "2")),
    )


@lru_cache(maxsize=1)
def get_requester_settings() -> RequesterSettings:
    """Retorna instância cacheada de RequesterSettings."""
    return _load_from_env()
