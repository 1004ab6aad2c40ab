"""Settings comuns ao worker e ao requester."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Literal

Environment = Literal["development", "staging", "production"]
ServiceRole = Literal["worker", "requester", "all"]

_ENVIRONMENT_ALIASES: dict[str, Environment] = {
    "production": "production",
    "prod": "production",
    "staging": "staging",
    "stage": "staging",
}
_ROLES: dict[str, ServiceRole] = {"worker": "worker", "requester": "requester", "all": "all"}
_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})


@dataclass(frozen=True)
class BaseSettings:
    """Configurações do processo.

    Attributes:
        environment: Ambiente de execução (development|staging|production)
        service_name: Nome do serviço em logs e no /health
        service_role: Routers montados (worker|requester|all)
        log_level: Nível do root logger
        shutdown_grace_seconds: Espera máxima por follow-ups no shutdown
        debug: Modo debug ativo
    """

    environment: Environment = "development"
    service_name: str = "ponte-discord"
    service_role: ServiceRole = "all"
    log_level: str = "INFO"
    shutdown_grace_seconds: float = 30.0
    debug: bool = False

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        return self.environment == "development"

    @property
    def serves_worker(self) -> bool:
        """Processo recebe o webhook de interações."""
        return self.service_role in ("worker", "all")

    @property
    def serves_requester(self) -> bool:
        """Processo expõe o proxy da REST API."""
        return self.service_role in ("requester", "all")

    def validate(self) -> list[str]:
        """Valida configurações base.

        Returns:
            Lista de erros (vazia = OK).
        """
        errors: list[str] = []
        if self.environment not in ("development", "staging", "production"):
            errors.append(f"ENVIRONMENT inválido: {self.environment}")
        if self.service_role not in _ROLES:
            errors.append(f"SERVICE_ROLE inválido: {self.service_role}")
        if not self.service_name:
            errors.append("SERVICE_NAME não pode ser vazio")
        if self.log_level.upper() not in _LOG_LEVELS:
            errors.append(f"LOG_LEVEL inválido: {self.log_level}")
        if self.shutdown_grace_seconds < 0:
            errors.append("SHUTDOWN_GRACE_SECONDS deve ser >= 0")
        return errors


def _load_base_from_env() -> BaseSettings:
    """Carrega BaseSettings de variáveis de ambiente."""
    return BaseSettings(
        environment=_ENVIRONMENT_ALIASES.get(
            os.getenv("ENVIRONMENT", "development").lower(), "development"
        ),
        service_name=os.getenv("SERVICE_NAME", "ponte-discord"),
        service_role=_ROLES.get(os.getenv("SERVICE_ROLE", "all").lower(), "all"),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        shutdown_grace_seconds=float(os.getenv("SHUTDOWN_GRACE_SECONDS", "30")),
        debug=os.getenv("DEBUG", "").lower() in ("true", "1", "yes"),
    )


@lru_cache(maxsize=1)
def get_base_settings() -> BaseSettings:
    """Retorna instância cacheada de BaseSettings."""
    return _load_base_from_env()
