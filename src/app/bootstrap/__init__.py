"""Bootstrap da aplicação: composition root.

Configura logging (com o token do bot como segredo redigido) e valida as
settings exigidas pelo papel do processo antes de aceitar tráfego.

Uso:
    from app.bootstrap import initialize_app, validate_runtime_settings

    initialize_app()
    validate_runtime_settings()
"""

from __future__ import annotations

import logging

from app.observability import get_correlation_id
from config.logging import configure_logging
from config.settings import get_base_settings, get_discord_settings, role_settings_errors

SERVICE_NAME = "ponte_discord"

# Ambientes onde configuração inválida impede o boot
STRICT_VALIDATION_ENVS = frozenset({"staging", "production"})

logger = logging.getLogger(__name__)


def initialize_app() -> None:
    """Configura o logging do processo. Chamada uma vez no import do app."""
    settings = get_base_settings()
    configure_logging(
        level=settings.log_level,
        service_name=SERVICE_NAME,
        service_role=settings.service_role,
        correlation_id_getter=get_correlation_id,
        secrets=[get_discord_settings().bot_token],
    )


def validate_runtime_settings() -> list[str]:
    """Valida as settings do papel no startup.

    Em staging/production falha rápido; em development apenas registra.

    Returns:
        Erros encontrados, prefixados pelo grupo (vazia = OK).

    Raises:
        RuntimeError: Configuração inválida em ambiente estrito.
    """
    base_settings = get_base_settings()
    environment = base_settings.environment
    errors = [
        f"{group}: {error}"
        for group, group_errors in role_settings_errors().items()
        for error in group_errors
    ]

    if not errors:
        logger.info(
            "settings_validated",
            extra={"environment": environment, "service_role": base_settings.service_role},
        )
        return errors

    logger.warning(
        "settings_validation_failed",
        extra={
            "environment": environment,
            "service_role": base_settings.service_role,
            "error_count": len(errors),
            "errors": errors,
        },
    )
    if environment in STRICT_VALIDATION_ENVS:
        details = "\n".join(f"- {error}" for error in errors)
        raise RuntimeError(f"Configuração inválida para {environment}:\n{details}")
    return errors
