"""Formatter JSON dos logs estruturados.

Cada linha carrega os campos de LOG_FIELDS, na ordem declarada, mais os
campos estáticos do processo (service, role) e os extras do chamador.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pythonjsonlogger.json import JsonFormatter

if TYPE_CHECKING:
    from collections.abc import Mapping

# Campos lidos do LogRecord, na ordem em que aparecem na linha
LOG_FIELDS = ("asctime", "levelname", "name", "message", "correlation_id")

# Campos que identificam o processo (iguais em todas as linhas)
STATIC_FIELDS = ("service", "role")

REQUIRED_LOG_FIELDS = frozenset(LOG_FIELDS + STATIC_FIELDS)

FIELD_RENAME_MAP = {
    "levelname": "level",
    "name": "logger",
}


def create_json_formatter(static_fields: Mapping[str, str] | None = None) -> JsonFormatter:
    """Cria o formatter JSON.

    Args:
        static_fields: Valores fixos adicionados a toda linha (service, role).

    Exemplo de output:
        {"asctime": "...", "level": "INFO", "logger": "api.routes.discord.proxy",
         "message": "proxy_request_forwarded", "correlation_id": "abc-123",
         "service": "ponte_discord", "role": "requester", "route_id": "CreateMessage"}
    """
    return JsonFormatter(
        " ".join(f"%({field})s" for field in LOG_FIELDS),
        rename_fields=FIELD_RENAME_MAP,
        static_fields=dict(static_fields or {}),
        json_ensure_ascii=False,
    )
