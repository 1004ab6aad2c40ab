"""Filters de logging: contexto da requisição e redação de credenciais."""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

REDACTED = "[REDACTED]"

# Token de continuação em paths de webhook/callback (webhooks/{id}/{token})
_CONTINUATION_TOKEN = re.compile(r"\b((?:webhooks|interactions)/\d+/)([\w.-]{16,})")

# Atributos padrão do LogRecord que nunca carregam dados do chamador
_RECORD_ATTRS = frozenset({"msg", "name", "levelname", "pathname", "filename", "module", "funcName"})


class CorrelationIdFilter(logging.Filter):
    """Injeta o correlation_id do contexto atual em cada record.

    Um correlation_id passado via `extra` tem precedência (tasks de
    follow-up rodam fora do contexto do request).
    """

    def __init__(self, correlation_id_getter: Callable[[], str] | None = None) -> None:
        super().__init__()
        self._get_correlation_id = correlation_id_getter or (lambda: "")

    def filter(self, record: logging.LogRecord) -> bool:
        if not getattr(record, "correlation_id", None):
            record.correlation_id = self._get_correlation_id()
        return True


class SecretRedactionFilter(logging.Filter):
    """Mascara segredos configurados e tokens de continuação.

    Atua na mensagem formatada e em todo extra do tipo string.
    """

    def __init__(self, secrets: Iterable[str] = ()) -> None:
        super().__init__()
        self._secrets = tuple(secret for secret in secrets if secret)

    def redact(self, value: str) -> str:
        for secret in self._secrets:
            value = value.replace(secret, REDACTED)
        return _CONTINUATION_TOKEN.sub(rf"\1{REDACTED}", value)

    def filter(self, record: logging.LogRecord) -> bool:
        if record.args:
            record.msg = record.getMessage()
            record.args = None
        if isinstance(record.msg, str):
            record.msg = self.redact(record.msg)
        for key, value in list(vars(record).items()):
            if isinstance(value, str) and key not in _RECORD_ATTRS:
                setattr(record, key, self.redact(value))
        return True
