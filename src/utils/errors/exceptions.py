"""Taxonomia de exceções compartilhada entre worker e requester.

Cada exceção carrega o status HTTP com que deve ser traduzida na borda.
Mensagens são códigos curtos (snake_case), nunca tokens ou chaves.
"""

from __future__ import annotations


class BridgeError(Exception):
    """Base para falhas classificadas da ponte."""

    status_code: int = 500

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason


class AuthenticationFailure(BridgeError):
    """Assinatura inválida/ausente ou token do proxy divergente."""

    status_code = 401


class MalformedInput(BridgeError):
    """Entrada do chamador não decodificável."""

    status_code = 400


class ConfigurationError(BridgeError):
    """Configuração do servidor inválida (chave pública, tabela de rotas)."""

    status_code = 500


class UnsupportedOperation(BridgeError):
    """Tipo de interação ou operação não suportada."""

    status_code = 400


class InternalFailure(BridgeError):
    """Falha interna (encoding, invariantes violadas)."""

    status_code = 500


class StateViolation(InternalFailure):
    """Sequência ilegal de respostas para uma interação."""


class FollowupExpired(BridgeError):
    """Follow-up tentado após a janela de validade do token."""

    status_code = 410


class UpstreamRateLimited(BridgeError):
    """Orçamento de retries esgotado em rate limit do upstream."""

    status_code = 429

    def __init__(self, reason: str, retry_after: float | None = None) -> None:
        super().__init__(reason)
        self.retry_after = retry_after


class UpstreamUnavailable(BridgeError):
    """Falha de transporte ao falar com o upstream."""

    status_code = 502


class UpstreamError(BridgeError):
    """Erro de aplicação do upstream, repassado sem reinterpretação."""

    def __init__(
        self,
        reason: str,
        status_code: int,
        body: bytes = b"",
        headers: dict[str, str] | None = None,
    ) -> None:
        super().__init__(reason)
        self.status_code = status_code
        self.body = body
        self.headers = headers or {}
