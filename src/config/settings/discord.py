"""Settings específicas de Discord.

Credenciais do bot, chave pública de interações e limites da REST API.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

# Constantes da Discord API
DISCORD_API_VERSION: str = "v10"
DISCORD_API_BASE_URL: str = "https://discord.com/api"

# Tamanho da chave pública Ed25519 em bytes
PUBLIC_KEY_SIZE = 32


@dataclass(frozen=True)
class DiscordSettings:
    """Configurações do canal Discord.

    Attributes:
        bot_token: Token do bot Discord (nunca logar)
        application_id: ID da aplicação Discord
        public_key: Chave pública (hex) para verificação de interações
        api_version: Versão da API
        api_base_url: URL base da API
        request_timeout_seconds: Timeout para requisições HTTP
        max_rate_limit_retries: Máximo de reenvios após 429
        max_server_error_retries: Máximo de reenvios após 5xx (só idempotentes)
        ack_deadline_ms: Prazo para acknowledgement de uma interação
        token_ttl_seconds: Validade do token de continuação
    """

    # Credenciais
    bot_token: str = ""
    application_id: str = ""
    public_key: str = ""

    # API
    api_version: str = DISCORD_API_VERSION
    api_base_url: str = DISCORD_API_BASE_URL

    # Timeouts e retries
    request_timeout_seconds: float = 30.0
    max_rate_limit_retries: int = 3
    max_server_error_retries: int = 1

    # Contrato de interações
    ack_deadline_ms: int = 3000
    token_ttl_seconds: int = 900

    @property
    def api_endpoint(self) -> str:
        """URL base completa da API com versão."""
        return f"{self.api_base_url.rstrip('/')}/{self.api_version}"

    def public_key_bytes(self) -> bytes:
        """Decodifica a chave pública hex.

        Raises:
            ValueError: Se a chave não for hex válido de 32 bytes.
        """
        key = bytes.fromhex(self.public_key.strip())
        if len(key) != PUBLIC_KEY_SIZE:
            raise ValueError(f"public key must have {PUBLIC_KEY_SIZE} bytes")
        return key

    def validate(self) -> list[str]:
        """Valida configurações mínimas de Discord."""
        errors: list[str] = []
        if not self.bot_token:
            errors.append("DISCORD_BOT_TOKEN não configurado")
        if not self.application_id:
            errors.append("DISCORD_APPLICATION_ID não configurado")
        if not self.public_key:
            errors.append("DISCORD_PUBLIC_KEY não configurado")
        else:
            try:
                self.public_key_bytes()
            except ValueError:
                errors.append("DISCORD_PUBLIC_KEY deve ser hex de 32 bytes")
        if self.request_timeout_seconds <= 0:
            errors.append("DISCORD_REQUEST_TIMEOUT_SECONDS deve ser > 0")
        if self.max_rate_limit_retries < 0:
            errors.append("DISCORD_MAX_RATE_LIMIT_RETRIES deve ser >= 0")
        if self.max_server_error_retries < 0:
            errors.append("DISCORD_MAX_SERVER_ERROR_RETRIES deve ser >= 0")
        if self.ack_deadline_ms <= 0:
            errors.append("DISCORD_ACK_DEADLINE_MS deve ser > 0")
        return errors


def _load_from_env() -> DiscordSettings:
    """Carrega DiscordSettings de variáveis de ambiente."""
    return DiscordSettings(
        bot_token=os.getenv("DISCORD_BOT_TOKEN", "").strip(),
        application_id=os.getenv("DISCORD_APPLICATION_ID", ""),
        public_key=os.getenv("DISCORD_PUBLIC_KEY", ""),
        api_version=os.getenv("DISCORD_API_VERSION", DISCORD_API_VERSION),
        api_base_url=os.getenv("DISCORD_API_BASE_URL", DISCORD_API_BASE_URL),
        request_timeout_seconds=float(
            os.getenv("DISCORD_REQUEST_TIMEOUT_SECONDS", "30")
        ),
        max_rate_limit_retries=int(os.getenv("DISCORD_MAX_RATE_LIMIT_RETRIES", "3")),
        max_server_error_retries=int(
            os.getenv("DISCORD_MAX_SERVER_ERROR_RETRIES", "1")
        ),
        ack_deadline_ms=int(os.getenv("DISCORD_ACK_DEADLINE_MS", "3000")),
        token_ttl_seconds=int(os.getenv("DISCORD_TOKEN_TTL_SECONDS", "900")),
    )


@lru_cache(maxsize=1)
def get_discord_settings() -> DiscordSettings:
    """Retorna instância cacheada de DiscordSettings."""
    return _load_from_env()
