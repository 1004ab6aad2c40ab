"""Endpoint do webhook de interações.

Endpoints:
- POST /interactions: recebimento de interações assinadas

Fluxo:
1. Verificação Ed25519 sobre timestamp + corpo bruto (antes do parsing)
2. Decodificação para o modelo de domínio
3. Máquina de estados + dispatch → acknowledgement
4. Trabalho posterior (follow-ups) em task destacada, após o flush da resposta

Segurança:
- Assinatura obrigatória; chave pública inválida é erro de configuração (500)
- O acknowledgement não aguarda I/O externo
"""

from __future__ import annotations

import logging
import time
from typing import Any

from fastapi import APIRouter, Request, Response, status
from fastapi.responses import JSONResponse
from starlette.background import BackgroundTask

from api.connectors.discord.webhook import (
    InvalidJsonError,
    InvalidSignatureError,
    parse_interaction_request,
)
from api.normalizers import decode_interaction
from api.payload_builders.discord import build_response_payload
from api.routes.discord.interactions_runtime import get_dispatcher, schedule_followups
from app.coordinators.interactions import acknowledge_interaction
from app.domain.interaction import InteractionKind
from app.domain.responses import EPHEMERAL_FLAG, CallbackType
from app.observability import get_correlation_id, reset_correlation_id, set_correlation_id
from config.settings import get_discord_settings
from fsm import create_machine
from utils.errors import BridgeError, MalformedInput, UnsupportedOperation

logger = logging.getLogger(__name__)

router = APIRouter()


def _unsupported_body(reason: str) -> dict[str, Any]:
    return {
        "type": int(CallbackType.CHANNEL_MESSAGE_WITH_SOURCE),
        "data": {"content": f"Unsupported interaction: {reason}", "flags": EPHEMERAL_FLAG},
    }


@router.post("/interactions", response_model=None)
async def receive_interaction(request: Request) -> Response:
    """Recebe uma interação e responde com o acknowledgement.

    Returns:
        JSON do callback (200) ou resposta de erro em texto puro.
    """
    received_at = time.monotonic()
    token = set_correlation_id(request.headers.get("x-correlation-id"))

    try:
        settings = get_discord_settings()
        raw_body = await request.body()

        try:
            payload, _signature = parse_interaction_request(
                raw_body=raw_body,
                headers=request.headers,
                public_key=settings.public_key,
            )
            interaction = decode_interaction(payload)
            machine = create_machine(
                interaction.id,
                is_ping=interaction.kind is InteractionKind.PING,
                created_at=interaction.created_at,
                ack_deadline_ms=settings.ack_deadline_ms,
                token_ttl_seconds=settings.token_ttl_seconds,
                received_at=received_at,
            )
            acknowledged = acknowledge_interaction(interaction, get_dispatcher(), machine)
            body = build_response_payload(acknowledged.response)

        except InvalidSignatureError as exc:
            logger.warning(
                "interaction_signature_invalid",
                extra={"correlation_id": get_correlation_id(), "error": exc.reason},
            )
            return Response(
                content="invalid request signature",
                media_type="text/plain",
                status_code=status.HTTP_401_UNAUTHORIZED,
            )

        except UnsupportedOperation as exc:
            logger.warning(
                "interaction_unsupported",
                extra={"correlation_id": get_correlation_id(), "error": exc.reason},
            )
            return JSONResponse(
                content=_unsupported_body(exc.reason),
                status_code=status.HTTP_400_BAD_REQUEST,
            )

        except (InvalidJsonError, MalformedInput) as exc:
            logger.warning(
                "interaction_payload_invalid",
                extra={"correlation_id": get_correlation_id(), "error": exc.reason},
            )
            return Response(
                content="Bad Request",
                media_type="text/plain",
                status_code=status.HTTP_400_BAD_REQUEST,
            )

        except BridgeError as exc:
            logger.error(
                "interaction_processing_failed",
                extra={
                    "correlation_id": get_correlation_id(),
                    "error_type": type(exc).__name__,
                    "error": exc.reason,
                },
            )
            return Response(
                content="Internal Server Error",
                media_type="text/plain",
                status_code=exc.status_code,
            )

        background = None
        if acknowledged.after_ack is not None:
            background = BackgroundTask(
                schedule_followups,
                acknowledged,
                get_correlation_id(),
            )
        return JSONResponse(content=body, background=background)

    finally:
        reset_correlation_id(token)
