"""Builders de payload para respostas a interações."""

from api.payload_builders.discord.interaction_response import (
    build_response_payload,
)

__all__ = [
    "build_response_payload",
]
