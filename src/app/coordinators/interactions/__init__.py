"""Coordenação do webhook de interações."""

from app.coordinators.interactions.acknowledge import (
    AcknowledgedInteraction,
    acknowledge_interaction,
    run_followup_work,
)
from app.coordinators.interactions.dispatcher import InteractionDispatcher

__all__ = [
    "AcknowledgedInteraction",
    "InteractionDispatcher",
    "acknowledge_interaction",
    "run_followup_work",
]
