"""Modelos de wire (pydantic) do payload de interação.

Campos desconhecidos são ignorados; apenas `type` é obrigatório.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class WireUser(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str


class WireMember(BaseModel):
    model_config = ConfigDict(extra="ignore")

    user: WireUser | None = None


class WireOption(BaseModel):
    """Opção de comando como enviada no wire."""

    model_config = ConfigDict(extra="ignore")

    name: str
    type: int
    value: Any = None
    options: list[WireOption] = Field(default_factory=list)


class WireComponent(BaseModel):
    """Componente de modal (action rows aninham text inputs)."""

    model_config = ConfigDict(extra="ignore")

    type: int | None = None
    custom_id: str | None = None
    value: str | None = None
    components: list[WireComponent] = Field(default_factory=list)


class WireInteractionData(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str | None = None
    name: str | None = None
    type: int | None = None
    options: list[WireOption] = Field(default_factory=list)
    resolved: dict[str, dict[str, Any]] = Field(default_factory=dict)
    custom_id: str | None = None
    component_type: int | None = None
    values: list[str] = Field(default_factory=list)
    components: list[WireComponent] = Field(default_factory=list)


class WireInteraction(BaseModel):
    """Envelope de interação recebido no webhook."""

    model_config = ConfigDict(extra="ignore")

    type: int
    id: str = ""
    application_id: str = ""
    token: str = ""
    channel_id: str | None = None
    guild_id: str | None = None
    data: WireInteractionData | None = None
    member: WireMember | None = None
    user: WireUser | None = None
