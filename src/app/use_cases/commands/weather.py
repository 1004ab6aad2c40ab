"""Comando /weather: acknowledgement adiado e relatório via follow-up.

Os dados são simulados; o formato do relatório é o mesmo de um provedor
real (condição, temperatura, umidade, vento e uma dica).
"""

from __future__ import annotations

import asyncio
import logging
import random
from dataclasses import dataclass
from typing import TYPE_CHECKING

from app.domain.responses import Deferred
from app.use_cases.commands.base import (
    CommandDefinition,
    CommandOptionDefinition,
    CommandOutcome,
    FollowupWork,
)

if TYPE_CHECKING:
    from app.domain.interaction import Interaction
    from app.services.followups import FollowupSender

logger = logging.getLogger(__name__)

WEATHER_REFRESH_PREFIX = "weather_refresh:"
DEFAULT_CITIES = ("New York", "London", "Tokyo", "Sydney", "Paris")

CONDITION_EMOJIS: dict[str, str] = {
    "Sunny": "☀️",
    "Partly Cloudy": "⛅",
    "Cloudy": "☁️",
    "Rainy": "\U0001f327️",
    "Thunderstorms": "⛈️",
    "Snowy": "❄️",
    "Foggy": "\U0001f32b️",
    "Windy": "\U0001f4a8",
    "Clear": "\U0001f308",
}

# Faixa de temperatura (°C) por condição
_TEMPERATURE_RANGES: dict[str, tuple[int, int]] = {
    "Snowy": (-10, 5),
    "Rainy": (5, 15),
    "Foggy": (5, 15),
    "Thunderstorms": (5, 15),
    "Cloudy": (10, 20),
    "Windy": (10, 20),
    "Partly Cloudy": (15, 25),
    "Sunny": (20, 35),
    "Clear": (20, 35),
}

TIPS = (
    "Don't forget your umbrella! ☔",
    "Perfect day for outdoor activities! \U0001f3c4",
    "Stay hydrated! \U0001f4a7",
    "Dress warmly! \U0001f9e3",
    "Drive safely in these conditions! \U0001f697",
)


@dataclass(frozen=True, slots=True)
class WeatherReport:
    city: str
    temperature: int
    condition: str
    humidity: int
    wind_speed: int


def simulate_weather(city: str, rng: random.Random) -> WeatherReport:
    """Gera um relatório simulado para a cidade."""
    condition = rng.choice(tuple(CONDITION_EMOJIS))
    low, high = _TEMPERATURE_RANGES.get(condition, (15, 30))
    return WeatherReport(
        city=city,
        temperature=rng.randrange(low, high),
        condition=condition,
        humidity=rng.randrange(30, 90),
        wind_speed=rng.randrange(5, 25),
    )


def pick_tip(report: WeatherReport, rng: random.Random) -> str:
    if report.condition in ("Rainy", "Thunderstorms"):
        return TIPS[0]
    if report.condition in ("Sunny", "Clear"):
        return TIPS[1]
    if report.temperature > 25:
        return TIPS[2]
    if report.temperature < 10:
        return TIPS[3]
    if report.condition in ("Foggy", "Windy"):
        return TIPS[4]
    return rng.choice(TIPS)


def format_weather_report(report: WeatherReport, tip: str) -> str:
    emoji = CONDITION_EMOJIS.get(report.condition, "\U0001f321️")
    return (
        f"## Weather for {report.city} {emoji}\n\n"
        f"**Condition:** {report.condition} {emoji}\n"
        f"**Temperature:** {report.temperature}°C\n"
        f"**Humidity:** {report.humidity}%\n"
        f"**Wind Speed:** {report.wind_speed} km/h\n\n"
        f"**Tip:** {tip}"
    )


class WeatherCommand:
    definition = CommandDefinition(
        name="weather",
        description="Shows the current weather for a city.",
        options=(
            CommandOptionDefinition(name="city", description="City to look up"),
        ),
    )

    def __init__(
        self,
        rng: random.Random | None = None,
        lookup_delay_seconds: float = 1.0,
    ) -> None:
        self._rng = rng or random.Random()
        self._lookup_delay_seconds = lookup_delay_seconds

    def handle(self, interaction: Interaction) -> CommandOutcome:
        city = interaction.string_option("city") or self._rng.choice(DEFAULT_CITIES)
        return CommandOutcome(
            response=Deferred(),
            after_ack=_report_work(interaction, city, self._rng, self._lookup_delay_seconds),
        )


class WeatherRefreshButton:
    """Botão "atualizar" de um relatório: custom_id `weather_refresh:<cidade>`."""

    custom_id_prefix = WEATHER_REFRESH_PREFIX

    def __init__(
        self,
        rng: random.Random | None = None,
        lookup_delay_seconds: float = 1.0,
    ) -> None:
        self._rng = rng or random.Random()
        self._lookup_delay_seconds = lookup_delay_seconds

    def handle(self, interaction: Interaction) -> CommandOutcome:
        custom_id = interaction.custom_id or ""
        city = custom_id.removeprefix(self.custom_id_prefix).strip()
        if not city:
            city = self._rng.choice(DEFAULT_CITIES)
        return CommandOutcome(
            response=Deferred(),
            after_ack=_report_work(interaction, city, self._rng, self._lookup_delay_seconds),
        )


def _report_work(
    interaction: Interaction,
    city: str,
    rng: random.Random,
    lookup_delay_seconds: float,
) -> FollowupWork:
    async def report(followups: FollowupSender) -> None:
        # Simula latência do provedor
        await asyncio.sleep(lookup_delay_seconds)
        weather = simulate_weather(city, rng)
        await followups.send(format_weather_report(weather, pick_tip(weather, rng)))
        logger.info(
            "weather_report_sent",
            extra={"interaction_id": interaction.id, "condition": weather.condition},
        )

    return report
