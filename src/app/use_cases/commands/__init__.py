"""Comandos de aplicação e componentes, com registro estático."""

from app.use_cases.commands.base import (
    CommandDefinition,
    CommandHandler,
    CommandOptionDefinition,
    CommandOptionType,
    CommandOutcome,
    ComponentHandler,
    FollowupWork,
)
from app.use_cases.commands.ping import PingCommand
from app.use_cases.commands.registration import (
    command_payloads,
    register_commands,
    registration_path,
)
from app.use_cases.commands.weather import WeatherCommand, WeatherRefreshButton


def default_commands() -> tuple[CommandHandler, ...]:
    """Comandos expostos pelo worker (e registrados pelo CLI)."""
    return (PingCommand(), WeatherCommand())


def default_components() -> tuple[ComponentHandler, ...]:
    """Handlers de componentes por prefixo de custom_id."""
    return (WeatherRefreshButton(),)


__all__ = [
    "CommandDefinition",
    "CommandHandler",
    "CommandOptionDefinition",
    "CommandOptionType",
    "CommandOutcome",
    "ComponentHandler",
    "FollowupWork",
    "PingCommand",
    "WeatherCommand",
    "WeatherRefreshButton",
    "command_payloads",
    "default_commands",
    "default_components",
    "register_commands",
    "registration_path",
]
