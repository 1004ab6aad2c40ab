"""Snowflakes do Discord: IDs de 64 bits com timestamp embutido.

O timestamp (ms desde o epoch do Discord) ocupa os 42 bits superiores.
"""

from __future__ import annotations

from datetime import UTC, datetime

DISCORD_EPOCH_MS = 1420070400000

# Menor snowflake com timestamp diferente de zero
_MIN_SNOWFLAKE = 1 << 22


def snowflake_to_datetime(snowflake: str | int, epoch_ms: int = DISCORD_EPOCH_MS) -> datetime:
    """Converte snowflake em datetime UTC.

    Raises:
        ValueError: Se o valor não for um inteiro não-negativo.
    """
    value = int(snowflake)
    if value < 0:
        raise ValueError("snowflake must be non-negative")
    milliseconds = (value >> 22) + epoch_ms
    return datetime.fromtimestamp(milliseconds / 1000, tz=UTC)


def validate_snowflake(snowflake: str) -> str:
    """Valida um snowflake textual e o retorna inalterado.

    Raises:
        ValueError: Se não for numérico ou for pequeno demais para conter
            um timestamp.
    """
    if not snowflake.isdigit():
        raise ValueError("That doesn't look like a snowflake. Snowflakes contain only numbers.")
    if int(snowflake) < _MIN_SNOWFLAKE:
        raise ValueError("That doesn't look like a snowflake. Snowflakes are much larger numbers.")
    if int(snowflake) >= 1 << 64:
        raise ValueError("That doesn't look like a snowflake. Snowflakes have fewer digits.")
    return snowflake
