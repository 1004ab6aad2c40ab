#!/usr/bin/env python3
"""Registra os comandos do worker via proxy requester.

Uso:
    python scripts/register_commands.py 123456789012345678 --token BOT_TOKEN
    python scripts/register_commands.py --global

Sem guild ids nem --global, nada é enviado.
"""

from __future__ import annotations

import argparse
import asyncio
import os
import sys

from api.connectors.discord import RequesterClient, RequesterClientConfig
from app.domain.snowflake import validate_snowflake
from app.use_cases.commands import default_commands, register_commands
from config.settings import DISCORD_API_VERSION


def _snowflake(value: str) -> str:
    try:
        return validate_snowflake(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "guild_ids",
        nargs="*",
        type=_snowflake,
        help="Guilds onde os comandos serão sobrescritos.",
    )
    parser.add_argument(
        "--global",
        dest="register_global",
        action="store_true",
        help="Sobrescreve também os comandos globais.",
    )
    parser.add_argument(
        "--token",
        default=os.getenv("DISCORD_BOT_TOKEN", ""),
        help="Token do bot (padrao: DISCORD_BOT_TOKEN).",
    )
    parser.add_argument(
        "--application-id",
        type=_snowflake,
        default=os.getenv("DISCORD_APPLICATION_ID") or None,
        help="ID da aplicação (padrao: DISCORD_APPLICATION_ID).",
    )
    parser.add_argument(
        "--rest-url",
        default=os.getenv("BOT_REQUESTER_URL", "http://localhost:8088"),
        help="URL do requester.",
    )
    return parser.parse_args(argv)


async def _run(args: argparse.Namespace) -> list[str]:
    client = RequesterClient(
        RequesterClientConfig(
            base_url=args.rest_url,
            api_version=DISCORD_API_VERSION,
            bot_token=args.token,
        )
    )
    return await register_commands(
        client,
        args.application_id,
        default_commands(),
        guild_ids=args.guild_ids,
        register_global=args.register_global,
    )


def main() -> None:
    args = parse_args()
    if not args.token or not args.application_id:
        print("token e application id são obrigatórios", file=sys.stderr)
        sys.exit(2)
    if not args.guild_ids and not args.register_global:
        print("nenhum escopo informado (guild ids ou --global)", file=sys.stderr)
        sys.exit(2)

    updated = asyncio.run(_run(args))
    for path in updated:
        print(f"[ok] PUT {path}")


if __name__ == "__main__":
    main()
