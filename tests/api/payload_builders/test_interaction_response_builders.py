"""Testes dos builders de resposta a interações."""

from __future__ import annotations

import pytest

from api.payload_builders.discord import build_response_payload
from app.domain.responses import Deferred, Followup, ImmediateMessage, Pong
from utils.errors import InternalFailure


def test_pong_has_no_data() -> None:
    assert build_response_payload(Pong()) == {"type": 1}


def test_immediate_message() -> None:
    assert build_response_payload(ImmediateMessage("hi")) == {
        "type": 4,
        "data": {"content": "hi"},
    }


def test_ephemeral_immediate_message_sets_flag() -> None:
    payload = build_response_payload(ImmediateMessage("only you", ephemeral=True))

    assert payload["data"]["flags"] == 64


def test_deferred() -> None:
    assert build_response_payload(Deferred()) == {"type": 5}
    assert build_response_payload(Deferred(ephemeral=True)) == {"type": 5, "data": {"flags": 64}}


def test_followup_has_no_callback_envelope() -> None:
    assert build_response_payload(Followup("done")) == {"content": "done"}


def test_unknown_variant_is_internal_failure() -> None:
    with pytest.raises(InternalFailure):
        build_response_payload(object())
