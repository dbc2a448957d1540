from __future__ import annotations

import pytest

from devcontrol.domain.launch import LaunchFlags, parse_tokens


def test_leading_flags_are_applied_and_rest_is_passthrough() -> None:
    parsed = parse_tokens(["dont_migrate", "da", "up", "--build"])

    assert parsed.flags.migrate is False
    assert parsed.flags.dont_attach is True
    assert parsed.flags.sync_templates is True
    assert parsed.flags.passthrough == ("up", "--build")
    assert parsed.stopped_at == 2
    assert not parsed.help_requested


def test_keyword_after_first_passthrough_token_is_not_a_flag() -> None:
    parsed = parse_tokens(["up", "dont_migrate"])

    assert parsed.flags == LaunchFlags(passthrough=("up", "dont_migrate"))
    assert parsed.stopped_at == 0
    assert parsed.notices == ()


def test_restart_wipe_sets_both_flags() -> None:
    flags = parse_tokens(["restart_wipe"]).flags
    assert flags.delete_db_volume is True
    assert flags.up_down_restart is True


def test_restart_alone_only_restarts() -> None:
    flags = parse_tokens(["restart"]).flags
    assert flags.up_down_restart is True
    assert flags.delete_db_volume is False


@pytest.mark.parametrize(
    ("token", "field", "expected"),
    [
        ("dont_sync", "sync_templates", False),
        ("dont_attach", "dont_attach", True),
        ("wipe_db", "delete_db_volume", True),
        ("ignore_ownership", "exit_if_other_owners_found", False),
    ],
)
def test_single_flag_effects(token: str, field: str, expected: bool) -> None:
    parsed = parse_tokens([token, "ps"])
    assert getattr(parsed.flags, field) is expected
    assert parsed.flags.passthrough == ("ps",)
    assert len(parsed.notices) == 1


def test_help_short_circuits() -> None:
    parsed = parse_tokens(["da", "help", "up"])
    assert parsed.help_requested is True
    assert parsed.stopped_at == 1


def test_help_after_passthrough_is_forwarded() -> None:
    parsed = parse_tokens(["run", "help"])
    assert parsed.help_requested is False
    assert parsed.flags.passthrough == ("run", "help")


def test_empty_token_list() -> None:
    parsed = parse_tokens([])
    assert parsed.flags == LaunchFlags()
    assert parsed.stopped_at == 0


def test_tokens_with_whitespace_are_kept_verbatim() -> None:
    parsed = parse_tokens(["da", "run", "backend", "bash -c 'echo hi'"])
    assert parsed.flags.passthrough == ("run", "backend", "bash -c 'echo hi'")
