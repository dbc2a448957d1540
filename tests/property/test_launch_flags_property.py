from __future__ import annotations

from hypothesis import given, settings
from hypothesis import strategies as st

from devcontrol.domain.launch import KEYWORDS, LaunchFlags, parse_tokens, rewrite

FLAG_KEYWORDS = sorted(KEYWORDS - {"help"})
tokens_strategy = st.lists(
    st.one_of(st.sampled_from(FLAG_KEYWORDS + ["help"]), st.text(max_size=12)),
    max_size=8,
)


@settings(max_examples=200)
@given(tokens=tokens_strategy)
def test_recognition_stops_at_first_unknown_token(tokens: list[str]) -> None:
    parsed = parse_tokens(tokens)
    prefix = tokens[: parsed.stopped_at]
    assert all(token in KEYWORDS for token in prefix)
    if parsed.help_requested:
        assert tokens[parsed.stopped_at] == "help"
        return
    assert parsed.flags.passthrough == tuple(tokens[parsed.stopped_at :])
    if parsed.stopped_at < len(tokens):
        assert tokens[parsed.stopped_at] not in KEYWORDS


@settings(max_examples=200)
@given(
    passthrough=st.lists(st.sampled_from(["up", "start", "logs", "-d", "--build", "down", "ps"]), max_size=5),
    dont_attach=st.booleans(),
    restart=st.booleans(),
    wipe=st.booleans(),
)
def test_rewrite_never_duplicates_detach_marker(
    passthrough: list[str], dont_attach: bool, restart: bool, wipe: bool
) -> None:
    flags = LaunchFlags(dont_attach=dont_attach, up_down_restart=restart, delete_db_volume=wipe)
    plan = rewrite(passthrough, flags, db_volume="pgdata")
    added = plan.args.count("-d") - passthrough.count("-d")
    assert added in (0, 1)
    if added:
        assert "-d" not in passthrough
        assert not dont_attach
    if dont_attach:
        assert plan.dont_attach
    assert len(plan.prelude) == int(restart) + int(wipe)
