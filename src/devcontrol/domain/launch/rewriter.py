"""Rewrites the passthrough arguments into the calls devcall actually issues."""

from __future__ import annotations

from typing import Sequence

from .value_objects import (
    CallKind,
    DETACH_MARKERS,
    FORCED_REMOVE_ARGS,
    LaunchFlags,
    OrchestrationCall,
    RewritePlan,
)

ATTACHABLE_VERBS = frozenset({"up", "start"})


def _has_detach_marker(args: Sequence[str]) -> bool:
    return any(token in DETACH_MARKERS for token in args)


def rewrite(passthrough: Sequence[str], flags: LaunchFlags, *, db_volume: str) -> RewritePlan:
    """Build the prelude calls and final compose arguments for a run.

    Prelude calls must be executed, in order, before ``args`` is submitted.
    """

    args = tuple(passthrough)
    dont_attach = flags.dont_attach
    notices: list[str] = []
    prelude: list[OrchestrationCall] = []

    if args == ("down",):
        notices.append("Replacing down with 'rm --stop -v --force' to clean up any anonymous volumes.")
        args = FORCED_REMOVE_ARGS

    if not dont_attach:
        starts_containers = bool(args) and args[0] in ATTACHABLE_VERBS
        if starts_containers or flags.up_down_restart:
            if not _has_detach_marker(args):
                notices.append("Appending -d, disable with dont_attach.")
                args = args + ("-d",)
        else:
            dont_attach = True

    if flags.up_down_restart:
        prelude.append(OrchestrationCall(CallKind.COMPOSE, FORCED_REMOVE_ARGS))
        args = ("up",) + args

    if flags.delete_db_volume:
        prelude.append(OrchestrationCall(CallKind.REMOVE_VOLUME, (db_volume,), best_effort=True))

    return RewritePlan(
        prelude=tuple(prelude),
        args=args,
        dont_attach=dont_attach,
        notices=tuple(notices),
    )


__all__ = ["ATTACHABLE_VERBS", "rewrite"]
