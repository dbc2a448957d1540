"""Leading custom flag recognition for devcall.

Custom flags must form an unbroken prefix of the argument list. Scanning
stops at the first token that is not a known keyword; that token and
everything after it is handed to docker-compose untouched, even when a
later token happens to spell a keyword.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Dict, Sequence, Tuple

from .value_objects import LaunchFlags

HELP_KEYWORD = "help"


@dataclass(frozen=True)
class FlagEffect:
    changes: Dict[str, bool]
    notice: str
    description: str


FLAG_TABLE: Dict[str, FlagEffect] = {
    "dont_attach": FlagEffect(
        {"dont_attach": True},
        "Configured to not attach to running dev containers.",
        "Don't attach to the running dev containers after starting them.",
    ),
    "da": FlagEffect(
        {"dont_attach": True},
        "Configured to not attach to running dev containers.",
        "Shortcut for dont_attach.",
    ),
    "dont_migrate": FlagEffect(
        {"migrate": False},
        "Automatic migration on startup has been disabled.",
        "Disable automatic database migration on startup.",
    ),
    "dont_sync": FlagEffect(
        {"sync_templates": False},
        "Automatic template syncing on startup has been disabled.",
        "Disable automatic template sync on startup.",
    ),
    "wipe_db": FlagEffect(
        {"delete_db_volume": True},
        "Will wipe the postgres database volume if it exists.",
        "Delete the database volume before running.",
    ),
    "restart": FlagEffect(
        {"up_down_restart": True},
        "Will restart using separate rm and up commands, extra parameters are only passed to the up.",
        "Stop and remove the containers, then up them again.",
    ),
    "restart_wipe": FlagEffect(
        {"delete_db_volume": True, "up_down_restart": True},
        "Will restart and wipe the postgres database volume if it exists.",
        "restart plus wipe_db.",
    ),
    "ignore_ownership": FlagEffect(
        {"exit_if_other_owners_found": False},
        "Continuing if files in the repo are not owned by the current user.",
        "Don't exit if there are files in the repo owned by a different user.",
    ),
}

KEYWORDS = frozenset(FLAG_TABLE) | {HELP_KEYWORD}


@dataclass(frozen=True)
class ParsedCommand:
    flags: LaunchFlags
    stopped_at: int
    help_requested: bool = False
    notices: Tuple[str, ...] = ()


def parse_tokens(tokens: Sequence[str]) -> ParsedCommand:
    """Split ``tokens`` into custom flags and docker-compose passthrough."""

    flags = LaunchFlags()
    notices: list[str] = []
    index = 0
    while index < len(tokens):
        token = tokens[index]
        if token == HELP_KEYWORD:
            return ParsedCommand(flags=flags, stopped_at=index, help_requested=True, notices=tuple(notices))
        effect = FLAG_TABLE.get(token)
        if effect is None:
            break
        flags = replace(flags, **effect.changes)
        notices.append(effect.notice)
        index += 1
    flags = replace(flags, passthrough=tuple(tokens[index:]))
    return ParsedCommand(flags=flags, stopped_at=index, notices=tuple(notices))


__all__ = ["FLAG_TABLE", "FlagEffect", "HELP_KEYWORD", "KEYWORDS", "ParsedCommand", "parse_tokens"]
