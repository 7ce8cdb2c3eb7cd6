"""A file-backed stand-in for the game server, used by the CLI."""

from __future__ import annotations

import asyncio
import json
import sys
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Literal, TextIO

from pydantic import BaseModel, ConfigDict, Field

from .types import NamedGroup, Subject

TEAM_NAMES: dict[str, str] = {
    "T": "TERRORISTS",
    "CT": "COUNTER-TERRORISTS",
}


class RosterPlayer(BaseModel):
    """One player entry in a roster snapshot file."""

    model_config = ConfigDict(extra="ignore")

    name: str = "Unknown"
    steam_id: str
    team: Literal["T", "CT", "SPEC"] = "SPEC"
    bot: bool = False
    connected: bool = True
    permissions: list[str] = Field(default_factory=list)


class RosterFile(BaseModel):
    """Structure of a roster JSON file."""

    players: list[RosterPlayer] = Field(default_factory=list)


def load_roster(path: Path) -> RosterFile:
    return RosterFile.model_validate(json.loads(path.read_text(encoding="utf-8")))


class ConsoleHost:
    """Host environment that reads a roster snapshot and prints chat lines.

    Lines for ``viewer_id`` are printed as-is; lines for anyone else are
    prefixed with the recipient's name so a single terminal shows everything.
    """

    def __init__(
        self,
        roster: RosterFile,
        *,
        viewer_id: str | None = None,
        stream: TextIO | None = None,
    ) -> None:
        self._players = {player.steam_id: player for player in roster.players}
        self._order = [player.steam_id for player in roster.players]
        self._viewer_id = viewer_id
        self._stream = stream or sys.stdout
        self._lock = asyncio.Lock()

    def _humans(self) -> list[RosterPlayer]:
        return [
            self._players[steam_id]
            for steam_id in self._order
            if self._players[steam_id].connected and not self._players[steam_id].bot
        ]

    def list_subjects(self) -> Sequence[Subject]:
        return [Subject(player.name, player.steam_id) for player in self._humans()]

    def list_groups(self) -> Sequence[NamedGroup]:
        humans = self._humans()
        return [
            NamedGroup(
                name,
                tuple(
                    Subject(player.name, player.steam_id)
                    for player in humans
                    if player.team == team
                ),
            )
            for team, name in TEAM_NAMES.items()
        ]

    def is_authorized(self, local_id: str, permission: str) -> bool:
        player = self._players.get(local_id)
        return player is not None and permission in player.permissions

    def is_connected(self, local_id: str) -> bool:
        player = self._players.get(local_id)
        return player is not None and player.connected and not player.bot

    def disconnect(self, local_id: str) -> None:
        player = self._players.get(local_id)
        if player is not None:
            self._players[local_id] = player.model_copy(update={"connected": False})

    def deliver_text(self, recipient_id: str, text: str) -> None:
        player = self._players.get(recipient_id)
        if player is None or not player.connected:
            return
        if recipient_id == self._viewer_id:
            print(text, file=self._stream)
        else:
            print(f"[-> {player.name}] {text}", file=self._stream)

    async def run_serialized(self, callback: Callable[[], None]) -> None:
        async with self._lock:
            callback()


__all__ = ["TEAM_NAMES", "ConsoleHost", "RosterFile", "RosterPlayer", "load_roster"]
