"""The ``!faceit`` command: authorization, lookup and delivery."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import Protocol

from .aggregator import LookupClients, aggregate_detail, aggregate_groups
from .config import FaceitConfigError, PluginConfig, require_api_key
from .report import CHAT, Palette, format_detail, format_ratings_report
from .types import NamedGroup, Subject

logger = logging.getLogger(__name__)

PERMISSION_DENIED = "You don't have permission to use this command!"
CONFIG_ERROR = "Plugin configuration error! Check server console."


class HostEnvironment(Protocol):
    """What the game server exposes to the command.

    Everything except :meth:`run_serialized` may be called from the lookup
    coroutine; anything that touches the live server state or chat must go
    through :meth:`run_serialized`.
    """

    def list_subjects(self) -> Sequence[Subject]:
        """Every connected human player, in roster order."""

    def list_groups(self) -> Sequence[NamedGroup]:
        """The roster split into display-ordered teams, bots removed."""

    def is_authorized(self, local_id: str, permission: str) -> bool:
        """Whether the player holds ``permission``."""

    def is_connected(self, local_id: str) -> bool:
        """Whether the player is still present and valid."""

    def deliver_text(self, recipient_id: str, text: str) -> None:
        """Show one line to a player; a no-op for players who have left."""

    async def run_serialized(self, callback: Callable[[], None]) -> None:
        """Run ``callback`` on the host's single delivery thread."""


def is_authorized(
    host: HostEnvironment, local_id: str, permissions: Sequence[str]
) -> bool:
    """Allow when no permission is configured, otherwise require any one of them."""
    wanted = [permission for permission in permissions if permission]
    if not wanted:
        return True
    return any(host.is_authorized(local_id, permission) for permission in wanted)


def find_subject(subjects: Sequence[Subject], query: str) -> Subject | None:
    """Exact (case-insensitive) name match first, then first partial match."""
    needle = query.strip().casefold()
    if not needle:
        return None
    for subject in subjects:
        if subject.display_name.casefold() == needle:
            return subject
    for subject in subjects:
        if needle in subject.display_name.casefold():
            return subject
    return None


def select_recipients(
    host: HostEnvironment, config: PluginConfig, invoker_id: str
) -> list[str]:
    """Apply the output-visibility policy; the invoker always comes first."""
    recipients = [invoker_id]
    if config.output_visibility == "self":
        return recipients

    for subject in host.list_subjects():
        if subject.local_id in recipients:
            continue
        if config.output_visibility == "all" or host.is_authorized(
            subject.local_id, config.admin_permission
        ):
            recipients.append(subject.local_id)
    return recipients


async def deliver(
    host: HostEnvironment, recipients: Sequence[str], lines: Sequence[str]
) -> None:
    """Send ``lines`` to every recipient still connected at send time."""

    def _send() -> None:
        for recipient in recipients:
            if not host.is_connected(recipient):
                logger.debug("Dropping output for disconnected player %s", recipient)
                continue
            for line in lines:
                host.deliver_text(recipient, line)

    await host.run_serialized(_send)


async def notify_admins(
    host: HostEnvironment,
    config: PluginConfig,
    message: str,
    *,
    is_error: bool,
    palette: Palette = CHAT,
) -> None:
    """Log an operator message and echo it to every connected admin."""
    if is_error:
        logger.error(message)
    else:
        logger.warning(message)
    admins = [
        subject.local_id
        for subject in host.list_subjects()
        if host.is_authorized(subject.local_id, config.admin_permission)
    ]
    if admins:
        prefix = "ERROR: " if is_error else ""
        await deliver(
            host, admins, [f" {palette.error}{prefix}{message}{palette.default}"]
        )


class CommandOrchestrator:
    """Runs one ``!faceit`` invocation end to end."""

    def __init__(
        self,
        host: HostEnvironment,
        config: PluginConfig,
        *,
        clients: LookupClients | None = None,
        palette: Palette = CHAT,
    ) -> None:
        self.host = host
        self.config = config
        self.clients = clients or LookupClients()
        self.palette = palette

    async def handle(self, invoker_id: str, args: Sequence[str] = ()) -> None:
        """Entry point for the command; never raises."""
        try:
            await self._handle(invoker_id, args)
        except Exception:
            logger.exception("Error while handling faceit command from %s", invoker_id)

    async def _handle(self, invoker_id: str, args: Sequence[str]) -> None:
        roster = list(self.host.list_subjects())
        invoker = next((s for s in roster if s.local_id == invoker_id), None)
        if invoker is None or not self.host.is_connected(invoker_id):
            return

        if not is_authorized(self.host, invoker_id, self.config.required_permissions):
            await self._reply(invoker_id, PERMISSION_DENIED)
            return

        logger.debug("Faceit command invoked by %s", invoker.display_name)
        try:
            require_api_key(self.config)
        except FaceitConfigError as exc:
            logger.error("CRITICAL: Invalid API key configuration! %s", exc)
            await self._reply(invoker_id, CONFIG_ERROR)
            return

        query = " ".join(args).strip()
        if query:
            target = find_subject(roster, query)
            if target is None:
                await self._reply(invoker_id, f"No player found matching '{query}'.")
                return
            detail = await aggregate_detail(target, self.config, self.clients)
            lines = format_detail(detail, self.palette)
        else:
            groups = list(self.host.list_groups())
            logger.debug(
                "Looking up %s",
                ", ".join(f"{len(g.subjects)} {g.name}" for g in groups) or "nobody",
            )
            results = await aggregate_groups(groups, self.config, self.clients)
            lines = format_ratings_report(results, self.palette)

        recipients = select_recipients(self.host, self.config, invoker_id)
        await deliver(self.host, recipients, lines)

    async def _reply(self, invoker_id: str, message: str) -> None:
        line = f" {self.palette.error}{message}{self.palette.default}"
        await deliver(self.host, [invoker_id], [line])


__all__ = [
    "CONFIG_ERROR",
    "PERMISSION_DENIED",
    "CommandOrchestrator",
    "HostEnvironment",
    "deliver",
    "find_subject",
    "is_authorized",
    "notify_admins",
    "select_recipients",
]
