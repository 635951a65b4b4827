"""Server-wide chat announcement when a heli gets leashed."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from heli_leash.core.grid_label import grid_label

if TYPE_CHECKING:
    from heli_leash.config import LeashConfig
    from heli_leash.core.host import ChatChannel, PlayerQuery
    from heli_leash.core.models import PlayerId

logger = logging.getLogger(__name__)

CHAT_PREFIX = '<size=18><sprite name="heli" /></size> '


def format_announcement(config: LeashConfig, display_name: str, label: str) -> str:
    """Fill the configured template: ``{0}`` is the player, ``{1}`` the grid."""
    body = config.global_message_format.format(
        display_name, label, color=config.chat_message_color,
    )
    return CHAT_PREFIX + body


class NotificationBroadcaster:
    """Formats and broadcasts the leash message to every connected player."""

    __slots__ = ("_players", "_chat")

    def __init__(self, players: PlayerQuery, chat: ChatChannel) -> None:
        self._players = players
        self._chat = chat

    def announce(self, attacker: PlayerId, config: LeashConfig) -> int:
        """Broadcast the leash message for *attacker*. Returns recipients reached."""
        if not config.send_chat_message:
            return 0
        snap = self._players.attacker(attacker)
        if snap is None or not snap.connected:
            return 0

        label = grid_label(snap.position)
        message = format_announcement(config, snap.display_name, label)
        delivered = self._chat.send_to_all_connected(message)
        logger.info("Announced leash to %s at %s (%d recipients)", snap.display_name, label, delivered)
        return delivered
