"""Tests for the leash chat announcement.

Covers:
- Message formatting: sprite prefix, player name, grid label, color passthrough
- Delivery to every connected player only
- A failing recipient does not abort the broadcast
- No-op when chat is disabled or the attacker is gone
"""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from heli_leash.config import LeashConfig
from heli_leash.core.grid_label import grid_label
from heli_leash.core.host import ChatChannel, DeliveryError
from heli_leash.core.models import Vector3
from heli_leash.leash.broadcaster import CHAT_PREFIX, NotificationBroadcaster, format_announcement
from heli_leash.systems.host_sim import SimulatedHost


def _make_host() -> tuple[SimulatedHost, NotificationBroadcaster]:
    host = SimulatedHost()
    host.add_player("Rook", Vector3(150.0, 0.0, 0.0))
    host.add_player("Scrap", Vector3(-900.0, 0.0, 300.0))
    host.add_player("Nomad", Vector3(0.0, 0.0, 0.0), connected=False)
    return host, NotificationBroadcaster(host, host)


class TestFormatting:

    def test_default_template(self):
        msg = format_announcement(LeashConfig(), "Rook", "U21")
        assert msg.startswith(CHAT_PREFIX)
        assert "Helicopter is staying close to Rook at [<color=#ffd700>U21</color>]" in msg

    def test_color_passthrough(self):
        cfg = LeashConfig(global_message_format="<color={color}>{0} @ {1}</color>", chat_message_color="#00ff00")
        assert format_announcement(cfg, "Vex", "B7") == CHAT_PREFIX + "<color=#00ff00>Vex @ B7</color>"

    def test_label_uses_attacker_position(self):
        host, broadcaster = _make_host()
        broadcaster.announce(1, LeashConfig(global_message_format="{0}|{1}"))
        assert host.players[2].inbox == [CHAT_PREFIX + "Rook|" + grid_label(Vector3(150.0, 0.0, 0.0))]
        assert host.players[2].inbox[0].endswith("|U21")


class TestDelivery:

    def test_reaches_connected_players_only(self):
        host, broadcaster = _make_host()
        assert broadcaster.announce(1, LeashConfig()) == 2
        assert len(host.players[1].inbox) == 1
        assert len(host.players[2].inbox) == 1
        assert host.players[3].inbox == []

    def test_failed_recipient_does_not_abort(self):
        host, broadcaster = _make_host()
        host.players[1].reject_messages = True
        host.add_player("Vex", Vector3())
        assert broadcaster.announce(1, LeashConfig()) == 2
        assert host.players[1].inbox == []
        assert len(host.players[2].inbox) == 1
        assert len(host.players[4].inbox) == 1

    def test_disconnect_mid_broadcast(self):
        """A recipient that drops between listing and delivery is skipped."""

        class FlakyChat(ChatChannel):
            def __init__(self):
                self.sent: list[int] = []

            def connected_recipients(self):
                return [1, 2, 3]

            def send(self, recipient, message):
                if recipient == 2:
                    raise DeliveryError(recipient, "disconnected")
                self.sent.append(recipient)

        chat = FlakyChat()
        assert chat.send_to_all_connected("hi") == 2
        assert chat.sent == [1, 3]


class TestNoop:

    def test_chat_disabled(self):
        host, broadcaster = _make_host()
        assert broadcaster.announce(1, LeashConfig(send_chat_message=False)) == 0
        assert all(p.inbox == [] for p in host.players.values())

    def test_attacker_disconnected(self):
        host, broadcaster = _make_host()
        assert broadcaster.announce(3, LeashConfig()) == 0
        assert all(p.inbox == [] for p in host.players.values())

    def test_attacker_unknown(self):
        host, broadcaster = _make_host()
        assert broadcaster.announce(99, LeashConfig()) == 0
