"""Tests for AttackerTracker — last-attacker association lifecycle.

Covers:
- Latest record wins, regardless of how many came before
- Forget removes; a later record re-establishes
- Unknown/missing attackers and stale entity handles are ignored
- Concurrent records on different entities do not interfere
- A forget racing in-flight records on a destroyed entity sticks
"""

import sys
import os
import threading

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from heli_leash.core.models import Vector3
from heli_leash.leash.tracker import AttackerTracker
from heli_leash.systems.host_sim import SimulatedHost


def _make_host(num_players: int = 3) -> SimulatedHost:
    host = SimulatedHost()
    host.spawn_entity(Vector3(0.0, 100.0, 0.0))
    for i in range(num_players):
        host.add_player(f"p{i}", Vector3(float(i), 0.0, 0.0))
    return host


def _make_tracker(host: SimulatedHost) -> AttackerTracker:
    return AttackerTracker(host, host)


class TestRecord:

    def test_absent_before_any_damage(self):
        host = _make_host()
        tracker = _make_tracker(host)
        assert tracker.current_attacker(1) is None
        assert 1 not in tracker

    def test_most_recent_attacker_wins(self):
        host = _make_host()
        tracker = _make_tracker(host)
        for pid in (1, 2, 3, 2, 1, 3):
            assert tracker.record(1, pid) is True
        assert tracker.current_attacker(1) == 3
        assert len(tracker) == 1

    def test_same_attacker_overwrites(self):
        host = _make_host()
        tracker = _make_tracker(host)
        tracker.record(1, 2)
        tracker.record(1, 2)
        assert tracker.associations() == {1: 2}

    def test_none_attacker_ignored(self):
        host = _make_host()
        tracker = _make_tracker(host)
        tracker.record(1, 1)
        assert tracker.record(1, None) is False
        assert tracker.current_attacker(1) == 1

    def test_unknown_attacker_ignored(self):
        host = _make_host()
        tracker = _make_tracker(host)
        assert tracker.record(1, 99) is False
        assert tracker.current_attacker(1) is None

    def test_stale_entity_ignored(self):
        host = _make_host()
        tracker = _make_tracker(host)
        host.destroy_entity(1)
        assert tracker.record(1, 1) is False
        assert 1 not in tracker

    def test_disconnected_attacker_still_recorded(self):
        """Connectivity matters for enforcement, not for remembering who shot."""
        host = _make_host()
        host.disconnect(2)
        tracker = _make_tracker(host)
        assert tracker.record(1, 2) is True
        assert tracker.current_attacker(1) == 2


class TestForget:

    def test_forget_removes(self):
        host = _make_host()
        tracker = _make_tracker(host)
        tracker.record(1, 1)
        assert tracker.forget(1) is True
        assert tracker.current_attacker(1) is None

    def test_forget_absent_is_noop(self):
        host = _make_host()
        tracker = _make_tracker(host)
        assert tracker.forget(42) is False
        assert len(tracker) == 0

    def test_record_after_forget_reestablishes(self):
        host = _make_host()
        tracker = _make_tracker(host)
        tracker.record(1, 1)
        tracker.forget(1)
        tracker.record(1, 3)
        assert tracker.current_attacker(1) == 3

    def test_associations_is_a_copy(self):
        host = _make_host()
        tracker = _make_tracker(host)
        tracker.record(1, 1)
        snap = tracker.associations()
        snap[1] = 99
        assert tracker.current_attacker(1) == 1

    def test_clear(self):
        host = _make_host()
        host.spawn_entity(Vector3(10.0, 100.0, 0.0))
        tracker = _make_tracker(host)
        tracker.record(1, 1)
        tracker.record(2, 2)
        tracker.clear()
        assert len(tracker) == 0


class TestConcurrentRecords:

    def test_parallel_entities_do_not_corrupt_each_other(self):
        host = SimulatedHost()
        for i in range(8):
            host.spawn_entity(Vector3(float(i), 100.0, 0.0))
        for i in range(8):
            host.add_player(f"p{i}", Vector3())
        tracker = _make_tracker(host)

        def hammer(eid: int) -> None:
            for _ in range(500):
                tracker.record(eid, eid)

        threads = [threading.Thread(target=hammer, args=(eid,)) for eid in range(1, 9)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert tracker.associations() == {eid: eid for eid in range(1, 9)}

    def test_forget_during_records_leaves_nothing_behind(self):
        host = _make_host(num_players=4)
        tracker = _make_tracker(host)
        go = threading.Event()

        def hammer(pid: int) -> None:
            go.wait()
            for _ in range(2000):
                tracker.record(1, pid)

        threads = [threading.Thread(target=hammer, args=(pid,)) for pid in range(1, 5)]
        for t in threads:
            t.start()
        go.set()
        host.destroy_entity(1)
        tracker.forget(1)
        for t in threads:
            t.join()

        assert 1 not in tracker
