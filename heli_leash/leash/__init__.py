"""Leash layer: attacker tracking, enforcement, announcements, event routing."""

from heli_leash.leash.broadcaster import NotificationBroadcaster
from heli_leash.leash.enforcer import LeashEnforcer
from heli_leash.leash.router import EventRouter
from heli_leash.leash.service import LeashService
from heli_leash.leash.tracker import AttackerTracker

__all__ = ["AttackerTracker", "EventRouter", "LeashEnforcer", "LeashService", "NotificationBroadcaster"]
