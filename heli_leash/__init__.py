"""Heli Leash Control — keeps a badly damaged patrol helicopter near its attacker."""

__version__ = "1.0.15"
