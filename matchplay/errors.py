"""Exceptions raised for contract violations the models cannot rule out."""

from __future__ import annotations


class MatchplayError(Exception):
    pass


class InvalidRosterError(MatchplayError):
    """A side carries more players than its format allows."""


__all__ = ["InvalidRosterError", "MatchplayError"]
