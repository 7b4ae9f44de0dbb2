from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Admin:
    """Administrator account as seen outside the gateway (no password)."""

    admin_id: int
    name: str
    phone: str
    email: str
