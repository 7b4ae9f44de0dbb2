from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Pilgrim:
    """Domain entity: a registered pilgrim.

    Plain data object; no database access lives here.
    """

    pilgrim_id: int
    name: str
    phone: str
    nationality: str
    special_need: str
    allergies: str
    age: int
