from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Actor classes that can hold a session."""

    ADMIN = "admin"
    PILGRIM = "pilgrim"


class BloodType(str, Enum):
    A_POS = "A+"
    A_NEG = "A-"
    B_POS = "B+"
    B_NEG = "B-"
    AB_POS = "AB+"
    AB_NEG = "AB-"
    O_POS = "O+"
    O_NEG = "O-"


class TransportType(str, Enum):
    """Transport modes used between the holy sites."""

    BUS = "Bus"
    TRAIN = "Train"
    SHUTTLE = "Shuttle"
