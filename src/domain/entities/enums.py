"""
Chat Account Domain Enums

All enumeration types used across domain entities.
"""

from enum import Enum


class UserPresence(str, Enum):
    """Presence status shown next to a user in the chat UI"""

    ONLINE = "ONLINE"
    IDLE = "IDLE"
    DO_NOT_DISTURB = "DO_NOT_DISTURB"
    INVISIBLE = "INVISIBLE"
    OFFLINE = "OFFLINE"
