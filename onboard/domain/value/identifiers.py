"""Strongly typed identifiers for onboarding entities.

Identity provider user IDs are opaque strings ("auth0|65f1..."), so they are
typed as str rather than UUID.
"""

from typing import NewType

UserId = NewType("UserId", str)
