"""Strongly typed identifiers for profile entities.

Profile ids are opaque strings minted by an IdGenerator; user ids come
verbatim from the identity provider.
"""

from typing import NewType

ProfileId = NewType("ProfileId", str)
UserId = NewType("UserId", str)
