"""Per data source settings and API credentials."""

from __future__ import annotations

import random
from dataclasses import dataclass, field


@dataclass
class Credentials:
    """Values required for authenticating with a web API."""

    name: str
    username: str = ""
    password: str = ""
    key: str = ""
    secret: str = ""


@dataclass
class DataSourceConfig:
    """Configuration specific to one data source."""

    name: str
    ttl: int = 0
    creds: dict[str, Credentials] = field(default_factory=dict)

    def add_credentials(self, cred: Credentials | None) -> None:
        """Store the credentials under their name, replacing any with the same name."""
        if cred is None or not cred.name:
            raise ValueError("AddCredentials: The Credentials argument is invalid")
        self.creds[cred.name] = cred

    def get_credentials(self) -> Credentials | None:
        """Return a randomly selected set of credentials, or None if there are none."""
        if not self.creds:
            return None
        return random.choice(list(self.creds.values()))