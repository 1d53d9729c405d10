"""Credential record type."""
from __future__ import annotations

from dataclasses import dataclass
from typing import List

from pydantic import TypeAdapter


@dataclass(frozen=True)
class Credential:
    username: str
    password_hash: str

    def to_dict(self) -> dict:
        return {"username": self.username, "password_hash": self.password_hash}

    def __repr__(self) -> str:
        return f"Credential(username={self.username!r}, password_hash=<redacted>)"


CREDENTIAL_LIST = TypeAdapter(List[Credential])
