"""
Registration use case.
"""

from __future__ import annotations

from dataclasses import dataclass

from bookshelf.repositories.credential_repository import CredentialRepository

MAX_USERNAME_LENGTH = 150


class AuthError(Exception):
    """Base class for authentication-related exceptions."""


class RegistrationError(AuthError):
    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


@dataclass
class RegisterResult:
    username: str


@dataclass
class AuthService:
    """Validates registration input and hands it to the credential store."""

    repository: CredentialRepository

    def register(self, username: str, password: str) -> RegisterResult:
        username = (username or "").strip()
        if not username:
            raise RegistrationError("Username is required")
        if len(username) > MAX_USERNAME_LENGTH:
            raise RegistrationError(f"Username must be at most {MAX_USERNAME_LENGTH} characters")
        if not password:
            raise RegistrationError("Password is required")
        credential = self.repository.register(username, password)
        return RegisterResult(username=credential.username)
