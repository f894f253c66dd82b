from dataclasses import dataclass
from typing import Optional

from app.models.note import AuthorKind


def normalize_email(raw_email: str) -> str:
    """Lower-case an email address. Format is validated at the API boundary."""
    return raw_email.strip().lower()


def derive_name(email: str) -> str:
    """Return the local-part of an email, i.e. everything before the first '@'."""
    return email.strip().split("@", 1)[0]


@dataclass(frozen=True)
class AuthorIdentity:
    """Who owns a note, or who is asking to change one.

    Emails compare case-insensitively (they are stored lower-cased).
    Wallet addresses compare exactly as supplied. An email identity never
    matches a wallet identity.
    """

    kind: AuthorKind
    value: str

    @classmethod
    def email(cls, raw_email: str) -> "AuthorIdentity":
        return cls(AuthorKind.EMAIL, normalize_email(raw_email))

    @classmethod
    def wallet(cls, raw_address: str) -> "AuthorIdentity":
        return cls(AuthorKind.WALLET, raw_address.strip())

    @classmethod
    def parse(cls, raw: str) -> "AuthorIdentity":
        """Build an identity from an untagged string such as a path or query value."""
        if "@" in raw:
            return cls.email(raw)
        return cls.wallet(raw)

    @property
    def is_blank(self) -> bool:
        return not self.value

    def matches(self, other: "AuthorIdentity") -> bool:
        if self.kind != other.kind:
            return False
        if self.kind == AuthorKind.EMAIL:
            return self.value.lower() == other.value.lower()
        return self.value == other.value

    def __str__(self) -> str:
        return f"{self.kind.value}:{self.value}"


def identity_of(note) -> AuthorIdentity:
    """The stored owner identity of a note."""
    return AuthorIdentity(AuthorKind(note.author_kind), note.author_identity)


def resolve_author_name(
    identity: AuthorIdentity, author_name: Optional[str], raw_email: Optional[str] = None
) -> str:
    """Pick the display name for a new note.

    An explicit name wins. Email authors otherwise get the local-part of the
    email as they typed it; wallet authors get their address.
    """
    if author_name and author_name.strip():
        return author_name.strip()
    if identity.kind == AuthorKind.EMAIL:
        return derive_name(raw_email or identity.value)
    return identity.value
