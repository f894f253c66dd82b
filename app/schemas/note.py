from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field, field_validator, model_validator

from app.models.note import AuthorKind
from app.utils.validation import (
    normalize_tx_hash,
    validate_tx_hash,
    validate_wallet_address,
)


class NoteBase(BaseModel):
    """Base note schema with common fields."""

    title: str = Field(
        ..., min_length=1, max_length=200, description="Short note title (1-200 chars)"
    )
    content: str = Field(..., min_length=1, description="Full note content")

    @field_validator("title", "content")
    @classmethod
    def not_blank(cls, v):
        if not v.strip():
            raise ValueError("must not be blank")
        return v


class NoteCreate(NoteBase):
    """Schema for creating a note. Exactly one author identity is required."""

    author_email: Optional[EmailStr] = Field(None, description="Author email address")
    wallet_address: Optional[str] = Field(
        None, max_length=255, description="Author wallet address"
    )
    author_name: Optional[str] = Field(
        None,
        max_length=150,
        description="Display name; derived from the email when omitted",
    )

    # Optional on-chain metadata
    blockchain_tx_hash: Optional[str] = Field(
        None, max_length=66, description="Transaction hash of the on-chain copy"
    )
    blockchain_note_id: Optional[int] = Field(None, ge=0, description="On-chain note id")
    is_blockchain_note: bool = Field(False, description="Note has an on-chain copy")

    @field_validator("wallet_address")
    @classmethod
    def validate_wallet(cls, v):
        if v is not None and not validate_wallet_address(v):
            raise ValueError("wallet_address must be 0x followed by 40 hex characters")
        return v.strip() if v is not None else v

    @field_validator("blockchain_tx_hash")
    @classmethod
    def validate_tx_hash_field(cls, v):
        if v is not None and not validate_tx_hash(v):
            raise ValueError(
                "blockchain_tx_hash must be 0x followed by 64 hex characters"
            )
        return normalize_tx_hash(v) if v is not None else v

    @model_validator(mode="after")
    def exactly_one_author(self):
        if (self.author_email is None) == (self.wallet_address is None):
            raise ValueError("Provide exactly one of author_email or wallet_address")
        return self

    @model_validator(mode="after")
    def blockchain_flag_needs_hash(self):
        if self.is_blockchain_note and not self.blockchain_tx_hash:
            raise ValueError("is_blockchain_note requires blockchain_tx_hash")
        return self


class BlockchainNoteCreate(NoteCreate):
    """Schema for storing a note that already has an on-chain copy."""

    blockchain_tx_hash: str = Field(
        ..., max_length=66, description="Transaction hash of the on-chain copy"
    )
    is_blockchain_note: bool = Field(True, description="Always true for this route")


class NoteUpdate(BaseModel):
    """Schema for updating a note. Omitted fields remain unchanged."""

    title: Optional[str] = Field(None, min_length=1, max_length=200)
    content: Optional[str] = Field(None, min_length=1)

    @field_validator("title", "content")
    @classmethod
    def not_blank(cls, v):
        if v is not None and not v.strip():
            raise ValueError("must not be blank")
        return v


class NoteResponse(BaseModel):
    """Projection of a note returned to callers."""

    id: int
    uuid: UUID
    title: str
    content: str
    author_kind: AuthorKind
    author_identity: str
    author_name: str
    blockchain_tx_hash: Optional[str] = None
    blockchain_note_id: Optional[int] = None
    is_blockchain_note: bool = False
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class TransactionVerification(BaseModel):
    """Result of the local transaction lookup. No ledger is consulted."""

    verified: bool
    transaction_hash: str
    note_count: int
    notes: List[NoteResponse]
