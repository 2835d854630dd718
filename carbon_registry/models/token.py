"""
Token ownership model - exactly one current owner per minted credit.
"""

from sqlmodel import SQLModel, Field


class TokenOwner(SQLModel, table=True):
    """Token ownership table, kept apart from the credit's producer field."""
    __tablename__ = "token_owners"

    token_id: int = Field(
        ...,
        primary_key=True,
        foreign_key="carbon_credits.id",
        sa_column_kwargs={"autoincrement": False}
    )
    owner: str = Field(..., index=True)
