from datetime import datetime

from sqlalchemy import Column, DateTime, String, Text
from sqlmodel import Field, SQLModel


class StoredDiff(SQLModel, table=True):
    __tablename__ = "stored_diffs"
    key: str = Field(primary_key=True)
    provider: str = Field(..., index=True, nullable=False)
    review_id: str = Field(..., index=True, nullable=False)
    position: int = Field(default=0, nullable=False, description="Index in the review's original file order")
    path: str = Field(..., nullable=False)
    change_kind: str = Field(..., sa_column=Column(String(16), nullable=False))
    status: str = Field(..., sa_column=Column(String(16), nullable=False))
    additions: int = Field(default=0, nullable=False)
    deletions: int = Field(default=0, nullable=False)
    rendered: str = Field(..., sa_column=Column(Text, nullable=False))
    diff_json: str = Field(..., sa_column=Column(Text, nullable=False), description="UnifiedDiff as JSON")
    updated_at: datetime = Field(default_factory=datetime.now, sa_column=Column(DateTime(timezone=False), nullable=False))
