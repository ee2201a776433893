from datetime import datetime, timezone
from sqlmodel import Field, SQLModel
from sqlalchemy import Column, Text

class StorageRecord(SQLModel, table=True):
    """Registro chave/valor usado para persistir carrinhos serializados."""
    __tablename__ = "tb_storage_record"

    key: str = Field(primary_key=True, max_length=255)
    value: str = Field(sa_column=Column(Text, nullable=False))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc), index=True)
