from datetime import datetime, timezone
from typing import Dict
from pydantic import BaseModel
from sqlalchemy import Column, DateTime, String, Text
from voting_portal.infrastructure.database import Base


class Document(Base):
    __tablename__ = "documents"
    name = Column(String, primary_key=True)  # e.g. "electionData"
    body = Column(Text, nullable=False)
    updated_at = Column(
        DateTime,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )


class ElectionStatusResponse(BaseModel):
    status: str


class ElectionConfigResponse(BaseModel):
    startTime: str
    endTime: str


class ResultsResponse(BaseModel):
    votes: Dict[str, Dict[str, int]]


class SuccessResponse(BaseModel):
    success: bool
