from typing import Any, Dict, Optional
from pydantic import BaseModel, ConfigDict, Field


class ValidateVoterCommand(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    voter_id: Optional[str] = Field(default=None, alias="voterId")


class SubmitVoteCommand(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    voter_id: Optional[str] = Field(default=None, alias="voterId")
    # position -> candidate id
    selected_candidates: Optional[Dict[str, Any]] = Field(default=None, alias="selectedCandidates")


class UpdateVotesCommand(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    votes: Optional[Dict[str, Any]] = None
    admin_password: Optional[str] = Field(default=None, alias="adminPassword")


class UpdateConfigCommand(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    start_time: Optional[str] = Field(default=None, alias="startTime")
    end_time: Optional[str] = Field(default=None, alias="endTime")
    admin_password: Optional[str] = Field(default=None, alias="adminPassword")


class ResetElectionCommand(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    admin_password: Optional[str] = Field(default=None, alias="adminPassword")
