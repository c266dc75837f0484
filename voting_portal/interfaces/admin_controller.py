from fastapi import APIRouter, Depends, HTTPException
from voting_portal.application.commands import ResetElectionCommand, UpdateConfigCommand, UpdateVotesCommand
from voting_portal.application.handlers import CommandBus
from voting_portal.domain.errors import VotingError
from voting_portal.infrastructure.models import SuccessResponse
from voting_portal.interfaces.dependencies import get_command_bus

router = APIRouter(prefix="/api", tags=["Admin"])


def _dispatch(command_bus: CommandBus, command):
    try:
        return command_bus.handle(command)
    except VotingError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))


@router.post("/update-votes", response_model=SuccessResponse)
def update_votes(command: UpdateVotesCommand, command_bus: CommandBus = Depends(get_command_bus)):
    return _dispatch(command_bus, command)


@router.post("/update-config", response_model=SuccessResponse)
def update_config(command: UpdateConfigCommand, command_bus: CommandBus = Depends(get_command_bus)):
    return _dispatch(command_bus, command)


@router.post("/reset", response_model=SuccessResponse)
def reset_election(command: ResetElectionCommand, command_bus: CommandBus = Depends(get_command_bus)):
    return _dispatch(command_bus, command)
