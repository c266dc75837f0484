from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse
from voting_portal.application.commands import SubmitVoteCommand, ValidateVoterCommand
from voting_portal.application.handlers import CommandBus
from voting_portal.domain.errors import ForbiddenError, VotingError
from voting_portal.interfaces.dependencies import get_command_bus

router = APIRouter(prefix="/api", tags=["Votes"])


@router.post("/validate-voter")
def validate_voter(command: ValidateVoterCommand, command_bus: CommandBus = Depends(get_command_bus)):
    try:
        return command_bus.handle(command)
    except ForbiddenError as e:
        # The voting page reads isEligible on rejections too
        return JSONResponse(status_code=e.status_code, content={"isEligible": False, "error": str(e)})
    except VotingError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))


@router.post("/submit-vote")
def submit_vote(command: SubmitVoteCommand, command_bus: CommandBus = Depends(get_command_bus)):
    try:
        return command_bus.handle(command)
    except VotingError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))
