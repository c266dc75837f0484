from fastapi import APIRouter, Depends, HTTPException
from voting_portal.application.queries import GetElectionConfigQuery, GetElectionStatusQuery, GetResultsQuery
from voting_portal.application.query_bus import QueryBus
from voting_portal.domain.errors import VotingError
from voting_portal.infrastructure.models import ElectionConfigResponse, ElectionStatusResponse, ResultsResponse
from voting_portal.interfaces.dependencies import get_query_bus

router = APIRouter(prefix="/api", tags=["Election"])


@router.get("/election-status", response_model=ElectionStatusResponse)
def get_election_status(query_bus: QueryBus = Depends(get_query_bus)):
    return query_bus.handle(GetElectionStatusQuery())


@router.get("/election-config", response_model=ElectionConfigResponse)
def get_election_config(query_bus: QueryBus = Depends(get_query_bus)):
    return query_bus.handle(GetElectionConfigQuery())


@router.get("/results", response_model=ResultsResponse)
def get_results(query_bus: QueryBus = Depends(get_query_bus)):
    try:
        return query_bus.handle(GetResultsQuery())
    except VotingError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))
