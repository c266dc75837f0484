from fastapi import APIRouter, Depends
from voting_portal.application.queries import GetCandidatesQuery
from voting_portal.application.query_bus import QueryBus
from voting_portal.interfaces.dependencies import get_query_bus

router = APIRouter(prefix="/api", tags=["Candidate"])


@router.get("/candidates")
def get_candidates(query_bus: QueryBus = Depends(get_query_bus)):
    return query_bus.handle(GetCandidatesQuery())
