class GetElectionStatusQuery:
    pass  # Status is derived from the clock and the election window


class GetCandidatesQuery:
    pass


class GetElectionConfigQuery:
    pass


class GetResultsQuery:
    pass
