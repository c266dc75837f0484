class VotingError(ValueError):
    status_code = 400


class BadRequestError(VotingError):
    status_code = 400


class ForbiddenError(VotingError):
    status_code = 403
