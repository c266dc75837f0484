import logging

from voting_portal.application.commands import (
    ResetElectionCommand,
    SubmitVoteCommand,
    UpdateConfigCommand,
    UpdateVotesCommand,
    ValidateVoterCommand,
)
from voting_portal.application.queries import (
    GetCandidatesQuery,
    GetElectionConfigQuery,
    GetElectionStatusQuery,
    GetResultsQuery,
)
from voting_portal.application.query_bus import QueryBus
from voting_portal.config import ADMIN_PASSWORD
from voting_portal.domain.election import ENDED, PENDING
from voting_portal.domain.errors import BadRequestError, ForbiddenError
from voting_portal.infrastructure.election_store import ElectionStore
from voting_portal.security import require_admin

logger = logging.getLogger(__name__)


def ensure_voting_open(store: ElectionStore):
    status = store.status()
    if status == PENDING:
        raise ForbiddenError("Election has not started yet.")
    if status == ENDED:
        raise ForbiddenError("Election has ended.")


class GetElectionStatusHandler:
    def __init__(self, store: ElectionStore):
        self.store = store

    def handle(self, query: GetElectionStatusQuery):
        return {"status": self.store.status()}


class GetCandidatesHandler:
    def __init__(self, store: ElectionStore):
        self.store = store

    def handle(self, query: GetCandidatesQuery):
        return self.store.list_candidates()


class GetElectionConfigHandler:
    def __init__(self, store: ElectionStore):
        self.store = store

    def handle(self, query: GetElectionConfigQuery):
        return self.store.config()


class GetResultsHandler:
    def __init__(self, store: ElectionStore):
        self.store = store

    def handle(self, query: GetResultsQuery):
        # Results stay readable after the election ends
        if not self.store.has_started():
            raise ForbiddenError("Election has not started yet.")
        return {"votes": self.store.tallies()}


class ValidateVoterHandler:
    def __init__(self, store: ElectionStore):
        self.store = store

    def handle(self, command: ValidateVoterCommand):
        ensure_voting_open(self.store)
        if not command.voter_id or not command.voter_id.strip():
            raise BadRequestError("Voter ID is required")
        if not self.store.is_eligible(command.voter_id):
            raise ForbiddenError("Invalid voter ID")
        return {"isEligible": True, "hasVoted": self.store.voter_record(command.voter_id)}


class SubmitVoteHandler:
    def __init__(self, store: ElectionStore):
        self.store = store

    def handle(self, command: SubmitVoteCommand):
        ensure_voting_open(self.store)
        if not command.voter_id or not command.voter_id.strip() or not command.selected_candidates:
            raise BadRequestError("Voter ID and selections required")
        if not self.store.is_eligible(command.voter_id):
            raise ForbiddenError("Unauthorized voter")

        # Positions that fail validation are skipped without feedback;
        # the request only fails when nothing was recorded.
        accepted = self.store.record_votes(command.voter_id, command.selected_candidates)
        if not accepted:
            raise BadRequestError("No valid votes to record")

        # Keyed by the submitted id; the voting page looks its record up that way.
        return {
            "votes": self.store.tallies(),
            "hasVoted": {command.voter_id: self.store.voter_record(command.voter_id)},
        }


class UpdateVotesHandler:
    def __init__(self, store: ElectionStore, admin_password: str):
        self.store = store
        self.admin_password = admin_password

    def handle(self, command: UpdateVotesCommand):
        require_admin(command.admin_password, self.admin_password)
        if command.votes is None:
            raise BadRequestError("Votes data required")
        self.store.replace_votes(command.votes)
        return {"success": True}


class UpdateConfigHandler:
    def __init__(self, store: ElectionStore, admin_password: str):
        self.store = store
        self.admin_password = admin_password

    def handle(self, command: UpdateConfigCommand):
        require_admin(command.admin_password, self.admin_password)
        if not command.start_time or not command.end_time:
            raise BadRequestError("Start and end times required")
        self.store.update_config(command.start_time, command.end_time)
        return {"success": True}


class ResetElectionHandler:
    def __init__(self, store: ElectionStore, admin_password: str):
        self.store = store
        self.admin_password = admin_password

    def handle(self, command: ResetElectionCommand):
        require_admin(command.admin_password, self.admin_password)
        self.store.reset()
        return {"success": True}


class CommandBus:
    def __init__(self):
        self.handlers = {}

    def register_handler(self, command_type, handler):
        self.handlers[command_type] = handler

    def handle(self, command):
        command_type = type(command)
        if command_type not in self.handlers:
            raise ValueError(f"No handler registered for {command_type}")
        return self.handlers[command_type].handle(command)


def build_buses(store: ElectionStore, admin_password: str = ADMIN_PASSWORD):
    """
    Creates a command bus and a query bus whose handlers share ``store``.
    """
    command_bus = CommandBus()
    command_bus.register_handler(ValidateVoterCommand, ValidateVoterHandler(store))
    command_bus.register_handler(SubmitVoteCommand, SubmitVoteHandler(store))
    command_bus.register_handler(UpdateVotesCommand, UpdateVotesHandler(store, admin_password))
    command_bus.register_handler(UpdateConfigCommand, UpdateConfigHandler(store, admin_password))
    command_bus.register_handler(ResetElectionCommand, ResetElectionHandler(store, admin_password))

    query_bus = QueryBus()
    query_bus.register_handler(GetElectionStatusQuery, GetElectionStatusHandler(store))
    query_bus.register_handler(GetCandidatesQuery, GetCandidatesHandler(store))
    query_bus.register_handler(GetElectionConfigQuery, GetElectionConfigHandler(store))
    query_bus.register_handler(GetResultsQuery, GetResultsHandler(store))

    logger.debug("Registered %d command and %d query handlers", len(command_bus.handlers), len(query_bus.handlers))
    return command_bus, query_bus
