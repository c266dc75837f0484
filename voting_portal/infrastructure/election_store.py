import copy
import logging
import threading
from typing import Callable, Dict, List, Optional

from voting_portal.config import DEFAULT_WINDOW_HOURS
from voting_portal.domain.election import ElectionWindow, canonical_voter_id, utc_now
from voting_portal.domain.errors import BadRequestError
from voting_portal.infrastructure.persistence import DocumentNotFoundError, PersistenceError

logger = logging.getLogger(__name__)

CANDIDATES = "candidates"
VOTERS = "voters"
CONFIG = "electionConfig"
DATA = "electionData"


def candidate_key(candidate_id) -> str:
    # 1 and 1.0 name the same candidate
    if isinstance(candidate_id, float) and candidate_id.is_integer():
        candidate_id = int(candidate_id)
    return str(candidate_id)


def initialize_votes(candidates: List[dict]) -> Dict[str, Dict[str, int]]:
    """
    Builds a zero-filled tally table with one entry per (position, candidate id).
    """
    votes: Dict[str, Dict[str, int]] = {}
    for candidate in candidates:
        votes.setdefault(candidate["position"], {})[candidate_key(candidate["id"])] = 0
    return votes


def _is_tally(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0


def _valid_candidates(document) -> bool:
    return isinstance(document, list) and all(
        isinstance(c, dict) and "id" in c and isinstance(c.get("position"), str) for c in document
    )


def _valid_voter_list(document) -> bool:
    return isinstance(document, list) and all(isinstance(v, str) for v in document)


def _valid_election_data(document) -> bool:
    if not isinstance(document, dict):
        return False
    votes = document.get("votes", {})
    voters = document.get("voters", {})
    return (
        isinstance(votes, dict)
        and all(isinstance(tallies, dict) for tallies in votes.values())
        and isinstance(voters, dict)
        and all(isinstance(record, dict) for record in voters.values())
    )


class ElectionStore:
    """
    Owns the candidates, eligible voters, election config and election data.

    Tables live in memory and each mutation is written back through the
    persistence backend. Writes are best effort: a failed write is logged and
    the in-memory state is kept as mutated.
    """

    def __init__(self, persistence, clock: Optional[Callable] = None, default_window_hours: int = DEFAULT_WINDOW_HOURS):
        self.persistence = persistence
        self.clock = clock or utc_now
        self.default_window_hours = default_window_hours
        self.lock = threading.RLock()

        self.candidates: List[dict] = []
        self.eligible_voters: List[str] = []
        self._eligible = set()
        self.window = ElectionWindow.starting_at(self.clock(), default_window_hours)
        self.votes: Dict[str, Dict[str, int]] = {}
        self.voters: Dict[str, Dict[str, bool]] = {}

    # Loading

    def _load_document(self, name: str, default, is_valid):
        try:
            document = self.persistence.load(name)
        except DocumentNotFoundError:
            logger.warning("%s not found, using default", name)
            return default
        except PersistenceError as e:
            logger.error("Error loading %s: %s", name, e)
            return default

        if not is_valid(document):
            logger.error("%s has an unexpected shape, using default", name)
            return default
        return document

    def _load_window(self) -> ElectionWindow:
        default = ElectionWindow.starting_at(self.clock(), self.default_window_hours)
        config = self._load_document(CONFIG, None, lambda document: isinstance(document, dict))
        if config is None:
            return default
        try:
            return ElectionWindow.from_config(config)
        except ValueError as e:
            logger.error("Invalid %s (%s), using default", CONFIG, e)
            return default

    def _merge_votes(self, persisted: Dict[str, Dict]) -> Dict[str, Dict[str, int]]:
        votes = initialize_votes(self.candidates)
        for position, tallies in persisted.items():
            for candidate_id, count in tallies.items():
                if position not in votes or candidate_key(candidate_id) not in votes[position]:
                    logger.warning("Dropping tally for unknown candidate %s/%s", position, candidate_id)
                    continue
                if not _is_tally(count):
                    logger.warning("Dropping invalid tally %r for %s/%s", count, position, candidate_id)
                    continue
                votes[position][candidate_key(candidate_id)] = count
        return votes

    def _merge_voters(self, persisted: Dict[str, Dict]) -> Dict[str, Dict[str, bool]]:
        voters: Dict[str, Dict[str, bool]] = {}
        for voter_id, record in persisted.items():
            positions = voters.setdefault(canonical_voter_id(voter_id), {})
            positions.update({position: True for position, voted in record.items() if voted})
        return voters

    def load_all(self) -> None:
        with self.lock:
            self.candidates = self._load_document(CANDIDATES, [], _valid_candidates)
            self.eligible_voters = self._load_document(VOTERS, [], _valid_voter_list)
            self._eligible = {canonical_voter_id(v) for v in self.eligible_voters}
            self.window = self._load_window()

            data = self._load_document(DATA, {}, _valid_election_data)
            self.votes = self._merge_votes(data.get("votes", {}))
            self.voters = self._merge_voters(data.get("voters", {}))

        logger.info(
            "Loaded %d candidates and %d eligible voters, window %s to %s",
            len(self.candidates),
            len(self.eligible_voters),
            self.window.start_time,
            self.window.end_time,
        )

    # Persistence

    def persist(self, table: str) -> bool:
        documents = {
            CANDIDATES: lambda: self.candidates,
            VOTERS: lambda: self.eligible_voters,
            CONFIG: self.window.to_config,
            DATA: lambda: {"votes": self.votes, "voters": self.voters},
        }
        try:
            self.persistence.save(table, documents[table]())
        except PersistenceError as e:
            logger.error("Error saving %s: %s", table, e)
            return False
        return True

    # Reads

    def status(self) -> str:
        return self.window.status(self.clock())

    def has_started(self) -> bool:
        return self.window.has_started(self.clock())

    def config(self) -> dict:
        return self.window.to_config()

    def list_candidates(self) -> List[dict]:
        return copy.deepcopy(self.candidates)

    def is_eligible(self, voter_id: str) -> bool:
        return canonical_voter_id(voter_id) in self._eligible

    def voter_record(self, voter_id: str) -> Dict[str, bool]:
        with self.lock:
            return dict(self.voters.get(canonical_voter_id(voter_id), {}))

    def tallies(self) -> Dict[str, Dict[str, int]]:
        with self.lock:
            return copy.deepcopy(self.votes)

    def find_candidate(self, position: str, candidate_id) -> Optional[dict]:
        for candidate in self.candidates:
            if candidate["position"] == position and candidate_key(candidate["id"]) == candidate_key(candidate_id):
                return candidate
        return None

    # Mutations

    def record_votes(self, voter_id: str, selections: Dict[str, object]) -> List[str]:
        """
        Records one vote per position for the voter.
        A selection counts only when the candidate id is non-empty, the voter
        has not voted that position yet and the candidate stands for that
        position. Other selections are skipped silently.
        :return: the positions that were recorded.
        """
        key = canonical_voter_id(voter_id)
        accepted = []
        with self.lock:
            record = self.voters.get(key, {})
            for position, candidate_id in selections.items():
                if not candidate_id or record.get(position):
                    continue
                candidate = self.find_candidate(position, candidate_id)
                if candidate is None:
                    continue
                tallies = self.votes.setdefault(position, {})
                tally_key = candidate_key(candidate["id"])
                tallies[tally_key] = tallies.get(tally_key, 0) + 1
                record[position] = True
                accepted.append(position)

            if accepted:
                self.voters[key] = record
                self.persist(DATA)

        if accepted:
            logger.info("Recorded votes from %s for %s", key, ", ".join(accepted))
        return accepted

    def replace_votes(self, votes: Dict[str, Dict]) -> None:
        with self.lock:
            replacement = initialize_votes(self.candidates)
            for position, tallies in votes.items():
                if position not in replacement or not isinstance(tallies, dict):
                    raise BadRequestError("Invalid votes data")
                for candidate_id, count in tallies.items():
                    if candidate_key(candidate_id) not in replacement[position] or not _is_tally(count):
                        raise BadRequestError("Invalid votes data")
                    replacement[position][candidate_key(candidate_id)] = count
            self.votes = replacement
            self.persist(DATA)
        logger.info("Tallies overwritten by admin")

    def update_config(self, start_time: str, end_time: str) -> None:
        try:
            window = ElectionWindow(start_time, end_time)
        except ValueError:
            raise BadRequestError("Invalid start or end time")
        with self.lock:
            self.window = window
            self.persist(CONFIG)
        logger.info("Election window set to %s - %s", start_time, end_time)

    def reset(self) -> None:
        with self.lock:
            self.votes = initialize_votes(self.candidates)
            self.voters = {}
            self.persist(DATA)
        logger.info("Election data reset")
