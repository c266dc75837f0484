import logging
from datetime import timedelta

import pytest
from tests.election_data import CANDIDATES, DURING, END, START, FakeClock, read_document, write_document

from voting_portal.domain.errors import BadRequestError
from voting_portal.infrastructure.election_store import ElectionStore, candidate_key, initialize_votes
from voting_portal.infrastructure.persistence import JsonFilePersistence, PersistenceError


class FailingPersistence(JsonFilePersistence):
    def save(self, name, document):
        raise PersistenceError(f"disk full while writing {name}")


def make_store(data_dir, persistence_class=JsonFilePersistence):
    store = ElectionStore(persistence_class(data_dir), clock=FakeClock(DURING))
    store.load_all()
    return store


def test_initialize_votes():
    assert initialize_votes(CANDIDATES) == {
        "President": {"1": 0, "2": 0},
        "Secretary": {"3": 0, "4": 0},
    }
    assert initialize_votes([]) == {}


def test_load_all_with_no_files(tmp_path, caplog):
    with caplog.at_level(logging.WARNING):
        store = make_store(tmp_path)

    assert store.candidates == []
    assert store.eligible_voters == []
    assert store.votes == {}
    assert store.voters == {}
    assert store.window.start == DURING
    assert store.window.end == DURING + timedelta(hours=24)
    assert store.status() == "active"
    assert "candidates not found" in caplog.text


def test_load_all_does_not_write_files(tmp_path):
    make_store(tmp_path)

    assert list(tmp_path.iterdir()) == []


def test_load_all_with_unparsable_files(tmp_path, caplog):
    for name in ("candidates", "voters", "electionConfig", "electionData"):
        (tmp_path / f"{name}.json").write_text("{not json", encoding="utf-8")

    with caplog.at_level(logging.ERROR):
        store = make_store(tmp_path)

    assert store.candidates == []
    assert store.eligible_voters == []
    assert store.window.start == DURING
    assert store.votes == {}
    assert "Error loading candidates" in caplog.text


def test_load_all_rejects_wrong_shapes(tmp_path):
    write_document(tmp_path, "candidates", {"id": 1})
    write_document(tmp_path, "voters", [1, 2, 3])
    write_document(tmp_path, "electionConfig", {"startTime": END, "endTime": START})
    write_document(tmp_path, "electionData", {"votes": [], "voters": {}})

    store = make_store(tmp_path)

    assert store.candidates == []
    assert store.eligible_voters == []
    assert store.window.start == DURING
    assert store.votes == {}


def test_load_all_backfills_votes(data_dir):
    write_document(
        data_dir,
        "electionData",
        {"votes": {"President": {"1": 5}}, "voters": {"A1": {"President": True}}},
    )

    store = make_store(data_dir)

    assert store.votes == {"President": {"1": 5, "2": 0}, "Secretary": {"3": 0, "4": 0}}
    assert store.voters == {"A1": {"President": True}}


def test_load_all_drops_tallies_for_unknown_candidates(data_dir):
    write_document(
        data_dir,
        "electionData",
        {"votes": {"President": {"1": 2, "9": 4}, "Treasurer": {"5": 1}}, "voters": {}},
    )

    store = make_store(data_dir)

    assert store.votes == {"President": {"1": 2, "2": 0}, "Secretary": {"3": 0, "4": 0}}


def test_load_all_merges_voter_id_variants(data_dir):
    write_document(
        data_dir,
        "electionData",
        {"votes": {}, "voters": {"a1": {"President": True}, "A1 ": {"Secretary": True}}},
    )

    store = make_store(data_dir)

    assert store.voters == {"A1": {"President": True, "Secretary": True}}


def test_record_votes_returns_accepted_positions(store):
    accepted = store.record_votes("A1", {"President": 2, "Secretary": 99})

    assert accepted == ["President"]
    assert store.votes["President"] == {"1": 0, "2": 1}
    assert store.voter_record("a1") == {"President": True}


def test_record_votes_never_double_counts(store):
    store.record_votes("A1", {"President": 1})

    assert store.record_votes("A1", {"President": 1}) == []
    assert store.votes["President"] == {"1": 1, "2": 0}


def test_persist_failure_keeps_memory_state(data_dir, caplog):
    store = make_store(data_dir, FailingPersistence)

    with caplog.at_level(logging.ERROR):
        accepted = store.record_votes("A1", {"President": 1})

    assert accepted == ["President"]
    assert store.votes["President"] == {"1": 1, "2": 0}
    assert "Error saving electionData" in caplog.text


def test_persist_reports_result(store):
    assert store.persist("electionData") is True


def test_replace_votes_is_all_or_nothing(store):
    store.record_votes("A1", {"President": 1})

    with pytest.raises(BadRequestError):
        store.replace_votes({"President": {"2": 4}, "Secretary": {"7": 1}})

    assert store.votes["President"] == {"1": 1, "2": 0}


def test_update_config_keeps_previous_on_error(store, data_dir):
    with pytest.raises(BadRequestError):
        store.update_config(END, START)

    assert store.config() == {"startTime": START, "endTime": END}
    assert read_document(data_dir, "electionConfig") == {"startTime": START, "endTime": END}


def test_reset_leaves_reference_data(store, data_dir):
    store.record_votes("A1", {"President": 1})

    store.reset()

    assert store.votes == initialize_votes(CANDIDATES)
    assert store.voters == {}
    assert read_document(data_dir, "candidates") == CANDIDATES
    assert store.is_eligible("A1")


@pytest.mark.parametrize("candidate_id, expected", [(1, "1"), (1.0, "1"), ("1", "1"), (1.5, "1.5"), ("p1", "p1")])
def test_candidate_key(candidate_id, expected):
    assert candidate_key(candidate_id) == expected


def test_replace_votes_accepts_float_keys_from_candidates(data_dir):
    write_document(data_dir, "candidates", [{"id": 7.0, "name": "Candidate F", "position": "Treasurer"}])
    store = make_store(data_dir)

    store.replace_votes({"Treasurer": {"7": 3}})

    assert store.votes == {"Treasurer": {"7": 3}}
