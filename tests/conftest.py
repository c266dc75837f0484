import pytest
from fastapi.testclient import TestClient

from tests.election_data import ADMIN_PASSWORD, CANDIDATES, ELIGIBLE_VOTERS, END, START, FakeClock, write_document
from voting_portal.infrastructure.election_store import ElectionStore
from voting_portal.infrastructure.persistence import JsonFilePersistence
from voting_portal.main import create_app


@pytest.fixture
def data_dir(tmp_path):
    write_document(tmp_path, "candidates", CANDIDATES)
    write_document(tmp_path, "voters", ELIGIBLE_VOTERS)
    write_document(tmp_path, "electionConfig", {"startTime": START, "endTime": END})
    return tmp_path


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store(data_dir, clock):
    election_store = ElectionStore(JsonFilePersistence(data_dir), clock=clock)
    election_store.load_all()
    return election_store


@pytest.fixture
def client(store):
    with TestClient(create_app(store=store, admin_password=ADMIN_PASSWORD)) as client:
        yield client
