import json
from pathlib import Path

from sqlalchemy.exc import SQLAlchemyError

from voting_portal.config import DATA_DIR, DATABASE_URL
from voting_portal.infrastructure.database import Base, make_engine, make_session_factory
from voting_portal.infrastructure.document_repo import DocumentRepository


class PersistenceError(Exception):
    pass


class DocumentNotFoundError(LookupError):
    pass


def _dump(name: str, document) -> str:
    try:
        return json.dumps(document, indent=2)
    except (TypeError, ValueError) as e:
        raise PersistenceError(f"Could not serialize {name}: {e}") from e


class JsonFilePersistence:
    """
    Keeps each table as its own JSON file inside ``data_dir``.
    Every save rewrites the whole file.
    """

    def __init__(self, data_dir):
        self.data_dir = Path(data_dir)

    def path_for(self, name: str) -> Path:
        return self.data_dir / f"{name}.json"

    def load(self, name: str):
        path = self.path_for(name)
        if not path.exists():
            raise DocumentNotFoundError(f"{path.name} not found")
        try:
            with path.open(encoding="utf-8") as f:
                return json.load(f)
        except (OSError, ValueError) as e:
            raise PersistenceError(f"Could not read {path.name}: {e}") from e

    def save(self, name: str, document) -> None:
        path = self.path_for(name)
        body = _dump(name, document)
        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
            path.write_text(body, encoding="utf-8")
        except OSError as e:
            raise PersistenceError(f"Could not write {path.name}: {e}") from e


class SqlDocumentPersistence:
    """
    Stores the same documents as rows of a single ``documents`` table.
    """

    def __init__(self, engine):
        self.engine = engine
        self.SessionLocal = make_session_factory(engine)
        Base.metadata.create_all(bind=engine)

    def load(self, name: str):
        try:
            with self.SessionLocal() as db:
                document = DocumentRepository(db).get_document(name)
                body = document.body if document is not None else None
        except SQLAlchemyError as e:
            raise PersistenceError(f"Could not read {name}: {e}") from e

        if body is None:
            raise DocumentNotFoundError(f"{name} not found")
        try:
            return json.loads(body)
        except ValueError as e:
            raise PersistenceError(f"Could not parse {name}: {e}") from e

    def save(self, name: str, document) -> None:
        body = _dump(name, document)
        try:
            with self.SessionLocal() as db:
                DocumentRepository(db).save_document(name, body)
        except SQLAlchemyError as e:
            raise PersistenceError(f"Could not write {name}: {e}") from e


def build_persistence(data_dir=DATA_DIR, database_url=DATABASE_URL):
    if database_url:
        return SqlDocumentPersistence(make_engine(database_url))
    return JsonFilePersistence(data_dir)
