from sqlalchemy.orm import Session

from voting_portal.infrastructure.models import Document


class DocumentRepository:
    def __init__(self, db: Session):
        self.db = db

    def get_document(self, name: str):
        return self.db.query(Document).filter(Document.name == name).first()

    def save_document(self, name: str, body: str):
        document = self.get_document(name)
        if document is None:
            document = Document(name=name, body=body)
            self.db.add(document)
        else:
            document.body = body
        self.db.commit()
        self.db.refresh(document)
        return document
