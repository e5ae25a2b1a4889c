import uuid

from sqlalchemy import Column, String, Text, Uuid

from db.base import Base


class Team(Base):
    """
    Model for teams. Tasks belong to at most one team and are removed
    together with it (see Task.team).
    """
    __tablename__ = "teams"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)

    def __repr__(self) -> str:
        return f"<Team(id={self.id}, name={self.name})>"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
        }
