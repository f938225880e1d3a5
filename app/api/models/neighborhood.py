from sqlalchemy import Column, Integer, String

from app.db.base_class import Base


# Tabela global (compartilhada por todos os usuários)
class Neighborhood(Base):
    __tablename__ = "neighborhoods"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), unique=True, nullable=False)
