from sqlalchemy import Column, Integer, String

from app.db.base_class import Base


# Tabela global (compartilhada por todos os usuários)
class Specialty(Base):
    __tablename__ = "specialties"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), unique=True, nullable=False)
