from __future__ import annotations

from typing import Optional

from sqlalchemy import ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base_class import Base


class Schedule(Base):
    """
    Uma linha por (médico, local, bairro, dia da semana, início, fim).

    Nunca é atualizada individualmente: salvar um médico apaga e recria todas as linhas dele.
    """
    __tablename__ = "schedules"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)

    doctor_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("doctors.id", ondelete="CASCADE"), index=True, nullable=False
    )
    # dono (escopo de acesso por linha)
    user_id: Mapped[Optional[int]] = mapped_column(Integer, ForeignKey("users.id"), index=True, nullable=True)

    place_name: Mapped[str] = mapped_column(String(160), nullable=False)
    neighborhood_id: Mapped[Optional[int]] = mapped_column(Integer, ForeignKey("neighborhoods.id"), nullable=True)

    day_of_week: Mapped[str] = mapped_column(String(16), nullable=False)

    # horário de parede "HH:MM", sem data e sem fuso
    start_time: Mapped[str] = mapped_column(String(8), nullable=False)
    end_time: Mapped[str] = mapped_column(String(8), nullable=False)

    doctor = relationship("Doctor", back_populates="schedules")
