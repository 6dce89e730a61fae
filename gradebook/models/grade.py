from sqlalchemy import (
    CheckConstraint, Column, DateTime, ForeignKey, Index, Integer, Numeric, String, func
)
from sqlalchemy.orm import relationship
from gradebook.core.database import Base

NOTE_MIN = 0
NOTE_MAX = 20
COEFFICIENT_MIN = 1
COEFFICIENT_MAX = 10
MATIERE_MAX_LENGTH = 100


class Grade(Base):
    __tablename__ = "notes"

    id = Column(Integer, primary_key=True)
    etudiant_id = Column(
        Integer,
        ForeignKey("etudiants.id", ondelete="CASCADE"),
        nullable=False
    )
    matiere = Column(String(MATIERE_MAX_LENGTH), nullable=False)
    note = Column(Numeric(4, 2), nullable=False)
    coefficient = Column(Integer, nullable=False, default=1, server_default="1")
    date_saisie = Column(DateTime, nullable=False, server_default=func.now())

    etudiant = relationship("Student", back_populates="notes")

    __table_args__ = (
        CheckConstraint(f"note >= {NOTE_MIN} AND note <= {NOTE_MAX}", name="ck_notes_note_range"),
        CheckConstraint(
            f"coefficient >= {COEFFICIENT_MIN} AND coefficient <= {COEFFICIENT_MAX}",
            name="ck_notes_coefficient_range"
        ),
        Index("idx_notes_etudiant", "etudiant_id"),
    )
