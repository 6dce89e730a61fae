from sqlalchemy import Column, Date, DateTime, Index, Integer, String, func
from sqlalchemy.orm import relationship
from gradebook.core.database import Base

NOM_MAX_LENGTH = 100
PRENOM_MAX_LENGTH = 100
CLASSE_MAX_LENGTH = 50
MATRICULE_MAX_LENGTH = 50


class Student(Base):
    __tablename__ = "etudiants"

    id = Column(Integer, primary_key=True)
    nom = Column(String(NOM_MAX_LENGTH), nullable=False)
    prenom = Column(String(PRENOM_MAX_LENGTH), nullable=False)
    classe = Column(String(CLASSE_MAX_LENGTH))
    date_naissance = Column(Date)
    matricule = Column(String(MATRICULE_MAX_LENGTH))
    date_inscription = Column(DateTime, nullable=False, server_default=func.now())

    # The database performs the cascade (ON DELETE CASCADE on notes.etudiant_id)
    notes = relationship(
        "Grade",
        back_populates="etudiant",
        cascade="all, delete-orphan",
        passive_deletes=True
    )

    __table_args__ = (
        Index("idx_etudiants_matricule", "matricule", unique=True),
        Index("idx_etudiants_nom_prenom", "nom", "prenom"),
    )
