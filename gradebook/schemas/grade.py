from datetime import datetime
from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, ConfigDict


class GradeCreate(BaseModel):
    """Body of POST /api/notes. ``note`` may be 0, so absence means None."""
    etudiant_id: Optional[int] = None
    matiere: Optional[str] = None
    note: Optional[Decimal] = None
    coefficient: Optional[int] = None


class Grade(BaseModel):
    id: int
    etudiant_id: int
    matiere: str
    note: float
    coefficient: int
    date_saisie: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class GradeWithStudent(Grade):
    nom: str
    prenom: str
    classe: Optional[str] = None
    matricule: Optional[str] = None


class GradeCreated(BaseModel):
    success: bool = True
    note: Grade
