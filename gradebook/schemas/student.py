from datetime import date, datetime
from typing import List, Optional
from pydantic import BaseModel, ConfigDict

from gradebook.schemas.grade import Grade


class StudentCreate(BaseModel):
    """Body of POST /api/etudiants. Presence is checked by the service validator."""
    nom: Optional[str] = None
    prenom: Optional[str] = None
    classe: Optional[str] = None
    date_naissance: Optional[date] = None
    matricule: Optional[str] = None


class Student(BaseModel):
    id: int
    nom: str
    prenom: str
    classe: Optional[str] = None
    date_naissance: Optional[date] = None
    matricule: Optional[str] = None
    date_inscription: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class StudentWithStats(Student):
    nombre_notes: int = 0
    moyenne: Optional[float] = None


class StudentCreated(BaseModel):
    success: bool = True
    etudiant: Student


class StudentDetail(BaseModel):
    """Student record with its grades (used by detail and export)."""
    success: bool = True
    etudiant: Student
    notes: List[Grade]
