"""
Request validation shared by every write and lookup.

All checks run before the database is touched; the first failure raises
and nothing is written.
"""
import re
from decimal import Decimal
from typing import Any, Dict, Optional

from gradebook.core.config import settings
from gradebook.core.exceptions import InvalidIdException, ValidationException
from gradebook.models.grade import (
    COEFFICIENT_MAX, COEFFICIENT_MIN, MATIERE_MAX_LENGTH, NOTE_MAX, NOTE_MIN
)
from gradebook.models.student import (
    CLASSE_MAX_LENGTH, MATRICULE_MAX_LENGTH, NOM_MAX_LENGTH, PRENOM_MAX_LENGTH
)
from gradebook.schemas.grade import GradeCreate
from gradebook.schemas.student import StudentCreate

_ID_PATTERN = re.compile(r"^\d+$")

# Largest value an INTEGER primary key can hold
ID_MAX = 2 ** 31 - 1


def parse_id(raw: Any) -> int:
    """Return ``raw`` as a positive int or raise InvalidIdException."""
    if isinstance(raw, bool):
        raise InvalidIdException()
    if isinstance(raw, int):
        value = raw
    elif isinstance(raw, str) and _ID_PATTERN.match(raw):
        value = int(raw)
    else:
        raise InvalidIdException()
    if value <= 0:
        raise InvalidIdException()
    return value


def id_in_range(value: int) -> bool:
    """False for ids no stored row can have (the lookup would overflow the column)."""
    return value <= ID_MAX


def _check_length(cleaned: str, field: str, max_length: int) -> str:
    if len(cleaned) > max_length:
        raise ValidationException(
            f"Le champ '{field}' ne doit pas dépasser {max_length} caractères",
            details={field: f"{max_length} caractères maximum"}
        )
    return cleaned


def require_text(value: Optional[str], field: str, max_length: int) -> str:
    """Trimmed ``value``; blank, missing or too long is a validation error naming ``field``."""
    cleaned = value.strip() if value is not None else ""
    if not cleaned:
        raise ValidationException(
            f"Le champ '{field}' est requis",
            details={field: "requis"}
        )
    return _check_length(cleaned, field, max_length)


def clean_optional_text(value: Optional[str], field: str, max_length: int) -> Optional[str]:
    if value is None:
        return None
    cleaned = value.strip()
    if not cleaned:
        return None
    return _check_length(cleaned, field, max_length)


def validate_student_payload(payload: StudentCreate, strict: Optional[bool] = None) -> Dict[str, Any]:
    """
    Normalised column values for a new student.

    In strict mode the matricule is mandatory and upper-cased; in lenient
    mode it is optional and kept as typed.
    """
    if strict is None:
        strict = settings.STRICT_VALIDATION

    nom = require_text(payload.nom, "nom", NOM_MAX_LENGTH)
    prenom = require_text(payload.prenom, "prenom", PRENOM_MAX_LENGTH)
    if strict:
        matricule = require_text(payload.matricule, "matricule", MATRICULE_MAX_LENGTH).upper()
    else:
        matricule = clean_optional_text(payload.matricule, "matricule", MATRICULE_MAX_LENGTH)

    return {
        "nom": nom,
        "prenom": prenom,
        "classe": clean_optional_text(payload.classe, "classe", CLASSE_MAX_LENGTH),
        "date_naissance": payload.date_naissance,
        "matricule": matricule,
    }


def validate_grade_payload(payload: GradeCreate) -> Dict[str, Any]:
    """Normalised column values for a new grade; coefficient defaults to 1."""
    missing = [
        field for field in ("etudiant_id", "matiere", "note")
        if getattr(payload, field) is None
    ]
    if missing:
        raise ValidationException(
            f"Champs requis manquants: {', '.join(missing)}",
            details={field: "requis" for field in missing}
        )

    etudiant_id = parse_id(payload.etudiant_id)
    matiere = require_text(payload.matiere, "matiere", MATIERE_MAX_LENGTH)

    note = Decimal(payload.note)
    if not note.is_finite() or note < NOTE_MIN or note > NOTE_MAX:
        raise ValidationException(
            f"La note doit être comprise entre {NOTE_MIN} et {NOTE_MAX}",
            details={"note": f"{NOTE_MIN}-{NOTE_MAX}"}
        )

    coefficient = 1 if payload.coefficient is None else int(payload.coefficient)
    if coefficient < COEFFICIENT_MIN or coefficient > COEFFICIENT_MAX:
        raise ValidationException(
            f"Le coefficient doit être compris entre {COEFFICIENT_MIN} et {COEFFICIENT_MAX}",
            details={"coefficient": f"{COEFFICIENT_MIN}-{COEFFICIENT_MAX}"}
        )

    return {
        "etudiant_id": etudiant_id,
        "matiere": matiere,
        "note": note,
        "coefficient": coefficient,
    }
