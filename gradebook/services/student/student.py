from decimal import Decimal, ROUND_HALF_UP
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session
from typing import Any, Dict, List, Optional, Tuple
import logging

from gradebook.core.database import is_unique_violation
from gradebook.core.exceptions import (
    DuplicateKeyException, NotFoundException, StoreFailureException
)
from gradebook.models.grade import Grade
from gradebook.models.student import Student
from gradebook.schemas.student import StudentCreate
from gradebook.services.validation import id_in_range, parse_id, validate_student_payload

logger = logging.getLogger(__name__)

STUDENT_NOT_FOUND = "Étudiant non trouvé"


WEIGHTED_TOTAL = func.sum(Grade.note * Grade.coefficient)
WEIGHT_SUM = func.sum(Grade.coefficient)


def weighted_average(weighted_total, weight_sum) -> Optional[float]:
    """
    weighted_total / weight_sum rounded half-up to 2 places.
    None when there is nothing to average (no grade, or a zero weight sum).
    """
    if not weight_sum or weighted_total is None:
        return None
    average = Decimal(str(weighted_total)) / Decimal(str(weight_sum))
    return float(average.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def get_student(db: Session, student_id: Any) -> Student:
    """Student by ID; raises InvalidIdException or NotFoundException."""
    student_id = parse_id(student_id)
    if not id_in_range(student_id):
        raise NotFoundException(STUDENT_NOT_FOUND)
    student = db.query(Student).filter(Student.id == student_id).first()
    if student is None:
        raise NotFoundException(STUDENT_NOT_FOUND)
    return student


def student_exists(db: Session, student_id: int) -> bool:
    if not id_in_range(student_id):
        return False
    return db.query(Student.id).filter(Student.id == student_id).first() is not None


def get_students(db: Session) -> List[Dict[str, Any]]:
    """Every student by (nom, prenom) with its grade count and weighted average."""
    rows = (
        db.query(
            Student,
            func.count(Grade.id).label("nombre_notes"),
            WEIGHTED_TOTAL.label("total_pondere"),
            WEIGHT_SUM.label("somme_coefficients"),
        )
        .outerjoin(Grade, Grade.etudiant_id == Student.id)
        .group_by(Student.id)
        .order_by(Student.nom.asc(), Student.prenom.asc())
        .all()
    )

    students = []
    for student, nombre_notes, total_pondere, somme_coefficients in rows:
        students.append({
            **_as_dict(student),
            "nombre_notes": nombre_notes,
            "moyenne": weighted_average(total_pondere, somme_coefficients),
        })
    return students


def get_student_with_grades(db: Session, student_id: Any) -> Tuple[Student, List[Grade]]:
    """Student and its grades, newest first."""
    student = get_student(db, student_id)
    grades = (
        db.query(Grade)
        .filter(Grade.etudiant_id == student.id)
        .order_by(Grade.date_saisie.desc(), Grade.id.desc())
        .all()
    )
    return student, grades


def create_student(db: Session, student: StudentCreate, strict: Optional[bool] = None) -> Student:
    """Validate, normalise and insert a student."""
    values = validate_student_payload(student, strict=strict)
    db_student = Student(**values)
    db.add(db_student)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        if is_unique_violation(e):
            raise DuplicateKeyException(
                "Ce matricule existe déjà",
                details={"matricule": values["matricule"]}
            )
        logger.error(f"Student insert rejected: {e}")
        raise StoreFailureException()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Student insert failed: {e}", exc_info=True)
        raise StoreFailureException()

    db.refresh(db_student)
    logger.info(f"Student created: id={db_student.id} matricule={db_student.matricule}")
    return db_student


def delete_student(db: Session, student_id: Any) -> Student:
    """Delete a student; the database removes its grades (ON DELETE CASCADE)."""
    db_student = get_student(db, student_id)
    db.delete(db_student)
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Student delete failed: {e}", exc_info=True)
        raise StoreFailureException()
    logger.info(f"Student deleted: id={db_student.id}")
    return db_student


def _as_dict(student: Student) -> Dict[str, Any]:
    return {
        "id": student.id,
        "nom": student.nom,
        "prenom": student.prenom,
        "classe": student.classe,
        "date_naissance": student.date_naissance,
        "matricule": student.matricule,
        "date_inscription": student.date_inscription,
    }
