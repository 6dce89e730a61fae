from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session
from typing import Any, Dict, List
import logging

from gradebook.core.database import is_foreign_key_violation
from gradebook.core.exceptions import NotFoundException, StoreFailureException
from gradebook.models.grade import Grade
from gradebook.models.student import Student
from gradebook.schemas.grade import GradeCreate
from gradebook.services.student.student import STUDENT_NOT_FOUND, student_exists
from gradebook.services.validation import id_in_range, parse_id, validate_grade_payload

logger = logging.getLogger(__name__)

GRADE_NOT_FOUND = "Note non trouvée"


def get_grade(db: Session, grade_id: Any) -> Grade:
    """Grade by ID; raises InvalidIdException or NotFoundException."""
    grade_id = parse_id(grade_id)
    if not id_in_range(grade_id):
        raise NotFoundException(GRADE_NOT_FOUND)
    grade = db.query(Grade).filter(Grade.id == grade_id).first()
    if grade is None:
        raise NotFoundException(GRADE_NOT_FOUND)
    return grade


def get_grades(db: Session) -> List[Dict[str, Any]]:
    """Every grade with its student's identity, newest first."""
    rows = (
        db.query(Grade, Student.nom, Student.prenom, Student.classe, Student.matricule)
        .join(Student, Student.id == Grade.etudiant_id)
        .order_by(Grade.date_saisie.desc(), Grade.id.desc())
        .all()
    )
    return [
        {
            "id": grade.id,
            "etudiant_id": grade.etudiant_id,
            "matiere": grade.matiere,
            "note": grade.note,
            "coefficient": grade.coefficient,
            "date_saisie": grade.date_saisie,
            "nom": nom,
            "prenom": prenom,
            "classe": classe,
            "matricule": matricule,
        }
        for grade, nom, prenom, classe, matricule in rows
    ]


def create_grade(db: Session, grade: GradeCreate) -> Grade:
    """
    Validate and insert a grade for an existing student.

    The existence check and the insert are two statements without an
    enclosing transaction: a student deleted in between makes the insert
    fail on the foreign key, which is reported as NotFound as well.
    """
    values = validate_grade_payload(grade)

    if not student_exists(db, values["etudiant_id"]):
        raise NotFoundException(STUDENT_NOT_FOUND)

    db_grade = Grade(**values)
    db.add(db_grade)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        if is_foreign_key_violation(e):
            raise NotFoundException(STUDENT_NOT_FOUND)
        logger.error(f"Grade insert rejected: {e}")
        raise StoreFailureException()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Grade insert failed: {e}", exc_info=True)
        raise StoreFailureException()

    db.refresh(db_grade)
    logger.info(
        f"Grade created: id={db_grade.id} etudiant_id={db_grade.etudiant_id} "
        f"matiere={db_grade.matiere}"
    )
    return db_grade


def delete_grade(db: Session, grade_id: Any) -> Grade:
    db_grade = get_grade(db, grade_id)
    db.delete(db_grade)
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Grade delete failed: {e}", exc_info=True)
        raise StoreFailureException()
    logger.info(f"Grade deleted: id={db_grade.id}")
    return db_grade
