from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from gradebook.api.deps import get_db
from gradebook.services.export.export import export_student
from gradebook.schemas.student import StudentDetail

router = APIRouter()


@router.get("/etudiant/{student_id}", response_model=StudentDetail)
def export_student_grades(
    student_id: str,
    db: Session = Depends(get_db)
):
    """
    Student record with its grades sorted by subject
    """
    return export_student(db, student_id)
