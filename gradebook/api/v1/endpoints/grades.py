from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List
from gradebook.api.deps import get_db
from gradebook.services.grade import grade as crud_grade
from gradebook.schemas.common import DeleteResult
from gradebook.schemas.grade import GradeCreate, GradeCreated, GradeWithStudent

router = APIRouter()


@router.post("", response_model=GradeCreated, status_code=status.HTTP_201_CREATED)
def create_grade(
    grade: GradeCreate,
    db: Session = Depends(get_db)
):
    """
    Record a grade

    - **etudiant_id**, **matiere**, **note** (0 to 20): required
    - **coefficient** (1 to 10): defaults to 1
    """
    db_grade = crud_grade.create_grade(db=db, grade=grade)
    return {"success": True, "note": db_grade}


@router.get("", response_model=List[GradeWithStudent])
def get_grades(db: Session = Depends(get_db)):
    """
    Every grade with its student's name, class and matricule, newest first
    """
    return crud_grade.get_grades(db)


@router.delete("/{grade_id}", response_model=DeleteResult)
def delete_grade(
    grade_id: str,
    db: Session = Depends(get_db)
):
    crud_grade.delete_grade(db=db, grade_id=grade_id)
    return {"success": True, "message": "Note supprimée"}
