from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List
from gradebook.api.deps import get_db
from gradebook.services.student import student as crud_student
from gradebook.schemas.common import DeleteResult
from gradebook.schemas.student import (
    StudentCreate, StudentCreated, StudentDetail, StudentWithStats
)

router = APIRouter()


@router.post("", response_model=StudentCreated, status_code=status.HTTP_201_CREATED)
def create_student(
    student: StudentCreate,
    db: Session = Depends(get_db)
):
    """
    Create a student

    - **nom**, **prenom**: required
    - **matricule**: unique; required and upper-cased in strict mode
    - **classe**, **date_naissance**: optional
    """
    db_student = crud_student.create_student(db=db, student=student)
    return {"success": True, "etudiant": db_student}


@router.get("", response_model=List[StudentWithStats])
def get_students(db: Session = Depends(get_db)):
    """
    Every student sorted by name, with **nombre_notes** and the weighted
    **moyenne** (null when the student has no grade).
    """
    return crud_student.get_students(db)


@router.get("/{student_id}", response_model=StudentDetail)
def get_student(
    student_id: str,
    db: Session = Depends(get_db)
):
    """
    One student with its grades, newest first
    """
    db_student, grades = crud_student.get_student_with_grades(db, student_id)
    return {"success": True, "etudiant": db_student, "notes": grades}


@router.delete("/{student_id}", response_model=DeleteResult)
def delete_student(
    student_id: str,
    db: Session = Depends(get_db)
):
    """
    Delete a student and, through the foreign key cascade, all of its grades
    """
    crud_student.delete_student(db=db, student_id=student_id)
    return {"success": True, "message": "Étudiant supprimé"}
