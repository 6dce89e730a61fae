from sqlalchemy.orm import Session
from typing import Any, Dict

from gradebook.models.grade import Grade
from gradebook.services.student.student import get_student


def export_student(db: Session, student_id: Any) -> Dict[str, Any]:
    """Student record and its grades sorted by subject, ready to be sent as JSON."""
    student = get_student(db, student_id)
    grades = (
        db.query(Grade)
        .filter(Grade.etudiant_id == student.id)
        .order_by(Grade.matiere.asc(), Grade.id.asc())
        .all()
    )
    return {"success": True, "etudiant": student, "notes": grades}
