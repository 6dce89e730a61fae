from fastapi import APIRouter
from gradebook.api.v1.endpoints import students
from gradebook.api.v1.endpoints import grades
from gradebook.api.v1.endpoints import export

api_router = APIRouter()

# Nested alias of /notes, registered before /etudiants/{student_id}
api_router.include_router(
    grades.router,
    prefix="/etudiants/notes",
    tags=["notes"],
    include_in_schema=False
)

api_router.include_router(
    students.router,
    prefix="/etudiants",
    tags=["etudiants"]
)

api_router.include_router(
    grades.router,
    prefix="/notes",
    tags=["notes"]
)

api_router.include_router(
    export.router,
    prefix="/export",
    tags=["export"]
)
