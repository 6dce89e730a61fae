import argparse
import logging
from datetime import date

from gradebook.core.database import SessionLocal, init_db
from gradebook.models.grade import Grade
from gradebook.models.student import Student

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

DEMO_STUDENTS = [
    {
        "student": dict(nom="Martin", prenom="Léa", classe="L1-A",
                        date_naissance=date(2004, 3, 12), matricule="ETU001"),
        "notes": [("Mathématiques", 14.5, 3), ("Français", 12, 2), ("Anglais", 16, 1)],
    },
    {
        "student": dict(nom="Bernard", prenom="Hugo", classe="L1-A",
                        date_naissance=date(2003, 11, 2), matricule="ETU002"),
        "notes": [("Mathématiques", 9, 3), ("Physique", 11.5, 2)],
    },
    {
        "student": dict(nom="Dubois", prenom="Chloé", classe="L1-B",
                        date_naissance=date(2004, 7, 25), matricule="ETU003"),
        "notes": [],
    },
]


def seed_data(db) -> int:
    """
    Insert the demo students and their grades when the tables are empty.
    Returns the number of students inserted.
    """
    if db.query(Student).first():
        logger.info("Database already contains data. Skipping seed.")
        return 0

    logger.info("Seeding data...")
    try:
        for entry in DEMO_STUDENTS:
            student = Student(**entry["student"])
            student.notes = [
                Grade(matiere=matiere, note=note, coefficient=coefficient)
                for matiere, note, coefficient in entry["notes"]
            ]
            db.add(student)
        db.commit()
    except Exception as e:
        logger.error(f"Error seeding data: {e}")
        db.rollback()
        raise

    logger.info(f"Seeded {len(DEMO_STUDENTS)} students")
    return len(DEMO_STUDENTS)


def main(argv=None):
    parser = argparse.ArgumentParser(description="Seed the gradebook database with demo data")
    parser.add_argument(
        "--reset",
        action="store_true",
        help="DROP and recreate the tables first (destroys every existing row)",
    )
    args = parser.parse_args(argv)

    init_db(reset=args.reset)

    db = SessionLocal()
    try:
        seed_data(db)
    finally:
        db.close()


if __name__ == "__main__":
    main()
