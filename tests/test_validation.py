"""
Unit tests for request validation (no database access).
"""
from datetime import date
from decimal import Decimal

import pytest

from gradebook.core.exceptions import InvalidIdException, ValidationException
from gradebook.schemas.grade import GradeCreate
from gradebook.schemas.student import StudentCreate
from gradebook.services.validation import (
    ID_MAX,
    clean_optional_text,
    id_in_range,
    parse_id,
    require_text,
    validate_grade_payload,
    validate_student_payload,
)


class TestParseId:
    """Tests for path identifier parsing."""

    @pytest.mark.parametrize("raw, expected", [("1", 1), ("42", 42), (7, 7)])
    def test_accepts_positive_integers(self, raw, expected):
        assert parse_id(raw) == expected

    @pytest.mark.parametrize("raw", ["abc", "", "1.5", "-3", "0", 0, -1, "12abc", " 4", None, True])
    def test_rejects_everything_else(self, raw):
        with pytest.raises(InvalidIdException):
            parse_id(raw)


class TestTextHelpers:
    def test_require_text_trims(self):
        assert require_text("  Dupont ", "nom", 100) == "Dupont"

    @pytest.mark.parametrize("value", [None, "", "   "])
    def test_require_text_names_the_field(self, value):
        with pytest.raises(ValidationException) as exc_info:
            require_text(value, "prenom", 100)
        assert "prenom" in exc_info.value.message
        assert exc_info.value.status_code == 400

    def test_clean_optional_text(self):
        assert clean_optional_text(None, "classe", 50) is None
        assert clean_optional_text("   ", "classe", 50) is None
        assert clean_optional_text(" L1-A ", "classe", 50) == "L1-A"

    def test_length_limit_applies_after_trimming(self):
        assert require_text("  " + "a" * 100 + "  ", "nom", 100) == "a" * 100
        with pytest.raises(ValidationException) as exc_info:
            require_text("a" * 101, "nom", 100)
        assert "nom" in exc_info.value.details

    def test_optional_text_too_long(self):
        with pytest.raises(ValidationException) as exc_info:
            clean_optional_text("x" * 51, "classe", 50)
        assert "classe" in exc_info.value.details


class TestIdRange:
    def test_bounds(self):
        assert id_in_range(1)
        assert id_in_range(ID_MAX)
        assert not id_in_range(ID_MAX + 1)

    def test_huge_ids_still_parse(self):
        assert parse_id("99999999999999999999") == 99999999999999999999


class TestStudentPayload:
    """Tests for student normalisation in strict and lenient modes."""

    def test_strict_normalises(self):
        payload = StudentCreate(
            nom=" Dupont ", prenom=" Jean", classe=" L1 ",
            date_naissance=date(2004, 1, 2), matricule=" etu001 "
        )
        values = validate_student_payload(payload, strict=True)
        assert values == {
            "nom": "Dupont",
            "prenom": "Jean",
            "classe": "L1",
            "date_naissance": date(2004, 1, 2),
            "matricule": "ETU001",
        }

    def test_strict_requires_matricule(self):
        with pytest.raises(ValidationException) as exc_info:
            validate_student_payload(StudentCreate(nom="Dupont", prenom="Jean"), strict=True)
        assert "matricule" in exc_info.value.message

    @pytest.mark.parametrize("missing", ["nom", "prenom"])
    def test_names_always_required(self, missing):
        fields = {"nom": "Dupont", "prenom": "Jean", "matricule": "E1"}
        fields[missing] = "  "
        for strict in (True, False):
            with pytest.raises(ValidationException):
                validate_student_payload(StudentCreate(**fields), strict=strict)

    def test_lenient_accepts_missing_matricule(self):
        values = validate_student_payload(StudentCreate(nom="Dupont", prenom="Jean"), strict=False)
        assert values["matricule"] is None
        assert values["classe"] is None

    def test_lenient_keeps_matricule_case(self):
        values = validate_student_payload(
            StudentCreate(nom="Dupont", prenom="Jean", matricule=" etu9 "), strict=False
        )
        assert values["matricule"] == "etu9"


class TestGradePayload:
    """Tests for grade presence and range checks."""

    def test_defaults_coefficient_to_one(self):
        values = validate_grade_payload(GradeCreate(etudiant_id=3, matiere=" Maths ", note=12.5))
        assert values == {
            "etudiant_id": 3,
            "matiere": "Maths",
            "note": Decimal("12.5"),
            "coefficient": 1,
        }

    @pytest.mark.parametrize("note", [0, 20, "0", 19.99])
    def test_accepts_bounds(self, note):
        values = validate_grade_payload(GradeCreate(etudiant_id=1, matiere="Maths", note=note))
        assert Decimal(0) <= values["note"] <= Decimal(20)

    @pytest.mark.parametrize("note", [-1, 21, 20.01, -0.5])
    def test_rejects_note_out_of_range(self, note):
        with pytest.raises(ValidationException) as exc_info:
            validate_grade_payload(GradeCreate(etudiant_id=1, matiere="Maths", note=note))
        assert "note" in exc_info.value.details

    @pytest.mark.parametrize("coefficient", [0, 11, -2])
    def test_rejects_coefficient_out_of_range(self, coefficient):
        with pytest.raises(ValidationException) as exc_info:
            validate_grade_payload(
                GradeCreate(etudiant_id=1, matiere="Maths", note=10, coefficient=coefficient)
            )
        assert "coefficient" in exc_info.value.details

    @pytest.mark.parametrize("coefficient", [1, 10])
    def test_accepts_coefficient_bounds(self, coefficient):
        values = validate_grade_payload(
            GradeCreate(etudiant_id=1, matiere="Maths", note=10, coefficient=coefficient)
        )
        assert values["coefficient"] == coefficient

    def test_reports_every_missing_field(self):
        with pytest.raises(ValidationException) as exc_info:
            validate_grade_payload(GradeCreate())
        assert set(exc_info.value.details) == {"etudiant_id", "matiere", "note"}

    def test_blank_subject_is_missing(self):
        with pytest.raises(ValidationException):
            validate_grade_payload(GradeCreate(etudiant_id=1, matiere="  ", note=10))

    def test_invalid_student_reference(self):
        with pytest.raises(InvalidIdException):
            validate_grade_payload(GradeCreate(etudiant_id=0, matiere="Maths", note=10))


class TestLengthLimits:
    """Over-long strings are rejected before reaching the database."""

    @pytest.mark.parametrize("field, limit", [
        ("nom", 100), ("prenom", 100), ("classe", 50), ("matricule", 50)
    ])
    def test_student_fields(self, field, limit):
        fields = {"nom": "Dupont", "prenom": "Jean", "matricule": "E1"}
        fields[field] = "x" * (limit + 1)
        with pytest.raises(ValidationException) as exc_info:
            validate_student_payload(StudentCreate(**fields), strict=True)
        assert field in exc_info.value.details

    def test_subject(self):
        with pytest.raises(ValidationException) as exc_info:
            validate_grade_payload(GradeCreate(etudiant_id=1, matiere="m" * 101, note=10))
        assert "matiere" in exc_info.value.details
