"""create etudiants and notes

Revision ID: 0001
Revises:
Create Date: 2026-10-18 10:00:00

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


revision: str = "0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "etudiants",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("nom", sa.String(length=100), nullable=False),
        sa.Column("prenom", sa.String(length=100), nullable=False),
        sa.Column("classe", sa.String(length=50), nullable=True),
        sa.Column("date_naissance", sa.Date(), nullable=True),
        sa.Column("matricule", sa.String(length=50), nullable=True),
        sa.Column("date_inscription", sa.DateTime(), server_default=sa.func.now(), nullable=False),
    )
    op.create_index("idx_etudiants_matricule", "etudiants", ["matricule"], unique=True)
    op.create_index("idx_etudiants_nom_prenom", "etudiants", ["nom", "prenom"])

    op.create_table(
        "notes",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "etudiant_id",
            sa.Integer(),
            sa.ForeignKey("etudiants.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("matiere", sa.String(length=100), nullable=False),
        sa.Column("note", sa.Numeric(4, 2), nullable=False),
        sa.Column("coefficient", sa.Integer(), server_default="1", nullable=False),
        sa.Column("date_saisie", sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.CheckConstraint("note >= 0 AND note <= 20", name="ck_notes_note_range"),
        sa.CheckConstraint("coefficient >= 1 AND coefficient <= 10", name="ck_notes_coefficient_range"),
    )
    op.create_index("idx_notes_etudiant", "notes", ["etudiant_id"])


def downgrade() -> None:
    op.drop_index("idx_notes_etudiant", table_name="notes")
    op.drop_table("notes")
    op.drop_index("idx_etudiants_nom_prenom", table_name="etudiants")
    op.drop_index("idx_etudiants_matricule", table_name="etudiants")
    op.drop_table("etudiants")
