"""dmv records: users + civilian characters, vehicles, citations, arrests, warrants

- users is the shared identity table (created here for standalone installs)
- civilian_vehicles.plate is unique system-wide
- citations and arrests are append-only (SQLite triggers)

Revision ID: 0001_dmv_records
Revises:
Create Date: 2026-10-18
"""
from __future__ import annotations

from alembic import op
import sqlalchemy as sa

from app.core.db import drop_append_only_triggers, install_append_only_triggers

revision = "0001_dmv_records"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    # --- users (identity, owned by the login service) ---
    op.create_table(
        "users",
        sa.Column("id", sa.Text(), primary_key=True),
        sa.Column("discord_id", sa.Text(), nullable=True),
        sa.Column("username", sa.Text(), nullable=False),
        sa.Column("is_admin", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("roles_json", sa.Text(), nullable=False, server_default="[]"),
        sa.Column("created_at", sa.Text(), nullable=False),
    )
    op.create_index("uq_users_discord_id", "users", ["discord_id"], unique=True)

    # --- civilian_characters ---
    op.create_table(
        "civilian_characters",
        sa.Column("id", sa.Text(), primary_key=True),
        sa.Column("user_id", sa.Text(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("date_of_birth", sa.Text(), nullable=False),
        sa.Column("address", sa.Text(), nullable=False),
        sa.Column("phone_number", sa.Text(), nullable=True),
        sa.Column("profession", sa.Text(), nullable=False),
        sa.Column("gender", sa.Text(), nullable=False),
        sa.Column("race", sa.Text(), nullable=False),
        sa.Column("hair_color", sa.Text(), nullable=True),
        sa.Column("eye_color", sa.Text(), nullable=True),
        sa.Column("height", sa.Text(), nullable=True),
        sa.Column("weight", sa.Text(), nullable=True),
        sa.Column("backstory", sa.Text(), nullable=True),
        sa.Column("drivers_license_status", sa.Text(), nullable=False, server_default="Valid"),
        sa.Column("firearms_license_status", sa.Text(), nullable=False, server_default="None"),
        sa.Column("created_at", sa.Text(), nullable=False),
        sa.Column("updated_at", sa.Text(), nullable=False),
    )
    op.create_index("ix_civilian_characters_user_id", "civilian_characters", ["user_id"])
    op.create_index("ix_civilian_characters_name", "civilian_characters", ["name"])

    # --- civilian_vehicles ---
    op.create_table(
        "civilian_vehicles",
        sa.Column("id", sa.Text(), primary_key=True),
        sa.Column("character_id", sa.Text(), sa.ForeignKey("civilian_characters.id"), nullable=False),
        sa.Column("make", sa.Text(), nullable=False),
        sa.Column("model", sa.Text(), nullable=False),
        sa.Column("color", sa.Text(), nullable=False),
        sa.Column("plate", sa.Text(), nullable=False),
        sa.Column("registration_status", sa.Text(), nullable=False, server_default="Valid"),
        sa.Column("insurance_status", sa.Text(), nullable=False, server_default="Valid"),
        sa.Column("created_at", sa.Text(), nullable=False),
        sa.Column("updated_at", sa.Text(), nullable=False),
    )
    op.create_index("ix_civilian_vehicles_character_id", "civilian_vehicles", ["character_id"])
    op.create_index("uq_civilian_vehicles_plate", "civilian_vehicles", ["plate"], unique=True)

    # --- civilian_citations (append-only) ---
    op.create_table(
        "civilian_citations",
        sa.Column("id", sa.Text(), primary_key=True),
        sa.Column("character_id", sa.Text(), sa.ForeignKey("civilian_characters.id"), nullable=False),
        sa.Column("violation", sa.Text(), nullable=False),
        sa.Column("fine_amount", sa.Numeric(10, 2), nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("issued_by", sa.Text(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("created_at", sa.Text(), nullable=False),
        sa.CheckConstraint("fine_amount >= 0", name="ck_civilian_citations_fine_non_negative"),
    )
    op.create_index("ix_civilian_citations_character_id", "civilian_citations", ["character_id"])

    # --- civilian_arrests (append-only) ---
    op.create_table(
        "civilian_arrests",
        sa.Column("id", sa.Text(), primary_key=True),
        sa.Column("character_id", sa.Text(), sa.ForeignKey("civilian_characters.id"), nullable=False),
        sa.Column("charges", sa.Text(), nullable=False),
        sa.Column("location", sa.Text(), nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("arrested_by", sa.Text(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("created_at", sa.Text(), nullable=False),
    )
    op.create_index("ix_civilian_arrests_character_id", "civilian_arrests", ["character_id"])

    # --- civilian_warrants ---
    op.create_table(
        "civilian_warrants",
        sa.Column("id", sa.Text(), primary_key=True),
        sa.Column("character_id", sa.Text(), sa.ForeignKey("civilian_characters.id"), nullable=False),
        sa.Column("charges", sa.Text(), nullable=False),
        sa.Column("reason", sa.Text(), nullable=False),
        sa.Column("status", sa.Text(), nullable=False, server_default="Active"),  # Active|Completed
        sa.Column("issued_by", sa.Text(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("completed_by", sa.Text(), sa.ForeignKey("users.id"), nullable=True),
        sa.Column("completed_at", sa.Text(), nullable=True),
        sa.Column("created_at", sa.Text(), nullable=False),
    )
    op.create_index("ix_civilian_warrants_character_id", "civilian_warrants", ["character_id"])
    op.create_index("ix_civilian_warrants_status", "civilian_warrants", ["status"])

    # append-only triggers (SQLite)
    install_append_only_triggers(op.get_bind())


def downgrade() -> None:
    drop_append_only_triggers(op.get_bind())

    op.drop_index("ix_civilian_warrants_status", table_name="civilian_warrants")
    op.drop_index("ix_civilian_warrants_character_id", table_name="civilian_warrants")
    op.drop_table("civilian_warrants")

    op.drop_index("ix_civilian_arrests_character_id", table_name="civilian_arrests")
    op.drop_table("civilian_arrests")

    op.drop_index("ix_civilian_citations_character_id", table_name="civilian_citations")
    op.drop_table("civilian_citations")

    op.drop_index("uq_civilian_vehicles_plate", table_name="civilian_vehicles")
    op.drop_index("ix_civilian_vehicles_character_id", table_name="civilian_vehicles")
    op.drop_table("civilian_vehicles")

    op.drop_index("ix_civilian_characters_name", table_name="civilian_characters")
    op.drop_index("ix_civilian_characters_user_id", table_name="civilian_characters")
    op.drop_table("civilian_characters")

    op.drop_index("uq_users_discord_id", table_name="users")
    op.drop_table("users")
