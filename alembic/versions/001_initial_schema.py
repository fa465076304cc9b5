"""Initial schema — reference values, configuration kinds, specimen tests.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

CONFIG_TABLES = ("actuator_calibrations", "display_calibrations", "detection_settings")
SPECIMEN_TABLES = ("compressive_tests", "shear_tests", "flexure_tests")


def _config_columns(default_scope: str) -> list:
    return [
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("scope", sa.String(191), nullable=False, server_default=default_scope),
        sa.Column("is_active", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    ]


def _specimen_columns() -> list:
    return [
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("specimen_name", sa.String(255), nullable=False),
        sa.Column("test_type", sa.String(255), nullable=False),
        sa.Column("base", sa.Float, nullable=False),
        sa.Column("height", sa.Float, nullable=False),
        sa.Column("length", sa.Float, nullable=False),
        sa.Column("area", sa.Float, nullable=False),
        sa.Column("max_force", sa.Float, nullable=False),
        sa.Column("moisture_content", sa.Float, nullable=True),
        sa.Column("pressure", sa.Float, nullable=True),
        sa.Column("stress", sa.Float, nullable=True),
        sa.Column("photo", sa.Text, nullable=True),
        sa.Column(
            "species_id", UUID(as_uuid=True),
            sa.ForeignKey("reference_values.id", ondelete="SET NULL"), nullable=True,
        ),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    ]


def upgrade() -> None:
    op.create_table(
        "reference_values",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("strength_group", sa.String(50), nullable=False),
        sa.Column("common_name", sa.String(255), nullable=False),
        sa.Column("botanical_name", sa.String(255), nullable=True),
        sa.Column("compression_parallel", sa.Float, nullable=True),
        sa.Column("compression_perpendicular", sa.Float, nullable=True),
        sa.Column("shear_parallel", sa.Float, nullable=True),
        sa.Column("bending_tension_parallel", sa.Float, nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index(
        "ix_reference_values_strength_group", "reference_values", ["strength_group"],
    )

    op.create_table(
        "actuator_calibrations",
        *_config_columns("global"),
        sa.Column("midpoint", sa.Float, nullable=False, server_default="0"),
        sa.Column("max_distance_left", sa.Float, nullable=False, server_default="0"),
        sa.Column("max_distance_right", sa.Float, nullable=False, server_default="0"),
        sa.Column("is_calibrated", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("notes", sa.Text, nullable=True),
    )

    op.create_table(
        "display_calibrations",
        *_config_columns("seven_segment"),
        sa.Column("device_name", sa.String(191), nullable=True),
        sa.Column("display_box", sa.JSON, nullable=False),
        sa.Column("segment_boxes", sa.JSON, nullable=False),
        sa.Column("calibration_image_size", sa.JSON, nullable=True),
        sa.Column("num_digits", sa.Integer, nullable=False, server_default="3"),
        sa.Column("has_decimal_point", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("decimal_position", sa.Integer, nullable=False, server_default="1"),
        sa.Column("notes", sa.Text, nullable=True),
    )

    op.create_table(
        "detection_settings",
        *_config_columns("global"),
        sa.Column("threshold1", sa.Integer, nullable=False, server_default="52"),
        sa.Column("threshold2", sa.Integer, nullable=False, server_default="104"),
        sa.Column("min_area", sa.Integer, nullable=False, server_default="1000"),
        sa.Column("blur_kernel", sa.Integer, nullable=False, server_default="21"),
        sa.Column("dilation", sa.Integer, nullable=False, server_default="1"),
        sa.Column("erosion", sa.Integer, nullable=False, server_default="1"),
        sa.Column("roi_size", sa.Integer, nullable=False, server_default="60"),
        sa.Column("brightness", sa.Integer, nullable=False, server_default="0"),
        sa.Column("contrast", sa.Integer, nullable=False, server_default="101"),
        sa.Column("mm_per_pixel", sa.Float, nullable=False, server_default="0.1"),
    )

    for table in CONFIG_TABLES:
        op.create_index(f"ix_{table}_scope", table, ["scope"])
        # at most one active record per scope
        op.create_index(
            f"uq_{table}_active_scope", table, ["scope"], unique=True,
            postgresql_where=sa.text("is_active"),
            sqlite_where=sa.text("is_active"),
        )

    for table in SPECIMEN_TABLES:
        op.create_table(table, *_specimen_columns())
        op.create_index(f"ix_{table}_test_type", table, ["test_type"])
        op.create_index(f"ix_{table}_species_id", table, ["species_id"])


def downgrade() -> None:
    for table in SPECIMEN_TABLES:
        op.drop_table(table)
    for table in CONFIG_TABLES:
        op.drop_table(table)
    op.drop_table("reference_values")
