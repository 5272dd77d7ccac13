"""create documents and images tables

Revision ID: 20261019_0001
Revises:
Create Date: 2026-10-19 09:00:00.000000
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa


revision = "20261019_0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "documents",
        sa.Column("id", sa.String(length=36), primary_key=True, nullable=False),
        sa.Column("modification_secret", sa.String(length=36), nullable=False),
        sa.Column("owner_external_id", sa.String(length=255), nullable=True),
        sa.Column("data", sa.LargeBinary(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("last_accessed_at", sa.DateTime(timezone=True), nullable=False),
        sa.UniqueConstraint("modification_secret", name="uq_documents_modification_secret"),
    )
    op.create_index("ix_documents_owner_external_id", "documents", ["owner_external_id"])
    op.create_index("ix_documents_last_accessed_at", "documents", ["last_accessed_at"])

    op.create_table(
        "images",
        sa.Column("id", sa.String(length=36), primary_key=True, nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("mimetype", sa.String(length=100), nullable=False),
        sa.Column("document_id", sa.String(length=36), sa.ForeignKey("documents.id"), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_images_document_id", "images", ["document_id"])


def downgrade() -> None:
    op.drop_index("ix_images_document_id", table_name="images")
    op.drop_table("images")
    op.drop_index("ix_documents_last_accessed_at", table_name="documents")
    op.drop_index("ix_documents_owner_external_id", table_name="documents")
    op.drop_table("documents")
