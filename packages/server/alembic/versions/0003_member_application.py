"""Membership status and application fields

Revision ID: 0003_member_application
Revises: 0002_projects_members
Create Date: 2025-09-27 22:24:04.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "0003_member_application"
down_revision: Union[str, None] = "0002_projects_members"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

JSONList = sa.JSON().with_variant(postgresql.JSONB(), "postgresql")

APPLICATION_COLUMNS = (
    "full_name",
    "contact_info",
    "portfolio_url",
    "preferred_role",
    "availability",
    "motivation",
)


def upgrade() -> None:
    # Existing rows predate the review workflow and are treated as applications
    op.add_column(
        "project_members",
        sa.Column("status", sa.String(), server_default="APPLIED", nullable=False),
    )
    op.add_column(
        "project_members",
        sa.Column("accepted_at", sa.DateTime(timezone=True), nullable=True),
    )
    for name in APPLICATION_COLUMNS:
        op.add_column("project_members", sa.Column(name, sa.String(), nullable=True))
    op.add_column(
        "project_members",
        sa.Column("skills", JSONList, server_default=sa.text("'[]'"), nullable=False),
    )
    op.add_column(
        "project_members",
        sa.Column("agreed_to_guidelines", sa.Boolean(), server_default=sa.false(), nullable=False),
    )


def downgrade() -> None:
    with op.batch_alter_table("project_members") as batch:
        batch.drop_column("agreed_to_guidelines")
        batch.drop_column("skills")
        for name in reversed(APPLICATION_COLUMNS):
            batch.drop_column(name)
        batch.drop_column("accepted_at")
        batch.drop_column("status")
