"""add user table

Revision ID: 5a1d3c7e9b20
Revises:
Create Date: 2026-09-28 18:02:41.530114

"""

from alembic import op
import sqlalchemy as sa
import sqlmodel

from models import UtcAwareDateTime

# revision identifiers, used by Alembic.
revision = "5a1d3c7e9b20"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column("name", sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column("email", sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column("username", sqlmodel.sql.sqltypes.AutoString(), nullable=True),
        sa.Column("picture", sqlmodel.sql.sqltypes.AutoString(), nullable=True),
        sa.Column("bio", sqlmodel.sql.sqltypes.AutoString(), nullable=True),
        sa.Column("join_date", UtcAwareDateTime(timezone=True), nullable=False),
        sa.Column("allow_friend_requests", sa.Boolean(), nullable=False),
        sa.Column(
            "profile_visibility",
            sa.Enum("public", "friends", "private", name="profilevisibility"),
            nullable=False,
        ),
        sa.Column("updated_at", UtcAwareDateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    with op.batch_alter_table("users", schema=None) as batch_op:
        batch_op.create_index(batch_op.f("ix_users_email"), ["email"], unique=True)
        batch_op.create_index(
            batch_op.f("ix_users_username"), ["username"], unique=True
        )


def downgrade() -> None:
    with op.batch_alter_table("users", schema=None) as batch_op:
        batch_op.drop_index(batch_op.f("ix_users_username"))
        batch_op.drop_index(batch_op.f("ix_users_email"))

    op.drop_table("users")
