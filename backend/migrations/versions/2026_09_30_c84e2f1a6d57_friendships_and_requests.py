"""friendships and friend requests

Revision ID: c84e2f1a6d57
Revises: 5a1d3c7e9b20
Create Date: 2026-09-30 21:14:09.772301

"""

from alembic import op
import sqlalchemy as sa
import sqlmodel

from models import UtcAwareDateTime

# revision identifiers, used by Alembic.
revision = "c84e2f1a6d57"
down_revision = "5a1d3c7e9b20"
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "friendships",
        sa.Column("id", sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column("user_a_id", sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column("user_b_id", sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column("pair_low_id", sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column("pair_high_id", sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column("created_at", UtcAwareDateTime(timezone=True), nullable=False),
        sa.CheckConstraint("pair_low_id < pair_high_id", name="ck_friendship_order"),
        sa.CheckConstraint("user_a_id <> user_b_id", name="ck_friendship_distinct"),
        sa.ForeignKeyConstraint(["user_a_id"], ["users.id"]),
        sa.ForeignKeyConstraint(["user_b_id"], ["users.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("pair_low_id", "pair_high_id", name="uq_friendship_pair"),
    )
    with op.batch_alter_table("friendships", schema=None) as batch_op:
        batch_op.create_index(
            batch_op.f("ix_friendships_user_a_id"), ["user_a_id"], unique=False
        )
        batch_op.create_index(
            batch_op.f("ix_friendships_user_b_id"), ["user_b_id"], unique=False
        )

    op.create_table(
        "friend_requests",
        sa.Column("id", sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column("from_user_id", sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column("to_user_id", sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column("pair_low_id", sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column("pair_high_id", sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column(
            "status",
            sa.Enum("pending", "accepted", "declined", name="friendrequeststatus"),
            nullable=False,
        ),
        sa.Column("message", sqlmodel.sql.sqltypes.AutoString(), nullable=True),
        sa.Column("created_at", UtcAwareDateTime(timezone=True), nullable=False),
        sa.Column("updated_at", UtcAwareDateTime(timezone=True), nullable=False),
        sa.CheckConstraint(
            "from_user_id <> to_user_id", name="ck_friend_request_distinct"
        ),
        sa.ForeignKeyConstraint(["from_user_id"], ["users.id"]),
        sa.ForeignKeyConstraint(["to_user_id"], ["users.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    with op.batch_alter_table("friend_requests", schema=None) as batch_op:
        batch_op.create_index(
            batch_op.f("ix_friend_requests_from_user_id"),
            ["from_user_id"],
            unique=False,
        )
        batch_op.create_index(
            batch_op.f("ix_friend_requests_to_user_id"), ["to_user_id"], unique=False
        )
        batch_op.create_index(
            batch_op.f("ix_friend_requests_status"), ["status"], unique=False
        )
        batch_op.create_index(
            "uq_friend_request_pending_pair",
            ["pair_low_id", "pair_high_id"],
            unique=True,
            sqlite_where=sa.text("status = 'pending'"),
            postgresql_where=sa.text("status = 'pending'"),
        )


def downgrade() -> None:
    with op.batch_alter_table("friend_requests", schema=None) as batch_op:
        batch_op.drop_index("uq_friend_request_pending_pair")
        batch_op.drop_index(batch_op.f("ix_friend_requests_status"))
        batch_op.drop_index(batch_op.f("ix_friend_requests_to_user_id"))
        batch_op.drop_index(batch_op.f("ix_friend_requests_from_user_id"))
    op.drop_table("friend_requests")

    with op.batch_alter_table("friendships", schema=None) as batch_op:
        batch_op.drop_index(batch_op.f("ix_friendships_user_b_id"))
        batch_op.drop_index(batch_op.f("ix_friendships_user_a_id"))
    op.drop_table("friendships")
