"""initial league schema

Revision ID: 20261019_000001
Revises:
Create Date: 2026-10-19 09:00:00.000000
"""

import sqlmodel.sql.sqltypes
from alembic import op  # type: ignore[attr-defined]
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

revision = "20261019_000001"
down_revision = None
branch_labels = None
depends_on = None

AutoString = sqlmodel.sql.sqltypes.AutoString


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("email", AutoString(), nullable=False),
        sa.Column("display_name", AutoString(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_users_email"), "users", ["email"], unique=True)

    op.create_table(
        "admin_users",
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("granted_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"]),
        sa.PrimaryKeyConstraint("user_id"),
    )

    op.create_table(
        "teams",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", AutoString(), nullable=False),
        sa.Column("captain_id", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["captain_id"], ["users.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_teams_name"), "teams", ["name"], unique=True)
    op.create_index(op.f("ix_teams_captain_id"), "teams", ["captain_id"], unique=False)

    op.create_table(
        "team_members",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("team_id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column(
            "status",
            sa.Enum("PENDING", "ACCEPTED", name="memberstatus"),
            nullable=False,
        ),
        sa.Column("joined_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["team_id"], ["teams.id"]),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("team_id", "user_id", name="uq_team_members_team_user"),
    )
    op.create_index(op.f("ix_team_members_team_id"), "team_members", ["team_id"], unique=False)
    op.create_index(op.f("ix_team_members_user_id"), "team_members", ["user_id"], unique=False)

    op.create_table(
        "team_invites",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("team_id", sa.Integer(), nullable=False),
        sa.Column("email", AutoString(), nullable=False),
        sa.Column("invited_by", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["team_id"], ["teams.id"]),
        sa.ForeignKeyConstraint(["invited_by"], ["users.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("team_id", "email", name="uq_team_invites_team_email"),
    )
    op.create_index(op.f("ix_team_invites_team_id"), "team_invites", ["team_id"], unique=False)
    op.create_index(op.f("ix_team_invites_email"), "team_invites", ["email"], unique=False)

    op.create_table(
        "seasons",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", AutoString(), nullable=False),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("end_date", sa.Date(), nullable=False),
        sa.Column("recurring_config", postgresql.JSONB(astext_type=sa.Text()), nullable=False),
        sa.Column(
            "status",
            sa.Enum("DRAFT", "ACTIVE", "COMPLETED", name="seasonstatus"),
            nullable=False,
        ),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_seasons_status"), "seasons", ["status"], unique=False)
    op.create_index(op.f("ix_seasons_created_at"), "seasons", ["created_at"], unique=False)

    op.create_table(
        "season_teams",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("season_id", sa.Integer(), nullable=False),
        sa.Column("team_id", sa.Integer(), nullable=False),
        sa.Column("total_sets_won", sa.Integer(), nullable=False),
        sa.Column("total_sets_lost", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(["season_id"], ["seasons.id"]),
        sa.ForeignKeyConstraint(["team_id"], ["teams.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("season_id", "team_id", name="uq_season_teams_season_team"),
    )
    op.create_index(op.f("ix_season_teams_season_id"), "season_teams", ["season_id"], unique=False)
    op.create_index(op.f("ix_season_teams_team_id"), "season_teams", ["team_id"], unique=False)

    op.create_table(
        "game_days",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("season_id", sa.Integer(), nullable=False),
        sa.Column("game_date", sa.Date(), nullable=False),
        sa.Column("description", AutoString(), nullable=True),
        sa.Column("image_url", AutoString(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["season_id"], ["seasons.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("season_id", "game_date", name="uq_game_days_season_date"),
    )
    op.create_index(op.f("ix_game_days_season_id"), "game_days", ["season_id"], unique=False)
    op.create_index(op.f("ix_game_days_game_date"), "game_days", ["game_date"], unique=False)

    op.create_table(
        "game_results",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("game_day_id", sa.Integer(), nullable=False),
        sa.Column("team_id", sa.Integer(), nullable=False),
        sa.Column("sets_won", sa.Integer(), nullable=False),
        sa.Column("sets_lost", sa.Integer(), nullable=False),
        sa.Column("recorded_at", sa.DateTime(), nullable=False),
        sa.Column("reported_by", sa.Integer(), nullable=True),
        sa.ForeignKeyConstraint(["game_day_id"], ["game_days.id"]),
        sa.ForeignKeyConstraint(["team_id"], ["teams.id"]),
        sa.ForeignKeyConstraint(["reported_by"], ["users.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("game_day_id", "team_id", name="uq_game_results_game_day_team"),
    )
    op.create_index(op.f("ix_game_results_game_day_id"), "game_results", ["game_day_id"], unique=False)
    op.create_index(op.f("ix_game_results_team_id"), "game_results", ["team_id"], unique=False)

    op.create_table(
        "game_day_players",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("game_day_id", sa.Integer(), nullable=False),
        sa.Column("team_id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["game_day_id"], ["game_days.id"]),
        sa.ForeignKeyConstraint(["team_id"], ["teams.id"]),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "game_day_id",
            "team_id",
            "user_id",
            name="uq_game_day_players_game_day_team_user",
        ),
    )
    op.create_index(op.f("ix_game_day_players_game_day_id"), "game_day_players", ["game_day_id"], unique=False)
    op.create_index(op.f("ix_game_day_players_team_id"), "game_day_players", ["team_id"], unique=False)
    op.create_index(op.f("ix_game_day_players_user_id"), "game_day_players", ["user_id"], unique=False)

    op.create_table(
        "newsletters",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("title", AutoString(), nullable=False),
        sa.Column("content", AutoString(), nullable=False),
        sa.Column("created_by", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("published_at", sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(["created_by"], ["users.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_newsletters_created_at"), "newsletters", ["created_at"], unique=False)
    op.create_index(op.f("ix_newsletters_published_at"), "newsletters", ["published_at"], unique=False)


def downgrade() -> None:
    op.drop_table("newsletters")
    op.drop_table("game_day_players")
    op.drop_table("game_results")
    op.drop_table("game_days")
    op.drop_table("season_teams")
    op.drop_table("seasons")
    op.drop_table("team_invites")
    op.drop_table("team_members")
    op.drop_table("teams")
    op.drop_table("admin_users")
    op.drop_table("users")

    sa.Enum(name="seasonstatus").drop(op.get_bind(), checkfirst=True)
    sa.Enum(name="memberstatus").drop(op.get_bind(), checkfirst=True)
