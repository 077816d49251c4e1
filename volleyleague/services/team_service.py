"""Teams and rosters.

Whoever creates a team becomes its captain and first member. Rosters are
capped: accepted members plus outstanding invites may not exceed the roster
limit. Players with an account are added directly; other emails get an
invite that still counts toward the cap.
"""

from __future__ import annotations

import logging
from typing import Iterable

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from volleyleague.models.teams import (
    AddPlayerResult,
    PendingInvite,
    RosterMember,
    RosterResponse,
    TeamRead,
)
from volleyleague.schemas.teams import MemberStatus, Team, TeamInvite, TeamMember
from volleyleague.schemas.users import LeagueUser

logger = logging.getLogger(__name__)

DEFAULT_ROSTER_LIMIT = 10


def normalize_email(email: str) -> str:
    return email.strip().lower()


def _clean_emails(emails: Iterable[str], *, exclude: str | None = None) -> list[str]:
    cleaned: list[str] = []
    for raw in emails:
        email = normalize_email(raw)
        if not email or email == exclude or email in cleaned:
            continue
        if "@" not in email:
            raise ValueError("invalid_email")
        cleaned.append(email)
    return cleaned


def _to_read(team: Team, viewer_id: int | None = None) -> TeamRead:
    return TeamRead(
        id=team.id or 0,
        name=team.name,
        captain_id=team.captain_id,
        is_captain=viewer_id is not None and team.captain_id == viewer_id,
    )


async def get_team(db: AsyncSession, team_id: int) -> Team:
    team = await db.get(Team, team_id)
    if team is None:
        raise ValueError("team_not_found")
    return team


async def _find_user_by_email(db: AsyncSession, email: str) -> LeagueUser | None:
    result = await db.execute(
        select(LeagueUser).where(func.lower(LeagueUser.email) == email)
    )
    return result.scalar_one_or_none()


async def _roster_size(db: AsyncSession, team_id: int) -> int:
    members = await db.scalar(
        select(func.count())
        .select_from(TeamMember)
        .where(
            TeamMember.team_id == team_id,  # type: ignore[arg-type]
            TeamMember.status == MemberStatus.ACCEPTED,  # type: ignore[arg-type]
        )
    )
    invites = await db.scalar(
        select(func.count())
        .select_from(TeamInvite)
        .where(TeamInvite.team_id == team_id)  # type: ignore[arg-type]
    )
    return (members or 0) + (invites or 0)


async def create_team(
    db: AsyncSession,
    *,
    captain: LeagueUser,
    name: str,
    player_emails: Iterable[str] = (),
    roster_limit: int = DEFAULT_ROSTER_LIMIT,
) -> TeamRead:
    """Create a team captained by ``captain`` with an optional starting roster.

    Raises:
        ValueError: "roster_full", "team_name_taken" or "invalid_email".
    """
    team_name = name.strip()
    if not team_name:
        raise ValueError("invalid_team_name")

    emails = _clean_emails(player_emails, exclude=normalize_email(captain.email))
    if len(emails) + 1 > roster_limit:
        raise ValueError("roster_full")

    existing = await db.execute(
        select(Team.id).where(func.lower(Team.name) == team_name.lower())
    )
    if existing.first() is not None:
        raise ValueError("team_name_taken")

    try:
        team = Team(name=team_name, captain_id=captain.id)  # type: ignore[arg-type]
        db.add(team)
        await db.flush()
        assert team.id is not None

        db.add(
            TeamMember(
                team_id=team.id,
                user_id=captain.id,  # type: ignore[arg-type]
                status=MemberStatus.ACCEPTED,
            )
        )
        invited = 0
        for email in emails:
            user = await _find_user_by_email(db, email)
            if user is not None:
                db.add(
                    TeamMember(
                        team_id=team.id,
                        user_id=user.id,  # type: ignore[arg-type]
                        status=MemberStatus.ACCEPTED,
                    )
                )
            else:
                db.add(TeamInvite(team_id=team.id, email=email, invited_by=captain.id))  # type: ignore[arg-type]
                invited += 1
        await db.commit()
    except IntegrityError as exc:
        await db.rollback()
        raise ValueError("team_name_taken") from exc

    await db.refresh(team)
    logger.info(
        f"Team {team.id} '{team.name}' created by user {captain.id} "
        f"({len(emails) - invited} added, {invited} invited)"
    )
    return _to_read(team, captain.id)


async def list_user_teams(db: AsyncSession, user_id: int) -> list[TeamRead]:
    """Teams the user is an accepted member of, by name."""
    result = await db.execute(
        select(Team)
        .join(TeamMember, TeamMember.team_id == Team.id)  # type: ignore[arg-type]
        .where(
            TeamMember.user_id == user_id,  # type: ignore[arg-type]
            TeamMember.status == MemberStatus.ACCEPTED,  # type: ignore[arg-type]
        )
        .order_by(Team.name)
    )
    return [_to_read(t, user_id) for t in result.scalars().all()]


async def list_all_teams(db: AsyncSession) -> list[TeamRead]:
    result = await db.execute(select(Team).order_by(Team.name))
    return [_to_read(t) for t in result.scalars().all()]


async def get_roster(
    db: AsyncSession,
    team_id: int,
    *,
    viewer_id: int | None = None,
    roster_limit: int = DEFAULT_ROSTER_LIMIT,
) -> RosterResponse:
    team = await get_team(db, team_id)

    member_rows = await db.execute(
        select(TeamMember, LeagueUser)
        .join(LeagueUser, LeagueUser.id == TeamMember.user_id)  # type: ignore[arg-type]
        .where(TeamMember.team_id == team_id)  # type: ignore[arg-type]
        .order_by(TeamMember.joined_at, TeamMember.id)  # type: ignore[arg-type]
    )
    members = [
        RosterMember(
            member_id=m.id or 0,
            user_id=m.user_id,
            email=u.email,
            display_name=u.display_name,
            status=m.status,
            is_captain=m.user_id == team.captain_id,
        )
        for m, u in member_rows.all()
    ]

    invite_rows = await db.execute(
        select(TeamInvite)
        .where(TeamInvite.team_id == team_id)  # type: ignore[arg-type]
        .order_by(TeamInvite.created_at)  # type: ignore[arg-type]
    )
    invites = [
        PendingInvite(invite_id=i.id or 0, email=i.email, created_at=i.created_at)
        for i in invite_rows.scalars().all()
    ]

    return RosterResponse(
        team=_to_read(team, viewer_id),
        members=members,
        invites=invites,
        roster_limit=roster_limit,
    )


async def add_player(
    db: AsyncSession,
    *,
    team_id: int,
    email: str,
    invited_by: int,
    roster_limit: int = DEFAULT_ROSTER_LIMIT,
) -> AddPlayerResult:
    """Add a player by email, or invite them when they have no account.

    Raises:
        ValueError: "roster_full", "already_invited", "already_member",
            "invalid_email" or "team_not_found".
    """
    await get_team(db, team_id)
    address = normalize_email(email)
    if "@" not in address:
        raise ValueError("invalid_email")

    if await _roster_size(db, team_id) >= roster_limit:
        raise ValueError("roster_full")

    invite = await db.execute(
        select(TeamInvite.id).where(
            TeamInvite.team_id == team_id,  # type: ignore[arg-type]
            func.lower(TeamInvite.email) == address,
        )
    )
    if invite.first() is not None:
        raise ValueError("already_invited")

    user = await _find_user_by_email(db, address)
    try:
        if user is not None:
            db.add(
                TeamMember(
                    team_id=team_id,
                    user_id=user.id,  # type: ignore[arg-type]
                    status=MemberStatus.ACCEPTED,
                )
            )
            outcome = "added"
        else:
            db.add(TeamInvite(team_id=team_id, email=address, invited_by=invited_by))
            outcome = "invited"
        await db.commit()
    except IntegrityError as exc:
        await db.rollback()
        raise ValueError(
            "already_member" if user is not None else "already_invited"
        ) from exc

    logger.info(f"Team {team_id}: {address} {outcome} by user {invited_by}")
    return AddPlayerResult(outcome=outcome, email=address)


async def remove_member(db: AsyncSession, *, team_id: int, member_id: int) -> None:
    team = await get_team(db, team_id)
    member = await db.get(TeamMember, member_id)
    if member is None or member.team_id != team_id:
        raise ValueError("member_not_found")
    if member.user_id == team.captain_id:
        raise ValueError("cannot_remove_captain")

    await db.delete(member)
    await db.commit()
    logger.info(f"Removed user {member.user_id} from team {team_id}")


async def cancel_invite(db: AsyncSession, *, team_id: int, invite_id: int) -> None:
    invite = await db.get(TeamInvite, invite_id)
    if invite is None or invite.team_id != team_id:
        raise ValueError("invite_not_found")

    await db.delete(invite)
    await db.commit()
    logger.info(f"Cancelled invite for {invite.email} on team {team_id}")
