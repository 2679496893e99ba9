import random

from flask import current_app

from bidarena.models import Team
from .errors import NotFound, RuleViolation, ValidationError


def list_teams(session):
    return session.query(Team).order_by(Team.id).all()


def get_team(session, team_id) -> Team:
    team = session.get(Team, team_id)
    if team is None:
        raise NotFound('Team not found')
    return team


def create_team(session, name) -> Team:
    name = name.strip() if isinstance(name, str) else ''
    if not name:
        raise ValidationError('Team name is required')
    if session.query(Team).filter_by(name=name).first():
        raise RuleViolation('Team name already exists')
    team = Team(
        name=name,
        balance=current_app.config.get('STARTING_BALANCE', 10000),
        is_active=True,
        has_spun=False,
    )
    session.add(team)
    session.commit()
    current_app.logger.info(f'[team] created team={team.id} name={team.name}')
    return team


def spin_team(session, team_id) -> Team:
    """Mark a team as having entered through the lobby spinner."""
    team = get_team(session, team_id)
    team.has_spun = True
    session.commit()
    return team


def spin_random(session, rng=None) -> Team:
    """Pick one active team that has not spun yet and mark it as spun."""
    candidates = session.query(Team).filter_by(is_active=True, has_spun=False).order_by(Team.id).all()
    if not candidates:
        raise RuleViolation('No teams left to spin')
    team = (rng or random).choice(candidates)
    team.has_spun = True
    session.commit()
    current_app.logger.info(f'[spin] team={team.id} picked from {len(candidates)}')
    return team


def reset_team_balance(session, team_id) -> Team:
    team = get_team(session, team_id)
    team.balance = current_app.config.get('STARTING_BALANCE', 10000)
    session.commit()
    return team


def deactivate_team(session, team_id) -> Team:
    team = get_team(session, team_id)
    team.is_active = False
    session.commit()
    current_app.logger.info(f'[team] deactivated team={team.id}')
    return team
