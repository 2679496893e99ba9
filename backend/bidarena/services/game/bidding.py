import time
from typing import List, Optional

from flask import current_app

from bidarena.models import Bid, Team
from .errors import RuleViolation
from .state import get_state


def place_bid(session, team_id, amount, now: Optional[float] = None) -> Bid:
    """Record a sealed bid for the current round.

    Checks run in a fixed order and the first failure is reported:
    bidding open, deadline not passed, team exists and is active, amount
    is a positive integer, amount covers no more than the team's balance.
    Balances are not touched until the answer is settled.
    """
    now = time.time() if now is None else now
    state = get_state(session)

    if not state.is_bidding_open:
        raise RuleViolation('Bidding is closed')
    if state.bidding_ends_at is not None and now > state.bidding_ends_at:
        raise RuleViolation('Bidding window has expired')

    team = None
    if isinstance(team_id, int) and not isinstance(team_id, bool):
        team = session.get(Team, team_id)
    if team is None or not team.is_active:
        raise RuleViolation('Team not found or inactive')

    if not isinstance(amount, int) or isinstance(amount, bool) or amount <= 0:
        raise RuleViolation('Bid amount must be a positive integer')
    if amount > team.balance:
        raise RuleViolation('Insufficient funds')

    if not current_app.config.get('ALLOW_MULTIPLE_BIDS', True):
        already = session.query(Bid).filter_by(team_id=team.id, round_number=state.current_round).first()
        if already:
            raise RuleViolation('Team has already bid this round')

    bid = Bid(team_id=team.id, round_number=state.current_round, amount=amount, created_at=now)
    session.add(bid)
    session.commit()
    current_app.logger.info(f'[bid] team={team.id} round={bid.round_number} amount={amount}')
    return bid


def get_bids_for_round(session, round_number: int) -> List[Bid]:
    """Bids for a round, best first: highest amount, then earliest placed."""
    return (
        session.query(Bid)
        .filter_by(round_number=round_number)
        .order_by(Bid.amount.desc(), Bid.created_at.asc(), Bid.id.asc())
        .all()
    )


def resolve_winner(session, round_number: int) -> Optional[Bid]:
    bids = get_bids_for_round(session, round_number)
    return bids[0] if bids else None
