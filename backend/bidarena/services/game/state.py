import math
import time

from flask import current_app
from sqlalchemy.exc import IntegrityError

from bidarena.models import Bid, GameState, Phase, Question, Team
from .errors import RuleViolation, ValidationError

# The game state lives in a single row with a fixed primary key, so two
# concurrent first reads cannot both insert one.
STATE_ID = 1

PHASE_TRANSITIONS = {
    Phase.LOBBY: {Phase.ROUND_START},
    Phase.ROUND_START: {Phase.BIDDING},
    Phase.BIDDING: {Phase.BIDDING_LOCKED},
    Phase.BIDDING_LOCKED: {Phase.BIDDING, Phase.QUESTION},
    Phase.QUESTION: {Phase.SCORING},
    Phase.SCORING: {Phase.ROUND_START, Phase.ENDED},
    Phase.ENDED: set(),
}

RESET_SCOPES = ('round', 'balance', 'full')


def parse_phase(value) -> Phase:
    try:
        return Phase(value)
    except ValueError:
        allowed = ', '.join(p.value for p in Phase)
        raise ValidationError(f'Unknown phase {value!r}; expected one of: {allowed}')


def get_state(session) -> GameState:
    """Return the live game state, creating the default row if there is none."""
    state = session.get(GameState, STATE_ID)
    if state is not None:
        return state
    session.add(_fresh_state())
    try:
        session.commit()
    except IntegrityError:
        # Another request created it first
        session.rollback()
    else:
        current_app.logger.info('[state] created default game state')
    return session.get(GameState, STATE_ID)


def _fresh_state() -> GameState:
    return GameState(
        id=STATE_ID,
        current_round=1,
        phase=Phase.LOBBY.value,
        is_bidding_open=False,
    )


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _clean_updates(session, fields: dict) -> dict:
    cleaned = {}
    for name, value in fields.items():
        if name == 'phase':
            cleaned[name] = parse_phase(value)
        elif name == 'current_round':
            if not _is_int(value) or value < 1:
                raise ValidationError('current_round must be a positive integer')
            cleaned[name] = value
        elif name == 'current_question_id':
            if value is not None:
                if not _is_int(value) or session.get(Question, value) is None:
                    raise ValidationError(f'Unknown question {value!r}')
            cleaned[name] = value
        elif name == 'is_bidding_open':
            if not isinstance(value, bool):
                raise ValidationError('is_bidding_open must be a boolean')
            cleaned[name] = value
        elif name == 'active_team_id':
            if value is not None and not _is_int(value):
                raise ValidationError('active_team_id must be an integer or null')
            cleaned[name] = value
        elif name == 'winning_bid_amount':
            if value is not None and (not _is_int(value) or value < 0):
                raise ValidationError('winning_bid_amount must be a non-negative integer or null')
            cleaned[name] = value
        elif name == 'bidding_ends_at':
            if value is not None and (
                isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value)
            ):
                raise ValidationError('bidding_ends_at must be a timestamp in seconds or null')
            cleaned[name] = float(value) if value is not None else None
        else:
            raise ValidationError(f'Unknown game state field {name!r}')
    return cleaned


def _set_phase(state: GameState, target: Phase) -> None:
    current = Phase(state.phase)
    if current == target:
        return
    if current_app.config.get('ENFORCE_PHASE_ORDER') and target not in PHASE_TRANSITIONS[current]:
        raise RuleViolation(f'Cannot move from {current.value} to {target.value}')
    current_app.logger.info(f'[phase] round={state.current_round} {current.value} -> {target.value}')
    state.phase = target.value


def update_state(session, /, **fields) -> GameState:
    """Merge the given fields into the live state.

    Fields left out are unchanged. No cross-field checks are made: opening
    bidding without also moving to the bidding phase is the caller's call.
    """
    cleaned = _clean_updates(session, fields)
    state = get_state(session)
    phase = cleaned.pop('phase', None)
    if phase is not None:
        _set_phase(state, phase)
    for name, value in cleaned.items():
        setattr(state, name, value)
    session.commit()
    return state


def reset_game(session, scope: str) -> None:
    if scope not in RESET_SCOPES:
        raise ValidationError(f'Unknown reset type {scope!r}; expected one of: {", ".join(RESET_SCOPES)}')
    starting_balance = current_app.config.get('STARTING_BALANCE', 10000)
    state = get_state(session)

    if scope == 'round':
        cleared = session.query(Bid).filter_by(round_number=state.current_round).delete(synchronize_session=False)
        state.phase = Phase.ROUND_START.value
        state.is_bidding_open = False
        state.bidding_ends_at = None
        state.active_team_id = None
        state.winning_bid_amount = 0
        current_app.logger.info(f'[reset] scope=round round={state.current_round} bids_cleared={cleared}')
    elif scope == 'balance':
        session.query(Team).update({Team.balance: starting_balance}, synchronize_session=False)
        current_app.logger.info(f'[reset] scope=balance balance={starting_balance}')
    else:
        session.query(Bid).delete(synchronize_session=False)
        session.query(Team).update(
            {Team.balance: starting_balance, Team.has_spun: False, Team.is_active: True},
            synchronize_session=False,
        )
        session.delete(state)
        session.flush()
        session.add(_fresh_state())
        current_app.logger.info('[reset] scope=full')
    session.commit()


def _close_bidding(state: GameState) -> None:
    state.is_bidding_open = False
    state.bidding_ends_at = None


def question_for_round(session, round_number: int, question_id=None):
    """Pick the question id for a round: the one asked for, else the bank in id order."""
    if question_id is not None:
        if not _is_int(question_id) or session.get(Question, question_id) is None:
            raise ValidationError(f'Unknown question {question_id!r}')
        return question_id
    total = session.query(Question).count()
    if not total:
        return None
    question = session.query(Question).order_by(Question.id).offset((round_number - 1) % total).first()
    return question.id


def start_game(session, question_id=None) -> GameState:
    state = get_state(session)
    chosen = question_for_round(session, state.current_round, question_id)
    _set_phase(state, Phase.ROUND_START)
    _close_bidding(state)
    state.active_team_id = None
    state.winning_bid_amount = 0
    state.current_question_id = chosen
    session.commit()
    return state


def open_bidding(session, duration=None, now=None) -> GameState:
    """Open the bidding window, by default for BIDDING_WINDOW_SEC seconds.

    A duration of 0 opens bidding with no deadline. Expiry is only ever
    checked when a bid arrives; nothing closes the window by itself.
    """
    if duration is None:
        duration = current_app.config.get('BIDDING_WINDOW_SEC', 30)
    if (
        not isinstance(duration, (int, float)) or isinstance(duration, bool)
        or not math.isfinite(duration) or duration < 0
    ):
        raise ValidationError('duration must be a non-negative number of seconds')
    now = time.time() if now is None else now
    state = get_state(session)
    _set_phase(state, Phase.BIDDING)
    state.is_bidding_open = True
    state.bidding_ends_at = now + duration if duration > 0 else None
    session.commit()
    current_app.logger.info(
        f'[bidding] round={state.current_round} open deadline={state.bidding_ends_at}'
    )
    return state


def lock_bidding(session) -> GameState:
    state = get_state(session)
    _set_phase(state, Phase.BIDDING_LOCKED)
    state.is_bidding_open = False
    session.commit()
    return state


def reveal_winner(session) -> GameState:
    """Hand the question to the round's highest bidder.

    With no bids there is nobody to reveal and the state is returned as is.
    """
    from .bidding import resolve_winner

    state = get_state(session)
    winner = resolve_winner(session, state.current_round)
    if winner is None:
        current_app.logger.info(f'[reveal] round={state.current_round} no bids, nothing to reveal')
        return state
    _set_phase(state, Phase.QUESTION)
    state.is_bidding_open = False
    state.active_team_id = winner.team_id
    state.winning_bid_amount = winner.amount
    session.commit()
    current_app.logger.info(
        f'[reveal] round={state.current_round} team={winner.team_id} amount={winner.amount}'
    )
    return state


def next_round(session, question_id=None) -> GameState:
    state = get_state(session)
    upcoming = (state.current_round or 0) + 1
    chosen = question_for_round(session, upcoming, question_id)
    _set_phase(state, Phase.ROUND_START)
    state.current_round = upcoming
    _close_bidding(state)
    state.active_team_id = None
    state.winning_bid_amount = 0
    state.current_question_id = chosen
    session.commit()
    return state


def end_game(session) -> GameState:
    state = get_state(session)
    _set_phase(state, Phase.ENDED)
    _close_bidding(state)
    session.commit()
    return state
