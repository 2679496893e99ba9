from sqlalchemy import update
from flask import current_app

from bidarena.models import GameState, OPTION_LETTERS, Phase, Question, Team
from .errors import RuleViolation, ValidationError
from .state import get_state


def submit_answer(session, team_id, option) -> dict:
    """Judge the active team's answer and settle its bid.

    A correct answer adds the winning bid to the team's balance, a wrong one
    subtracts it. The move to scoring is a compare-and-swap on the state row
    and the balance change is a single SQL increment, committed together, so
    a duplicate submission cannot settle twice.
    """
    state = get_state(session)
    if state.phase != Phase.QUESTION.value or state.active_team_id is None or state.active_team_id != team_id:
        raise RuleViolation('Not your turn or wrong phase')

    choice = option.strip().upper() if isinstance(option, str) else None
    if choice not in OPTION_LETTERS:
        raise ValidationError('option must be one of A, B, C or D')

    question = session.get(Question, state.current_question_id) if state.current_question_id else None
    team = session.get(Team, team_id)
    if question is None or team is None:
        raise RuleViolation('Question or team missing')

    correct = choice == question.correct_option
    stake = state.winning_bid_amount or 0
    delta = stake if correct else -stake

    claimed = session.execute(
        update(GameState)
        .where(
            GameState.id == state.id,
            GameState.phase == Phase.QUESTION.value,
            GameState.active_team_id == team.id,
        )
        .values(phase=Phase.SCORING.value)
        .execution_options(synchronize_session=False)
    )
    if claimed.rowcount != 1:
        session.rollback()
        raise RuleViolation('Not your turn or wrong phase')

    session.execute(
        update(Team)
        .where(Team.id == team.id)
        .values(balance=Team.balance + delta)
        .execution_options(synchronize_session=False)
    )
    session.commit()

    current_app.logger.info(
        f'[settle] round={state.current_round} team={team.id} correct={correct} delta={delta} balance={team.balance}'
    )
    return {
        'correct': correct,
        'new_balance': team.balance,
        'correct_answer': question.correct_option,
    }
