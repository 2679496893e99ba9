from flask import Blueprint, jsonify

from bidarena import db
from bidarena.models import Phase, Question
from bidarena.services.game.errors import NotFound
from bidarena.services.game.state import get_state

questions = Blueprint('questions', __name__)

# The answer stays hidden from pollers until the round is being scored
ANSWER_VISIBLE_PHASES = (Phase.SCORING.value, Phase.ENDED.value)


@questions.route('/current', methods=['GET'])
def current_question():
    state = get_state(db.session)
    if not state.current_question_id:
        raise NotFound('No active question')
    question = db.session.get(Question, state.current_question_id)
    if question is None:
        raise NotFound('Question not found')
    return jsonify(question.to_dict(reveal_answer=state.phase in ANSWER_VISIBLE_PHASES))
