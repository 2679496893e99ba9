import time

from flask import Blueprint, jsonify

from bidarena import db
from bidarena.api import json_body, require_int
from bidarena.auth import admin_required
from bidarena.services.game import state as state_service
from bidarena.services.game.scoring import submit_answer as svc_submit_answer

game = Blueprint('game', __name__)


def _state_payload(state):
    payload = state.to_dict()
    # Pollers render the bidding countdown from these
    now = time.time()
    payload['server_time'] = now
    payload['bidding_seconds_left'] = (
        max(0.0, state.bidding_ends_at - now) if state.bidding_ends_at is not None else None
    )
    return payload


def _admin_fields():
    data = dict(json_body())
    data.pop('password', None)
    return data


@game.route('/state', methods=['GET'])
def get_game_state():
    return jsonify(_state_payload(state_service.get_state(db.session)))


@game.route('/update', methods=['POST'])
@admin_required
def update_game_state():
    state = state_service.update_state(db.session, **_admin_fields())
    return jsonify(_state_payload(state))


@game.route('/reset', methods=['POST'])
@admin_required
def reset_game():
    data = _admin_fields()
    state_service.reset_game(db.session, data.get('type'))
    return jsonify({'success': True})


@game.route('/start', methods=['POST'])
@admin_required
def start_game():
    data = _admin_fields()
    state = state_service.start_game(db.session, question_id=data.get('question_id'))
    return jsonify(_state_payload(state))


@game.route('/open-bidding', methods=['POST'])
@admin_required
def open_bidding():
    data = _admin_fields()
    state = state_service.open_bidding(db.session, duration=data.get('duration'))
    return jsonify(_state_payload(state))


@game.route('/lock-bidding', methods=['POST'])
@admin_required
def lock_bidding():
    return jsonify(_state_payload(state_service.lock_bidding(db.session)))


@game.route('/reveal', methods=['POST'])
@admin_required
def reveal_winner():
    return jsonify(_state_payload(state_service.reveal_winner(db.session)))


@game.route('/next-round', methods=['POST'])
@admin_required
def next_round():
    data = _admin_fields()
    state = state_service.next_round(db.session, question_id=data.get('question_id'))
    return jsonify(_state_payload(state))


@game.route('/end', methods=['POST'])
@admin_required
def end_game():
    return jsonify(_state_payload(state_service.end_game(db.session)))


@game.route('/answer', methods=['POST'])
def submit_answer():
    data = json_body()
    team_id = require_int(data, 'team_id')
    result = svc_submit_answer(db.session, team_id, data.get('option'))
    return jsonify(result)
