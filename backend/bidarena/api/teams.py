from flask import Blueprint, jsonify
from flask_login import current_user, login_required, login_user

from bidarena import db
from bidarena.api import json_body
from bidarena.services.game import teams as team_service

teams = Blueprint('teams', __name__)


@teams.route('', methods=['GET'])
def list_teams():
    return jsonify([t.to_dict() for t in team_service.list_teams(db.session)])


@teams.route('', methods=['POST'])
def create_team():
    data = json_body()
    team = team_service.create_team(db.session, data.get('name'))
    return jsonify(team.to_dict()), 201


@teams.route('/spin', methods=['POST'])
def spin_random_team():
    """Lobby spinner: picks a random team that has not entered yet and signs it in here."""
    team = team_service.spin_random(db.session)
    login_user(team, remember=True)
    return jsonify(team.to_dict())


@teams.route('/<int:team_id>/spin', methods=['POST'])
def spin_team(team_id):
    team = team_service.spin_team(db.session, team_id)
    if team.is_active:
        login_user(team, remember=True)
    return jsonify(team.to_dict())


@teams.route('/me', methods=['GET'])
@login_required
def current_team():
    return jsonify(current_user.to_dict())


@teams.route('/<int:team_id>/reset', methods=['POST'])
def reset_team_balance(team_id):
    team = team_service.reset_team_balance(db.session, team_id)
    return jsonify(team.to_dict())


@teams.route('/<int:team_id>', methods=['DELETE'])
def deactivate_team(team_id):
    team = team_service.deactivate_team(db.session, team_id)
    return jsonify(team.to_dict())
