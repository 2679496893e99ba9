from flask import Blueprint, jsonify

from bidarena import db
from bidarena.api import json_body
from bidarena.services.game.bidding import get_bids_for_round, place_bid as svc_place_bid
from bidarena.services.game.state import get_state

bids = Blueprint('bids', __name__)


@bids.route('', methods=['POST'])
def place_bid():
    data = json_body()
    bid = svc_place_bid(db.session, data.get('team_id'), data.get('amount'))
    return jsonify(bid.to_dict()), 201


@bids.route('/current', methods=['GET'])
def current_round_bids():
    state = get_state(db.session)
    return jsonify([b.to_dict() for b in get_bids_for_round(db.session, state.current_round)])
