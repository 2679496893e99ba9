from bidarena.models import Question
from bidarena.services.game.seeding import DEFAULT_TEAMS


def test_index(client):
    res = client.get('/')
    assert res.status_code == 200
    assert 'message' in res.get_json()


def test_state_is_created_on_first_read(client):
    res = client.get('/api/game/state')
    assert res.status_code == 200
    state = res.get_json()
    assert state['phase'] == 'lobby'
    assert state['current_round'] == 1
    assert state['is_bidding_open'] is False
    assert state['bidding_seconds_left'] is None


def test_list_teams(client, seeded):
    teams = client.get('/api/teams').get_json()
    assert [t['name'] for t in teams] == DEFAULT_TEAMS
    assert all(t['balance'] == 10000 and t['is_active'] and not t['has_spun'] for t in teams)


def test_create_team_enforces_unique_name(client, seeded):
    res = client.post('/api/teams', json={'name': 'ORBIT'})
    assert res.status_code == 201
    assert res.get_json()['balance'] == 10000
    res = client.post('/api/teams', json={'name': 'ORBIT'})
    assert res.status_code == 400
    assert 'exists' in res.get_json()['error']
    assert client.post('/api/teams', json={}).status_code == 400


def test_spin_marks_team_and_signs_it_in(client, seeded, team_ids):
    assert client.get('/api/teams/me').status_code == 401
    res = client.post(f'/api/teams/{team_ids[2]}/spin')
    assert res.status_code == 200
    assert res.get_json()['has_spun'] is True
    me = client.get('/api/teams/me')
    assert me.status_code == 200
    assert me.get_json()['id'] == team_ids[2]


def test_random_spin_exhausts_roster(client, seeded):
    picked = set()
    for _ in DEFAULT_TEAMS:
        res = client.post('/api/teams/spin')
        assert res.status_code == 200
        picked.add(res.get_json()['id'])
    assert len(picked) == len(DEFAULT_TEAMS)
    res = client.post('/api/teams/spin')
    assert res.status_code == 400


def test_team_reset_and_deactivate(client, seeded, team_ids):
    res = client.post(f'/api/teams/{team_ids[0]}/reset')
    assert res.status_code == 200
    assert res.get_json()['balance'] == 10000
    res = client.delete(f'/api/teams/{team_ids[0]}')
    assert res.status_code == 200
    assert res.get_json()['is_active'] is False
    assert client.post('/api/teams/9999/reset').status_code == 404


def test_admin_routes_require_secret(client, seeded):
    res = client.post('/api/game/update', json={'phase': 'bidding'})
    assert res.status_code == 403
    res = client.post('/api/game/update', json={'phase': 'bidding', 'password': 'nope'})
    assert res.status_code == 403
    res = client.post('/api/game/reset', json={'type': 'full'}, headers={'X-Admin-Secret': 'nope'})
    assert res.status_code == 403
    assert client.post('/api/game/open-bidding').status_code == 403
    # Nothing changed
    assert client.get('/api/game/state').get_json()['phase'] == 'lobby'


def test_admin_secret_in_body(client, seeded):
    res = client.post('/api/game/update', json={'phase': 'round_start', 'password': 'test-admin'})
    assert res.status_code == 200
    assert res.get_json()['phase'] == 'round_start'


def test_admin_auth_can_be_disabled(flask_app, client, seeded):
    flask_app.config['ADMIN_AUTH_ENABLED'] = False
    res = client.post('/api/game/update', json={'phase': 'round_start'})
    assert res.status_code == 200


def test_update_rejects_malformed_input(client, admin):
    res = client.post('/api/game/update', json={'phase': 'intermission'}, headers=admin)
    assert res.status_code == 400
    assert 'phase' in res.get_json()['error']
    res = client.post('/api/game/update', json=['phase'], headers=admin)
    assert res.status_code == 400
    res = client.post('/api/game/reset', json={'type': 'season'}, headers=admin)
    assert res.status_code == 400
    res = client.post('/api/game/update', json={'session': 1}, headers=admin)
    assert res.status_code == 400
    assert 'Unknown game state field' in res.get_json()['error']


def test_non_finite_deadline_is_rejected(client, seeded, team_ids, admin):
    res = client.post(
        '/api/game/update',
        data='{"phase": "bidding", "is_bidding_open": true, "bidding_ends_at": NaN}',
        content_type='application/json',
        headers=admin,
    )
    assert res.status_code == 400
    res = client.post(
        '/api/game/open-bidding',
        data='{"duration": Infinity}',
        content_type='application/json',
        headers=admin,
    )
    assert res.status_code == 400
    state = client.get('/api/game/state').get_json()
    assert state['is_bidding_open'] is False
    assert state['bidding_ends_at'] is None
    res = client.post('/api/bids', json={'team_id': team_ids[0], 'amount': 100})
    assert res.status_code == 400


def test_deactivated_team_loses_its_session(client, seeded, team_ids):
    client.post(f'/api/teams/{team_ids[1]}/spin')
    assert client.get('/api/teams/me').status_code == 200
    client.delete(f'/api/teams/{team_ids[1]}')
    assert client.get('/api/teams/me').status_code == 401


def test_current_question(client, seeded, admin):
    res = client.get('/api/questions/current')
    assert res.status_code == 404
    client.post('/api/game/start', headers=admin)
    res = client.get('/api/questions/current')
    assert res.status_code == 200
    question = res.get_json()
    assert question['question_text']
    assert 'correct_option' not in question


def test_bid_errors_are_readable(client, seeded, team_ids, admin):
    res = client.post('/api/bids', json={'team_id': team_ids[0], 'amount': 100})
    assert res.status_code == 400
    assert res.get_json()['error'] == 'Bidding is closed'

    client.post('/api/game/open-bidding', headers=admin)
    cases = [
        ({'team_id': 9999, 'amount': 100}, 'Team not found or inactive'),
        ({'team_id': team_ids[0], 'amount': 0}, 'Bid amount must be a positive integer'),
        ({'team_id': team_ids[0], 'amount': 20000}, 'Insufficient funds'),
    ]
    for body, message in cases:
        res = client.post('/api/bids', json=body)
        assert res.status_code == 400
        assert res.get_json()['error'] == message
    assert client.get('/api/bids/current').get_json() == []


def test_expired_window_rejects_bid(client, seeded, team_ids, admin):
    import time
    client.post('/api/game/update', json={
        'phase': 'bidding', 'is_bidding_open': True, 'bidding_ends_at': time.time() - 1,
    }, headers=admin)
    res = client.post('/api/bids', json={'team_id': team_ids[0], 'amount': 100})
    assert res.status_code == 400
    assert res.get_json()['error'] == 'Bidding window has expired'
    assert client.get('/api/bids/current').get_json() == []


def test_full_round(client, seeded, team_ids, admin):
    team_a, team_b, team_c = team_ids[:3]

    started = client.post('/api/game/start', headers=admin).get_json()
    assert started['phase'] == 'round_start'

    opened = client.post('/api/game/open-bidding', json={'duration': 60}, headers=admin).get_json()
    assert opened['phase'] == 'bidding'
    assert opened['is_bidding_open'] is True
    assert 0 < opened['bidding_seconds_left'] <= 60

    res = client.post('/api/bids', json={'team_id': team_a, 'amount': 500})
    assert res.status_code == 201
    assert res.get_json()['round_number'] == 1
    assert client.post('/api/bids', json={'team_id': team_b, 'amount': 700}).status_code == 201
    assert client.post('/api/bids', json={'team_id': team_c, 'amount': 700}).status_code == 201

    bids = client.get('/api/bids/current').get_json()
    assert [(b['team_id'], b['amount']) for b in bids] == [(team_b, 700), (team_c, 700), (team_a, 500)]

    locked = client.post('/api/game/lock-bidding', headers=admin).get_json()
    assert locked['phase'] == 'bidding_locked'
    assert client.post('/api/bids', json={'team_id': team_a, 'amount': 900}).status_code == 400

    revealed = client.post('/api/game/reveal', headers=admin).get_json()
    assert revealed['phase'] == 'question'
    assert revealed['active_team_id'] == team_b
    assert revealed['winning_bid_amount'] == 700

    # Wrong team
    res = client.post('/api/game/answer', json={'team_id': team_a, 'option': 'A'})
    assert res.status_code == 400

    question_id = revealed['current_question_id']
    from bidarena import db
    correct = db.session.get(Question, question_id).correct_option
    res = client.post('/api/game/answer', json={'team_id': team_b, 'option': correct})
    assert res.status_code == 200
    assert res.get_json() == {'correct': True, 'new_balance': 10700, 'correct_answer': correct}

    state = client.get('/api/game/state').get_json()
    assert state['phase'] == 'scoring'
    assert client.get('/api/questions/current').get_json()['correct_option'] == correct

    nxt = client.post('/api/game/next-round', headers=admin).get_json()
    assert nxt['current_round'] == 2
    assert nxt['phase'] == 'round_start'
    assert nxt['active_team_id'] is None
    assert client.get('/api/bids/current').get_json() == []

    ended = client.post('/api/game/end', headers=admin).get_json()
    assert ended['phase'] == 'ended'

    assert client.post('/api/game/reset', json={'type': 'full'}, headers=admin).get_json() == {'success': True}
    state = client.get('/api/game/state').get_json()
    assert (state['phase'], state['current_round']) == ('lobby', 1)
    teams = client.get('/api/teams').get_json()
    assert all(t['balance'] == 10000 for t in teams)


def test_answer_requires_integer_team_id(client, seeded):
    res = client.post('/api/game/answer', json={'team_id': 'ALPHA', 'option': 'A'})
    assert res.status_code == 400
