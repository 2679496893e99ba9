import enum

from flask_login import UserMixin

from bidarena import db

DEFAULT_BALANCE = 10000
OPTION_LETTERS = ('A', 'B', 'C', 'D')


class Phase(str, enum.Enum):
    """Stages of the game, listed in their intended order of play."""

    LOBBY = 'lobby'
    ROUND_START = 'round_start'
    BIDDING = 'bidding'
    BIDDING_LOCKED = 'bidding_locked'
    QUESTION = 'question'
    SCORING = 'scoring'
    ENDED = 'ended'


class Team(UserMixin, db.Model):
    __tablename__ = 'team'
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(64), unique=True, nullable=False, index=True)
    balance = db.Column(db.Integer, nullable=False, default=DEFAULT_BALANCE)
    # Shadows UserMixin.is_active so deactivated teams cannot log in
    is_active = db.Column(db.Boolean, nullable=False, default=True)
    has_spun = db.Column(db.Boolean, nullable=False, default=False)
    bids = db.relationship('Bid', back_populates='team', lazy='dynamic')

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'balance': self.balance,
            'is_active': self.is_active,
            'has_spun': self.has_spun,
        }


class Question(db.Model):
    __tablename__ = 'question'
    id = db.Column(db.Integer, primary_key=True)
    question_text = db.Column(db.Text, nullable=False)
    option_a = db.Column(db.String(256), nullable=False)
    option_b = db.Column(db.String(256), nullable=False)
    option_c = db.Column(db.String(256), nullable=False)
    option_d = db.Column(db.String(256), nullable=False)
    correct_option = db.Column(db.String(1), nullable=False)  # A, B, C or D
    explanation = db.Column(db.Text, nullable=True)

    def to_dict(self, reveal_answer=True):
        data = {
            'id': self.id,
            'question_text': self.question_text,
            'option_a': self.option_a,
            'option_b': self.option_b,
            'option_c': self.option_c,
            'option_d': self.option_d,
        }
        if reveal_answer:
            data['correct_option'] = self.correct_option
            data['explanation'] = self.explanation
        return data


class GameState(db.Model):
    """The single live row describing where the game currently is."""

    __tablename__ = 'game_state'
    id = db.Column(db.Integer, primary_key=True)
    current_round = db.Column(db.Integer, nullable=False, default=1)
    current_question_id = db.Column(db.Integer, db.ForeignKey('question.id'), nullable=True)
    phase = db.Column(db.String(32), nullable=False, default=Phase.LOBBY.value)
    is_bidding_open = db.Column(db.Boolean, nullable=False, default=False)
    bidding_ends_at = db.Column(db.Float, nullable=True)  # epoch seconds
    # Weak reference: set when a winner is revealed, never owns the team
    active_team_id = db.Column(db.Integer, nullable=True)
    winning_bid_amount = db.Column(db.Integer, nullable=True)

    def to_dict(self):
        return {
            'id': self.id,
            'current_round': self.current_round,
            'current_question_id': self.current_question_id,
            'phase': self.phase,
            'is_bidding_open': self.is_bidding_open,
            'bidding_ends_at': self.bidding_ends_at,
            'active_team_id': self.active_team_id,
            'winning_bid_amount': self.winning_bid_amount,
        }


class Bid(db.Model):
    __tablename__ = 'bid'
    id = db.Column(db.Integer, primary_key=True)
    team_id = db.Column(db.Integer, db.ForeignKey('team.id'), nullable=False, index=True)
    round_number = db.Column(db.Integer, nullable=False, index=True)
    amount = db.Column(db.Integer, nullable=False)
    created_at = db.Column(db.Float, nullable=False)  # epoch seconds
    team = db.relationship('Team', back_populates='bids')

    def to_dict(self):
        return {
            'id': self.id,
            'team_id': self.team_id,
            'round_number': self.round_number,
            'amount': self.amount,
            'created_at': self.created_at,
        }
