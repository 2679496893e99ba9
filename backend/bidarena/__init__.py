from flask import Flask, jsonify, request
from flask_sqlalchemy import SQLAlchemy
from flask_bcrypt import Bcrypt
from flask_login import LoginManager
from flask_cors import CORS
from flask_migrate import Migrate
from sqlalchemy.exc import SQLAlchemyError
import click
from config import Config

db = SQLAlchemy()
bcrypt = Bcrypt()
login_manager = LoginManager()
migrate = Migrate()


def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)

    db.init_app(flask_app)
    bcrypt.init_app(flask_app)
    login_manager.init_app(flask_app)
    migrate.init_app(flask_app, db)
    CORS(flask_app, supports_credentials=True, origins=flask_app.config.get('CORS_ORIGINS', []))

    # Requests compare against the hash only
    from bidarena.auth import hash_admin_secret
    if flask_app.config.get('ADMIN_AUTH_ENABLED', True) and not flask_app.config.get('ADMIN_SECRET_HASH'):
        secret = flask_app.config.get('ADMIN_SECRET')
        if not secret:
            raise RuntimeError('ADMIN_SECRET must be set when ADMIN_AUTH_ENABLED is on')
        flask_app.config['ADMIN_SECRET_HASH'] = hash_admin_secret(secret)

    from bidarena.main import main
    flask_app.register_blueprint(main)

    from bidarena.api.teams import teams
    from bidarena.api.game import game
    from bidarena.api.questions import questions
    from bidarena.api.bids import bids
    flask_app.register_blueprint(teams, url_prefix='/api/teams')
    flask_app.register_blueprint(game, url_prefix='/api/game')
    flask_app.register_blueprint(questions, url_prefix='/api/questions')
    flask_app.register_blueprint(bids, url_prefix='/api/bids')

    from bidarena.services.game.errors import GameError

    @flask_app.errorhandler(GameError)
    def handle_game_error(exc):
        db.session.rollback()
        if exc.status_code != 403:
            flask_app.logger.warning(f'[rejected] {request.method} {request.path}: {exc.message}')
        return jsonify({'error': exc.message}), exc.status_code

    # Flask-Login: a team that spun in on this client is its logged-in user
    from bidarena.models import Team

    @login_manager.user_loader
    def load_team(team_id):
        team = db.session.get(Team, int(team_id))
        # A deactivated team loses its session on the next request
        if team is None or not team.is_active:
            return None
        return team

    @login_manager.unauthorized_handler
    def unauthorized():
        return jsonify({'error': 'No team has entered on this client'}), 401

    from bidarena.services.game.seeding import seed_database

    if flask_app.config.get('SEED_ON_STARTUP'):
        with flask_app.app_context():
            try:
                seed_database(db.session)
            except SQLAlchemyError as exc:
                # Tables may not exist yet before the first migration
                db.session.rollback()
                flask_app.logger.warning(f'Startup seeding skipped: {exc}')

    @click.command('seed')
    def seed_command():
        """Creates the default teams and questions if the tables are empty."""
        with flask_app.app_context():
            teams_created, questions_created = seed_database(db.session)
            print(f'Seeded {teams_created} teams and {questions_created} questions.')

    @click.command('db-reset')
    def db_reset_command():
        """Drops, recreates, and seeds the database."""
        with flask_app.app_context():
            db.drop_all()
            db.create_all()
            seed_database(db.session)
            print('Database has been reset and seeded!')

    flask_app.cli.add_command(seed_command)
    flask_app.cli.add_command(db_reset_command)

    return flask_app
