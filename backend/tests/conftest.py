import os
import sys
import pytest

# Ensure the backend root (containing the `bidarena` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from bidarena import create_app, db

TEST_ADMIN_SECRET = 'test-admin'


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    STARTING_BALANCE = 10000
    BIDDING_WINDOW_SEC = 30
    ADMIN_AUTH_ENABLED = True
    ADMIN_SECRET = TEST_ADMIN_SECRET
    BCRYPT_LOG_ROUNDS = 4
    ALLOW_MULTIPLE_BIDS = True
    ENFORCE_PHASE_ORDER = False
    SEED_ON_STARTUP = False
    CORS_ORIGINS = ['http://localhost:5173']


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)
    with application.app_context():
        # Ensure models are imported so tables are created
        import bidarena.models  # noqa: F401
        db.create_all()
        yield application
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def session(flask_app):
    return db.session


@pytest.fixture()
def seeded(session):
    from bidarena.services.game.seeding import seed_database
    seed_database(session)
    return session


@pytest.fixture()
def admin():
    return {'X-Admin-Secret': TEST_ADMIN_SECRET}


@pytest.fixture()
def team_ids(seeded):
    from bidarena.models import Team
    return [t.id for t in seeded.query(Team).order_by(Team.id).all()]
