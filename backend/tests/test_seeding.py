from bidarena.models import Question, Team
from bidarena.services.game.seeding import DEFAULT_TEAMS, QUESTION_BANK, seed_database


def test_seed_creates_roster_and_bank(session):
    assert seed_database(session) == (len(DEFAULT_TEAMS), len(QUESTION_BANK))
    assert session.query(Team).count() == 5
    assert session.query(Question).count() == 10
    assert {q.correct_option for q in session.query(Question).all()} <= set('ABCD')


def test_seed_is_idempotent(session):
    seed_database(session)
    assert seed_database(session) == (0, 0)
    assert session.query(Team).count() == 5
    assert session.query(Question).count() == 10


def test_seed_skips_each_table_independently(session):
    session.add(Team(name='SOLO', balance=10000))
    session.commit()
    teams_created, questions_created = seed_database(session)
    assert teams_created == 0
    assert questions_created == len(QUESTION_BANK)
    assert [t.name for t in session.query(Team).all()] == ['SOLO']


def test_seed_cli_command(flask_app):
    runner = flask_app.test_cli_runner()
    result = runner.invoke(args=['seed'])
    assert result.exit_code == 0
    assert 'Seeded 5 teams and 10 questions.' in result.output
