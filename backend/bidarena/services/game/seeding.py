from flask import current_app

from bidarena.models import Question, Team

DEFAULT_TEAMS = ['ALPHA', 'NOVA', 'ZENITH', 'TITAN', 'NEXUS']

# (question, A, B, C, D, correct, explanation)
QUESTION_BANK = [
    ("Which company is the world's largest container shipping company (2025)?",
     'CMA CGM', 'MSC', 'Maersk', 'Hapag-Lloyd', 'B', 'MSC (Mediterranean Shipping Company)'),
    ("Which company operates India's largest logistics and supply chain network for e-commerce?",
     'DHL', 'Blue Dart', 'Delhivery', 'DTDC', 'C', 'Delhivery'),
    ('Which Indian company owns the largest container port in India (Mundra Port)?',
     'Reliance', 'Tata Group', 'Adani Group', 'L&T', 'C', 'Adani Group'),
    ('Which organization is responsible for public health globally?',
     'WHO', 'UNICEF', 'Red Cross', 'UNESCO', 'A', 'WHO (World Health Organization)'),
    ('Which logistics system keeps vaccines at correct temperature?',
     'Warm Chain', 'Cold Chain', 'Supply Chain', 'Storage Chain', 'B', 'Cold Chain'),
    ('How many high-speed rail corridors were announced in Budget 2026?',
     '3', '5', '7', '10', 'C', '7 high-speed rail corridors'),
    ('Which tax rate was reduced from 15% to 14% in Budget 2026?',
     'GST', 'Corporate Tax', 'MAT', 'Income Tax', 'C', 'MAT rate reduced to 14%'),
    ('What major mission was launched to improve semiconductor manufacturing?',
     'Digital India', 'Startup India', 'Semiconductor Mission 2.0', 'Make in India', 'C', 'Semiconductor Mission 2.0'),
    ('Which company is one of the largest employers in India (600k+)?',
     'Infosys', 'TCS', 'Wipro', 'Reliance', 'B', 'TCS (Tata Consultancy Services)'),
    ('What is the process of training new employees called?',
     'Recruitment', 'Selection', 'Onboarding', 'Promotion', 'C', 'Onboarding'),
]


def seed_database(session):
    """Create the default roster and question bank, skipping whichever already has rows.

    Returns the number of teams and questions created.
    """
    teams_created = 0
    questions_created = 0
    if session.query(Team).count() == 0:
        balance = current_app.config.get('STARTING_BALANCE', 10000)
        for name in DEFAULT_TEAMS:
            session.add(Team(name=name, balance=balance, is_active=True, has_spun=False))
            teams_created += 1
    if session.query(Question).count() == 0:
        for text, a, b, c, d, correct, explanation in QUESTION_BANK:
            session.add(Question(
                question_text=text,
                option_a=a,
                option_b=b,
                option_c=c,
                option_d=d,
                correct_option=correct,
                explanation=explanation,
            ))
            questions_created += 1
    session.commit()
    if teams_created or questions_created:
        current_app.logger.info(f'[seed] teams={teams_created} questions={questions_created}')
    return teams_created, questions_created
