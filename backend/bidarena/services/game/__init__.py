"""Game domain services: phase control, bidding, settlement and seeding.

This package contains the core game mechanics imported by the HTTP
blueprints, keeping transport concerns separated from the rules of play.
Every function takes the SQLAlchemy session it should read and write
through as its first argument.
"""
