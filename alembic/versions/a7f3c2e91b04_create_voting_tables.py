"""create_voting_tables

Revision ID: a7f3c2e91b04
Revises:
Create Date: 2025-11-03 00:00:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = 'a7f3c2e91b04'
down_revision = None
branch_labels = None
depends_on = None


def _uuid(name, *args, **kwargs):
    return sa.Column(name, sa.String(length=36), *args, **kwargs)


def upgrade():
    op.create_table(
        'associations',
        _uuid('id', primary_key=True),
        sa.Column('name', sa.String(length=200), nullable=False),
    )

    op.create_table(
        'users',
        _uuid('id', primary_key=True),
        sa.Column('email', sa.String(length=254), nullable=False, unique=True),
        sa.Column('first_name', sa.String(length=100), nullable=False),
        sa.Column('last_name', sa.String(length=100), nullable=False),
        sa.Column('role', sa.String(length=20), nullable=False),
        _uuid('association_id', sa.ForeignKey('associations.id', ondelete='CASCADE'), nullable=True),
    )
    op.create_index('idx_users_association', 'users', ['association_id'])

    op.create_table(
        'events',
        _uuid('id', primary_key=True),
        sa.Column('name', sa.String(length=200), nullable=False),
        _uuid('association_id', sa.ForeignKey('associations.id', ondelete='CASCADE'), nullable=False),
    )

    op.create_table(
        'event_user_enrollments',
        _uuid('id', primary_key=True),
        _uuid('event_id', sa.ForeignKey('events.id', ondelete='CASCADE'), nullable=False),
        _uuid('user_id', sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('present', sa.Boolean(), nullable=False),
        sa.UniqueConstraint('event_id', 'user_id', name='uq_event_user'),
    )
    op.create_index('idx_enrollments_event', 'event_user_enrollments', ['event_id'])

    op.create_table(
        'meetings',
        _uuid('id', primary_key=True),
        sa.Column('agendum', sa.Text(), nullable=False),
        sa.Column('presence_code', sa.String(length=50), nullable=False),
        _uuid('event_id', sa.ForeignKey('events.id', ondelete='CASCADE'), nullable=False, unique=True),
    )

    op.create_table(
        'surveys',
        _uuid('id', primary_key=True),
        sa.Column('title', sa.String(length=200), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('visibility', sa.String(length=20), nullable=False),
        _uuid('association_id', sa.ForeignKey('associations.id', ondelete='CASCADE'), nullable=False),
    )
    op.create_index('idx_surveys_association', 'surveys', ['association_id'])

    op.create_table(
        'poll_questions',
        _uuid('id', primary_key=True),
        sa.Column('prompt', sa.String(length=500), nullable=False),
        sa.Column('type', sa.String(length=20), nullable=False),
        sa.Column('position', sa.Integer(), nullable=False),
        _uuid('survey_id', sa.ForeignKey('surveys.id', ondelete='CASCADE'), nullable=True),
    )
    op.create_index('idx_poll_questions_survey', 'poll_questions', ['survey_id'])

    op.create_table(
        'poll_options',
        _uuid('id', primary_key=True),
        sa.Column('content', sa.String(length=200), nullable=False),
        sa.Column('position', sa.Integer(), nullable=False),
        _uuid('question_id', sa.ForeignKey('poll_questions.id', ondelete='CASCADE'), nullable=False),
    )
    op.create_index('idx_poll_options_question', 'poll_options', ['question_id'])

    op.create_table(
        'poll_responses',
        _uuid('id', primary_key=True),
        _uuid('question_id', sa.ForeignKey('poll_questions.id', ondelete='CASCADE'), nullable=False),
        _uuid('responder_id', sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('timestamp', sa.DateTime(timezone=True), nullable=False),
        sa.UniqueConstraint('question_id', 'responder_id', name='uq_question_responder'),
    )
    op.create_index('idx_poll_responses_question', 'poll_responses', ['question_id'])

    op.create_table(
        'poll_answers',
        _uuid('id', primary_key=True),
        _uuid('response_id', sa.ForeignKey('poll_responses.id', ondelete='CASCADE'), nullable=False),
        _uuid('option_id', sa.ForeignKey('poll_options.id', ondelete='CASCADE'), nullable=False),
        _uuid('responder_id', sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.UniqueConstraint('response_id', 'option_id', name='uq_response_option'),
    )
    op.create_index('idx_poll_answers_option', 'poll_answers', ['option_id'])

    op.create_table(
        'votes',
        _uuid('id', primary_key=True),
        sa.Column('title', sa.String(length=200), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('visibility', sa.String(length=20), nullable=False),
        sa.Column('min_percent_answers', sa.Integer(), nullable=False),
        sa.Column('acceptance_criteria', sa.String(length=20), nullable=False),
        _uuid('association_id', sa.ForeignKey('associations.id', ondelete='CASCADE'), nullable=False),
        _uuid('meeting_id', sa.ForeignKey('meetings.id', ondelete='SET NULL'), nullable=True),
        sa.Column('current_ballot', sa.Integer(), nullable=False, server_default='1'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index('idx_votes_association', 'votes', ['association_id'])

    op.create_table(
        'ballots',
        _uuid('id', primary_key=True),
        sa.Column('number', sa.Integer(), nullable=False),
        _uuid('vote_id', sa.ForeignKey('votes.id', ondelete='CASCADE'), nullable=False),
        _uuid('question_id', sa.ForeignKey('poll_questions.id', ondelete='CASCADE'), nullable=False, unique=True),
        sa.UniqueConstraint('vote_id', 'number', name='uq_vote_ballot_number'),
    )
    op.create_index('idx_ballots_vote', 'ballots', ['vote_id'])


def downgrade():
    op.drop_table('ballots')
    op.drop_table('votes')
    op.drop_table('poll_answers')
    op.drop_table('poll_responses')
    op.drop_table('poll_options')
    op.drop_table('poll_questions')
    op.drop_table('surveys')
    op.drop_table('meetings')
    op.drop_table('event_user_enrollments')
    op.drop_table('events')
    op.drop_table('users')
    op.drop_table('associations')
