"""Application constants.

This module contains magic strings and numbers used throughout the application.
Centralizing these values makes them easier to maintain and modify.
"""

# Length limits for user-supplied text (mirrored by the column sizes)
MAX_TITLE_LENGTH = 200
MAX_DESCRIPTION_LENGTH = 2000
MAX_PROMPT_LENGTH = 500
MAX_OPTION_LENGTH = 200

# A question needs something to choose from
MIN_OPTIONS_PER_QUESTION = 1
MAX_OPTIONS_PER_QUESTION = 50

# Ballots are numbered from 1 within a vote
FIRST_BALLOT_NUMBER = 1

# Misspelled wire value kept by older clients for multiple choice questions
LEGACY_MULTIPLE_CHOICE_VALUE = "mutliple_choice"

# JWT verification
ACCESS_TOKEN_ALGORITHM = "HS256"
