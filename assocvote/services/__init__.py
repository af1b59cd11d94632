from .poll import (
    NewQuestion,
    create_option,
    create_question,
    delete_question,
    get_answer_count,
    get_answers_count,
    get_option,
    get_question,
    send_answers,
)
from .survey import (
    add_question,
    answer_survey,
    create_survey,
    delete_survey,
    get_full_survey,
    get_survey,
    get_survey_results,
    get_surveys_for_association,
    remove_question,
    replace_survey,
    update_survey,
)
from .vote import (
    answer_vote,
    close_vote,
    create_vote,
    delete_vote,
    get_current_ballot_results,
    get_full_vote,
    get_vote,
    get_votes_for_association,
    get_winning_option,
    open_new_ballot,
    open_vote,
    update_vote,
)
from .meeting import count_meeting_enrollments, get_meeting
from .user import get_user

__all__ = [
    # poll questions
    "NewQuestion",
    "create_option",
    "create_question",
    "delete_question",
    "get_answer_count",
    "get_answers_count",
    "get_option",
    "get_question",
    "send_answers",
    # surveys
    "add_question",
    "answer_survey",
    "create_survey",
    "delete_survey",
    "get_full_survey",
    "get_survey",
    "get_survey_results",
    "get_surveys_for_association",
    "remove_question",
    "replace_survey",
    "update_survey",
    # votes
    "answer_vote",
    "close_vote",
    "create_vote",
    "delete_vote",
    "get_current_ballot_results",
    "get_full_vote",
    "get_vote",
    "get_votes_for_association",
    "get_winning_option",
    "open_new_ballot",
    "open_vote",
    "update_vote",
    # collaborators
    "count_meeting_enrollments",
    "get_meeting",
    "get_user",
]
