from app.models.college import College
from app.models.user import User
from app.models.question import Question, QUESTION_CATEGORIES
from app.models.answer import Answer, HelpfulMark

__all__ = [
    "College",
    "User",
    "Question",
    "QUESTION_CATEGORIES",
    "Answer",
    "HelpfulMark",
]
