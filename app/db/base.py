# app/db/base.py
# Import every model here so Base.metadata sees all tables.
from app.db.base_class import Base  # noqa

from app.models.college import College  # noqa
from app.models.user import User      # noqa
from app.models.question import Question  # noqa
from app.models.answer import Answer, HelpfulMark  # noqa
