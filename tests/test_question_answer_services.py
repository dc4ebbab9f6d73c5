"""
Question / answer CRUD services and their counter side effects.
"""

import pytest
from pydantic import ValidationError as SchemaValidationError

from app.core.exceptions import ForbiddenError, NotFoundError, ValidationError
from app.models.college import College
from app.models.question import Question
from app.models.user import User
from app.schemas.answer import AnswerCreate, AnswerUpdate
from app.schemas.question import QuestionCreate, QuestionUpdate
from app.services import answer_service, question_service, resolution_service

from tests.conftest import ctx_for


class TestQuestionService:
    def test_create_bumps_author_and_college(self, db_session, asker, college, question):
        db_session.expire_all()
        assert db_session.get(User, asker.id).questions_asked == 1
        assert db_session.get(College, college.id).total_questions == 1
        assert question.college_id == college.id
        assert question.is_resolved is False
        assert question.best_answer_id is None

    def test_tags_are_trimmed_lowercased_and_unique(self, db_session, question):
        assert question.tags == ["id-card", "library"]

    def test_category_details_only_for_matching_category(self, db_session, asker):
        lost = question_service.create_question(
            db_session,
            ctx=ctx_for(asker),
            obj_in=QuestionCreate(
                title="Found a blue water bottle",
                content="Left in lecture hall 3.",
                category="lost-and-found",
                lost_found_details={"item_type": "Bottle", "location": "LH3"},
                roommate_details={"budget": "500"},
            ),
        )
        assert lost.lost_found_details["item_type"] == "Bottle"
        assert lost.lost_found_details["is_found"] is False
        assert lost.roommate_details is None

        general = question_service.create_question(
            db_session,
            ctx=ctx_for(asker),
            obj_in=QuestionCreate(
                title="Best coffee on campus?",
                content="Looking for recommendations.",
                category="general",
                lost_found_details={"item_type": "Mug"},
            ),
        )
        assert general.lost_found_details is None

    def test_list_filters_by_category_and_search(self, db_session, asker, question):
        question_service.create_question(
            db_session,
            ctx=ctx_for(asker),
            obj_in=QuestionCreate(
                title="Roommate needed for spring",
                content="Quiet, non-smoker preferred.",
                category="roommate",
                tags=["housing"],
            ),
        )
        ctx = ctx_for(asker)

        roommate = question_service.list_questions_for_college(db_session, ctx=ctx, category="roommate")
        assert [q.title for q in roommate] == ["Roommate needed for spring"]

        everything = question_service.list_questions_for_college(db_session, ctx=ctx, category="all")
        assert len(everything) == 2

        by_content = question_service.list_questions_for_college(db_session, ctx=ctx, search="ID CARD")
        assert [q.id for q in by_content] == [question.id]

        by_tag = question_service.list_questions_for_college(db_session, ctx=ctx, search="housing")
        assert len(by_tag) == 1

    def test_list_rejects_unknown_category(self, db_session, asker, question):
        with pytest.raises(ValidationError):
            question_service.list_questions_for_college(db_session, ctx=ctx_for(asker), category="gossip")

    def test_list_is_college_scoped(self, db_session, outsider, question):
        assert question_service.list_questions_for_college(db_session, ctx=ctx_for(outsider)) == []

    def test_views_count_other_viewers_only(self, db_session, asker, helper, question):
        question_service.view_question(db_session, ctx=ctx_for(asker), question_id=question.id)
        assert db_session.get(Question, question.id).views == 0

        viewed = question_service.view_question(db_session, ctx=ctx_for(helper), question_id=question.id)
        assert viewed.views == 1

    def test_view_other_college_is_forbidden(self, db_session, outsider, question):
        with pytest.raises(ForbiddenError):
            question_service.view_question(db_session, ctx=ctx_for(outsider), question_id=question.id)

    def test_update_by_author(self, db_session, asker, question):
        updated = question_service.update_question(
            db_session,
            ctx=ctx_for(asker),
            question_id=question.id,
            obj_in=QuestionUpdate(title="  Lost ID card  ", tags=["Lost"]),
        )
        assert updated.title == "Lost ID card"
        assert updated.tags == ["lost"]
        assert updated.content.startswith("I lost my ID card")

    def test_update_by_other_user_is_forbidden(self, db_session, helper, question):
        with pytest.raises(ForbiddenError):
            question_service.update_question(
                db_session,
                ctx=ctx_for(helper),
                question_id=question.id,
                obj_in=QuestionUpdate(title="hijacked"),
            )

    def test_blank_title_is_rejected_before_the_service(self):
        with pytest.raises(SchemaValidationError):
            QuestionCreate(title="   ", content="Anyone know?", category="general")
        with pytest.raises(SchemaValidationError):
            QuestionUpdate(title=" \t ")

    def test_title_and_content_arrive_stripped(self, db_session, asker):
        created = question_service.create_question(
            db_session,
            ctx=ctx_for(asker),
            obj_in=QuestionCreate(title="  Gym hours?  ", content="  Open on weekends?  ", category="general"),
        )
        assert created.title == "Gym hours?"
        assert created.content == "Open on weekends?"

    def test_mine(self, db_session, asker, helper, question):
        assert [q.id for q in question_service.list_questions_for_author(db_session, ctx=ctx_for(asker))] == [question.id]
        assert question_service.list_questions_for_author(db_session, ctx=ctx_for(helper)) == []


class TestAnswerService:
    def test_create_appends_and_counts(self, db_session, answerer1, question, a1, a2):
        db_session.expire_all()
        q = db_session.get(Question, question.id)
        assert [a.id for a in q.answers] == [a1.id, a2.id]
        assert q.answer_count == 2
        assert db_session.get(User, answerer1.id).answers_given == 1

    def test_cannot_answer_other_college(self, db_session, outsider, question):
        with pytest.raises(ForbiddenError):
            answer_service.create_answer(
                db_session,
                ctx=ctx_for(outsider),
                question_id=question.id,
                obj_in=AnswerCreate(content="hello from elsewhere"),
            )

    def test_cannot_answer_missing_question(self, db_session, helper):
        with pytest.raises(NotFoundError):
            answer_service.create_answer(
                db_session,
                ctx=ctx_for(helper),
                question_id=404,
                obj_in=AnswerCreate(content="anyone?"),
            )

    def test_best_answer_listed_first(self, db_session, asker, question, a1, a2):
        resolution_service.assign_best_answer(db_session, ctx_for(asker), a2.id)

        listed = answer_service.list_answers_for_question(
            db_session, ctx=ctx_for(asker), question_id=question.id
        )
        assert [a.id for a in listed] == [a2.id, a1.id]

    def test_update_only_by_author(self, db_session, answerer1, answerer2, a1):
        updated = answer_service.update_answer(
            db_session,
            ctx=ctx_for(answerer1),
            answer_id=a1.id,
            obj_in=AnswerUpdate(content="  Admin block, room 12.  "),
        )
        assert updated.content == "Admin block, room 12."

        with pytest.raises(ForbiddenError):
            answer_service.update_answer(
                db_session,
                ctx=ctx_for(answerer2),
                answer_id=a1.id,
                obj_in=AnswerUpdate(content="mine now"),
            )

    def test_blank_content_is_rejected_before_the_service(self):
        with pytest.raises(SchemaValidationError):
            AnswerCreate(content="   ")
        with pytest.raises(SchemaValidationError):
            AnswerUpdate(content="\n\n")

    def test_mine(self, db_session, answerer1, a1, a2):
        mine = answer_service.list_answers_for_author(db_session, ctx=ctx_for(answerer1))
        assert [a.id for a in mine] == [a1.id]
