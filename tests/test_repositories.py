"""
Repository Tests - Snowflake-backed collaborators
tests/test_repositories.py

The Snowflake connection is replaced with a MagicMock; each test seeds the
cursor's fetch results and checks the mapping into domain models.
"""

from unittest.mock import MagicMock, patch

import pytest
from snowflake.connector.errors import ProgrammingError

from learning_scores.core.exceptions import (
    CourseModuleFormatError,
    EntityNotFoundException,
    InvalidScoreItemError,
    RepositoryException,
)
from learning_scores.models.activity import CourseModule, GradeRecord, ScoreItem
from learning_scores.models.enumerations import CompletionState
from learning_scores.repositories import (
    CompletionRepository,
    ContextRepository,
    CourseModuleRepository,
    EnrolmentRepository,
    GradeRepository,
    ScoreItemRepository,
)

MODULE = CourseModule(id=102, course_id=2, instance_id=12, modname="h5pactivity")


@pytest.fixture
def cursor():
    """Mock cursor returned by the patched Snowflake connection."""
    mock_cursor = MagicMock()
    mock_conn = MagicMock()
    mock_conn.cursor.return_value = mock_cursor
    with patch("learning_scores.repositories.base.get_snowflake_connection", return_value=mock_conn):
        yield mock_cursor


class TestBaseRepository:
    def test_programming_error_wrapped(self, cursor):
        cursor.execute.side_effect = ProgrammingError("bad sql")
        with pytest.raises(RepositoryException):
            EnrolmentRepository().is_authorized(5, 2)

    def test_cursor_closed(self, cursor):
        cursor.fetchone.return_value = None
        EnrolmentRepository().is_authorized(5, 2)
        cursor.close.assert_called_once()


class TestScoreItemRepository:
    def test_found(self, cursor):
        cursor.fetchone.return_value = {"ACTIVITY_ID": 102, "SCORE_MIN": 2.0, "SCORE_MAX": 10.0}
        item = ScoreItemRepository().get_score_item(102)
        assert item == ScoreItem(activity_id=102, score_min=2.0, score_max=10.0)
        assert cursor.execute.call_args[0][1] == (102,)

    def test_not_found(self, cursor):
        cursor.fetchone.return_value = None
        assert ScoreItemRepository().get_score_item(102) is None

    def test_inverted_range(self, cursor):
        cursor.fetchone.return_value = {"ACTIVITY_ID": 102, "SCORE_MIN": 10.0, "SCORE_MAX": 2.0}
        with pytest.raises(InvalidScoreItemError):
            ScoreItemRepository().get_score_item(102)


class TestCourseModuleRepository:
    def test_found(self, cursor):
        cursor.fetchone.return_value = {"ID": 102, "COURSE_ID": 2, "INSTANCE_ID": 12, "MODNAME": "h5pactivity"}
        assert CourseModuleRepository().get_course_module(102) == MODULE

    def test_not_found(self, cursor):
        cursor.fetchone.return_value = None
        assert CourseModuleRepository().get_course_module(102) is None

    def test_missing_modname(self, cursor):
        cursor.fetchone.return_value = {"ID": 102, "COURSE_ID": 2, "INSTANCE_ID": 12, "MODNAME": None}
        with pytest.raises(CourseModuleFormatError):
            CourseModuleRepository().get_course_module(102)


class TestCompletionRepository:
    def test_complete(self, cursor):
        cursor.fetchone.return_value = {"COMPLETION_STATE": 1}
        assert CompletionRepository().get_completion_state(MODULE, 5) is CompletionState.COMPLETE

    def test_no_row_is_incomplete(self, cursor):
        cursor.fetchone.return_value = None
        assert CompletionRepository().get_completion_state(MODULE, 5) is CompletionState.INCOMPLETE

    def test_other_state_is_incomplete(self, cursor):
        cursor.fetchone.return_value = {"COMPLETION_STATE": 3}
        assert CompletionRepository().get_completion_state(MODULE, 5) is CompletionState.INCOMPLETE

    def test_set_state_commits(self, cursor):
        CompletionRepository().set_completion_state(MODULE, 5, CompletionState.COMPLETE)
        sql, params = cursor.execute.call_args[0]
        assert "MERGE INTO COURSE_MODULE_COMPLETION" in sql
        assert params == (102, 5, 1, 102, 5, 1)
        cursor.connection.commit.assert_called_once()


class TestGradeRepository:
    def test_single_item(self, cursor):
        cursor.fetchall.return_value = [{"GRADE_MIN": 0, "GRADE_MAX": 10, "FINAL_GRADE": 7.5}]
        records = GradeRepository().get_grade_records(MODULE, 5)
        assert records == [GradeRecord(grade=7.5, grade_min=0.0, grade_max=10.0)]
        assert cursor.execute.call_args[0][1] == (5, 2, "h5pactivity", 12)

    def test_not_attempted(self, cursor):
        cursor.fetchall.return_value = [{"GRADE_MIN": 0, "GRADE_MAX": 10, "FINAL_GRADE": None}]
        assert GradeRepository().get_grade_records(MODULE, 5)[0].grade is None

    def test_no_items(self, cursor):
        cursor.fetchall.return_value = []
        assert GradeRepository().get_grade_records(MODULE, 5) == []


class TestContextRepository:
    def test_resolves_module_context(self, cursor):
        cursor.fetchone.return_value = {"INSTANCE_ID": 102}
        assert ContextRepository(module_context_level=70).resolve_context(902) == 102
        assert cursor.execute.call_args[0][1] == (902, 70)

    def test_unknown_context(self, cursor):
        cursor.fetchone.return_value = None
        with pytest.raises(EntityNotFoundException) as exc_info:
            ContextRepository().resolve_context(999)
        assert exc_info.value.entity_type == "Context"


class TestEnrolmentRepository:
    def test_enrolled(self, cursor):
        cursor.fetchone.return_value = {"1": 1}
        assert EnrolmentRepository().is_authorized(5, 2) is True

    def test_not_enrolled(self, cursor):
        cursor.fetchone.return_value = None
        assert EnrolmentRepository().is_authorized(6, 2) is False
