# tests/conftest.py

"""
Pytest Fixtures - Shared collaborator fakes and seed data for all tests

SEED DATA REFERENCE (course 2, enrolled actor 5, outsider actor 6):
- 101 url          score item (0.0, 5.0)   completion: complete
- 102 h5pactivity  score item (2.0, 10.0)  grade 7.5 of [0, 10]
- 103 h5pactivity  score item (0.0, 1.0)   grade not attempted
- 104 page         NO score item
- 105 quiz         score item (0.0, 3.0)   unsupported type
- 106 h5pactivity  score item (0.0, 4.0)   two grade items (inconsistent)
- Contexts: 901→101, 902→102, 903→103, 904→104
"""

import pytest
from typing import Dict, List, Optional, Set, Tuple
from fastapi.testclient import TestClient

from learning_scores.core.dependencies import get_scoring_service
from learning_scores.core.exceptions import EntityNotFoundException, EventIngestionError
from learning_scores.core.interfaces import ScoringCollaborators
from learning_scores.main import app
from learning_scores.models.activity import CourseModule, GradeRecord, ScoreItem
from learning_scores.models.enumerations import CompletionState
from learning_scores.services.scoring_service import ScoringService


COURSE_ID = 2
ACTOR_ID = 5
OUTSIDER_ID = 6


# =============================================================================
# IN-MEMORY COLLABORATORS
# =============================================================================

class FakeActivityDirectory:
    def __init__(self, modules: Dict[int, CourseModule]):
        self.modules = modules
        self.lookups: List[int] = []

    def get_course_module(self, activity_id: int) -> Optional[CourseModule]:
        self.lookups.append(activity_id)
        return self.modules.get(activity_id)


class FakeScoreItemStore:
    def __init__(self, items: Dict[int, ScoreItem]):
        self.items = items

    def get_score_item(self, activity_id: int) -> Optional[ScoreItem]:
        return self.items.get(activity_id)


class FakeCompletionTracker:
    def __init__(self, states: Dict[Tuple[int, int], CompletionState]):
        self.states = states
        self.updates: List[Tuple[int, int, CompletionState]] = []

    def get_completion_state(self, course_module: CourseModule, actor_id: int) -> CompletionState:
        return self.states.get((course_module.id, actor_id), CompletionState.INCOMPLETE)

    def set_completion_state(self, course_module: CourseModule, actor_id: int, new_state: CompletionState) -> None:
        self.updates.append((course_module.id, actor_id, new_state))
        self.states[(course_module.id, actor_id)] = new_state


class FakeGradingSubsystem:
    def __init__(self, records: Dict[Tuple[int, int], List[GradeRecord]]):
        self.records = records

    def get_grade_records(self, course_module: CourseModule, actor_id: int) -> List[GradeRecord]:
        return self.records.get((course_module.id, actor_id), [])


class FakeAuthorization:
    def __init__(self, enrolments: Set[Tuple[int, int]]):
        self.enrolments = enrolments

    def is_authorized(self, actor_id: int, course_id: int) -> bool:
        return (actor_id, course_id) in self.enrolments


class FakeContextResolver:
    def __init__(self, contexts: Dict[int, int]):
        self.contexts = contexts

    def resolve_context(self, context_id: int) -> int:
        if context_id not in self.contexts:
            raise EntityNotFoundException("Context", str(context_id))
        return self.contexts[context_id]


class FakeEventIngestion:
    def __init__(self):
        self.payloads: List[str] = []
        self.fail = False

    def post_statements(self, payload: str) -> None:
        if self.fail:
            raise EventIngestionError("LRS rejected statements: HTTP 503")
        self.payloads.append(payload)


# =============================================================================
# SEED DATA FIXTURES
# =============================================================================

@pytest.fixture
def course_modules():
    return {
        101: CourseModule(id=101, course_id=COURSE_ID, instance_id=11, modname="url"),
        102: CourseModule(id=102, course_id=COURSE_ID, instance_id=12, modname="h5pactivity"),
        103: CourseModule(id=103, course_id=COURSE_ID, instance_id=13, modname="h5pactivity"),
        104: CourseModule(id=104, course_id=COURSE_ID, instance_id=14, modname="page"),
        105: CourseModule(id=105, course_id=COURSE_ID, instance_id=15, modname="quiz"),
        106: CourseModule(id=106, course_id=COURSE_ID, instance_id=16, modname="h5pactivity"),
    }


@pytest.fixture
def score_items():
    return {
        101: ScoreItem(activity_id=101, score_min=0.0, score_max=5.0),
        102: ScoreItem(activity_id=102, score_min=2.0, score_max=10.0),
        103: ScoreItem(activity_id=103, score_min=0.0, score_max=1.0),
        105: ScoreItem(activity_id=105, score_min=0.0, score_max=3.0),
        106: ScoreItem(activity_id=106, score_min=0.0, score_max=4.0),
    }


@pytest.fixture
def grade_records():
    return {
        (102, ACTOR_ID): [GradeRecord(grade=7.5, grade_min=0.0, grade_max=10.0)],
        (103, ACTOR_ID): [GradeRecord(grade=None, grade_min=0.0, grade_max=10.0)],
        (106, ACTOR_ID): [
            GradeRecord(grade=1.0, grade_min=0.0, grade_max=10.0),
            GradeRecord(grade=2.0, grade_min=0.0, grade_max=10.0),
        ],
    }


@pytest.fixture
def activity_directory(course_modules):
    return FakeActivityDirectory(course_modules)


@pytest.fixture
def completion_tracker():
    return FakeCompletionTracker({(101, ACTOR_ID): CompletionState.COMPLETE})


@pytest.fixture
def collaborators(activity_directory, score_items, completion_tracker, grade_records):
    return ScoringCollaborators(
        activities=activity_directory,
        score_items=FakeScoreItemStore(score_items),
        completions=completion_tracker,
        grades=FakeGradingSubsystem(grade_records),
        authorization=FakeAuthorization({(ACTOR_ID, COURSE_ID)}),
    )


@pytest.fixture
def context_resolver():
    return FakeContextResolver({901: 101, 902: 102, 903: 103, 904: 104})


@pytest.fixture
def event_ingestion():
    return FakeEventIngestion()


@pytest.fixture
def scoring_service(collaborators, context_resolver, event_ingestion):
    return ScoringService(collaborators, context_resolver, event_ingestion)


def xapi_statement(context_id: int) -> dict:
    """Minimal xAPI statement emitted by an H5P activity in the given context."""
    return {
        "actor": {"account": {"homePage": "https://lms.example.org", "name": str(ACTOR_ID)}},
        "verb": {"id": "http://adlnet.gov/expapi/verbs/answered"},
        "object": {"id": f"https://lms.example.org/xapi/activity/{context_id}"},
        "result": {"score": {"raw": 7.5, "min": 0, "max": 10}},
    }


# =============================================================================
# FASTAPI TEST CLIENT FIXTURE
# =============================================================================

@pytest.fixture
def client(scoring_service):
    """TestClient with the scoring service backed by in-memory collaborators."""
    app.dependency_overrides[get_scoring_service] = lambda: scoring_service
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
