import pytest

from reading_coach.alignment import tokenize
from reading_coach.models import ReferenceSequence
from reading_coach.stats import InMemoryStatsRepository

CAT_TEXT = "The cat sat on the mat"


@pytest.fixture
def cat_reference():
    return ReferenceSequence.from_text(CAT_TEXT)


@pytest.fixture
def cat_tokens():
    return tokenize(CAT_TEXT)


@pytest.fixture
def stats_repo():
    return InMemoryStatsRepository()


@pytest.fixture
def client():
    from api.app import SESSION_STORE, app

    app.config["TESTING"] = True
    SESSION_STORE.clear()
    with app.test_client() as test_client:
        yield test_client
    SESSION_STORE.clear()
