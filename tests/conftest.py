import pytest
from fastapi.testclient import TestClient

from app.main import create_app
from app.question_bank import NO_ANSWER, Question
from app.test_engine.state import SessionStore


class FakeClock:
    def __init__(self, now=1000.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def questions():
    return (
        Question(id=1, question="Which port does RDP use?", options=("22", "3389", "80"), answer=1),
        Question(id=2, question="What does DHCP do?", options=("Assign addresses", "Sync time"), answer=0),
        Question(id=3, question="Identify the port in the picture.", options=("HDMI", "DVI"), answer=NO_ANSWER),
    )


@pytest.fixture
def store(clock):
    return SessionStore(ttl=1800, clock=clock)


@pytest.fixture
def client(questions, store):
    app = create_app(questions=questions, store=store, allowed_origin="https://quiz.example.org")
    with TestClient(app) as c:
        yield c
