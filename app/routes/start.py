import logging

from fastapi import APIRouter, Depends, Request

from app.question_bank import public_view
from app.schemas import StartRequest, StartResponse, json_body
from app.test_engine.generator import build_test, new_test_id

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/start", response_model=StartResponse)
def start_test(request: Request, body: StartRequest = Depends(json_body(StartRequest))):
    store = request.app.state.store
    bank = request.app.state.question_bank

    # Generate test
    questions = build_test(bank)
    test_id = new_test_id(exists=store.__contains__)

    # Store the full set (with answers) server-side
    store.put(test_id, questions)
    logger.info("Started test %s for user %r (%d questions)", test_id, body.user, len(questions))

    # Public view only: answers never leave the server before grading
    return {
        "success": True,
        "test_id": test_id,
        "test": [public_view(q) for q in questions],
    }
