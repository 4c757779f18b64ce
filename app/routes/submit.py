import logging

from fastapi import APIRouter, Depends, HTTPException, Request

from app.schemas import ErrorResponse, SubmitRequest, SubmitResponse, json_body
from app.test_engine.grading import grade

router = APIRouter()
logger = logging.getLogger(__name__)

INVALID_TEST_ID = "invalid or expired test_id"


@router.post(
    "/submit",
    response_model=SubmitResponse,
    responses={400: {"model": ErrorResponse}},
)
def submit_test(request: Request, body: SubmitRequest = Depends(json_body(SubmitRequest))):
    store = request.app.state.store

    # Expired and unknown ids look the same to the client
    questions = store.get(body.test_id or "")
    if questions is None:
        logger.warning("Submission for unknown or expired test %r", body.test_id)
        raise HTTPException(status_code=400, detail=INVALID_TEST_ID)

    answers = [(a.question_id, a.choice) for a in body.answers or []]
    result = grade(questions, answers)

    logger.info(
        "Graded test %s for user %r: %d/%d",
        body.test_id, body.user, result.score, result.total,
    )

    return {
        "success": True,
        "score": result.score,
        "total": result.total,
        "results": [
            {
                "question_id": item.question_id,
                "question": item.question,
                "options": list(item.options),
                "correct_choice": item.correct_choice,
                "user_choice": item.user_choice,
            }
            for item in result.results
        ],
    }
