"""Request/response shapes for the quiz API.

Strict types make a string where a number belongs (or the reverse) a
malformed body rather than something silently coerced.
"""
from typing import List, Optional, Type

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, StrictInt, StrictStr, ValidationError


class PublicQuestion(BaseModel):
    id: int
    question: str
    options: List[str]


class StartRequest(BaseModel):
    user: Optional[StrictStr] = ""


class StartResponse(BaseModel):
    success: bool = True
    test_id: str
    test: List[PublicQuestion]


class AnswerIn(BaseModel):
    question_id: StrictInt = 0
    choice: StrictInt = 0


class SubmitRequest(BaseModel):
    test_id: Optional[StrictStr] = ""
    user: Optional[StrictStr] = ""
    answers: Optional[List[AnswerIn]] = None


class ReviewItemOut(BaseModel):
    question_id: int
    question: str
    options: List[str]
    correct_choice: int
    user_choice: int


class SubmitResponse(BaseModel):
    success: bool = True
    score: int
    total: int
    results: List[ReviewItemOut]


class ErrorResponse(BaseModel):
    success: bool = False
    error: str


def json_body(model: Type[BaseModel]):
    """
    Dependency decoding the request body as JSON whatever its Content-Type,
    so text/plain posts (which skip the CORS preflight) still work.
    A literal null body is the empty request.
    """

    async def parse(request: Request) -> BaseModel:
        raw = await request.body()
        if raw.strip() == b"null":
            return model()
        try:
            return model.model_validate_json(raw)
        except ValidationError as exc:
            raise RequestValidationError(exc.errors()) from exc

    return parse
