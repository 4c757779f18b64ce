import secrets
from typing import Callable, Optional, Sequence, Tuple

from app.question_bank import Question

TEST_ID_PREFIX = "test-"
TEST_ID_ALPHABET = "abcdefghijklmnopqrstuvwxyz0123456789"
TEST_ID_LENGTH = 10

MAX_ID_ATTEMPTS = 5


def random_test_id() -> str:
    suffix = "".join(secrets.choice(TEST_ID_ALPHABET) for _ in range(TEST_ID_LENGTH))
    return TEST_ID_PREFIX + suffix


def new_test_id(exists: Optional[Callable[[str], bool]] = None) -> str:
    """
    Generate a test_id. When `exists` is given (normally the store's
    membership test), ids already in use are skipped.
    """
    for _ in range(MAX_ID_ATTEMPTS):
        test_id = random_test_id()
        if exists is None or not exists(test_id):
            return test_id

    # 36**10 ids; repeated collisions mean the random source is broken
    raise RuntimeError("Failed to generate a unique test_id")


def build_test(bank: Sequence[Question]) -> Tuple[Question, ...]:
    # Every session gets the full bank in bank order
    return tuple(bank)
