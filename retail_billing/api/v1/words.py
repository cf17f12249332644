"""Amount-in-words endpoint."""

from __future__ import annotations

from fastapi import APIRouter

from ...api.errors import APIError
from ...models.requests import WordsRequest, WordsResponse
from ...services.words import MAX_WHOLE_DIGITS, amount_to_words, exceeds_supported_range

router = APIRouter()


@router.post("/amount-in-words", response_model=WordsResponse)
async def amount_in_words(payload: WordsRequest) -> WordsResponse:
    amount = "" if payload.amount is None else str(payload.amount)
    if exceeds_supported_range(amount):
        raise APIError(
            code="AMOUNT_OUT_OF_RANGE",
            message=f"Amount must have at most {MAX_WHOLE_DIGITS} whole digits",
            status_code=422,
            details={"max_whole_digits": MAX_WHOLE_DIGITS},
        )
    return WordsResponse(amount=amount, words=amount_to_words(amount))
