"""
Voice-to-expense extraction.

Turns one final transcript into an ExpenseRecord by running the amount
extractor, the category classifier and the description cleaner in sequence.
Every expected failure is returned as an ExtractionFailure value.
"""

from __future__ import annotations

import logging
from datetime import date

from amount_extractor import find_amount
from category_classifier import classify_category
from description_cleaner import clean_description
from expense_model import ExpenseRecord, ExtractionFailure, ExtractionResult
from shared.observability.privacy import text_fingerprint

logger = logging.getLogger(__name__)

AMOUNT_NOT_FOUND_MESSAGE = (
    "I couldn't find an amount in that. Try again with the amount, e.g. "
    '"I spent 25 rupees on lunch".'
)
ZERO_AMOUNT_MESSAGE = "The amount has to be more than zero. Please say the amount you paid."
EMPTY_INPUT_MESSAGE = "Nothing was captured. Please try again."


def build_expense_record(transcript: str | None, today: date) -> ExtractionResult:
    """
    Extract an expense record from a transcript.

    Args:
        transcript: Final transcript for one utterance.
        today: Date stamped on the record; supplied by the caller so the result
            is reproducible.
    Returns:
        ExtractionResult holding the record, or a failure of kind
        ``empty_input`` (blank transcript) or ``amount_not_found`` (no amount, or
        an amount that is not positive).
    """
    if transcript is None or not transcript.strip():
        logger.info({"event": "expense_extraction_skipped", "reason": "empty_input"})
        return ExtractionResult(failure=ExtractionFailure(kind="empty_input", message=EMPTY_INPUT_MESSAGE))

    amount_match = find_amount(transcript)
    if amount_match is None or amount_match.value <= 0:
        logger.info(
            {
                "event": "expense_extraction_failed",
                "reason": "amount_not_found",
                "zero_amount": amount_match is not None,
                "transcript": text_fingerprint(transcript),
            }
        )
        message = ZERO_AMOUNT_MESSAGE if amount_match is not None else AMOUNT_NOT_FOUND_MESSAGE
        return ExtractionResult(failure=ExtractionFailure(kind="amount_not_found", message=message))

    category = classify_category(transcript)
    description = clean_description(transcript, amount_match, category)
    record = ExpenseRecord(
        amount=amount_match.value,
        category=category,
        description=description,
        date=today,
    )

    logger.info(
        {
            "event": "expense_extracted",
            "pattern": amount_match.pattern,
            "category": category,
            "transcript": text_fingerprint(transcript),
        }
    )
    return ExtractionResult(record=record)
