import json
import logging
from typing import List, Dict, Any, Optional

from app.ai.client import get_ai_client
from app.ai.prompts import (
    RECEIPT_CHAT_SYSTEM, RECEIPT_CHAT_USER, RECEIPT_HISTORY_ENTRY,
    BUDGET_PLANNER_SYSTEM,
    BUDGET_SUGGESTIONS_SYSTEM, BUDGET_SUGGESTIONS_USER
)

logger = logging.getLogger(__name__)


class AIServiceError(Exception):
    """The language model call failed or returned nothing."""


async def _ask(messages: List[Dict[str, str]], temperature: float, max_tokens: int) -> str:
    client = get_ai_client()

    try:
        response = await client.chat(messages, temperature=temperature, max_tokens=max_tokens)
    except Exception as e:
        logger.error(f"Assistant request failed: {e}")
        raise AIServiceError("Failed to get AI response") from e

    if not response:
        raise AIServiceError("Failed to get AI response")
    return response


async def chat_with_receipt(
    ocr_text: Optional[str],
    user_message: Optional[str],
    history: List[Dict[str, str]]
) -> Dict[str, Any]:
    """Discuss a receipt's OCR text with the assistant."""
    messages = [{"role": "system", "content": RECEIPT_CHAT_SYSTEM}, *history]
    new_turns = []

    if ocr_text:
        messages.append({"role": "user", "content": RECEIPT_CHAT_USER.format(ocr_text=ocr_text)})
        new_turns.append({"role": "user", "content": RECEIPT_HISTORY_ENTRY.format(ocr_text=ocr_text)})
    if user_message:
        messages.append({"role": "user", "content": user_message})
        new_turns.append({"role": "user", "content": user_message})

    response = await _ask(messages, temperature=0.3, max_tokens=800)

    return {
        "ai_response": response,
        "conversation_history": [*history, *new_turns, {"role": "assistant", "content": response}]
    }


async def budget_planner_chat(
    user_message: str,
    history: List[Dict[str, str]],
    user_profile: Dict[str, Any]
) -> Dict[str, Any]:
    """General budgeting conversation."""
    system_prompt = BUDGET_PLANNER_SYSTEM.format(user_profile_json=json.dumps(user_profile))
    messages = [
        {"role": "system", "content": system_prompt},
        *history,
        {"role": "user", "content": user_message}
    ]

    response = await _ask(messages, temperature=0.7, max_tokens=1500)

    return {
        "ai_response": response,
        "conversation_history": [
            *history,
            {"role": "user", "content": user_message},
            {"role": "assistant", "content": response}
        ]
    }


async def generate_budget_suggestions(
    spending_data: Any,
    monthly_income: Optional[float] = None,
    financial_goals: Optional[str] = None
) -> str:
    user_prompt = BUDGET_SUGGESTIONS_USER.format(
        spending_data_json=json.dumps(spending_data),
        income_line=f"Monthly income: ${monthly_income}" if monthly_income else "",
        goals_line=f"Financial goals: {financial_goals}" if financial_goals else ""
    )
    messages = [
        {"role": "system", "content": BUDGET_SUGGESTIONS_SYSTEM},
        {"role": "user", "content": user_prompt}
    ]

    return await _ask(messages, temperature=0.5, max_tokens=800)
