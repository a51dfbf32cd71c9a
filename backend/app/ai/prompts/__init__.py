from app.ai.prompts.receipt_chat import (
    RECEIPT_CHAT_SYSTEM,
    RECEIPT_CHAT_USER,
    RECEIPT_HISTORY_ENTRY,
)
from app.ai.prompts.budget_planner import (
    BUDGET_PLANNER_SYSTEM,
    BUDGET_SUGGESTIONS_SYSTEM,
    BUDGET_SUGGESTIONS_USER,
)

__all__ = [
    "RECEIPT_CHAT_SYSTEM",
    "RECEIPT_CHAT_USER",
    "RECEIPT_HISTORY_ENTRY",
    "BUDGET_PLANNER_SYSTEM",
    "BUDGET_SUGGESTIONS_SYSTEM",
    "BUDGET_SUGGESTIONS_USER",
]
