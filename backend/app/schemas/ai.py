"""Pydantic schemas for the AI assistant."""

from pydantic import BaseModel
from typing import Any, Dict, List, Literal, Optional


class ChatMessage(BaseModel):
    role: Literal["system", "user", "assistant"]
    content: str


class ReceiptChatRequest(BaseModel):
    ocr_text: Optional[str] = None
    user_message: Optional[str] = None
    conversation_history: List[ChatMessage] = []


class BudgetPlannerChatRequest(BaseModel):
    user_message: Optional[str] = None
    conversation_history: List[ChatMessage] = []
    user_profile: Dict[str, Any] = {}


class ChatResponse(BaseModel):
    ai_response: str
    conversation_history: List[ChatMessage]


class BudgetSuggestionsRequest(BaseModel):
    spending_data: Optional[Any] = None
    monthly_income: Optional[float] = None
    financial_goals: Optional[str] = None


class BudgetSuggestionsResponse(BaseModel):
    suggestions: str
