"""
AI assistant API endpoints.
"""

from fastapi import APIRouter, HTTPException

from app.schemas.ai import (
    ReceiptChatRequest,
    BudgetPlannerChatRequest,
    ChatResponse,
    BudgetSuggestionsRequest,
    BudgetSuggestionsResponse,
)
from app.services import ai_service
from app.services.ai_service import AIServiceError

router = APIRouter(prefix="/ai", tags=["ai"])


@router.post("/chat-with-receipt", response_model=ChatResponse)
async def chat_with_receipt(request: ReceiptChatRequest):
    """Ask the assistant about a receipt's OCR text."""
    if not request.ocr_text and not request.user_message:
        raise HTTPException(status_code=400, detail="Either OCR text or user message is required")

    try:
        result = await ai_service.chat_with_receipt(
            request.ocr_text,
            request.user_message,
            [m.model_dump() for m in request.conversation_history]
        )
    except AIServiceError as e:
        raise HTTPException(status_code=502, detail=str(e))

    return result


@router.post("/budget-planner-chat", response_model=ChatResponse)
async def budget_planner_chat(request: BudgetPlannerChatRequest):
    """Free-form budgeting conversation."""
    if not request.user_message:
        raise HTTPException(status_code=400, detail="User message is required")

    try:
        result = await ai_service.budget_planner_chat(
            request.user_message,
            [m.model_dump() for m in request.conversation_history],
            request.user_profile
        )
    except AIServiceError as e:
        raise HTTPException(status_code=502, detail=str(e))

    return result


@router.post("/budget-suggestions", response_model=BudgetSuggestionsResponse)
async def budget_suggestions(request: BudgetSuggestionsRequest):
    """Suggest a monthly budget breakdown from spending data."""
    if not request.spending_data:
        raise HTTPException(status_code=400, detail="Spending data is required for budget suggestions")

    try:
        suggestions = await ai_service.generate_budget_suggestions(
            request.spending_data,
            monthly_income=request.monthly_income,
            financial_goals=request.financial_goals
        )
    except AIServiceError as e:
        raise HTTPException(status_code=502, detail=str(e))

    return BudgetSuggestionsResponse(suggestions=suggestions)
