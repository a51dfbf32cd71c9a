"""
Main API router.
"""

from fastapi import APIRouter
from app.api import transactions, budgets, category_rules, goals, ai

api_router = APIRouter()

api_router.include_router(transactions.router)
api_router.include_router(budgets.router)
api_router.include_router(category_rules.router)
api_router.include_router(goals.router)
api_router.include_router(ai.router)
