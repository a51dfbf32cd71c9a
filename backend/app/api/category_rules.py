"""
Category rule API endpoints.
"""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import List

from app.dependencies import get_db, get_current_owner
from app.models.category_rule import CategoryRule
from app.schemas.category_rule import (
    CategoryRuleCreate,
    CategoryRuleUpdate,
    CategoryRuleResponse,
)
from app.services.category_rule_service import get_rules, find_rule_by_keyword

router = APIRouter(prefix="/category-rules", tags=["category-rules"])


@router.get("", response_model=List[CategoryRuleResponse])
def list_rules(
    owner: str = Depends(get_current_owner),
    db: Session = Depends(get_db)
):
    """List the caller's rules, newest first."""
    return get_rules(db, owner)


@router.post("", response_model=CategoryRuleResponse, status_code=201)
def create_rule(
    rule: CategoryRuleCreate,
    owner: str = Depends(get_current_owner),
    db: Session = Depends(get_db)
):
    """Create a keyword rule."""
    if find_rule_by_keyword(db, owner, rule.keyword):
        raise HTTPException(status_code=400, detail="Rule with this keyword already exists")

    db_rule = CategoryRule(
        owner=owner,
        keyword=rule.keyword,
        category=rule.category
    )
    db.add(db_rule)
    db.commit()
    db.refresh(db_rule)
    return db_rule


@router.put("/{rule_id}", response_model=CategoryRuleResponse)
def update_rule(
    rule_id: str,
    update: CategoryRuleUpdate,
    owner: str = Depends(get_current_owner),
    db: Session = Depends(get_db)
):
    """Replace a rule's keyword and category."""
    rule = db.query(CategoryRule).filter(
        CategoryRule.id == rule_id,
        CategoryRule.owner == owner
    ).first()
    if not rule:
        raise HTTPException(status_code=404, detail="Rule not found")

    if find_rule_by_keyword(db, owner, update.keyword, exclude_rule_id=rule_id):
        raise HTTPException(status_code=400, detail="Rule with this keyword already exists")

    rule.keyword = update.keyword
    rule.category = update.category
    db.commit()
    db.refresh(rule)
    return rule


@router.delete("/{rule_id}")
def delete_rule(
    rule_id: str,
    owner: str = Depends(get_current_owner),
    db: Session = Depends(get_db)
):
    """Delete a rule."""
    rule = db.query(CategoryRule).filter(
        CategoryRule.id == rule_id,
        CategoryRule.owner == owner
    ).first()
    if not rule:
        raise HTTPException(status_code=404, detail="Rule not found")

    db.delete(rule)
    db.commit()
    return {"message": "Rule deleted successfully"}
