"""Service for keyword-based transaction categorization."""

from typing import Iterable, List, Optional
from sqlalchemy.orm import Session

from app.models.category_rule import CategoryRule

DEFAULT_CATEGORY = "Uncategorized"


def get_rules(db: Session, owner: str) -> List[CategoryRule]:
    """Get the owner's rules, newest first."""
    return db.query(CategoryRule).filter(
        CategoryRule.owner == owner
    ).order_by(CategoryRule.created_at.desc()).all()


def find_rule_by_keyword(
    db: Session,
    owner: str,
    keyword: str,
    exclude_rule_id: str = None
) -> Optional[CategoryRule]:
    query = db.query(CategoryRule).filter(
        CategoryRule.owner == owner,
        CategoryRule.keyword == keyword.strip().lower()
    )
    if exclude_rule_id:
        query = query.filter(CategoryRule.id != exclude_rule_id)
    return query.first()


def apply_category_rules(description: Optional[str], rules: Iterable[CategoryRule]) -> Optional[str]:
    """Return the category of the first rule whose keyword occurs in the description."""
    if not description:
        return None

    text = description.lower()
    for rule in rules:
        if rule.keyword and rule.keyword.lower() in text:
            return rule.category
    return None


def categorize(db: Session, owner: str, description: Optional[str]) -> str:
    """Pick a category for a new transaction from the owner's rules."""
    return apply_category_rules(description, get_rules(db, owner)) or DEFAULT_CATEGORY
