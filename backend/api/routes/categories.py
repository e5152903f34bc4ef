"""
Category and subcategory listing routes.
"""
from typing import List, Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from domain.models import CodeEntry
from services.taxonomy import UnknownCategory, get_default_taxonomy_resolver

router = APIRouter()


class CategoryResponse(BaseModel):
    id: str
    name: str
    taxonomy_code: Optional[str] = None
    keywords: List[str]


class SubcategoryResponse(BaseModel):
    id: str
    name: str
    category_id: str
    taxonomy_code: Optional[str] = None


@router.get("", response_model=List[CategoryResponse])
def list_categories():
    resolver = get_default_taxonomy_resolver()
    return [
        CategoryResponse(
            id=entry.category_id,
            name=entry.label,
            taxonomy_code=entry.taxonomy_code if isinstance(entry, CodeEntry) else None,
            keywords=list(entry.keywords),
        )
        for entry in resolver.categories()
    ]


@router.get("/{category_id}/subcategories", response_model=List[SubcategoryResponse])
def list_subcategories(category_id: str):
    resolver = get_default_taxonomy_resolver()
    try:
        subs = resolver.subcategories(category_id)
    except UnknownCategory:
        raise HTTPException(status_code=404, detail="Category not found")
    canonical = resolver.get_category(category_id).category_id
    return [
        SubcategoryResponse(
            id=sub.subcategory_id,
            name=sub.label,
            category_id=canonical,
            taxonomy_code=sub.taxonomy_code,
        )
        for sub in subs
    ]
