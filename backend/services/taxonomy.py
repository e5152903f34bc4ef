"""
Taxonomy resolver.

Maps the application's category/subcategory ids onto the upstream search
vocabulary (taxonomy codes or free-text keywords) and back again.
"""
from __future__ import annotations

import logging
from typing import Dict, List, Mapping, Optional, Sequence

from domain.models import CodeEntry, KeywordEntry, ResolvedTerm, SubcategoryEntry, TaxonomyEntry

logger = logging.getLogger(__name__)


class UnknownCategory(LookupError):
    """The category has no entry, so no upstream search can be built for it."""

    def __init__(self, category_id: str):
        super().__init__(f"Unknown category: {category_id!r}")
        self.category_id = category_id


def _norm_id(value: Optional[str]) -> str:
    return (value or "").strip().lower()


def _root_segment(code: str) -> str:
    return code.split("-", 1)[0].strip()


class TaxonomyResolver:
    def __init__(
        self,
        entries: Sequence[TaxonomyEntry],
        root_aliases: Optional[Mapping[str, str]] = None,
    ):
        self._entries: List[TaxonomyEntry] = list(entries)
        self._by_id: Dict[str, TaxonomyEntry] = {}
        for entry in self._entries:
            self._by_id.setdefault(_norm_id(entry.category_id), entry)

        # code -> category_id, first declaration wins
        self._code_index: Dict[str, str] = {}
        self._root_index: Dict[str, str] = {}
        for entry in self._entries:
            if isinstance(entry, CodeEntry):
                self._code_index.setdefault(entry.taxonomy_code.upper(), entry.category_id)
                self._root_index.setdefault(_root_segment(entry.taxonomy_code).upper(), entry.category_id)
        for entry in self._entries:
            for sub in entry.subcategories:
                if sub.taxonomy_code:
                    self._code_index.setdefault(sub.taxonomy_code.upper(), entry.category_id)
        for root, category_id in (root_aliases or {}).items():
            self._root_index.setdefault(root.upper(), category_id)

    def categories(self) -> List[TaxonomyEntry]:
        return list(self._entries)

    def get_category(self, category_id: str) -> Optional[TaxonomyEntry]:
        return self._by_id.get(_norm_id(category_id))

    def subcategories(self, category_id: str) -> List[SubcategoryEntry]:
        entry = self.get_category(category_id)
        if entry is None:
            raise UnknownCategory(category_id)
        return list(entry.subcategories)

    def resolve(self, category_id: str, subcategory_id: Optional[str] = None) -> ResolvedTerm:
        """
        Resolve a category (and optional subcategory) to an upstream search term.

        Fallback chain:
        1. the subcategory's own taxonomy code,
        2. the category's taxonomy code,
        3. the category's first keyword (free text).

        Raises UnknownCategory when the category is not in the table.
        """
        entry = self.get_category(category_id)
        if entry is None:
            raise UnknownCategory(category_id)

        sub_key = _norm_id(subcategory_id)
        if sub_key:
            for sub in entry.subcategories:
                if _norm_id(sub.subcategory_id) == sub_key and sub.taxonomy_code:
                    return ResolvedTerm(term=sub.taxonomy_code, is_code=True)

        if isinstance(entry, CodeEntry):
            return ResolvedTerm(term=entry.taxonomy_code, is_code=True)
        if isinstance(entry, KeywordEntry) and entry.keywords:
            return ResolvedTerm(term=entry.keywords[0], is_code=False)
        raise UnknownCategory(category_id)

    def match_keyword(self, free_text: str) -> Optional[str]:
        """
        Find the category whose keyword list matches free text.

        A keyword matches when either string contains the other, compared
        lower-cased. Categories are tried in table order; the first hit wins.
        """
        norm = (free_text or "").strip().lower()
        if not norm:
            return None
        for entry in self._entries:
            for keyword in entry.keywords:
                kw = keyword.strip().lower()
                if kw and (kw in norm or norm in kw):
                    return entry.category_id
        return None

    def category_for_code(self, taxonomy_code: Optional[str]) -> str:
        """
        Map an upstream taxonomy code back to a category id.

        Exact code first, then the code's root segment (before the first
        '-'); an unrecognized root comes back lower-cased as a degraded match.
        An absent code maps to the empty string.
        """
        code = (taxonomy_code or "").strip()
        if not code:
            return ""
        exact = self._code_index.get(code.upper())
        if exact:
            return exact
        root = _root_segment(code)
        matched = self._root_index.get(root.upper())
        if matched:
            return matched
        return root.lower()


_default_resolver: Optional[TaxonomyResolver] = None


def get_default_taxonomy_resolver() -> TaxonomyResolver:
    global _default_resolver
    if _default_resolver is None:
        from services.taxonomy_data import CATEGORY_TABLE, ROOT_CODE_ALIASES

        _default_resolver = TaxonomyResolver(CATEGORY_TABLE, ROOT_CODE_ALIASES)
    return _default_resolver
