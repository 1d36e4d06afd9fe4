from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, Query

from srteen.api.dependencies import get_translation_catalog
from srteen.services.translation_service import TranslationCatalog

router = APIRouter(tags=["Translations"])


@router.get("/translations")
def get_translations(
    lang: str = Query("en", description="Language code, e.g. 'en', 'es', 'ar'."),
    catalog: TranslationCatalog = Depends(get_translation_catalog),
) -> dict[str, Any]:
    """Return the UI strings for ``lang``.

    Unknown languages fall back to the default catalog, or to an empty
    object when no default catalog is loaded.
    """

    return catalog.get(lang)
