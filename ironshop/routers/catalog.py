from fastapi import APIRouter, Depends

from ironshop.config import settings
from ironshop.deps import get_catalog
from ironshop.services.catalog import Catalog

router = APIRouter(prefix="/catalog", tags=["catalog"])

@router.get("/")
def rate_card(catalog: Catalog = Depends(get_catalog)):
    return {
        "items": [{"key": e.key, "label": e.label, "unit_price": e.unit_price} for e in catalog.values()],
        "discount_options": settings.DISCOUNT_OPTIONS,
        "default_discount_percent": settings.DEFAULT_DISCOUNT_PERCENT,
        "workers": settings.WORKERS,
    }
