# storefront/api/routers/content.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from storefront.api.deps import get_db
from storefront.services.landing_service import LandingService
from storefront.services.product_service import ProductService

router = APIRouter(prefix="/api", tags=["content"])


@router.get("/landing")
def landing(db: Session = Depends(get_db)):
    data = LandingService(db).get_content()
    data.pop("updated_at", None)
    return data


@router.get("/hero")
def hero(db: Session = Depends(get_db)):
    return ProductService(db).hero()
