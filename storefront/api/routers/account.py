# storefront/api/routers/account.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from storefront.api.deps import get_db, require_user
from storefront.domain.context import RequestContext
from storefront.domain.schemas import AddressIn
from storefront.services.account_service import AccountService

router = APIRouter(prefix="/api/account", tags=["account"])


@router.get("/address")
def get_address(ctx: RequestContext = Depends(require_user), db: Session = Depends(get_db)):
    return AccountService(db).get_address(ctx.user_id)


@router.put("/address")
def save_address(
    payload: AddressIn,
    ctx: RequestContext = Depends(require_user),
    db: Session = Depends(get_db),
):
    return AccountService(db).save_address(ctx.user_id, payload.model_dump())
