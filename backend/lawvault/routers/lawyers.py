from typing import Any
from fastapi import APIRouter, Body, Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from lawvault.database import get_db
from lawvault.exceptions import NotFoundError
from lawvault.models.lawyer import Lawyer
from lawvault.schemas.lawyer import lawyer_to_dict

router = APIRouter()

# Generated fields are never taken from the client
RESERVED_FIELDS = ("id", "created_at")


async def _get_or_404(lawyer_id: int, db: AsyncSession) -> Lawyer:
    result = await db.execute(select(Lawyer).where(Lawyer.id == lawyer_id))
    lawyer = result.scalar_one_or_none()
    if not lawyer:
        raise NotFoundError(f"Lawyer {lawyer_id} not found")
    return lawyer


@router.get("")
async def list_lawyers(db: AsyncSession = Depends(get_db)):
    result = await db.execute(select(Lawyer).order_by(Lawyer.id))
    return [lawyer_to_dict(lawyer) for lawyer in result.scalars().all()]


@router.get("/{lawyer_id}")
async def get_lawyer(lawyer_id: int, db: AsyncSession = Depends(get_db)):
    return lawyer_to_dict(await _get_or_404(lawyer_id, db))


@router.post("", status_code=201)
async def create_lawyer(data: dict[str, Any] = Body(...), db: AsyncSession = Depends(get_db)):
    profile = {k: v for k, v in data.items() if k not in RESERVED_FIELDS}
    lawyer = Lawyer(profile=profile)
    db.add(lawyer)
    await db.flush()
    await db.refresh(lawyer)
    await db.commit()
    return lawyer_to_dict(lawyer)


@router.delete("/{lawyer_id}")
async def delete_lawyer(lawyer_id: int, db: AsyncSession = Depends(get_db)):
    lawyer = await _get_or_404(lawyer_id, db)
    await db.delete(lawyer)
    await db.commit()
    return {"deleted": True, "lawyer_id": lawyer_id}
