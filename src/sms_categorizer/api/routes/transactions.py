import asyncio
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query

from sms_categorizer.api.dependencies import get_store
from sms_categorizer.models import Transaction
from sms_categorizer.storage.repository import TransactionStore

router = APIRouter()


@router.get("/api/transactions", response_model=list[Transaction])
async def list_transactions(
    store: Annotated[TransactionStore, Depends(get_store)],
    limit: Annotated[int | None, Query(ge=1)] = None,
) -> list[Transaction]:
    return await asyncio.to_thread(store.list_recent, limit)


@router.delete("/api/transactions")
async def delete_all_transactions(
    store: Annotated[TransactionStore, Depends(get_store)],
) -> dict[str, int | str]:
    deleted = await asyncio.to_thread(store.delete_all)
    return {"status": "deleted", "deleted": deleted}


@router.delete("/api/transactions/{transaction_id}")
async def delete_transaction(
    transaction_id: int,
    store: Annotated[TransactionStore, Depends(get_store)],
) -> dict[str, int | str]:
    deleted = await asyncio.to_thread(store.delete, transaction_id)
    if not deleted:
        raise HTTPException(status_code=404, detail="Transaction not found")
    return {"status": "deleted", "id": transaction_id}
