from fastapi import APIRouter, Depends

from fulltext_api.api.deps import get_index_store
from fulltext_api.models.index import IndexInfo, IndexListing
from fulltext_api.storage.registry import IndexStore

router = APIRouter()


@router.get("/indexes", response_model=IndexListing)
async def list_indexes(store: IndexStore = Depends(get_index_store)):
    """列出啟動時登錄的索引，以及被略過的目錄與原因。"""
    return IndexListing(
        status=store.status,
        indexes=[IndexInfo(name=d.name, doc_count=d.doc_count) for d in store.descriptors],
        skipped=store.skipped,
    )
