# piloo/routers/search.py
"""
Footage search + the saved search-query log.
Every POST /search is recorded with its results and execution time (ms).
"""

import time
from fastapi import APIRouter, Depends, HTTPException
from piloo.schemas.search_query import SearchQueryCreate, SearchQueryOut, SearchQueryUpdate, SearchRequest
from piloo.services.search_service import search_events
from piloo.storage import Storage, get_storage
from piloo.utils.logger import get_logger

router = APIRouter()
logger = get_logger(__name__)


@router.post("/search", summary="Search alerts and cameras by free text")
def search(body: SearchRequest, storage: Storage = Depends(get_storage)):
    started = time.perf_counter()
    results = search_events(storage, body.query, body.filters)
    elapsed_ms = int((time.perf_counter() - started) * 1000)

    saved = storage.search_queries.create(SearchQueryCreate(
        user_id=body.user_id,
        query=body.query,
        query_type=body.query_type,
        filters=body.filters.model_dump(by_alias=True) if body.filters else None,
        results=results,
        execution_time=elapsed_ms,
    ))
    logger.debug(f"Search '{body.query}' → {len(results)} result(s) in {elapsed_ms}ms")
    return {"searchId": saved.id, "results": results, "executionTime": elapsed_ms}


@router.get("/search-queries", response_model=list[SearchQueryOut])
def list_search_queries(user_id: int = None, storage: Storage = Depends(get_storage)):
    if user_id is not None:
        return storage.search_queries.find_by(user_id=user_id)
    return storage.search_queries.list()


@router.get("/search-queries/{query_id}", response_model=SearchQueryOut)
def get_search_query(query_id: int, storage: Storage = Depends(get_storage)):
    query = storage.search_queries.get(query_id)
    if query is None:
        raise HTTPException(status_code=404, detail="Search query not found")
    return query


@router.post("/search-queries", response_model=SearchQueryOut)
def create_search_query(body: SearchQueryCreate, storage: Storage = Depends(get_storage)):
    return storage.search_queries.create(body)


@router.put("/search-queries/{query_id}", response_model=SearchQueryOut)
def update_search_query(query_id: int, body: SearchQueryUpdate, storage: Storage = Depends(get_storage)):
    query = storage.search_queries.update(query_id, body)
    if query is None:
        raise HTTPException(status_code=404, detail="Search query not found")
    return query


@router.delete("/search-queries/{query_id}")
def delete_search_query(query_id: int, storage: Storage = Depends(get_storage)):
    if not storage.search_queries.delete(query_id):
        raise HTTPException(status_code=404, detail="Search query not found")
    return {"message": "Search query deleted"}
