# crud router factory — the same five endpoints for every resource kind
# responses use the {success, message, data} envelope; 404 for unknown ids, 500 for storage failures

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, status
from fastapi.responses import JSONResponse

from mindmate.resources import Resource
from mindmate.services.db import Database, get_db
from mindmate.services.record_store import RecordNotFound, RecordStore, StorageError

logger = logging.getLogger(__name__)


def _failure(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "message": message})


def build_crud_router(resource: Resource) -> APIRouter:
    """mount create/list/get/put/patch/delete for a resource under /api/{name}"""
    name = resource.name
    router = APIRouter(prefix=resource.base_path, tags=[name])

    def not_found() -> JSONResponse:
        return _failure(status.HTTP_404_NOT_FOUND, f"{name} not found")

    def storage_failure(action: str) -> JSONResponse:
        logger.exception(f"Error {action} {name}")
        return _failure(status.HTTP_500_INTERNAL_SERVER_ERROR, f"Error {action} {name}")

    async def update(record_id: str, payload: Any, db: Database, action: str, message: str):
        try:
            record = await RecordStore(db, resource).update(record_id, {} if payload is None else payload)
        except RecordNotFound:
            return not_found()
        except StorageError:
            return storage_failure(action)
        return {"success": True, "message": message, "data": record}

    @router.post("", status_code=status.HTTP_201_CREATED, name=f"create_{name}")
    async def create_record(payload: Any = Body(None), db: Database = Depends(get_db)):
        try:
            record = await RecordStore(db, resource).create({} if payload is None else payload)
        except StorageError:
            return storage_failure("creating")
        return {"success": True, "message": f"{name} created", "data": record}

    @router.get("", name=f"list_{name}")
    async def list_records(db: Database = Depends(get_db)):
        try:
            records = await RecordStore(db, resource).find_all()
        except StorageError:
            return storage_failure("fetching")
        return {"success": True, "data": records}

    @router.get("/{record_id}", name=f"get_{name}")
    async def get_record(record_id: str, db: Database = Depends(get_db)):
        try:
            record = await RecordStore(db, resource).find_by_id(record_id)
        except RecordNotFound:
            return not_found()
        except StorageError:
            return storage_failure("fetching")
        return {"success": True, "data": record}

    # put and patch are both partial merges
    @router.put("/{record_id}", name=f"update_{name}")
    async def update_record(record_id: str, payload: Any = Body(None), db: Database = Depends(get_db)):
        return await update(record_id, payload, db, "updating", f"{name} updated")

    @router.patch("/{record_id}", name=f"patch_{name}")
    async def patch_record(record_id: str, payload: Any = Body(None), db: Database = Depends(get_db)):
        return await update(record_id, payload, db, "patching", f"{name} partially updated")

    @router.delete("/{record_id}", name=f"delete_{name}")
    async def delete_record(record_id: str, db: Database = Depends(get_db)):
        try:
            await RecordStore(db, resource).delete(record_id)
        except RecordNotFound:
            return not_found()
        except StorageError:
            return storage_failure("deleting")
        return {"success": True, "message": f"{name} deleted successfully"}

    return router
