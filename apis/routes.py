"""
API routes for inspecting a plugin class loader.
Provides read-only views of declared classes and loaded libraries, plus manifest refresh.
"""

import logging
from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel
from typing import List

from plugins import ClassLoader, ManifestSourceError, UnknownClassError

logger = logging.getLogger(__name__)

router = APIRouter()

# Pydantic models for responses
class PluginInfo(BaseModel):
    qualified_name: str
    short_name: str
    implementation_type: str
    base_capability_type: str
    description: str
    declaring_package: str
    library_name: str
    manifest_path: str
    loaded: bool

class PluginList(BaseModel):
    base_capability_type: str
    plugins: List[str]

class LibraryInfo(BaseModel):
    path: str
    state: str
    refcount: int
    load_count: int
    unload_count: int

class RefreshResponse(BaseModel):
    status: str
    declared: int


def _loader(request: Request) -> ClassLoader:
    return request.app.state.class_loader


@router.get("/plugins", response_model=PluginList)
def list_plugins(request: Request):
    """List declared plugin classes."""
    loader = _loader(request)
    return PluginList(base_capability_type=loader.get_base_class_type(), plugins=loader.list_declared())

@router.get("/plugins/{name:path}", response_model=PluginInfo)
def describe_plugin(name: str, request: Request):
    """Describe one declared plugin class."""
    loader = _loader(request)
    try:
        descriptor = loader.describe(name)
        loaded = loader.is_loaded(name)
    except UnknownClassError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return PluginInfo(loaded=loaded, **descriptor.to_dict())

@router.get("/libraries", response_model=List[LibraryInfo])
def list_libraries(request: Request):
    """List every library record, loaded or not."""
    records = _loader(request).lifecycle.list_records()
    return [
        LibraryInfo(
            path=record.path,
            state=record.state.value,
            refcount=record.refcount,
            load_count=record.load_count,
            unload_count=record.unload_count
        )
        for record in records.values()
    ]

@router.post("/plugins/refresh", response_model=RefreshResponse)
def refresh_plugins(request: Request):
    """Rediscover declared classes from the manifest source."""
    loader = _loader(request)
    try:
        loader.refresh()
    except ManifestSourceError as e:
        logger.error(f"Refresh requested over API failed: {e}")
        raise HTTPException(status_code=503, detail=str(e))
    return RefreshResponse(status="ok", declared=len(loader.list_declared()))
