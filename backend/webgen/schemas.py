from pydantic import BaseModel
from typing import List, Optional


class GenerateRequest(BaseModel):
    message: str  # free-text description of the application to build


class BundleOut(BaseModel):
    frontend: str
    backend: str
    database: str


class GenerateResponse(BaseModel):
    status: str
    id: str
    created_at: str
    stage: Optional[str] = None  # repair stage that recovered the bundle
    bundle: BundleOut


class ChatResponse(BaseModel):
    status: str
    content: str


class StoredBundleOut(BaseModel):
    id: str
    prompt: str
    created_at: str
    bundle: BundleOut


class BundleListResponse(BaseModel):
    status: str
    bundles: List[StoredBundleOut] = []
