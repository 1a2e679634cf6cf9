"""Script CRUD + execute endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.ext.asyncio import AsyncSession

from noteboard.database import get_db
from noteboard.schemas.script import (
    ExecutionResponse,
    ScriptExecute,
    ScriptResponse,
    ScriptResult,
    ScriptWrite,
)
from noteboard.services import script_service

router = APIRouter()


@router.get("/", response_model=list[ScriptResponse])
@router.get("", response_model=list[ScriptResponse], include_in_schema=False)
async def list_scripts(db: AsyncSession = Depends(get_db)):
    return await script_service.list_scripts(db)


@router.post("/", response_model=ScriptResponse, status_code=201)
@router.post("", response_model=ScriptResponse, status_code=201, include_in_schema=False)
async def create_script(data: ScriptWrite, db: AsyncSession = Depends(get_db)):
    return await script_service.create_script(db, data)


@router.get("/{script_id}", response_model=ScriptResponse)
async def get_script(script_id: str, db: AsyncSession = Depends(get_db)):
    script = await script_service.get_script(db, script_id)
    if not script:
        raise HTTPException(status_code=404, detail="Script not found")
    return script


@router.put("/{script_id}", response_model=ScriptResponse)
async def update_script(script_id: str, data: ScriptWrite, db: AsyncSession = Depends(get_db)):
    script = await script_service.update_script(db, script_id, data)
    if not script:
        raise HTTPException(status_code=404, detail="Script not found")
    return script


@router.delete("/{script_id}", status_code=204)
async def delete_script(script_id: str, db: AsyncSession = Depends(get_db)):
    deleted = await script_service.delete_script(db, script_id)
    if not deleted:
        raise HTTPException(status_code=404, detail="Script not found")
    return Response(status_code=204)


@router.post("/{script_id}/execute", response_model=ScriptResult)
async def execute_script(script_id: str, body: ScriptExecute, db: AsyncSession = Depends(get_db)):
    # NotFoundError -> 404, MissingVariablesError -> 400 (see main).
    return await script_service.execute_script(db, script_id, body.variables)


@router.get("/{script_id}/executions", response_model=list[ExecutionResponse])
async def list_executions(script_id: str, db: AsyncSession = Depends(get_db)):
    script = await script_service.get_script(db, script_id)
    if not script:
        raise HTTPException(status_code=404, detail="Script not found")
    return await script_service.list_executions(db, script_id)
