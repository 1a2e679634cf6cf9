"""Script service — CRUD for parameterized scripts plus execution."""

from __future__ import annotations

import json
import logging
from datetime import datetime

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from noteboard.errors import NotFoundError
from noteboard.models.script import Script, ScriptExecution, ScriptVariable
from noteboard.schemas.script import ScriptResult, ScriptWrite, VariableIn
from noteboard.utils import script_template
from noteboard.utils.dates import utcnow

logger = logging.getLogger(__name__)


def _build_variables(variables: list[VariableIn]) -> list[ScriptVariable]:
    # Rows without a name or placeholder are dropped rather than rejected.
    return [
        ScriptVariable(
            name=v.name.strip(),
            placeholder=v.placeholder.strip(),
            description=(v.description or "").strip() or None,
            default_value=(v.default_value or "").strip() or None,
            required=v.required,
            type=v.type,
        )
        for v in variables
        if not v.is_blank
    ]


async def list_scripts(db: AsyncSession) -> list[Script]:
    result = await db.execute(select(Script).order_by(Script.updated_at.desc()))
    return list(result.scalars().all())


async def get_script(db: AsyncSession, script_id: str) -> Script | None:
    return await db.get(Script, script_id)


async def create_script(db: AsyncSession, data: ScriptWrite) -> Script:
    """Insert the script and all of its variables in one transaction."""
    now = utcnow()
    script = Script(
        name=data.name,
        description=(data.description or "").strip() or None,
        content=data.content,
        created_at=now,
        updated_at=now,
        variables=_build_variables(data.variables),
    )
    db.add(script)
    await db.commit()
    await db.refresh(script, attribute_names=["variables"])
    logger.info("Created script %s (%d variables)", script.id, len(script.variables))
    return script


async def update_script(db: AsyncSession, script_id: str, data: ScriptWrite) -> Script | None:
    """Replace fields and the whole variable set in one transaction."""
    script = await db.get(Script, script_id)
    if not script:
        return None

    script.name = data.name
    script.description = (data.description or "").strip() or None
    script.content = data.content
    script.updated_at = utcnow()

    # Flush the removals first so re-used names don't trip the (script_id, name) constraint.
    script.variables.clear()
    await db.flush()
    script.variables.extend(_build_variables(data.variables))

    await db.commit()
    await db.refresh(script, attribute_names=["variables"])
    return script


async def delete_script(db: AsyncSession, script_id: str) -> bool:
    script = await db.get(Script, script_id)
    if not script:
        return False

    # Variables go through the ORM cascade; executions through ON DELETE CASCADE.
    await db.delete(script)
    await db.commit()
    return True


async def list_executions(db: AsyncSession, script_id: str) -> list[ScriptExecution]:
    stmt = (
        select(ScriptExecution)
        .where(ScriptExecution.script_id == script_id)
        .order_by(ScriptExecution.executed_at.desc())
    )
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def execute_script(db: AsyncSession, script_id: str, variables: dict[str, str]) -> ScriptResult:
    """Validate, substitute, then record history on a best-effort basis.

    Raises NotFoundError for an unknown script and MissingVariablesError
    before any substitution or write.
    """
    script = await db.get(Script, script_id)
    if not script:
        raise NotFoundError("Script", script_id)

    processed = script_template.render(script.content, script.variables, variables)
    executed_at = utcnow()

    await _record_execution(db, script_id, variables, processed, executed_at)

    return ScriptResult(
        script_id=script_id,
        processed_content=processed,
        variables_used=variables,
        executed_at=executed_at,
    )


async def _record_execution(
    db: AsyncSession,
    script_id: str,
    variables: dict[str, str],
    processed: str,
    executed_at: datetime,
) -> None:
    # History is diagnostic; a failed insert must not fail the execution.
    try:
        db.add(
            ScriptExecution(
                script_id=script_id,
                variables_used=json.dumps(variables),
                processed_content=processed,
                executed_at=executed_at,
            )
        )
        await db.commit()
    except SQLAlchemyError as exc:
        await db.rollback()
        logger.warning("Failed to save execution history for script %s: %s", script_id, exc)
