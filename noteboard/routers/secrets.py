"""Secret endpoints — values go in through PUT and come out only by name."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Path, Response

from noteboard.deps import get_vault
from noteboard.schemas.secret import SecretMetadata, SecretSet, SecretValue
from noteboard.services.secret_service import SecretVault

router = APIRouter()

SecretName = Annotated[str, Path(min_length=1, max_length=128)]


@router.get("/", response_model=list[SecretMetadata])
@router.get("", response_model=list[SecretMetadata], include_in_schema=False)
async def list_secrets(vault: SecretVault = Depends(get_vault)):
    return await vault.list_secret_metadata()


@router.get("/{name}", response_model=SecretValue)
async def get_secret(name: SecretName, vault: SecretVault = Depends(get_vault)):
    revealed = await vault.reveal(name)
    if revealed is None:
        raise HTTPException(status_code=404, detail="Secret not found")
    return revealed


@router.put("/{name}", status_code=204)
async def set_secret(body: SecretSet, name: SecretName, vault: SecretVault = Depends(get_vault)):
    await vault.set_secret(name, body.value, body.due_date)
    return Response(status_code=204)


@router.delete("/{name}", status_code=204)
async def delete_secret(name: SecretName, vault: SecretVault = Depends(get_vault)):
    await vault.delete_secret(name)
    return Response(status_code=204)
