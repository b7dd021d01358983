"""Public product page: GET /product/{sku} (the URL printed in product QR codes).

Reachable without credentials. Signed-in callers are redirected to the
internal search; everyone else gets the public projection or a 404 that
does not say whether the product exists.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse, RedirectResponse

from inventory_console.api.v1.dependencies import get_disclosure_gateway
from inventory_console.application.dtos.disclosure import NotFound, Redirect
from inventory_console.application.services.disclosure_gateway import DisclosureGateway
from inventory_console.domain.exceptions import NotFoundException

router = APIRouter()


@router.get(
    "/{sku}",
    response_model=None,
    responses={
        307: {"description": "Signed in: redirect to the internal product search"},
        404: {"description": "Product not found"},
    },
)
async def get_public_product(
    sku: str,
    gateway: Annotated[DisclosureGateway, Depends(get_disclosure_gateway)],
) -> JSONResponse | RedirectResponse:
    """Resolve a shareable product link."""
    result = await gateway.resolve(sku)
    if isinstance(result, Redirect):
        return RedirectResponse(url=result.location, status_code=307)
    if isinstance(result, NotFound):
        raise NotFoundException(result.message)
    return JSONResponse(content=result.to_public_dict())
