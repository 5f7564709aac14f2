"""
Line endpoints for API v1.

These routes expose a CRUD API for subway lines.  Errors raised by
``LineService`` are not caught here; the handlers registered in
``core.exceptions`` turn them into 400 and 404 responses.
"""

from typing import List

from fastapi import APIRouter, Depends, Request, Response, status

from subway_api.app.api.deps import get_line_service
from subway_api.app.schemas.line import LineRequest, LineResponse
from subway_api.app.services.line_service import LineService

router = APIRouter()


@router.post("", response_model=LineResponse, status_code=status.HTTP_201_CREATED)
async def create_line(
    line_in: LineRequest,
    request: Request,
    response: Response,
    service: LineService = Depends(get_line_service),
) -> LineResponse:
    """Create a line between two registered stations.

    Responds 201 with a ``Location`` header pointing at the new line,
    or 400 with an empty body when the name is already taken.
    """
    line = await service.save_line(line_in)
    response.headers["Location"] = f"{request.url.path.rstrip('/')}/{line.id}"
    return line


@router.get("", response_model=List[LineResponse])
async def list_lines(service: LineService = Depends(get_line_service)) -> List[LineResponse]:
    """Return every line, each with its stations in line order."""
    return await service.find_all_lines()


@router.get("/{line_id}", response_model=LineResponse)
async def get_line(line_id: int, service: LineService = Depends(get_line_service)) -> LineResponse:
    """Retrieve a single line by ID.  Returns 404 if it does not exist."""
    return await service.find_line_by_id(line_id)


@router.put("/{line_id}")
async def update_line(
    line_id: int,
    line_in: LineRequest,
    service: LineService = Depends(get_line_service),
) -> Response:
    """Replace a line's name, color and endpoints; responds 200 with no body."""
    await service.update_line_by_id(line_id, line_in)
    return Response(status_code=status.HTTP_200_OK)


@router.delete("/{line_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_line(line_id: int, service: LineService = Depends(get_line_service)) -> Response:
    await service.delete_line_by_id(line_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
