from typing import Any, Dict, Optional

from fastapi import APIRouter, File, HTTPException, Query, UploadFile, status

from orbit_map.core import schemas
from orbit_map.core.orbits import aggregate, ingest, pipeline

router = APIRouter(prefix="/orbits", tags=["Orbits"])


def _raise_for_failure(result: Dict[str, Any]) -> None:
    if result["status"] == pipeline.PipelineStatus.FAILED:
        raise HTTPException(status.HTTP_422_UNPROCESSABLE_ENTITY, result["detail"])


def _count_response(result: Dict[str, Any]) -> schemas.OrbitCountResponse:
    summary = result["result"]
    return schemas.OrbitCountResponse(
        **summary, message=pipeline.format_result(summary["total_orbits"])
    )


@router.post("/count", response_model=schemas.OrbitCountResponse)
async def count_uploaded_map(
    file: UploadFile = File(...),
    root: Optional[str] = Query(None, min_length=1),
    allow_orphans: Optional[bool] = None,
):
    """
    Count direct and indirect orbits in an uploaded map file:
    parse -> build -> count.
    """
    file_content = await file.read()
    if not file_content:
        raise HTTPException(
            status.HTTP_400_BAD_REQUEST, "Uploaded file is empty or unreadable"
        )

    lines = ingest.decode_map(file_content)

    result = pipeline.run_orbit_pipeline(
        lines,
        root_identifier=root,
        allow_orphans=allow_orphans,
        source=file.filename or "<upload>",
    )
    _raise_for_failure(result)
    return _count_response(result)


@router.post("/count-lines", response_model=schemas.OrbitCountResponse)
async def count_lines(payload: schemas.OrbitLinesRequest):
    """Same as /count, with the map sent as a JSON list of lines."""
    result = pipeline.run_orbit_pipeline(
        payload.lines,
        root_identifier=payload.root,
        allow_orphans=payload.allow_orphans,
    )
    _raise_for_failure(result)
    return _count_response(result)


@router.post("/tree", response_model=schemas.TreeResponse)
async def get_tree(payload: schemas.OrbitLinesRequest):
    """
    Return the map as a flat list of bodies, each with its parent and depth,
    parents listed before their children.
    """
    result = pipeline.run_orbit_pipeline(
        payload.lines,
        root_identifier=payload.root,
        allow_orphans=payload.allow_orphans,
    )
    _raise_for_failure(result)
    root = result["result"]["root"]
    rows = aggregate.flatten_tree(result["tree"], root, result["starting_depth"])
    return schemas.TreeResponse(root=root, bodies=rows)
