from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


# =========================
# ORBIT MAP
# =========================
class Relationship(BaseModel):
    """One ``PARENT)CHILD`` line: ``name`` directly orbits ``parent``."""

    parent: str
    name: str

    model_config = ConfigDict(frozen=True)


class TreeNode(BaseModel):
    name: str
    children: Tuple["TreeNode", ...] = ()

    model_config = ConfigDict(frozen=True)


TreeNode.model_rebuild()


# =========================
# API
# =========================
class OrbitLinesRequest(BaseModel):
    lines: List[str]
    root: Optional[str] = Field(default=None, min_length=1)
    allow_orphans: Optional[bool] = None


class OrbitCountResponse(BaseModel):
    root: str
    relationships: int
    bodies: int
    max_depth: int
    total_orbits: int
    message: str


class TreeRow(BaseModel):
    name: str
    parent: str
    depth: int


class TreeResponse(BaseModel):
    root: str
    bodies: List[TreeRow] = []
