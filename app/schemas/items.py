from pydantic import BaseModel, Field, field_validator
from typing import Dict, List, Literal, Optional

SortOption = Literal["recent", "favorite"]


class ItemCreate(BaseModel):
    location: str = Field(min_length=1, max_length=120)
    description: str = Field(min_length=1, max_length=4000)
    game_version: str = Field(min_length=1, max_length=32)
    shard_id: str = Field(min_length=1, max_length=32)
    image_path: Optional[str] = None
    preview_image_path: Optional[str] = None

    @field_validator("location", "game_version", "shard_id")
    @classmethod
    def _strip(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v


class ItemOut(BaseModel):
    id: str
    author_id: Optional[str] = None
    author_name: Optional[str] = None
    author_avatar_url: Optional[str] = None
    location: str
    description: str
    game_version: str
    shard_id: str
    image_path: Optional[str] = None
    preview_image_path: Optional[str] = None
    is_public: bool = False
    created_at: Optional[str] = None
    likes: int = 0
    has_liked: bool = False


class ItemVisibilityIn(BaseModel):
    is_public: bool


class ItemFacetsOut(BaseModel):
    game_versions: List[str] = Field(default_factory=list)
    shards: Dict[str, List[str]] = Field(default_factory=dict)


class LikeOut(BaseModel):
    item_id: str
    liked: bool
    likes: int
