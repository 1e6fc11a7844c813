"""
Contenu des blocks, par type.

Chaque forme de contenu peut porter un sous-objet `position` injecté par le
canvas; les éditeurs de blocks ne le touchent jamais. Les clés inconnues
sont conservées telles quelles.
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Literal, Optional

BlockType = Literal["text", "code", "drawing", "image"]
BLOCK_TYPES = ("text", "code", "drawing", "image")


class Position(BaseModel):
    """Rectangle d'un block dans l'espace canvas"""
    x: float
    y: float
    width: float
    height: float


class BlockContent(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    position: Optional[Position] = None


class TextContent(BlockContent):
    text: str = ""


class CodeContent(BlockContent):
    code: str = ""
    language: str = "javascript"
    output: Optional[str] = ""


class DrawingContent(BlockContent):
    data: Optional[Any] = None  # document vectoriel sérialisé


class ImageContent(BlockContent):
    url: Optional[str] = ""
    local_data: Optional[str] = Field(default=None, alias="localData")


CONTENT_MODELS: dict[str, type[BlockContent]] = {
    "text": TextContent,
    "code": CodeContent,
    "drawing": DrawingContent,
    "image": ImageContent,
}


def validate_content(block_type: str, content: dict[str, Any]) -> dict[str, Any]:
    """Valide le contenu contre le modèle du type et le retourne inchangé"""
    CONTENT_MODELS[block_type].model_validate(content)
    return content


def default_content(block_type: str) -> dict[str, Any]:
    """Contenu initial d'un nouveau block, sans position"""
    return CONTENT_MODELS[block_type]().model_dump(by_alias=True, exclude={"position"})
