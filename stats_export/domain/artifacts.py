from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum


@dataclass(frozen=True)
class RasterArtifact:
    width: int
    height: int
    payload: bytes = field(repr=False)
    caption: str = ""

    @property
    def aspect_ratio(self) -> float:
        return self.height / self.width


# geometry is expressed in millimetres
@dataclass(frozen=True)
class PageGeometry:
    width: float = 210.0
    height: float = 297.0
    margin: float = 20.0

    @property
    def content_width(self) -> float:
        return self.width - 2 * self.margin

    @property
    def bottom_limit(self) -> float:
        return self.height - self.margin


A4_PORTRAIT = PageGeometry()


@dataclass
class PageLayout:
    """Vertical cursor over the page currently being filled."""

    geometry: PageGeometry
    cursor: float = 0.0

    def fits(self, block_height: float) -> bool:
        return self.cursor + block_height <= self.geometry.bottom_limit

    def reset(self) -> None:
        self.cursor = self.geometry.margin

    def advance(self, amount: float) -> None:
        self.cursor = min(self.cursor + amount, self.geometry.bottom_limit)


class BlockKind(str, Enum):
    TEXT = "text"
    IMAGE = "image"


@dataclass(frozen=True)
class PlacedBlock:
    kind: BlockKind
    x: float
    y: float
    width: float
    height: float
    text: str | None = None
    font_size: float = 12.0
    align: str = "left"
    raster: RasterArtifact | None = None


@dataclass
class Page:
    number: int
    blocks: list[PlacedBlock] = field(default_factory=list)

    @property
    def image_blocks(self) -> list[PlacedBlock]:
        return [b for b in self.blocks if b.kind is BlockKind.IMAGE]


@dataclass
class DocumentArtifact:
    title: str
    requester: str
    geometry: PageGeometry
    pages: list[Page] = field(default_factory=list)

    @property
    def page_count(self) -> int:
        return len(self.pages)
