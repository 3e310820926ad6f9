from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field
from typing import Dict, List, Tuple


@dataclass(frozen=True)
class HeadingCounts:
    h1: int = 0  # H1s converted to H2
    h2: int = 0
    h3: int = 0
    h4: int = 0
    h5_plus: int = 0  # H5/H6 converted to H4

    def total(self) -> int:
        return self.h1 + self.h2 + self.h3 + self.h4 + self.h5_plus

    def to_dict(self) -> Dict[str, int]:
        return {
            "h1": self.h1,
            "h2": self.h2,
            "h3": self.h3,
            "h4": self.h4,
            "h5Plus": self.h5_plus,
        }


@dataclass(frozen=True)
class AnalysisResult:
    heading_counts: HeadingCounts
    total_images: int
    images_without_links: int
    code_block_count: int
    issues: Tuple[str, ...] = ()

    @property
    def header_ratio(self) -> float:
        """Lower-level (H3+H4) headers per H2, 0 when there are no H2s."""
        counts = self.heading_counts
        if not counts.h2:
            return 0.0
        return (counts.h3 + counts.h4) / counts.h2

    def to_dict(self) -> Dict:
        return {
            "headingCounts": self.heading_counts.to_dict(),
            "totalImages": self.total_images,
            "imagesWithoutLinks": self.images_without_links,
            "codeBlockCount": self.code_block_count,
            "issues": list(self.issues),
        }


@dataclass
class TextPair:
    html: str
    text: str = ""


@dataclass
class DocumentContent:
    original: TextPair
    formatted: TextPair
    file_name: str

    def to_dict(self) -> Dict:
        return {
            "original": asdict(self.original),
            "formatted": asdict(self.formatted),
            "fileName": self.file_name,
        }


@dataclass
class FormattingOptions:
    standardize_headings: bool = True
    add_caption_prefix: bool = True
    preserve_code_blocks: bool = True


@dataclass
class ProcessingResult:
    content: DocumentContent
    analysis: AnalysisResult
    messages: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict:
        return {
            "content": self.content.to_dict(),
            "analysis": self.analysis.to_dict(),
            "messages": list(self.messages),
        }

    def to_json(self, **json_kwargs: Dict) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False, **json_kwargs)
