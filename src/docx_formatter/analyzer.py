"""Read-only structural analysis of a converted document tree."""

from __future__ import annotations

from typing import List

from lxml.html import HtmlElement

from .dom import get_body, has_ancestor, iter_headings
from .models import AnalysisResult, HeadingCounts


NAVIGATION_RATIO = 5


def _plural(count: int, singular: str, plural: str) -> str:
    return singular if count == 1 else plural


def derive_issues(counts: HeadingCounts, images_without_links: int) -> List[str]:
    """Human readable issues, in a fixed order. Rules are independent."""
    issues: List[str] = []
    if counts.h3 + counts.h4 > counts.h2 * NAVIGATION_RATIO:
        issues.append("Navigation issue: Too many lower-level headers compared to H2 headers")
    if images_without_links > 0:
        word = _plural(images_without_links, "image", "images")
        issues.append(f"{images_without_links} embedded {word} without links")
    if counts.h1 > 0:
        word = _plural(counts.h1, "element", "elements")
        issues.append(f"{counts.h1} H1 {word} converted to H2")
    if counts.h5_plus > 0:
        word = _plural(counts.h5_plus, "element", "elements")
        issues.append(f"{counts.h5_plus} H5+ {word} converted to H4")
    return issues


def analyze_document(root: HtmlElement) -> AnalysisResult:
    """Count headings, images and code blocks without touching the tree."""
    tally = {"h1": 0, "h2": 0, "h3": 0, "h4": 0, "h5_plus": 0}
    for _el, counter in iter_headings(root):
        tally[counter] += 1
    counts = HeadingCounts(**tally)

    body = get_body(root)
    total_images = 0
    images_without_links = 0
    for img in body.iter("img"):
        total_images += 1
        if not has_ancestor(img, "a"):
            images_without_links += 1

    # A <code> nested in a <pre> counts twice.
    code_block_count = sum(1 for _ in body.iter("pre", "code"))

    return AnalysisResult(
        heading_counts=counts,
        total_images=total_images,
        images_without_links=images_without_links,
        code_block_count=code_block_count,
        issues=tuple(derive_issues(counts, images_without_links)),
    )
