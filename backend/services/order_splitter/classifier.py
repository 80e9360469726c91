from dataclasses import dataclass
from typing import Iterable, List

from models import LineItem


@dataclass(frozen=True)
class ClassifiedItems:
    domestic: List[LineItem]
    international: List[LineItem]

    @property
    def needs_split(self) -> bool:
        """True only if the order holds both domestic and international items."""
        return bool(self.domestic) and bool(self.international)


def _has_tag(item: LineItem, tag: str) -> bool:
    return any(product_tag.lower() == tag for product_tag in item.product_tags)


def classify_line_items(line_items: Iterable[LineItem], tag: str) -> ClassifiedItems:
    """Items whose product carries ``tag`` (any case) are domestic, the rest international."""
    wanted = tag.lower()
    domestic: List[LineItem] = []
    international: List[LineItem] = []
    for item in line_items:
        if _has_tag(item, wanted):
            domestic.append(item)
        else:
            international.append(item)
    return ClassifiedItems(domestic=domestic, international=international)
