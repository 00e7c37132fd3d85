from .title import TitleExtractor
from .timestamp import TimestampExtractor, LinkedDataStrategy, RawBytesStrategy, parse_rfc3339
from .content import ContentExtractor, ContainerStrategy, RawParagraphStrategy
from .normalizer import ContentNormalizer
from .formatter import DocumentFormatter

__all__ = [
    "TitleExtractor",
    "TimestampExtractor", "LinkedDataStrategy", "RawBytesStrategy", "parse_rfc3339",
    "ContentExtractor", "ContainerStrategy", "RawParagraphStrategy",
    "ContentNormalizer",
    "DocumentFormatter",
]
