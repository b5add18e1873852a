"""Project sources: sidecar metadata, media assets and technology icons."""

from src.sources.asset_scanner import AssetScan, AssetScanner
from src.sources.metadata_reader import MetadataReader
from src.sources.tech_resolver import IconDirectoryResolver, TechnologyCatalog, parse_tech_string

__all__ = [
    "AssetScan",
    "AssetScanner",
    "IconDirectoryResolver",
    "MetadataReader",
    "TechnologyCatalog",
    "parse_tech_string",
]
