"""Technology name parsing and icon resolution."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Iterable, List, Sequence

from src.manifest.models import DatabaseTechItem, Technology, TechItem


def parse_tech_string(value: Any) -> List[str]:
    """Split a comma-delimited technology string into trimmed, non-empty names."""
    if not value or not isinstance(value, str):
        return []
    return [name.strip() for name in value.split(",") if name.strip()]


class IconDirectoryResolver:
    """Resolve technology icons by probing an icon directory on disk."""

    def __init__(
        self,
        icons_dir: Path | str,
        url_prefix: str = "/portfolio/icons",
        extensions: Sequence[str] = (".svg", ".png"),
    ) -> None:
        self.icons_dir = Path(icons_dir)
        self.url_prefix = url_prefix.rstrip("/")
        self.extensions = list(extensions)

    def icon_for(self, name: str) -> str | None:
        """Public icon path for ``name``; the first extension found wins."""
        key = name.lower()
        for ext in self.extensions:
            if (self.icons_dir / f"{key}{ext}").is_file():
                return f"{self.url_prefix}/{key}{ext}"
        return None

    def resolve(self, tech: Any) -> List[TechItem]:
        return [TechItem(name=name, icon=self.icon_for(name)) for name in parse_tech_string(tech)]


class TechnologyCatalog:
    """Case-insensitive lookup over the rows of the ``technologies`` table."""

    def __init__(self, technologies: Iterable[Technology] = ()) -> None:
        self._by_name: Dict[str, Technology] = {}
        for tech in technologies:
            self._by_name[tech.name.lower()] = tech

    def lookup(self, name: str) -> Technology | None:
        return self._by_name.get(name.strip().lower())

    def resolve(self, tech: Any) -> List[DatabaseTechItem]:
        """Map each name to its icon; unknown names get null icon and icon type."""
        items = []
        for name in parse_tech_string(tech):
            match = self.lookup(name)
            items.append(
                DatabaseTechItem(
                    name=name,
                    icon=match.icon_path if match else None,
                    icon_type=match.icon_type if match else None,
                )
            )
        return items
