"""
Resource discovery.

Walks a project root and groups .resx files by logical resource:
"Strings.resx" is the base of the group, "Strings.fr-FR.resx" a variant.
Results are sorted by relative path so the same file set always yields
the same groups in the same order.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import resxsync_config as config
from core.locale_utils import is_culture_tag, normalize_locale
from resxsync_logger import get_logger

logger = get_logger("core.resource_discovery")


@dataclass
class ResourceGroup:
    """
    Files of one logical resource.

    Attributes:
        resource_id (str): Relative path of the base file without extension, '/' separated.
        base_path (Path): Path of the base file (may not exist when only variants were found).
        variants (Dict[str, Path]): Normalized locale -> variant file path.
    """
    resource_id: str
    base_path: Path
    variants: Dict[str, Path] = field(default_factory=dict)

    @property
    def has_base_file(self) -> bool:
        return self.base_path.is_file()


def split_resource_name(file_name: str) -> Tuple[str, Optional[str]]:
    """
    Split a .resx file name into (logical name, locale).

    "Strings.resx" -> ("Strings", None)
    "Strings.fr-FR.resx" -> ("Strings", "fr-FR")
    "Form1.Designer.resx" -> ("Form1.Designer", None)
    """
    stem = file_name[:-len(config.RESX_EXTENSION)] if file_name.lower().endswith(config.RESX_EXTENSION) else file_name
    name, dot, suffix = stem.rpartition(".")
    if dot and name and is_culture_tag(suffix):
        return name, normalize_locale(suffix)
    return stem, None


def discover_resources(root) -> List[ResourceGroup]:
    """Return the resource groups found under root, sorted by resource id."""
    root = Path(root)
    groups: Dict[str, ResourceGroup] = {}

    for path in sorted(root.rglob("*")):
        if not path.is_file() or path.suffix.lower() != config.RESX_EXTENSION:
            continue
        name, locale = split_resource_name(path.name)
        base_path = path.with_name(name + config.RESX_EXTENSION)
        resource_id = base_path.relative_to(root).with_suffix("").as_posix()

        group = groups.get(resource_id)
        if group is None:
            group = ResourceGroup(resource_id=resource_id, base_path=base_path)
            groups[resource_id] = group

        if locale is None:
            # Keeps the extension case of the file on disk
            group.base_path = path
        else:
            if locale in group.variants:
                logger.warning(f"Duplicate variant for {resource_id} [{locale}]: {path.name} ignored")
                continue
            group.variants[locale] = path

    result = [groups[k] for k in sorted(groups)]
    logger.debug(f"Discovered {len(result)} resource(s) under {root}")
    return result
