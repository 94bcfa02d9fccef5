# -*- coding: utf-8 -*-
"""
ResxSync .resx File Format

Reads and writes the string entries of a .resx file. Non-string data
(images, typed values) and resheader blocks of an existing file are
preserved when it is rewritten.
"""

from pathlib import Path
from typing import List, Sequence

from lxml import etree

import resxsync_config as config
from resxsync_models import ResourceEntry
from resxsync_exceptions import FileOperationError
from resxsync_logger import get_logger

logger = get_logger("core.resx_format")

XML_SPACE = "{http://www.w3.org/XML/1998/namespace}space"

RESHEADERS = (
    ("resmimetype", "text/microsoft-resx"),
    ("version", "2.0"),
    ("reader", "System.Resources.ResXResourceReader, System.Windows.Forms, "
               "Version=4.0.0.0, Culture=neutral, PublicKeyToken=b77a5c561934e089"),
    ("writer", "System.Resources.ResXResourceWriter, System.Windows.Forms, "
               "Version=4.0.0.0, Culture=neutral, PublicKeyToken=b77a5c561934e089"),
)


def _create_parser(remove_blank_text: bool = False) -> etree.XMLParser:
    """Return an XML parser configured to avoid external entity resolution."""
    return etree.XMLParser(
        remove_blank_text=remove_blank_text,
        resolve_entities=False,
        no_network=True,
    )


def _is_string_data(element) -> bool:
    return (element.tag == "data"
            and element.get("name")
            and element.get("type") is None
            and element.get("mimetype") is None)


class ResxFileFormat:
    """File-format collaborator: load(path) -> entries, save(path, entries)."""

    def load(self, path) -> List[ResourceEntry]:
        """
        Read the string entries of a .resx file in document order.

        A <data> element without a <value> child loads with value None.
        """
        path = Path(path)
        try:
            tree = etree.parse(str(path), _create_parser())
        except OSError as e:
            raise FileOperationError(f"Cannot read resource file: {e}",
                                     file_path=str(path), operation="load") from e
        except etree.XMLSyntaxError as e:
            raise FileOperationError(f"Invalid resource file: {e}",
                                     file_path=str(path), operation="load") from e

        entries = []
        for element in tree.getroot():
            if not isinstance(element.tag, str) or not _is_string_data(element):
                continue
            value_el = element.find("value")
            comment_el = element.find("comment")
            value = None if value_el is None else (value_el.text or "")
            comment = None if comment_el is None else (comment_el.text or "")
            entries.append(ResourceEntry(element.get("name"), value, comment))

        logger.debug(f"Loaded {len(entries)} entries from {path.name}")
        return entries

    def save(self, path, entries: Sequence[ResourceEntry]):
        """Write entries, replacing the string data of an existing file."""
        path = Path(path)
        try:
            if path.is_file():
                root = etree.parse(str(path), _create_parser(remove_blank_text=True)).getroot()
                for element in list(root):
                    if isinstance(element.tag, str) and _is_string_data(element):
                        root.remove(element)
            else:
                root = self._new_root()

            for entry in entries:
                root.append(self._build_data(entry))

            xml_bytes = etree.tostring(root.getroottree(), encoding=config.RESX_ENCODING,
                                       xml_declaration=True, pretty_print=True)
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(xml_bytes)
        except OSError as e:
            raise FileOperationError(f"Cannot write resource file: {e}",
                                     file_path=str(path), operation="save") from e
        except etree.XMLSyntaxError as e:
            raise FileOperationError(f"Existing resource file is invalid: {e}",
                                     file_path=str(path), operation="save") from e

        logger.debug(f"Saved {len(entries)} entries to {path.name}")

    @staticmethod
    def _new_root():
        root = etree.Element("root")
        for name, value in RESHEADERS:
            header = etree.SubElement(root, "resheader", name=name)
            etree.SubElement(header, "value").text = value
        return root

    @staticmethod
    def _build_data(entry: ResourceEntry):
        data = etree.Element("data", name=entry.key)
        data.set(XML_SPACE, "preserve")
        etree.SubElement(data, "value").text = entry.value or ""
        if entry.comment is not None:
            etree.SubElement(data, "comment").text = entry.comment
        return data
