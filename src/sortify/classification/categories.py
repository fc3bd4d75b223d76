"""Map resolved type labels to destination categories."""

from __future__ import annotations

from enum import Enum

MISMATCH_LABEL = "mismatch"


class Category(str, Enum):
    """Destination grouping for a sorted file."""

    VIDEO = "Video"
    AUDIO = "Audio"
    PICTURES = "Pictures"
    DOCUMENTS = "Documents"
    ARCHIVES = "Archives"
    EXECUTABLES = "Executables"
    CODE = "Code"
    UNCATEGORIZED = "Uncategorized"
    MISMATCH = "Mismatch"

    @property
    def dir_name(self) -> str:
        """Return the folder name files of this category are moved into."""
        if self is Category.MISMATCH:
            return "Check manually"
        return self.value


_GROUPS: dict[Category, str] = {
    Category.VIDEO: "mp4 m4v mov mkv avi webm flv wmv mpg mpeg 3gp ogv ts vob",
    Category.AUDIO: "mp3 wav flac ogg m4a aac opus wma ape alac aiff dsf dsd",
    Category.PICTURES: (
        "png jpg jpeg gif bmp webp tiff tif svg ico heic heif raw cr2 nef arw dng psd ai eps"
    ),
    Category.DOCUMENTS: (
        "pdf doc docx xls xlsx ppt pptx txt md rtf odt ods odp csv epub mobi djvu"
    ),
    Category.ARCHIVES: "zip 7z rar gz tar tgz bz2 xz zst lz4 cab iso dmg",
    Category.EXECUTABLES: "exe msi elf app mach-o wasm dll so dylib bin",
    Category.CODE: (
        "rs py js jsx tsx c cpp h hpp java go rb php swift kt cs html css scss sass less "
        "vue svelte sh bash zsh fish ps1 bat cmd yaml yml json toml xml ini conf config env "
        "gitignore dockerfile makefile cmake sql"
    ),
}

CATEGORY_BY_LABEL: dict[str, Category] = {
    label: category for category, labels in _GROUPS.items() for label in labels.split()
}
CATEGORY_BY_LABEL[MISMATCH_LABEL] = Category.MISMATCH


def category_for(label: str) -> Category:
    """Return the category for a type label; unknown labels are Uncategorized."""
    return CATEGORY_BY_LABEL.get(label.lower(), Category.UNCATEGORIZED)


__all__ = ["Category", "CATEGORY_BY_LABEL", "MISMATCH_LABEL", "category_for"]
