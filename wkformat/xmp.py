"""XMP descriptive metadata attached to a WK image."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable


def _clamp_rating(rating: int) -> int:
    return max(0, min(5, int(rating)))


@dataclass
class XmpData:
    """Dublin Core and XMP basic properties of an image."""

    title: str | None = None
    description: str | None = None
    creator: list[str] = field(default_factory=list)
    subject: list[str] = field(default_factory=list)
    rights: str | None = None
    rating: int | None = None
    label: str | None = None
    marked: bool | None = None
    create_date: str | None = None
    modify_date: str | None = None
    creator_tool: str | None = None
    custom: dict[str, str] = field(default_factory=dict)

    @classmethod
    def builder(cls) -> XmpBuilder:
        """A builder for XMP data."""
        return XmpBuilder()

    def set_title(self, title: str) -> None:
        self.title = title

    def set_description(self, description: str) -> None:
        self.description = description

    def add_creator(self, creator: str) -> None:
        self.creator.append(creator)

    def add_subject(self, subject: str) -> None:
        self.subject.append(subject)

    def set_rating(self, rating: int) -> None:
        """Set the star rating, clamped to 0..5."""
        self.rating = _clamp_rating(rating)

    def set_rights(self, rights: str) -> None:
        self.rights = rights

    def set_custom(self, key: str, value: str) -> None:
        self.custom[key] = value

    def get_custom(self, key: str) -> str | None:
        return self.custom.get(key)


class XmpBuilder:
    """Fluent construction of XmpData."""

    def __init__(self) -> None:
        self._data = XmpData()

    def title(self, title: str) -> XmpBuilder:
        self._data.title = title
        return self

    def description(self, description: str) -> XmpBuilder:
        self._data.description = description
        return self

    def creator(self, creator: str) -> XmpBuilder:
        self._data.creator.append(creator)
        return self

    def creators(self, creators: Iterable[str]) -> XmpBuilder:
        self._data.creator.extend(creators)
        return self

    def subject(self, subject: str) -> XmpBuilder:
        self._data.subject.append(subject)
        return self

    def subjects(self, subjects: Iterable[str]) -> XmpBuilder:
        self._data.subject.extend(subjects)
        return self

    def rights(self, rights: str) -> XmpBuilder:
        self._data.rights = rights
        return self

    def rating(self, rating: int) -> XmpBuilder:
        self._data.rating = _clamp_rating(rating)
        return self

    def label(self, label: str) -> XmpBuilder:
        self._data.label = label
        return self

    def marked(self, marked: bool) -> XmpBuilder:
        self._data.marked = bool(marked)
        return self

    def create_date(self, date: str) -> XmpBuilder:
        self._data.create_date = date
        return self

    def modify_date(self, date: str) -> XmpBuilder:
        self._data.modify_date = date
        return self

    def creator_tool(self, tool: str) -> XmpBuilder:
        self._data.creator_tool = tool
        return self

    def custom(self, key: str, value: str) -> XmpBuilder:
        self._data.custom[key] = value
        return self

    def build(self) -> XmpData:
        """The XMP data built so far."""
        return self._data