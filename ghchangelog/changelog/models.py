"""Data models for tags and issue/pull-request records."""

from datetime import datetime, timezone
from typing import List, Optional, Tuple, Union

from dateutil import parser as date_parser
from pydantic import BaseModel, ConfigDict, field_validator, model_validator


def to_utc_datetime(value):
    """Parse ``value`` into a timezone-aware datetime.

    Strings are parsed with dateutil's ISO-8601 parser; naive values are
    taken to be UTC.
    """
    if isinstance(value, str):
        value = date_parser.isoparse(value)
    if isinstance(value, datetime) and value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value


class Tag(BaseModel):
    """A released tag. ``link`` defaults to the tag name."""

    model_config = ConfigDict(frozen=True)

    name: str
    time: datetime
    link: Optional[str] = None

    @field_validator('time', mode='before')
    @classmethod
    def parse_time(cls, v):
        return to_utc_datetime(v)

    @model_validator(mode='before')
    @classmethod
    def default_link(cls, data):
        if isinstance(data, dict) and not data.get('link'):
            data = dict(data, link=data.get('name'))
        return data


class Unreleased(BaseModel):
    """Open-ended boundary standing in for HEAD.

    ``future`` is set when the boundary is a named upcoming release rather
    than the plain unreleased label; such headers carry a date.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    time: datetime
    link: str = "HEAD"
    future: bool = False

    @field_validator('time', mode='before')
    @classmethod
    def parse_time(cls, v):
        return to_utc_datetime(v)


Boundary = Union[Tag, Unreleased]

# (older, newer); older is None for "since project inception"
TagInterval = Tuple[Optional[Tag], Boundary]


class Label(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    url: str = ""


class User(BaseModel):
    model_config = ConfigDict(frozen=True)

    login: str
    html_url: str = ""


class Milestone(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str
    state: str = "closed"

    @property
    def is_open(self) -> bool:
        return self.state == "open"


class Item(BaseModel):
    """An issue or pull request as handed over by the item source."""

    model_config = ConfigDict(frozen=True)

    number: int
    title: str
    html_url: str
    actual_date: datetime
    labels: Tuple[Label, ...] = ()
    user: Optional[User] = None
    is_pull_request: bool = False
    milestone: Optional[Milestone] = None

    @field_validator('actual_date', mode='before')
    @classmethod
    def parse_actual_date(cls, v):
        return to_utc_datetime(v)

    @property
    def label_names(self) -> List[str]:
        return [label.name for label in self.labels]
