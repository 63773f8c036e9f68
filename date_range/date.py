import re
from dataclasses import dataclass
from datetime import UTC, date, datetime
from typing import TYPE_CHECKING, ClassVar, Self, overload

from absl import logging

from .errors import DecodeError, ParseError

if TYPE_CHECKING:
  from .daterange import DateRange


@dataclass(frozen=True, order=True)
class Date:
  """A calendar day in UTC, stored as a proleptic Gregorian ordinal."""

  ordinal: int

  _ORDINAL_MIN: ClassVar[int] = date.min.toordinal()
  _ORDINAL_MAX: ClassVar[int] = date.max.toordinal()

  def __post_init__(self) -> None:
    if not self._ORDINAL_MIN <= self.ordinal <= self._ORDINAL_MAX:
      raise ValueError(f'ordinal {self.ordinal} out of range, '
                       f'expected to be in range [{self._ORDINAL_MIN}, {self._ORDINAL_MAX}]')

  def __str__(self) -> str:
    return self.to_date().isoformat()

  def __repr__(self) -> str:
    return f'Date.new({self.year}, {self.month}, {self.day})'

  @classmethod
  def new(cls, year: int, month: int, day: int) -> Self:
    """Builds a Date, rolling overflowing months into years and overflowing days into months.

    Date.new(2015, 13, 1) is 2016-01-01 and Date.new(2015, 3, 0) is 2015-02-28.
    """
    year += (month - 1) // 12
    month = (month - 1) % 12 + 1
    try:
      first_of_month = date(year, month, 1)
    except ValueError as e:
      raise ValueError(f'year {year} out of range, expected to be in range [{date.min.year}, {date.max.year}]') from e
    return cls(first_of_month.toordinal() + day - 1)

  @classmethod
  def today(cls) -> Self:
    return cls.from_timestamp(datetime.now(UTC))

  @classmethod
  def from_timestamp(cls, timestamp: datetime | date) -> Self:
    # datetime is a subclass of date, check it first.
    if isinstance(timestamp, datetime):
      if timestamp.tzinfo is not None:
        timestamp = timestamp.astimezone(UTC)
      return cls(timestamp.date().toordinal())
    if isinstance(timestamp, date):
      return cls(timestamp.toordinal())
    raise TypeError(f'expected a datetime or a date, got {type(timestamp).__name__}')

  ISO_8601_LAYOUT: ClassVar[str] = '%Y-%m-%d'
  _REGEX: ClassVar[str] = r'\d{4}-\d{2}-\d{2}'
  _PATTERN: ClassVar[re.Pattern[str]] = re.compile(_REGEX)

  @classmethod
  def parse(cls, text: str, layout: str | None = None) -> Self:
    """Parses strict YYYY-MM-DD text, or text in the given strptime layout."""
    if layout is None:
      if cls._PATTERN.fullmatch(text) is None:
        raise ParseError(f'unable to match "{text}" with regex {cls._REGEX}')
      layout = cls.ISO_8601_LAYOUT

    try:
      parsed = datetime.strptime(text, layout)
    except ValueError as e:
      raise ParseError(f'unable to parse "{text}" with layout "{layout}"') from e
    return cls.from_timestamp(parsed)

  @property
  def year(self) -> int:
    return self.to_date().year

  @property
  def month(self) -> int:
    return self.to_date().month

  @property
  def day(self) -> int:
    return self.to_date().day

  def to_date(self) -> date:
    return date.fromordinal(self.ordinal)

  def add_days(self, days: int) -> Self:
    return self.__class__(self.ordinal + days)

  def add_date(self, years: int, months: int, days: int) -> Self:
    d = self.to_date()
    return self.new(d.year + years, d.month + months, d.day + days)

  def __add__(self, other: object) -> Self:
    if isinstance(other, int):
      return self.add_days(other)
    return NotImplemented

  @overload
  def __sub__(self, other: int) -> Self:
    ...

  @overload
  def __sub__(self, other: Self) -> int:
    ...

  def __sub__(self, other: object) -> Self | int:
    if isinstance(other, int):
      return self.add_days(-other)
    if isinstance(other, Date):
      return self.ordinal - other.ordinal
    return NotImplemented

  def before(self, other: Self) -> bool:
    return self < other

  def after(self, other: Self) -> bool:
    return self > other

  def equals(self, other: Self) -> bool:
    return self == other

  def within(self, term: 'DateRange') -> bool:
    return term.includes(self)

  @staticmethod
  def dump(value: 'Date | None') -> str | None:
    """Renders a Date for JSON, with a missing Date as null."""
    if value is None:
      return None
    return str(value)

  @classmethod
  def load(cls, value: str | None) -> Self | None:
    if value is None:
      return None
    if not isinstance(value, str):
      raise ParseError(f'expected a string or null, got {type(value).__name__}')
    return cls.parse(value)

  def to_sql(self) -> str:
    return str(self)

  @classmethod
  def from_sql(cls, value: object) -> Self:
    """Decodes a backend value: a native datetime or date, or its text form."""
    if isinstance(value, date):
      return cls.from_timestamp(value)

    if isinstance(value, bytes):
      try:
        value = value.decode('ascii')
      except UnicodeDecodeError as e:
        raise DecodeError(f'date value {value!r} is not ascii text') from e
    if not isinstance(value, str):
      raise DecodeError(f'unable to decode a date from {type(value).__name__}')

    try:
      decoded = cls.parse(value)
    except ParseError as e:
      raise DecodeError(f'unable to decode date value "{value}"') from e
    logging.debug(f'Decoded date {decoded} from {value=}')
    return decoded

  MIN: ClassVar[Self]
  MAX: ClassVar[Self]


def is_zero(value: Date | None) -> bool:
  """Returns True for a missing Date, the way unbounded range sides are stored."""
  return value is None


Date.MIN = Date(Date._ORDINAL_MIN)
Date.MAX = Date(Date._ORDINAL_MAX)
