import json
from dataclasses import dataclass
from typing import Any, ClassVar

from absl import logging
from jsonschema import Draft202012Validator

from .date import Date
from .errors import DecodeError, ParseError, RangeOrderError


class DateRange:
  """An inclusive interval of Dates.

  Every range is exactly one of five shapes: Never (empty), Forever (unbounded on both sides),
  Until (unbounded start), Onward (unbounded end) and Between (bounded on both sides).
  A missing bound is None. Emptiness is its own shape and is never inferred from missing bounds.
  """

  start: Date | None
  end: Date | None

  NEVER: ClassVar['Never']
  FOREVER: ClassVar['Forever']

  def __new__(cls, *args, **kwargs):
    if cls is DateRange:
      raise TypeError('DateRange is abstract, use DateRange.of() or one of its shapes')
    return super().__new__(cls)

  @staticmethod
  def of(start: Date | None, end: Date | None) -> 'DateRange':
    match start, end:
      case None, None:
        return Forever()
      case None, Date():
        return Until(end)
      case Date(), None:
        return Onward(start)
      case Date(), Date():
        return Between(start, end)
    raise TypeError(f'expected Date or None bounds, got {start!r} and {end!r}')

  @staticmethod
  def empty() -> 'Never':
    return Never()

  never = empty

  @staticmethod
  def forever() -> 'Forever':
    return Forever()

  infinity = forever

  @staticmethod
  def single_day(day: Date) -> 'Between':
    return Between(day, day)

  @staticmethod
  def only_today() -> 'Between':
    return DateRange.single_day(Date.today())

  @staticmethod
  def entire_month(year: int, month: int) -> 'Between':
    # Day 0 of the next month is the last day of this one.
    return Between(Date.new(year, month, 1), Date.new(year, month + 1, 0))

  @staticmethod
  def entire_year(year: int) -> 'Between':
    return Between(Date.new(year, 1, 1), Date.new(year + 1, 1, 0))

  @staticmethod
  def start_bounded_range(start: Date) -> 'Onward':
    return Onward(start)

  def is_empty(self) -> bool:
    return isinstance(self, Never)

  def is_zero(self) -> bool:
    """Returns True when both bounds are missing, for both Never and Forever.

    Check is_empty() first before reading missing bounds as unbounded.
    """
    return self.start is None and self.end is None

  is_infinity = is_zero

  def days(self) -> int:
    """Number of days in the range. Empty and unbounded ranges have 0."""
    match self:
      case Between(start, end):
        return end - start + 1
    return 0

  def includes(self, day: Date) -> bool:
    if self.is_empty():
      return False
    if self.start is not None and day < self.start:
      return False
    if self.end is not None and day > self.end:
      return False
    return True

  def __contains__(self, day: object) -> bool:
    return isinstance(day, Date) and self.includes(day)

  def intersection(self, other: 'DateRange') -> 'DateRange':
    match self, other:
      case (Never(), _) | (_, Never()):
        return Never()
      case (Forever(), _):
        return other
      case (_, Forever()):
        return self

    start = _later(self.start, other.start)
    end = _earlier(self.end, other.end)
    if start is not None and end is not None and start > end:
      return Never()
    return DateRange.of(start, end)

  def __and__(self, other: object) -> 'DateRange':
    if isinstance(other, DateRange):
      return self.intersection(other)
    return NotImplemented

  def union(self, other: 'DateRange') -> 'DateRange':
    """Returns the smallest range covering both ranges. Gaps between them are included."""
    match self, other:
      case (Never(), _):
        return other
      case (_, Never()):
        return self

    start = None if self.start is None or other.start is None else min(self.start, other.start)
    end = None if self.end is None or other.end is None else max(self.end, other.end)
    return DateRange.of(start, end)

  def __or__(self, other: object) -> 'DateRange':
    if isinstance(other, DateRange):
      return self.union(other)
    return NotImplemented

  def contains(self, other: 'DateRange') -> bool:
    return self.intersection(other) == other

  def does_not_contain(self, other: 'DateRange') -> bool:
    return not self.contains(other)

  def overlaps(self, other: 'DateRange') -> bool:
    return not self.intersection(other).is_empty()

  def equals(self, other: 'DateRange') -> bool:
    return self == other

  def error(self) -> RangeOrderError | None:
    match self:
      case Between(start, end) if start > end:
        return RangeOrderError(f'start date {start} cannot be after the end date {end}')
    return None

  def validate(self) -> None:
    if (error := self.error()) is not None:
      raise error

  def __str__(self) -> str:
    match self:
      case Never():
        return 'never'
      case Forever():
        return 'forever'
      case Until(end):
        return f'until {end}'
      case Onward(start):
        return f'{start} onward'
      case Between(start, end):
        return f'{start} to {end}'
    raise TypeError(f'unknown range shape {type(self).__name__}')

  def to_json(self) -> dict[str, str | None] | None:
    if self.is_empty():
      return None
    return {'start': Date.dump(self.start), 'end': Date.dump(self.end)}

  def dumps(self) -> str:
    return json.dumps(self.to_json(), separators=(',', ':'))

  @staticmethod
  def from_json(value: Any) -> 'DateRange':
    """Builds a range from decoded JSON. Null is the empty range and missing fields are unbounded."""
    _JSON_VALIDATOR.validate(value)
    if value is None:
      return Never()
    return DateRange.of(Date.load(value.get('start')), Date.load(value.get('end')))

  @staticmethod
  def loads(text: str | bytes) -> 'DateRange':
    return DateRange.from_json(json.loads(text))

  def to_sql(self) -> str:
    """Renders a range literal with inclusive brackets, or the empty token."""
    match self:
      case Never():
        return _SQL_EMPTY
      case Forever():
        return '[,]'
      case Until(end):
        return f"[,'{end}']"
      case Onward(start):
        return f"['{start}',]"
      case Between(start, end):
        return f"['{start}','{end}']"
    raise TypeError(f'unknown range shape {type(self).__name__}')

  @staticmethod
  def from_sql(value: str | bytes | None) -> 'DateRange | None':
    """Decodes a range literal such as "[2015-03-01,2015-03-05)".

    An exclusive ")" end bound is converted to an inclusive end by removing one day,
    and an exclusive "(" start bound by adding one day.
    """
    if value is None:
      return None

    if isinstance(value, bytes):
      try:
        value = value.decode('ascii')
      except UnicodeDecodeError as e:
        raise DecodeError(f'date range value {value!r} is not ascii text') from e
    if not isinstance(value, str):
      raise DecodeError(f'unable to decode a date range from {type(value).__name__}')

    text = value.strip()
    if text.lower() == _SQL_EMPTY:
      return Never()

    if len(text) < 3 or text[0] not in '[(' or text[-1] not in '])':
      raise DecodeError(f'expected date range "{value}" to be wrapped in brackets')
    lower, payload, upper = text[0], text[1:-1], text[-1]

    start_token, comma, end_token = payload.partition(',')
    if comma == '':
      raise DecodeError(f'unable to split date range "{value}" into start and end')

    start = _decode_bound(start_token, value)
    end = _decode_bound(end_token, value)
    try:
      if start is not None and lower == '(':
        start = start.add_days(1)
      if end is not None and upper == ')':
        end = end.add_days(-1)
    except ValueError as e:
      raise DecodeError(f'date range "{value}" is out of range') from e

    # Exclusive brackets around a single day, e.g. "[2015-03-05,2015-03-05)", cover no days.
    if start is not None and end is not None and start > end:
      logging.debug(f'Decoded empty date range from {value=}')
      return Never()

    term = DateRange.of(start, end)
    logging.debug(f'Decoded date range {term} from {value=}')
    return term


@dataclass(frozen=True)
class Never(DateRange):
  start = None
  end = None


@dataclass(frozen=True)
class Forever(DateRange):
  start = None
  end = None


@dataclass(frozen=True)
class Until(DateRange):
  start = None
  end: Date


@dataclass(frozen=True)
class Onward(DateRange):
  start: Date
  end = None


@dataclass(frozen=True)
class Between(DateRange):
  start: Date
  end: Date


DateRange.NEVER = Never()
DateRange.FOREVER = Forever()


def _later(a: Date | None, b: Date | None) -> Date | None:
  if a is None:
    return b
  if b is None:
    return a
  return max(a, b)


def _earlier(a: Date | None, b: Date | None) -> Date | None:
  if a is None:
    return b
  if b is None:
    return a
  return min(a, b)


_SQL_EMPTY = 'empty'
_SQL_UNBOUNDED = ('', 'infinity', '-infinity')


def _decode_bound(token: str, value: str) -> Date | None:
  token = token.strip().strip('"\'')
  if token.lower() in _SQL_UNBOUNDED:
    return None
  try:
    return Date.parse(token)
  except ParseError as e:
    raise DecodeError(f'unable to decode bound "{token}" of date range "{value}"') from e


_DATE_OR_NULL_SCHEMA = {
    'type': ['string', 'null'],
    'pattern': r'^\d{4}-\d{2}-\d{2}$',
}

_JSON_VALIDATOR = Draft202012Validator({
    'type': ['object', 'null'],
    'properties': {
        'start': _DATE_OR_NULL_SCHEMA,
        'end': _DATE_OR_NULL_SCHEMA,
    },
})
Draft202012Validator.check_schema(_JSON_VALIDATOR.schema)
