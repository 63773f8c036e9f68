import sqlite3
from dataclasses import dataclass

from absl import logging

from .date import Date
from .daterange import Between, DateRange, Forever, Never, Onward, Until

_RANGE_SHAPES: tuple[type[DateRange], ...] = (Never, Forever, Until, Onward, Between)


@dataclass(frozen=True)
class SqliteTypesConfig:
  # Declared column type of Date columns, e.g. "CREATE TABLE t (day DATE)".
  # Connections need detect_types=sqlite3.PARSE_DECLTYPES for the converters to run.
  date_type: str = 'DATE'

  # Declared column type of DateRange columns.
  range_type: str = 'DATERANGE'

  def __post_init__(self) -> None:
    assert self.date_type != '', 'expected "date_type" to be non-empty'
    assert self.range_type != '', 'expected "range_type" to be non-empty'
    assert self.date_type.upper() != self.range_type.upper(), 'expected "date_type" and "range_type" to differ'


def register(config: SqliteTypesConfig = SqliteTypesConfig()) -> None:
  """Registers sqlite3 adapters for Date and every DateRange shape, and converters for the declared types."""
  sqlite3.register_adapter(Date, Date.to_sql)
  # Adapters are looked up by exact type.
  for shape in _RANGE_SHAPES:
    sqlite3.register_adapter(shape, shape.to_sql)

  sqlite3.register_converter(config.date_type, Date.from_sql)
  sqlite3.register_converter(config.range_type, DateRange.from_sql)
  logging.debug(f'Registered sqlite3 converters. {config.date_type=}, {config.range_type=}')
