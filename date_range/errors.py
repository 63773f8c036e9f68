class DateRangeError(ValueError):
  pass


class ParseError(DateRangeError):
  """Date text did not match the expected layout."""


class RangeOrderError(DateRangeError):
  """Both bounds are present and the start is after the end."""


class DecodeError(DateRangeError):
  """A database value could not be decoded into a Date or a DateRange."""
