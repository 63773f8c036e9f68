import math
from typing import Iterator, Self

from .daterange import Between, DateRange


class DateRangeIterator(Iterator[Between]):
  """Splits a bounded range into consecutive ranges of step_days days. The last one may be shorter."""

  def __init__(self, term: DateRange, step_days: int) -> None:
    if step_days <= 0:
      raise ValueError(f'expected step_days to be a positive number of days, got {step_days}')
    if not isinstance(term, Between):
      raise ValueError(f'expected a range bounded on both sides, got {term}')
    term.validate()

    self.term = term
    self.step_days = step_days
    self._i = 0
    self._n = math.ceil(self.term.days() / self.step_days)

  def __iter__(self) -> Self:
    return self

  def __next__(self) -> Between:
    if self._i == self._n:
      raise StopIteration()

    start = self.term.start + self.step_days * self._i
    try:
      end = min(start + (self.step_days - 1), self.term.end)
    except ValueError:
      end = self.term.end

    self._i += 1
    return Between(start, end)

  def length(self) -> int:
    return self._n
