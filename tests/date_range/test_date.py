from datetime import UTC, date, datetime, timedelta, timezone

from absl.testing import parameterized

from date_range.date import Date, is_zero
from date_range.daterange import DateRange, Onward, Until
from date_range.errors import DecodeError, ParseError


class TestDate(parameterized.TestCase):

  @parameterized.parameters(
      (Date.MIN.ordinal - 1, ValueError),
      (Date.MAX.ordinal + 1, ValueError),
  )
  def test_invalidOrdinal_raises(self, ordinal: int, expected_exception: type[Exception]):
    with self.assertRaises(expected_exception):
      Date(ordinal)

  def test_str(self):
    self.assertEqual(str(Date.new(2015, 3, 1)), '2015-03-01')
    self.assertEqual(str(Date.MIN), '0001-01-01')
    self.assertEqual(str(Date.MAX), '9999-12-31')

  def test_repr(self):
    self.assertEqual(repr(Date.new(2015, 3, 1)), 'Date.new(2015, 3, 1)')

  @parameterized.parameters(
      ((2015, 13, 1), (2016, 1, 1)),
      ((2015, 0, 1), (2014, 12, 1)),
      ((2015, 3, 0), (2015, 2, 28)),
      ((2016, 3, 0), (2016, 2, 29)),
      ((2015, 2, 29), (2015, 3, 1)),
      ((2015, 12, 32), (2016, 1, 1)),
      ((2015, 25, 1), (2017, 1, 1)),
      ((2015, -11, 1), (2014, 1, 1)),
      ((2015, 1, -1), (2014, 12, 30)),
  )
  def test_new_rollsOver(self, components: tuple[int, int, int], expected: tuple[int, int, int]):
    self.assertEqual(Date.new(*components), Date.new(*expected))
    self.assertEqual(Date.new(*components).to_date(), date(*expected))

  def test_new_yearOutOfRange_raises(self):
    with self.assertRaises(ValueError):
      Date.new(10000, 1, 1)

  def test_components(self):
    day = Date.new(2016, 2, 29)
    self.assertEqual((day.year, day.month, day.day), (2016, 2, 29))

  def test_today(self):
    self.assertEqual(Date.today().to_date(), datetime.now(UTC).date())

  @parameterized.parameters(
      (datetime(2015, 3, 1, 23, 59, 59), Date.new(2015, 3, 1)),
      (datetime(2015, 3, 1, 0, 0, 0, tzinfo=UTC), Date.new(2015, 3, 1)),
      (datetime(2015, 3, 1, 23, 0, 0, tzinfo=timezone(timedelta(hours=-5))), Date.new(2015, 3, 2)),
      (datetime(2015, 3, 1, 1, 0, 0, tzinfo=timezone(timedelta(hours=5))), Date.new(2015, 2, 28)),
      (date(2015, 3, 1), Date.new(2015, 3, 1)),
  )
  def test_fromTimestamp(self, timestamp: datetime | date, expected: Date):
    self.assertEqual(Date.from_timestamp(timestamp), expected)

  def test_fromTimestamp_wrongType_raises(self):
    with self.assertRaises(TypeError):
      Date.from_timestamp('2015-03-01')  # type: ignore

  @parameterized.parameters(
      ('2015-03-01', Date.new(2015, 3, 1)),
      ('2016-02-29', Date.new(2016, 2, 29)),
      ('0001-01-01', Date.MIN),
      ('9999-12-31', Date.MAX),
  )
  def test_parse(self, text: str, expected: Date):
    self.assertEqual(Date.parse(text), expected)

  @parameterized.parameters(
      (''),
      ('2015-3-01'),
      ('2015-03-1'),
      ('15-03-01'),
      ('20150301'),
      ('2015/03/01'),
      ('2015-03-01T00:00:00'),
      ('2015-03-01\n'),
      (' 2015-03-01'),
      ('2015-02-29'),
      ('2015-13-01'),
      ('2015-00-10'),
      ('0000-01-01'),
  )
  def test_parse_invalidText_raises(self, text: str):
    with self.assertRaises(ParseError):
      Date.parse(text)

  def test_parse_layout(self):
    self.assertEqual(Date.parse('01/03/2015', layout='%d/%m/%Y'), Date.new(2015, 3, 1))

  def test_parse_layoutMismatch_raises(self):
    with self.assertRaises(ParseError):
      Date.parse('2015-03-01', layout='%d/%m/%Y')

  def test_parse_roundTrip(self):
    for day in (Date.MIN, Date.new(1999, 12, 31), Date.new(2016, 2, 29), Date.MAX):
      self.assertEqual(Date.parse(str(day)), day)

  @parameterized.parameters(
      (Date.new(2015, 3, 1), 1, Date.new(2015, 3, 2)),
      (Date.new(2015, 2, 28), 1, Date.new(2015, 3, 1)),
      (Date.new(2016, 2, 28), 1, Date.new(2016, 2, 29)),
      (Date.new(2016, 1, 1), -1, Date.new(2015, 12, 31)),
      (Date.new(2015, 1, 1), 365, Date.new(2016, 1, 1)),
      (Date.new(2015, 1, 1), 0, Date.new(2015, 1, 1)),
  )
  def test_addDays(self, day: Date, days: int, expected: Date):
    self.assertEqual(day.add_days(days), expected)
    self.assertEqual(day + days, expected)
    self.assertEqual(expected - days, day)

  @parameterized.parameters(
      ((1, 0, 0), Date.new(2017, 1, 31)),
      ((0, 1, 0), Date.new(2016, 3, 2)),
      ((0, 0, 1), Date.new(2016, 2, 1)),
      ((0, -1, 0), Date.new(2015, 12, 31)),
      ((0, 11, 1), Date.new(2017, 1, 1)),
  )
  def test_addDate(self, offsets: tuple[int, int, int], expected: Date):
    self.assertEqual(Date.new(2016, 1, 31).add_date(*offsets), expected)

  def test_addDays_outOfRange_raises(self):
    with self.assertRaises(ValueError):
      Date.MAX.add_days(1)

  def test_subtractDate(self):
    self.assertEqual(Date.new(2016, 1, 1) - Date.new(2015, 1, 1), 365)
    self.assertEqual(Date.new(2015, 1, 1) - Date.new(2016, 1, 1), -365)
    self.assertEqual(Date.new(2015, 1, 1) - Date.new(2015, 1, 1), 0)

  def test_comparison(self):
    day = Date.new(2015, 3, 1)
    next_day = Date.new(2015, 3, 2)

    self.assertTrue(day.before(next_day))
    self.assertFalse(next_day.before(day))
    self.assertFalse(day.before(day))
    self.assertTrue(next_day.after(day))
    self.assertFalse(day.after(next_day))
    self.assertFalse(day.after(day))
    self.assertTrue(next_day.equals(day.add_days(1)))
    self.assertFalse(next_day.equals(day))
    self.assertLess(day, next_day)
    self.assertLessEqual(day, day)

  def test_isZero(self):
    self.assertTrue(is_zero(None))
    self.assertFalse(is_zero(Date.MIN))
    self.assertFalse(is_zero(Date.new(2015, 3, 1)))

  def test_within(self):
    march1 = Date.new(2015, 3, 1)

    self.assertFalse(march1.within(DateRange.entire_month(2015, 2)))
    self.assertEqual(DateRange.entire_month(2015, 3).start, march1)
    self.assertTrue(march1.within(DateRange.entire_month(2015, 3)))
    self.assertTrue(march1.within(DateRange.single_day(march1)))
    self.assertTrue(march1.within(DateRange.forever()))
    self.assertFalse(march1.within(DateRange.empty()))
    self.assertTrue(march1.within(Until(march1)))
    self.assertFalse(march1.within(Until(march1 - 1)))
    self.assertTrue(march1.within(Onward(march1)))
    self.assertFalse(march1.within(Onward(march1 + 1)))

  def test_json(self):
    self.assertEqual(Date.dump(Date.new(2015, 3, 1)), '2015-03-01')
    self.assertIsNone(Date.dump(None))
    self.assertEqual(Date.load('2015-03-01'), Date.new(2015, 3, 1))
    self.assertIsNone(Date.load(None))

  def test_load_wrongType_raises(self):
    with self.assertRaises(ParseError):
      Date.load(20150301)  # type: ignore

  def test_toSql(self):
    self.assertEqual(Date.new(2015, 3, 1).to_sql(), '2015-03-01')

  @parameterized.parameters(
      (datetime(2015, 3, 1, 12, 30, tzinfo=UTC),),
      (datetime(2015, 3, 1),),
      (date(2015, 3, 1),),
      ('2015-03-01',),
      (b'2015-03-01',),
  )
  def test_fromSql(self, value: object):
    self.assertEqual(Date.from_sql(value), Date.new(2015, 3, 1))

  @parameterized.parameters(
      (None,),
      (735658,),
      ('2015-03-32',),
      (b'\xff\xfe',),
  )
  def test_fromSql_invalidValue_raises(self, value: object):
    with self.assertRaises(DecodeError):
      Date.from_sql(value)

  def test_errorsAreValueErrors(self):
    with self.assertRaises(ValueError):
      Date.parse('nope')
