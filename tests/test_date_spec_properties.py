"""
日付指定のプロパティベーステスト

Property 1: 時刻の維持
Property 2: 年の指定と維持
Property 3: 範囲外の日・月の拒否
を検証します。
"""

import calendar
from datetime import date

from hypothesis import given, strategies as st, assume
from hypothesis import settings
import pytest

from exif_chdate.date_spec import compose_datetime, looks_like_year, parse_date_spec
from exif_chdate.exceptions import DateFormatError, ValidationError
from exif_chdate.models import DateSpec


@st.composite
def exif_datetime_strategy(draw):
    """ExifTool形式の撮影日時文字列を生成（タイムゾーンオフセット付きを含む）"""
    year = draw(st.integers(min_value=1900, max_value=2100))
    month = draw(st.integers(min_value=1, max_value=12))
    day = draw(st.integers(min_value=1, max_value=28))
    hour = draw(st.integers(min_value=0, max_value=23))
    minute = draw(st.integers(min_value=0, max_value=59))
    second = draw(st.integers(min_value=0, max_value=59))
    offset = draw(st.sampled_from(['', '+09:00', '-05:00', '+00:00', 'Z']))

    time_part = f"{hour:02d}:{minute:02d}:{second:02d}{offset}"
    return f"{year:04d}:{month:02d}:{day:02d} {time_part}", year, time_part


@st.composite
def date_spec_strategy(draw, with_year=None):
    """どの年にも存在する日付のDateSpecを生成"""
    month = draw(st.integers(min_value=1, max_value=12))
    # 2月29日は閏年依存のため除外
    max_day = 28 if month == 2 else calendar.monthrange(2001, month)[1]
    day = draw(st.integers(min_value=1, max_value=max_day))
    if with_year is None:
        with_year = draw(st.booleans())
    year = draw(st.integers(min_value=1, max_value=9999)) if with_year else None
    return DateSpec(day=day, month=month, year=year)


class TestComposeDatetimeProperties:
    """compose_datetimeのプロパティテスト"""

    @settings(max_examples=200)
    @given(exif_datetime_strategy(), date_spec_strategy())
    def test_time_of_day_is_preserved_property(self, original_info, spec):
        """
        **Property 1: 時刻の維持**

        任意の撮影日時と日付指定に対して、変更後の時刻（とオフセット）は
        元の値と完全に一致し、日・月は指定値と一致すべきである。
        """
        original, original_year, time_part = original_info

        updated = compose_datetime(original, spec)
        date_part, updated_time = updated.split(' ', 1)
        year, month, day = (int(v) for v in date_part.split(':'))

        assert updated_time == time_part
        assert month == spec.month
        assert day == spec.day

    @settings(max_examples=200)
    @given(exif_datetime_strategy(), date_spec_strategy())
    def test_year_is_replaced_or_kept_property(self, original_info, spec):
        """
        **Property 2: 年の指定と維持**

        年が指定された場合は指定値、省略された場合は元の年になるべきである。
        """
        original, original_year, _ = original_info

        updated = compose_datetime(original, spec)
        year = int(updated.split(':', 1)[0])

        expected = spec.year if spec.year is not None else original_year
        assert year == expected

    def test_scenario_keep_year(self):
        """15 6 → 元の年と時刻を維持"""
        spec = parse_date_spec('15', '6')
        assert compose_datetime('2020:01:03 14:22:10', spec) == '2020:06:15 14:22:10'

    def test_scenario_with_year(self):
        """1 1 1999 → 1999:01:01、時刻は維持"""
        spec = parse_date_spec('1', '1', '1999')
        assert compose_datetime('2020:07:09 08:00:00', spec) == '1999:01:01 08:00:00'

    def test_timezone_offset_and_subseconds_are_kept(self):
        """タイムゾーンオフセットと秒未満はそのまま残る"""
        spec = DateSpec(day=2, month=3, year=2010)
        assert compose_datetime('2021:11:30 23:59:58.25+09:00', spec) == '2010:03:02 23:59:58.25+09:00'

    def test_surrounding_whitespace_is_ignored(self):
        """ExifTool出力の末尾改行は無視される"""
        spec = DateSpec(day=5, month=5)
        assert compose_datetime('2018:01:01 10:00:00\n', spec) == '2018:05:05 10:00:00'

    @pytest.mark.parametrize('original', [
        '',
        '2020-01-03 14:22:10',
        '2020:01:03',
        '0000:00:00 00:00:00 garbage',
        'not a date',
    ])
    def test_unexpected_format_is_rejected(self, original):
        """想定外の形式はDateFormatErrorになる"""
        with pytest.raises(DateFormatError):
            compose_datetime(original, DateSpec(day=1, month=1))

    def test_leap_day_on_non_leap_year_is_rejected(self):
        """年を維持する場合、元の年に存在しない日付はファイル単位のエラーになる"""
        spec = parse_date_spec('29', '2')

        assert compose_datetime('2020:05:05 12:00:00', spec) == '2020:02:29 12:00:00'
        with pytest.raises(DateFormatError):
            compose_datetime('2021:05:05 12:00:00', spec)


class TestParseDateSpecProperties:
    """parse_date_specのプロパティテスト"""

    @settings(max_examples=100)
    @given(st.integers(min_value=1, max_value=12), st.data())
    def test_valid_day_month_accepted_property(self, month, data):
        """どの年にも存在する日・月は受け入れられるべきである"""
        max_day = calendar.monthrange(2000, month)[1]
        day = data.draw(st.integers(min_value=1, max_value=max_day))

        spec = parse_date_spec(str(day), str(month))

        assert spec == DateSpec(day=day, month=month, year=None)

    @settings(max_examples=100)
    @given(st.integers(), st.integers(min_value=1, max_value=12))
    def test_out_of_range_day_rejected_property(self, day, month):
        """
        **Property 3: 範囲外の日・月の拒否**

        1-31の範囲外の日はValidationErrorになるべきである。
        """
        assume(not 1 <= day <= 31)
        with pytest.raises(ValidationError):
            parse_date_spec(str(day), str(month))

    @settings(max_examples=100)
    @given(st.integers(min_value=1, max_value=28), st.integers())
    def test_out_of_range_month_rejected_property(self, day, month):
        """1-12の範囲外の月はValidationErrorになるべきである"""
        assume(not 1 <= month <= 12)
        with pytest.raises(ValidationError):
            parse_date_spec(str(day), str(month))

    @settings(max_examples=100)
    @given(st.dates(min_value=date(1, 1, 1), max_value=date(9999, 12, 31)))
    def test_full_calendar_date_accepted_property(self, d):
        """年を含む実在の日付は受け入れられるべきである"""
        spec = parse_date_spec(str(d.day), str(d.month), str(d.year))
        assert (spec.year, spec.month, spec.day) == (d.year, d.month, d.day)

    @pytest.mark.parametrize('day, month', [('31', '4'), ('30', '2'), ('31', '11')])
    def test_nonexistent_day_of_month_rejected(self, day, month):
        """どの年にも存在しない日付は拒否される"""
        with pytest.raises(ValidationError):
            parse_date_spec(day, month)

    def test_leap_day_depends_on_year(self):
        """2月29日は年の指定次第で受け入れ/拒否が決まる"""
        assert parse_date_spec('29', '2', '2024').year == 2024
        with pytest.raises(ValidationError):
            parse_date_spec('29', '2', '2023')

    @pytest.mark.parametrize('day, month, year', [
        ('x', '1', None),
        ('1', 'jan', None),
        ('1.5', '1', None),
        ('1', '1', '0000'),
        ('1', '1', 'abcd'),
    ])
    def test_malformed_values_rejected(self, day, month, year):
        """整数でない、または正でない値は拒否される"""
        with pytest.raises(ValidationError):
            parse_date_spec(day, month, year)

    def test_zero_padded_values_accepted(self):
        """"01"のようなゼロ埋めの値を受け入れる"""
        assert parse_date_spec('05', '09') == DateSpec(day=5, month=9)


class TestLooksLikeYear:
    """年引数の判定テスト"""

    @pytest.mark.parametrize('value, expected', [
        ('1999', True),
        ('2024', True),
        ('0001', True),
        ('999', False),
        ('19999', False),
        ('img.RAW', False),
        ('2024.jpg', False),
    ])
    def test_looks_like_year(self, value, expected):
        assert looks_like_year(value) is expected
