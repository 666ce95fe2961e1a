"""请求参数校验单元测试

测试内容：
1. type 格式：仅小写字母和数字
2. 分页参数：缺省为 0，越界/非整数报错，不截断
"""

import pytest
from evtrack.core.config import OFFSET_MAX
from evtrack.core.exceptions import EventValidationError
from evtrack.core.validation import require_type, validate_pagination, validate_type


class TestValidateType:
    @pytest.mark.parametrize("value", ["meeting", "call", "meeting123", "123", "a"])
    def test_accepts_lowercase_alnum(self, value: str):
        assert validate_type(value) is True

    @pytest.mark.parametrize(
        "value",
        [
            "",
            "Meeting",
            "MEETING",
            "meeting-1",
            "meeting_1",
            "meeting 1",
            " meeting",
            "meeting\n",
            "встреча",
            "café",
        ],
    )
    def test_rejects_everything_else(self, value: str):
        assert validate_type(value) is False

    def test_rejects_none(self):
        assert validate_type(None) is False


class TestRequireType:
    def test_returns_valid_type(self):
        assert require_type("meeting") == "meeting"

    @pytest.mark.parametrize("value", [None, ""])
    def test_missing_type(self, value):
        with pytest.raises(EventValidationError) as exc_info:
            require_type(value)
        assert exc_info.value.field == "type"
        assert "required" in exc_info.value.message

    def test_malformed_type(self):
        with pytest.raises(EventValidationError) as exc_info:
            require_type("Meeting")
        assert "lowercase" in exc_info.value.message


class TestValidatePagination:
    def test_defaults(self):
        assert validate_pagination(None, None) == (0, 0)

    def test_empty_strings_mean_absent(self):
        assert validate_pagination("", "") == (0, 0)

    def test_valid_values(self):
        assert validate_pagination("5", "10") == (5, 10)

    @pytest.mark.parametrize("limit", ["0", "1", "100"])
    def test_limit_bounds_inclusive(self, limit: str):
        assert validate_pagination(None, limit) == (0, int(limit))

    @pytest.mark.parametrize("offset", ["-1", "abc", "1.5", "1e3", " 1", "1_0"])
    def test_bad_offset(self, offset: str):
        with pytest.raises(EventValidationError) as exc_info:
            validate_pagination(offset, None)
        assert exc_info.value.field == "offset"

    @pytest.mark.parametrize("limit", ["-1", "101", "1000", "ten", "5.0"])
    def test_bad_limit(self, limit: str):
        with pytest.raises(EventValidationError) as exc_info:
            validate_pagination(None, limit)
        assert exc_info.value.field == "limit"

    def test_large_offset_accepted(self):
        assert validate_pagination("100000", None) == (100000, 0)

    def test_offset_upper_bound(self):
        assert validate_pagination(str(OFFSET_MAX), None) == (OFFSET_MAX, 0)
        with pytest.raises(EventValidationError) as exc_info:
            validate_pagination(str(OFFSET_MAX + 1), None)
        assert exc_info.value.field == "offset"

    def test_offset_beyond_sqlite_integer_rejected(self):
        with pytest.raises(EventValidationError):
            validate_pagination("99999999999999999999", None)
