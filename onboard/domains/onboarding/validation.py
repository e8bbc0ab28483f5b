# onboard/domains/onboarding/validation.py

from typing import Any, Iterable, List


def is_blank(value: Any) -> bool:
    """None이거나 공백뿐인 문자열이면 True"""
    return value is None or (isinstance(value, str) and not value.strip())


class ValidationResult:
    """
    검증 오류 메시지를 순서대로 누적합니다.
    오류가 하나라도 있으면 valid는 False입니다.
    """

    def __init__(self, errors: Iterable[str] = ()):
        self._errors: List[str] = list(errors)

    @classmethod
    def success(cls) -> "ValidationResult":
        return cls()

    @classmethod
    def failure(cls, *errors: str) -> "ValidationResult":
        return cls(errors)

    def add_error(self, error: str) -> None:
        self._errors.append(error)

    def require(self, value: Any, message: str) -> None:
        """값이 비어 있으면 message를 오류로 추가합니다."""
        if is_blank(value):
            self.add_error(message)

    @property
    def valid(self) -> bool:
        return not self._errors

    @property
    def errors(self) -> List[str]:
        return list(self._errors)

    @property
    def error_message(self) -> str:
        return "; ".join(self._errors)

    def __repr__(self) -> str:
        return f"ValidationResult(valid={self.valid}, errors={self._errors!r})"
