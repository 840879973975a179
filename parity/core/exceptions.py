"""
도메인 예외
"""


class InvalidTierError(ValueError):
    """카탈로그에 없는 티어 이름"""

    def __init__(self, tier):
        self.tier = tier
        super().__init__(f"Invalid subscription tier selected: {tier!r}")


class InconsistentStateError(RuntimeError):
    """DB에 저장된 값이 카탈로그와 맞지 않음"""
