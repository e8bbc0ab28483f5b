# onboard/domains/__init__.py

"""
비즈니스 도메인 패키지입니다.

- `usr`: 사용자 및 인증 (제출자/승인자 식별).
- `company`: 회사 레코드와 불변 스냅샷.
- `approval`: 승인 레코드, 승인 프로세서, 승인 결정 서비스.
- `onboarding`: 단계별 검증/변환 전략과 오케스트레이터.
"""

__all__ = ["usr", "company", "approval", "onboarding"]
