# onboard/domains/onboarding/__init__.py

"""
'onboarding' 도메인 패키지입니다.

온보딩 이벤트(CREATE_COMPANY, UPDATE_CONTACT_INFO, UPDATE_OPERATIONAL_INFO,
COMPLETE_ONBOARDING)마다 하나의 전략이 검증(validate)과 변환(on_success)을 담당하고,
오케스트레이터가 검증 -> 변환 -> 승인 레코드 등록 순서로 처리합니다.

오케스트레이터는 상태를 갖지 않습니다. 회사가 온보딩 흐름의 어디에 있는지는
회사 레코드의 progress_state만으로 판단합니다.
"""

__title__ = "Onboard Workflow Domain"
__version__ = "0.1.0"
__all__ = ["validation", "strategies", "orchestrator"]
